"""
line_search.py

Модуль одномірного пошуку (line search) вздовж заданого напрямку.

Ідея:
    - Працюємо з допоміжною функцією φ(α) = f(x_k + α p_k),
      але сам пошук оперує абстрактною скалярною функцією
      одного аргументу φ: float -> float.
    - Мінімум φ шукаємо квадратичним лінійним пошуком
      (core.quadratic_line_search.QuadraticLineSearch).

Єдиний публічний інтерфейс:
    - LineSearchResult        – результат 1D-пошуку;
    - line_search_1d(...)     – квадратичний пошук на [a, b];
    - directional_phi(...)    – побудова φ(α) для точки x_k і напрямку p_k;
    - line_search_along(...)  – пошук кроку вздовж напрямку p_k.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from .functions import ArrayLike, Scalar1DFunction, ScalarFunction
from .quadratic_line_search import QuadraticLineSearch
from .search_observers import ProgressCallback, SearchCallback

LINE_SEARCH_QUADRATIC = "quadratic"


# ---------------------------------------------------------------------------
# Результат одномірного пошуку
# ---------------------------------------------------------------------------

@dataclass
class LineSearchResult:
    """
    Результат роботи процедури одномірного пошуку.

    Атрибути:
        alpha       - знайдене значення параметра кроку α* (NaN у разі невдачі);
        phi_value   - значення φ(α*) у цій точці;
        iterations  - кількість ітерацій 1D-алгоритму;
        func_evals  - кількість викликів φ під час пошуку;
        meta        - службова інформація (статус, кінцева дужка, ...).
    """
    alpha: float
    phi_value: float
    iterations: int
    func_evals: int
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.meta.get("stopped_by") == "success"


# ---------------------------------------------------------------------------
# Публічний інтерфейс line search
# ---------------------------------------------------------------------------

def line_search_1d(
    phi: Scalar1DFunction,
    a: float,
    b: float,
    tol: Optional[float] = None,
    max_iter: int = 50,
    options: Optional[Dict[str, Any]] = None,
    callback: Optional[SearchCallback] = None,
    progress: Optional[ProgressCallback] = None,
) -> LineSearchResult:
    """
    Виконати одномірний пошук мінімуму функції φ(α) на відрізку [a, b].

    Parameters
    ----------
    phi : Callable[[float], float]
        Цільова скалярна функція одного аргументу α.
    a, b : float
        Початковий інтервал пошуку [a, b], де a < b.
    tol : Optional[float]
        Поріг ширини дужки. None – 0.1% від (b - a).
    max_iter : int
        Максимальна кількість ітерацій.
    options : Optional[dict]
        Додаткові параметри QuadraticLineSearch.from_options()
        (init_estimate, function_tolerance, exit_if_outside_bounds, message).

    Returns
    -------
    LineSearchResult
        meta["status"] містить SearchStatus, meta["stopped_by"] – його рядок.
    """
    if a >= b:
        raise ValueError(
            "line_search_1d: ліва межа інтервалу повинна бути меншою за праву (a < b)."
        )

    ls_options: Dict[str, Any] = dict(options or {})
    ls_options.setdefault("max_iterations", max_iter)
    if tol is not None:
        ls_options["value_tolerance"] = tol

    search = QuadraticLineSearch.from_options(
        a, b, ls_options, callback=callback, progress=progress
    )
    result = search.minimize(phi)

    meta = {
        "method": LINE_SEARCH_QUADRATIC,
        "interval": (float(a), float(b)),
        "bracket": result.bracket,
        "status": result.status,
        "stopped_by": result.status.value,
    }

    return LineSearchResult(
        alpha=result.estimate,
        phi_value=result.value,
        iterations=result.iterations,
        func_evals=result.func_evals,
        meta=meta,
    )


def directional_phi(func: ScalarFunction, x_k: ArrayLike, p_k: ArrayLike) -> Scalar1DFunction:
    """Повернути φ(α) = f(x_k + α p_k)."""
    x_k = np.asarray(x_k, dtype=float)
    p_k = np.asarray(p_k, dtype=float)

    def phi(alpha: float) -> float:
        return float(func(x_k + float(alpha) * p_k))

    return phi


def line_search_along(
    func: ScalarFunction,
    x_k: ArrayLike,
    p_k: ArrayLike,
    a: float = 0.0,
    b: float = 1.0,
    tol: Optional[float] = None,
    max_iter: int = 50,
    options: Optional[Dict[str, Any]] = None,
    callback: Optional[SearchCallback] = None,
) -> LineSearchResult:
    """
    Знайти крок α* вздовж напрямку p_k з точки x_k.

    Якщо пошук успішний, meta["x_new"] = x_k + α* p_k.
    """
    x_k = np.asarray(x_k, dtype=float)
    p_k = np.asarray(p_k, dtype=float)

    result = line_search_1d(
        directional_phi(func, x_k, p_k),
        a,
        b,
        tol=tol,
        max_iter=max_iter,
        options=options,
        callback=callback,
    )
    if result.success:
        result.meta["x_new"] = x_k + result.alpha * p_k

    return result


__all__ = [
    "LINE_SEARCH_QUADRATIC",
    "LineSearchResult",
    "line_search_1d",
    "directional_phi",
    "line_search_along",
]
