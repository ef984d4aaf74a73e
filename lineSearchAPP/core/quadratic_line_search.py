"""
quadratic_line_search.py

Одномірна мінімізація на обмеженому інтервалі методом послідовної
квадратичної інтерполяції (quadratic line search).

Ідея:
    - тримаємо дужку з трьох точок l < m < u та значення f(l), f(m), f(u);
    - через ці три точки будуємо параболу і беремо її вершину n як нового
      кандидата на мінімум;
    - залежно від того, куди потрапила n і яке значення f(n), звужуємо
      (або, за дозволом, зсуваємо/розширюємо) дужку;
    - зупиняємося, коли ширина дужки u - l менша за value_tolerance.

Метод швидкий для гладких опуклих функцій. Якщо функція не опукла на
поточній дужці або мінімум лежить поза нею, пошук повертає NaN та
відповідний статус (див. SearchStatus). Винятків алгоритм не кидає:
результат завжди пара (оцінка, статус).

Типове використання:
    search = QuadraticLineSearch(-1.0, 1.0).set_value_tolerance(0.01)
    x_star, status = search.minimize(cost_function)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from .search_observers import (
    Bracket,
    ProgressCallback,
    SearchCallback,
    SearchIteration,
    TraceLogger,
)

logger = logging.getLogger(__name__)

CostFunction = Callable[[float], float]

_NAN_BRACKET: Bracket = (math.nan, math.nan, math.nan)


class SearchStatus(Enum):
    """Результат (або стан) одного запуску лінійного пошуку."""

    SUCCESS = "success"
    EXECUTING = "executing"
    OUTSIDE_BOUNDS = "outside_bounds"
    NONCONVEX = "nonconvex"
    NONCONVERGING = "nonconverging"
    DEGENERATE = "degenerate"


# ---------------------------------------------------------------------------
# Конфігурація та результат
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class QuadraticSearchConfig:
    """
    Незмінний знімок налаштувань, з яким виконується один запуск minimize().

    Атрибути:
        lower_bound, upper_bound - початкова дужка;
        init_estimate            - початкова середня точка m;
        value_tolerance          - поріг ширини дужки u - l;
        function_tolerance       - поріг відносної "пласкості" f для
                                   перевірки неопуклості (0 – вимкнено);
        exit_if_outside_bounds   - чи вважати вихід кандидата за дужку помилкою;
        max_iterations           - ліміт ітерацій;
        message                  - мітка для progress-observer'а.
    """
    lower_bound: float
    upper_bound: float
    init_estimate: float
    value_tolerance: float
    function_tolerance: float = 0.0
    exit_if_outside_bounds: bool = True
    max_iterations: int = 50
    message: str = ""

    def validate(self) -> None:
        if not self.lower_bound < self.upper_bound:
            raise ValueError(
                "QuadraticLineSearch: нижня межа повинна бути меншою за верхню "
                f"(отримано [{self.lower_bound}, {self.upper_bound}])."
            )
        if not self.lower_bound < self.init_estimate < self.upper_bound:
            raise ValueError(
                "QuadraticLineSearch: початкова оцінка повинна лежати строго "
                f"всередині ({self.lower_bound}, {self.upper_bound}), "
                f"отримано {self.init_estimate}."
            )


@dataclass
class QuadraticSearchResult:
    """
    Результат одного запуску квадратичного лінійного пошуку.

    Розпаковується як пара:
        estimate, status = search.minimize(f)

    Атрибути:
        estimate   - оцінка точки мінімуму (NaN у разі невдачі);
        status     - SearchStatus;
        value      - f(estimate), якщо відоме (інакше NaN);
        iterations - кількість розпочатих ітерацій;
        func_evals - кількість викликів цільової функції;
        bracket    - остання дужка (l, m, u);
        values     - значення f у точках дужки.
    """
    estimate: float
    status: SearchStatus
    value: float = math.nan
    iterations: int = 0
    func_evals: int = 0
    bracket: Bracket = _NAN_BRACKET
    values: Bracket = _NAN_BRACKET
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status is SearchStatus.SUCCESS

    def __iter__(self):
        return iter((self.estimate, self.status))


# ---------------------------------------------------------------------------
# Алгоритм
# ---------------------------------------------------------------------------

def _relative_spread(fl: float, fu: float) -> float:
    """|fu - fl| / (0.5 * (fu + fl)); при нульовому знаменнику 0 або inf."""
    mean = 0.5 * (fu + fl)
    diff = abs(fu - fl)
    if mean == 0.0:
        return 0.0 if diff == 0.0 else math.inf
    return abs(diff / mean)


def _run_search(
    func: CostFunction,
    cfg: QuadraticSearchConfig,
    callback: Optional[SearchCallback],
    progress: Optional[ProgressCallback],
) -> QuadraticSearchResult:
    func_evals = 0
    iters = 0

    def evaluate(x: float) -> float:
        nonlocal func_evals
        func_evals += 1
        return float(func(x))

    l, m, u = cfg.lower_bound, cfg.init_estimate, cfg.upper_bound
    fl, fm, fu = evaluate(l), evaluate(m), evaluate(u)

    def finish(estimate: float, status: SearchStatus, value: float = math.nan) -> QuadraticSearchResult:
        logger.debug(
            "Лінійний пошук завершено: %s, оцінка %.6g після %d ітерацій",
            status.value, estimate, iters,
        )
        return QuadraticSearchResult(
            estimate=estimate,
            status=status,
            value=value,
            iterations=iters,
            func_evals=func_evals,
            bracket=(l, m, u),
            values=(fl, fm, fu),
        )

    if not (math.isfinite(fl) and math.isfinite(fm) and math.isfinite(fu)):
        logger.warning(
            "Цільова функція не скінченна на початковій дужці (%.6g, %.6g, %.6g)",
            fl, fm, fu,
        )
        return finish(math.nan, SearchStatus.DEGENERATE)

    if callback is not None:
        callback(SearchIteration(index=0, bracket=(l, m, u), values=(fl, fm, fu)))

    # Дужка вже вужча за поріг
    if (u - l) < cfg.value_tolerance:
        return finish(m, SearchStatus.SUCCESS, fm)

    while iters < cfg.max_iterations:
        iters += 1

        # Точки дужки злиплись: вершина параболи потрапила в уже відому точку
        if not l < m < u:
            return finish(m, SearchStatus.SUCCESS, fm)

        # Перевірка опуклості: f(m) не повинна лежати вище хорди (l, fl)-(u, fu)
        if fm > fl + (fu - fl) * (m - l) / (u - l):
            if (min(m - l, u - m) < cfg.value_tolerance
                    or _relative_spread(fl, fu) < cfg.function_tolerance):
                return finish(m, SearchStatus.SUCCESS, fm)
            return finish(math.nan, SearchStatus.NONCONVEX)

        sl = (fm - fl) / (m - l)
        su = (fu - fm) / (u - m)

        if su == sl:
            logger.warning("Точки дужки колінеарні, параболу побудувати неможливо")
            return finish(m, SearchStatus.DEGENERATE, fm)

        n = 0.5 * (l + m) - (sl * (u - l)) / (2.0 * (su - sl))
        if not math.isfinite(n):
            logger.warning("Інтерпольована точка не скінченна: %s", n)
            return finish(m, SearchStatus.DEGENERATE, fm)

        fn = evaluate(n)
        if not math.isfinite(fn):
            logger.warning("f(%.6g) не скінченне значення, повертаємо середню точку", n)
            return finish(m, SearchStatus.DEGENERATE, fm)

        if n < l:
            if cfg.exit_if_outside_bounds:
                return finish(math.nan, SearchStatus.OUTSIDE_BOUNDS)
            u, fu = m, fm
            m, fm = l, fl
            l, fl = n, fn
        elif n < m:
            if fn > fm:
                l, fl = n, fn
            else:
                u, fu = m, fm
                m, fm = n, fn
        elif n == m:
            return finish(n, SearchStatus.SUCCESS, fn)
        elif n < u:
            if fn > fm:
                u, fu = n, fn
            else:
                l, fl = m, fm
                m, fm = n, fn
        else:
            if cfg.exit_if_outside_bounds:
                return finish(math.nan, SearchStatus.OUTSIDE_BOUNDS)
            l, fl = m, fm
            m, fm = u, fu
            u, fu = n, fn

        if callback is not None:
            callback(
                SearchIteration(
                    index=iters,
                    bracket=(l, m, u),
                    values=(fl, fm, fu),
                    candidate=n,
                    candidate_value=fn,
                )
            )
        if progress is not None:
            progress(cfg.message, iters)

        if (u - l) < cfg.value_tolerance:
            return finish(m, SearchStatus.SUCCESS, fm)

    return finish(math.nan, SearchStatus.NONCONVERGING)


def _chain_callbacks(*callbacks: Optional[SearchCallback]) -> SearchCallback:
    active = [cb for cb in callbacks if cb is not None]

    def chained(record: SearchIteration) -> None:
        for cb in active:
            cb(record)

    return chained


# ---------------------------------------------------------------------------
# Публічний клас
# ---------------------------------------------------------------------------

class QuadraticLineSearch:
    """
    Квадратичний лінійний пошук мінімуму функції однієї змінної.

    Налаштування задаються fluent-сетерами (кожен повертає self) і ніде
    не перевіряються, окрім порядку меж на початку minimize().

    Значення за замовчуванням:
        init_estimate          : середина [lower_bound, upper_bound]
        value_tolerance        : 0.001 * (upper_bound - lower_bound)
        function_tolerance     : 0.0 (вимкнено)
        exit_if_outside_bounds : True
        max_iterations         : 50

    Обидва "розрахункові" значення за замовчуванням обчислюються під час
    запуску, тож слідують за пізнішими змінами меж.

    Якщо exit_if_outside_bounds = False, кандидат поза дужкою не є помилкою:
    дужка зсувається в його бік, а цільова функція має бути визначена і
    поза початковими межами.
    """

    def __init__(
        self,
        lower_bound: float,
        upper_bound: float,
        callback: Optional[SearchCallback] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.lower_bound = float(lower_bound)
        self.upper_bound = float(upper_bound)
        self.init_estimate: Optional[float] = None
        self.value_tolerance: Optional[float] = None
        self.function_tolerance: float = 0.0
        self.exit_if_outside_bounds: bool = True
        self.max_iterations: int = 50
        self.message: str = ""
        self.callback = callback
        self.progress = progress

        self._last_status: Optional[SearchStatus] = None

    @classmethod
    def from_options(
        cls,
        a: float,
        b: float,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[SearchCallback] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> "QuadraticLineSearch":
        """
        Створити пошук з dict-налаштувань.

        Ключі options:
            init_estimate, value_tolerance (або tol), function_tolerance,
            exit_if_outside_bounds, max_iterations (або max_iter), message.
        """
        options = options or {}
        search = cls(a, b, callback=callback, progress=progress)

        if options.get("init_estimate") is not None:
            search.set_init_estimate(options["init_estimate"])
        tol = options.get("value_tolerance", options.get("tol"))
        if tol is not None:
            search.set_value_tolerance(tol)
        if "function_tolerance" in options:
            search.set_function_tolerance(options["function_tolerance"])
        if "exit_if_outside_bounds" in options:
            search.set_exit_if_outside_bounds(options["exit_if_outside_bounds"])
        max_iter = options.get("max_iterations", options.get("max_iter"))
        if max_iter is not None:
            search.set_max_iterations(max_iter)
        if "message" in options:
            search.set_message(options["message"])

        return search

    # ------------------------------------------------------------------
    # Fluent-сетери
    # ------------------------------------------------------------------

    def set_lower_bound(self, value: float) -> "QuadraticLineSearch":
        self.lower_bound = float(value)
        return self

    def set_upper_bound(self, value: float) -> "QuadraticLineSearch":
        self.upper_bound = float(value)
        return self

    def set_init_estimate(self, value: float) -> "QuadraticLineSearch":
        self.init_estimate = float(value)
        return self

    def set_value_tolerance(self, value: float) -> "QuadraticLineSearch":
        self.value_tolerance = float(value)
        return self

    def set_function_tolerance(self, value: float) -> "QuadraticLineSearch":
        self.function_tolerance = float(value)
        return self

    def set_exit_if_outside_bounds(self, value: bool) -> "QuadraticLineSearch":
        self.exit_if_outside_bounds = bool(value)
        return self

    def set_max_iterations(self, value: int) -> "QuadraticLineSearch":
        self.max_iterations = int(value)
        return self

    def set_message(self, value: str) -> "QuadraticLineSearch":
        self.message = str(value)
        return self

    def set_callback(self, callback: Optional[SearchCallback]) -> "QuadraticLineSearch":
        self.callback = callback
        return self

    def set_progress(self, progress: Optional[ProgressCallback]) -> "QuadraticLineSearch":
        self.progress = progress
        return self

    # ------------------------------------------------------------------
    # Запуск
    # ------------------------------------------------------------------

    @property
    def last_status(self) -> Optional[SearchStatus]:
        """
        Статус останнього (або поточного) запуску; None до першого
        запуску та після запуску, перерваного винятком цільової функції.
        """
        return self._last_status

    def config(self) -> QuadraticSearchConfig:
        lower, upper = self.lower_bound, self.upper_bound
        init_estimate = self.init_estimate
        if init_estimate is None:
            init_estimate = 0.5 * (lower + upper)
        value_tolerance = self.value_tolerance
        if value_tolerance is None:
            value_tolerance = 0.001 * (upper - lower)

        return QuadraticSearchConfig(
            lower_bound=lower,
            upper_bound=upper,
            init_estimate=init_estimate,
            value_tolerance=value_tolerance,
            function_tolerance=self.function_tolerance,
            exit_if_outside_bounds=self.exit_if_outside_bounds,
            max_iterations=self.max_iterations,
            message=self.message,
        )

    def minimize(self, func: CostFunction) -> QuadraticSearchResult:
        """
        Знайти мінімум func на поточній дужці.

        Returns
        -------
        QuadraticSearchResult
            Оцінка мінімуму та статус. При будь-якій невдачі оцінка = NaN
            (окрім DEGENERATE, де повертається остання середня точка).

        Raises
        ------
        ValueError
            Якщо lower_bound >= upper_bound або init_estimate не лежить
            строго всередині меж.
        """
        return self._minimize(func, self.callback)

    __call__ = minimize

    def verbose(self, func: CostFunction) -> QuadraticSearchResult:
        """
        Діагностичний режим: той самий minimize(), але кожна ітерація
        (позиції та значення дужки) і підсумок пишуться у logging.
        """
        tracer = TraceLogger()
        result = self._minimize(func, _chain_callbacks(self.callback, tracer))
        tracer.report(result)
        return result

    def _minimize(
        self,
        func: CostFunction,
        callback: Optional[SearchCallback],
    ) -> QuadraticSearchResult:
        cfg = self.config()
        cfg.validate()

        self._last_status = SearchStatus.EXECUTING
        try:
            result = _run_search(func, cfg, callback, self.progress)
        except Exception:
            # перерваний запуск не має статусу
            self._last_status = None
            raise
        self._last_status = result.status

        return result


__all__ = [
    "CostFunction",
    "SearchStatus",
    "QuadraticSearchConfig",
    "QuadraticSearchResult",
    "QuadraticLineSearch",
]
