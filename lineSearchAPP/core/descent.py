"""
descent.py

Метод найшвидшого спуску (Коші), у якому довжина кроку на кожній ітерації
визначається квадратичним лінійним пошуком.

Ідея:
    x_{k+1} = x_k + α_k * p_k,
    де p_k = -∇f(x_k),
        α_k = argmin φ(α), φ(α) = f(x_k + α p_k), знаходиться через
        core.line_search.line_search_along.

Це типовий "споживач" лінійного пошуку: 1D-підзадача розв'язується
повторно на кожній ітерації багатовимірного процесу.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from .functions import ArrayLike, ScalarFunction, VectorFunction, numerical_gradient
from .line_search import line_search_along

logger = logging.getLogger(__name__)


@dataclass
class DescentStep:
    """
    Одна ітерація спуску.

    Атрибути:
        index      - номер ітерації (0 – початкова точка);
        x          - точка x_k;
        f          - f(x_k);
        step_norm  - ||x_k - x_{k-1}||;
        alpha      - знайдений крок α_k (NaN для index = 0);
        meta       - службова інформація line search.
    """
    index: int
    x: np.ndarray
    f: float
    step_norm: float = 0.0
    alpha: float = float("nan")
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DescentResult:
    x_star: np.ndarray
    f_star: float
    n_iter: int
    func_evals: int
    grad_evals: int
    stopped_by: str
    history: List[DescentStep] = field(default_factory=list)


DescentCallback = Callable[[DescentStep], None]


class SteepestDescent:
    """
    Найшвидший спуск з квадратичним лінійним пошуком.

    Налаштування (options):
        grad_tol               : поріг норми градієнта (default: 1e-8)
        line_search_a          : ліва межа інтервалу для α (default: 0.0)
        line_search_b          : права межа інтервалу для α (default: 1.0)
        line_search_tol        : поріг ширини дужки по α (default: 0.1% інтервалу)
        line_search_max_iter   : ліміт ітерацій 1D-пошуку (default: 50)
        exit_if_outside_bounds : чи зупинятися, якщо α* поза [a, b]
                                 (default: False – дужка розширюється)
    """

    def __init__(
        self,
        func: ScalarFunction,
        grad: Optional[VectorFunction] = None,
        options: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
    ) -> None:
        self.func = func
        self._grad = grad
        self.options: Dict[str, Any] = options or {}
        self.name: str = name or "Steepest descent (quadratic line search)"

        self.func_evals: int = 0
        self.grad_evals: int = 0

    def eval_f(self, x: ArrayLike) -> float:
        self.func_evals += 1
        return float(self.func(np.asarray(x, dtype=float)))

    def eval_grad(self, x: ArrayLike) -> np.ndarray:
        self.grad_evals += 1
        x_arr = np.asarray(x, dtype=float)
        if self._grad is not None:
            return np.asarray(self._grad(x_arr), dtype=float)
        return numerical_gradient(self.func, x_arr)

    def run(
        self,
        x0: ArrayLike,
        max_iter: int = 200,
        tol_step: float = 1e-6,
        tol_f: float = 1e-9,
        callback: Optional[DescentCallback] = None,
    ) -> DescentResult:
        """
        Запустити спуск з точки x0.

        Причини зупинки: "small_gradient", "line_search:<статус>",
        "step_norm", "f_change", "max_iter".
        """
        self.func_evals = 0
        self.grad_evals = 0

        grad_tol = float(self.options.get("grad_tol", 1e-8))
        ls_a = float(self.options.get("line_search_a", 0.0))
        ls_b = float(self.options.get("line_search_b", 1.0))
        ls_tol = self.options.get("line_search_tol")
        ls_max_iter = int(self.options.get("line_search_max_iter", 50))
        ls_options = {
            "exit_if_outside_bounds": bool(self.options.get("exit_if_outside_bounds", False)),
        }

        x_k = np.asarray(x0, dtype=float).copy()
        f_k = self.eval_f(x_k)

        history: List[DescentStep] = [DescentStep(index=0, x=x_k.copy(), f=f_k)]
        if callback is not None:
            callback(history[0])

        stopped_by = "max_iter"

        for k in range(1, max_iter + 1):
            g_k = self.eval_grad(x_k)
            if float(np.linalg.norm(g_k, ord=2)) < grad_tol:
                stopped_by = "small_gradient"
                break

            p_k = -g_k

            ls_result = line_search_along(
                self.eval_f,
                x_k,
                p_k,
                a=ls_a,
                b=ls_b,
                tol=ls_tol,
                max_iter=ls_max_iter,
                options=ls_options,
            )

            if not ls_result.success:
                stopped_by = f"line_search:{ls_result.meta['stopped_by']}"
                logger.info("%s: лінійний пошук не вдався на ітерації %d (%s)",
                            self.name, k, stopped_by)
                break

            x_next = ls_result.meta["x_new"]
            f_next = float(ls_result.phi_value)
            step_norm = float(np.linalg.norm(x_next - x_k, ord=2))

            rec = DescentStep(
                index=k,
                x=x_next.copy(),
                f=f_next,
                step_norm=step_norm,
                alpha=float(ls_result.alpha),
                meta={
                    "grad_norm": float(np.linalg.norm(g_k, ord=2)),
                    "line_search_iterations": ls_result.iterations,
                    "line_search_evals": ls_result.func_evals,
                },
            )
            history.append(rec)
            if callback is not None:
                callback(rec)

            if step_norm < tol_step:
                stopped_by = "step_norm"
                x_k, f_k = x_next, f_next
                break
            if abs(f_next - f_k) < tol_f:
                stopped_by = "f_change"
                x_k, f_k = x_next, f_next
                break

            x_k, f_k = x_next, f_next

        logger.debug("%s: зупинка (%s) після %d ітерацій", self.name, stopped_by, len(history) - 1)

        return DescentResult(
            x_star=x_k.copy(),
            f_star=f_k,
            n_iter=len(history) - 1,
            func_evals=self.func_evals,
            grad_evals=self.grad_evals,
            stopped_by=stopped_by,
            history=history,
        )


__all__ = [
    "DescentStep",
    "DescentResult",
    "DescentCallback",
    "SteepestDescent",
]
