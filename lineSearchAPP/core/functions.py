"""
functions.py

Тестові цільові функції для лінійного пошуку.

Формат:
    - одномірні функції q1, ..., q5 працюють зі скаляром x: float;
      кожна має "рідну" дужку [lower_bound, upper_bound] у реєстрі FUNCTIONS_1D;
    - двовимірні функції f2, f8 (x: numpy.ndarray форми (2,)) та їх градієнти –
      для багатовимірного спуску, де лінійний пошук розв'язує 1D-підзадачу;
    - numerical_gradient – чисельний градієнт, якщо аналітичного немає.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict

import numpy as np

ArrayLike = np.ndarray
Scalar1DFunction = Callable[[float], float]
ScalarFunction = Callable[[ArrayLike], float]
VectorFunction = Callable[[ArrayLike], ArrayLike]


# ---------------------------------------------------------------------------
# Чисельний градієнт (центральні різниці)
# ---------------------------------------------------------------------------

def numerical_gradient(
    func: ScalarFunction,
    x: ArrayLike,
    h: float = 1e-6,
) -> ArrayLike:
    """
    Чисельний градієнт за центральною різницею.

    ∂f/∂x_i ≈ (f(x + h e_i) - f(x - h e_i)) / (2h)
    """
    x = np.asarray(x, dtype=float)
    grad = np.zeros_like(x, dtype=float)

    for i in range(len(x)):
        x_fwd = x.copy()
        x_bwd = x.copy()
        x_fwd[i] += h
        x_bwd[i] -= h
        grad[i] = (func(x_fwd) - func(x_bwd)) / (2.0 * h)

    return grad


# ---------------------------------------------------------------------------
# Одномірні функції q1–q5
# ---------------------------------------------------------------------------

def q1(x: float) -> float:
    """q1(x) = (x - 2)^2, мінімум у x = 2."""
    return (x - 2.0) ** 2


def q2(x: float) -> float:
    """
    q2(x) = (x - 12)^2
    На рідній дужці [-5, 5] мінімум лежить поза дужкою.
    """
    return (x - 12.0) ** 2


def q3(x: float) -> float:
    """q3(x) = exp(x) – строго монотонна, мінімуму на дужці немає."""
    return math.exp(x)


def q4(x: float) -> float:
    """q4(x) = sin(x) – на [0, π] це "горб", тобто не опукла функція."""
    return math.sin(x)


def q5(x: float) -> float:
    """q5(x) = cosh(x - 1), гладка опукла, мінімум у x = 1."""
    return math.cosh(x - 1.0)


# ---------------------------------------------------------------------------
# Двовимірні функції для спуску
# x = [x1, x2]
# ---------------------------------------------------------------------------

def f2(x: ArrayLike) -> float:
    """
    f2(x1, x2) = (x1 - x2)^2 + (x1 + x2 - 10)^2 / 9
    """
    x1, x2 = np.asarray(x, dtype=float)
    return (x1 - x2) ** 2 + (x1 + x2 - 10.0) ** 2 / 9.0


def grad_f2(x: ArrayLike) -> ArrayLike:
    x1, x2 = np.asarray(x, dtype=float)
    common = 2.0 * (x1 + x2 - 10.0) / 9.0
    return np.array([2.0 * (x1 - x2) + common, -2.0 * (x1 - x2) + common])


def f8(x: ArrayLike) -> float:
    """
    f8(x1, x2) = (x1 - 4)^2 + (x2 - 4)^2
    (проста квадратична форма)
    """
    x1, x2 = np.asarray(x, dtype=float)
    return (x1 - 4.0) ** 2 + (x2 - 4.0) ** 2


def grad_f8(x: ArrayLike) -> ArrayLike:
    return 2.0 * (np.asarray(x, dtype=float) - 4.0)


# ---------------------------------------------------------------------------
# Реєстри функцій
# ---------------------------------------------------------------------------

@dataclass
class TargetFunction1D:
    key: str
    name: str
    func: Scalar1DFunction
    lower_bound: float
    upper_bound: float


@dataclass
class TargetFunction:
    key: str
    name: str
    func: ScalarFunction
    grad: VectorFunction


FUNCTIONS_1D: Dict[str, TargetFunction1D] = {
    "q1": TargetFunction1D(
        key="q1",
        name="q1(x) = (x - 2)^2",
        func=q1,
        lower_bound=-5.0,
        upper_bound=5.0,
    ),
    "q2": TargetFunction1D(
        key="q2",
        name="q2(x) = (x - 12)^2",
        func=q2,
        lower_bound=-5.0,
        upper_bound=5.0,
    ),
    "q3": TargetFunction1D(
        key="q3",
        name="q3(x) = exp(x)",
        func=q3,
        lower_bound=-1.0,
        upper_bound=1.0,
    ),
    "q4": TargetFunction1D(
        key="q4",
        name="q4(x) = sin(x)",
        func=q4,
        lower_bound=0.0,
        upper_bound=math.pi,
    ),
    "q5": TargetFunction1D(
        key="q5",
        name="q5(x) = cosh(x - 1)",
        func=q5,
        lower_bound=-3.0,
        upper_bound=4.0,
    ),
}

FUNCTIONS: Dict[str, TargetFunction] = {
    "f2": TargetFunction(
        key="f2",
        name="f2(x1, x2) = (x1 - x2)^2 + (x1 + x2 - 10)^2 / 9",
        func=f2,
        grad=grad_f2,
    ),
    "f8": TargetFunction(
        key="f8",
        name="f8(x1, x2) = (x1 - 4)^2 + (x2 - 4)^2",
        func=f8,
        grad=grad_f8,
    ),
}

__all__ = [
    "ArrayLike",
    "Scalar1DFunction",
    "ScalarFunction",
    "VectorFunction",
    "numerical_gradient",
    "q1", "q2", "q3", "q4", "q5",
    "f2", "f8",
    "grad_f2", "grad_f8",
    "TargetFunction1D",
    "TargetFunction",
    "FUNCTIONS_1D",
    "FUNCTIONS",
]
