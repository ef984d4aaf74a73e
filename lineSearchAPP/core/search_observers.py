"""
search_observers.py

Спостерігачі (observers) для квадратичного лінійного пошуку.

Ідея:
    - алгоритм QuadraticLineSearch реалізований один раз;
    - усе, що стосується трасування та індикації прогресу, підключається
      ззовні як callback:
        * SearchCallback   – отримує SearchIteration (позиції дужки та значення);
        * ProgressCallback – отримує (мітка, номер ітерації).

Готові реалізації:
    - TraceRecorder – зберігає трасу ітерацій (для таблиць і графіків);
    - TraceLogger   – пише трасу в logging (діагностичний режим);
    - TqdmProgress  – індикатор прогресу на базі tqdm.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
from tqdm import tqdm

logger = logging.getLogger(__name__)

Bracket = Tuple[float, float, float]


# ---------------------------------------------------------------------------
# Запис однієї ітерації
# ---------------------------------------------------------------------------

@dataclass
class SearchIteration:
    """
    Стан дужки після однієї ітерації лінійного пошуку.

    Атрибути:
        index           - номер ітерації (0 – початкова дужка);
        bracket         - (l, m, u) після оновлення;
        values          - (f(l), f(m), f(u));
        candidate       - інтерпольована точка n (None для index = 0);
        candidate_value - f(n) (None для index = 0);
        meta            - довільна службова інформація.
    """
    index: int
    bracket: Bracket
    values: Bracket
    candidate: Optional[float] = None
    candidate_value: Optional[float] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def width(self) -> float:
        """Ширина дужки u - l."""
        return self.bracket[2] - self.bracket[0]


SearchCallback = Callable[[SearchIteration], None]
ProgressCallback = Callable[[str, int], None]


# ---------------------------------------------------------------------------
# Накопичення траси
# ---------------------------------------------------------------------------

class TraceRecorder:
    """
    Callback, який просто зберігає всі SearchIteration.

    Приклад:
        recorder = TraceRecorder()
        QuadraticLineSearch(-5.0, 5.0, callback=recorder).minimize(f)
        recorder.records  # [SearchIteration(index=0, ...), ...]
    """

    def __init__(self) -> None:
        self.records: List[SearchIteration] = []

    def __call__(self, record: SearchIteration) -> None:
        self.records.append(record)

    def __len__(self) -> int:
        return len(self.records)

    def clear(self) -> None:
        self.records.clear()

    def candidates(self) -> np.ndarray:
        """Масив пар (n, f(n)) для всіх ітерацій, де була нова точка."""
        pairs = [
            (rec.candidate, rec.candidate_value)
            for rec in self.records
            if rec.candidate is not None
        ]
        return np.asarray(pairs, dtype=float).reshape(-1, 2)

    def widths(self) -> np.ndarray:
        return np.asarray([rec.width for rec in self.records], dtype=float)


# ---------------------------------------------------------------------------
# Діагностичний вивід у лог
# ---------------------------------------------------------------------------

class TraceLogger:
    """
    Callback для діагностичного режиму: пише позиції та значення дужки
    на кожній ітерації у logging (рівень INFO за замовчуванням).
    """

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        self.log = log or logger
        self.level = level

    def __call__(self, record: SearchIteration) -> None:
        l, m, u = record.bracket
        fl, fm, fu = record.values

        if record.candidate is None:
            self.log.log(self.level, "Ініціалізація квадратичного лінійного пошуку")
        else:
            self.log.log(
                self.level,
                "Ітерація %d: нова точка %.6g, значення %.6g",
                record.index, record.candidate, record.candidate_value,
            )

        self.log.log(self.level, "  Позиції  l=%.6g  m=%.6g  u=%.6g", l, m, u)
        self.log.log(self.level, "  Значення f(l)=%.6g  f(m)=%.6g  f(u)=%.6g", fl, fm, fu)

    def report(self, result: Any) -> None:
        """Підсумок запуску (об'єкт зі status, estimate, iterations)."""
        self.log.log(
            self.level,
            "Завершено зі статусом %s: оцінка %.6g, ітерацій %d",
            result.status.value, result.estimate, result.iterations,
        )


# ---------------------------------------------------------------------------
# Індикатор прогресу
# ---------------------------------------------------------------------------

class TqdmProgress:
    """
    Progress-observer на базі tqdm.

    Смуга створюється під час першого виклику, мітка стає її описом.
    Повторне використання для наступного запуску скидає смугу до нуля.
    total за замовчуванням – max_iterations пошуку (якщо відомо).
    """

    def __init__(self, total: Optional[int] = None, **tqdm_kwargs: Any) -> None:
        self.total = total
        self.tqdm_kwargs = tqdm_kwargs
        self.bar: Optional[tqdm] = None

    def __call__(self, label: str, iteration: int) -> None:
        if self.bar is None:
            self.bar = tqdm(total=self.total, desc=label or None, **self.tqdm_kwargs)
        elif iteration <= self.bar.n:
            # новий запуск тим самим observer-ом: смуга починається з нуля
            self.bar.reset(total=self.total)
            self.bar.set_description(label or None)
        self.bar.update(iteration - self.bar.n)

    def close(self) -> None:
        if self.bar is not None:
            self.bar.close()
            self.bar = None

    def __enter__(self) -> "TqdmProgress":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = [
    "Bracket",
    "SearchIteration",
    "SearchCallback",
    "ProgressCallback",
    "TraceRecorder",
    "TraceLogger",
    "TqdmProgress",
]
