"""
results_summary.py

Зведена таблиця результатів квадратичного лінійного пошуку
для кількох цільових функцій.

Працює поверх об'єктів з інтерфейсом QuadraticSearchResult:
    - estimate
    - value
    - status
    - iterations
    - func_evals
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class ResultsSummary:
    """
    Зведення результатів пошуку для кількох функцій.

    Приклад використання:
        summary = ResultsSummary()
        summary.add_run("q1", result_q1)
        summary.add_run("q3", result_q3)
        rows = summary.as_rows()  # для CLI / pandas / CSV
    """
    runs: List[Tuple[str, Any]] = field(default_factory=list)

    def add_run(self, key: str, result: Any) -> None:
        """Додати результат пошуку для функції key."""
        self.runs.append((key, result))

    def __len__(self) -> int:
        return len(self.runs)

    # ------------------------------------------------------------------
    # Перетворення в "табличний" вигляд
    # ------------------------------------------------------------------

    def as_rows(self) -> List[Dict[str, Any]]:
        """
        Повернути список dict-рядків з полями:
            function, estimate, value, status, iterations, func_evals
        """
        rows: List[Dict[str, Any]] = []

        for key, result in self.runs:
            status = getattr(result, "status", None)
            rows.append(
                {
                    "function": key,
                    "estimate": float(result.estimate),
                    "value": float(getattr(result, "value", math.nan)),
                    "status": status.value if status is not None else None,
                    "iterations": int(getattr(result, "iterations", 0)),
                    "func_evals": int(getattr(result, "func_evals", 0)),
                }
            )

        return rows

    # ------------------------------------------------------------------
    # Вибір "найкращого" запуску
    # ------------------------------------------------------------------

    def best_by_value(self) -> Optional[Tuple[str, Any]]:
        """
        Повернути (key, result) з найменшим value серед успішних запусків.
        Якщо успішних немає – None.
        """
        best = None
        best_value = None

        for key, result in self.runs:
            if not getattr(result, "success", False):
                continue
            value = float(getattr(result, "value", math.nan))
            if math.isnan(value):
                continue
            if best_value is None or value < best_value:
                best_value = value
                best = (key, result)

        return best

    def format_table(self) -> str:
        """Текстова таблиця для виводу в консоль."""
        header = f"{'function':<10}{'status':<16}{'estimate':>14}{'value':>14}{'iter':>6}{'evals':>7}"
        lines = [header, "-" * len(header)]
        for row in self.as_rows():
            lines.append(
                f"{row['function']:<10}{row['status'] or '-':<16}"
                f"{row['estimate']:>14.6g}{row['value']:>14.6g}"
                f"{row['iterations']:>6d}{row['func_evals']:>7d}"
            )
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Опційно: повернути pandas.DataFrame
    # ------------------------------------------------------------------

    def to_dataframe(self):
        """
        Повернути pandas.DataFrame зі зведеною таблицею.

        Вимога: встановлений пакет pandas.
        """
        try:
            import pandas as pd  # type: ignore
        except ImportError as exc:  # pragma: no cover
            raise RuntimeError(
                "Для використання ResultsSummary.to_dataframe() "
                "потрібно встановити пакет 'pandas'."
            ) from exc

        return pd.DataFrame(self.as_rows())


__all__ = ["ResultsSummary"]
