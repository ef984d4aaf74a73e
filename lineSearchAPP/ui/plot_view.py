"""
Графіки для діагностики квадратичного лінійного пошуку (matplotlib).

Показує:
    - графік цільової функції на області, яку відвідав пошук;
    - інтерпольовані точки n та значення f(n);
    - межі кінцевої дужки [l, u].

Працює з трасою SearchIteration, яку збирає core.search_observers.TraceRecorder.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

import numpy as np
from matplotlib.figure import Figure

from ..core.search_observers import SearchIteration
from .styles import PALETTE, style_2d_axes


def _trace_span(records: Sequence[SearchIteration]) -> tuple:
    xs = [x for rec in records for x in (rec.bracket[0], rec.bracket[2])]
    xs += [rec.candidate for rec in records if rec.candidate is not None]
    lo, hi = min(xs), max(xs)
    pad = 0.05 * (hi - lo) if hi > lo else 1.0
    return lo - pad, hi + pad


def plot_search_trace(
    ax,
    records: Sequence[SearchIteration],
    func: Optional[Callable[[float], float]] = None,
    n_points: int = 200,
) -> None:
    """
    Намалювати трасу пошуку на ax.

    Лінії: графік func (якщо передано) та дві вертикалі кінцевої дужки.
    Точки: кандидати (n, f(n)) з усіх ітерацій.
    """
    style_2d_axes(ax)

    if not records:
        ax.text(0.5, 0.5, "Немає даних для відображення", ha="center", va="center",
                transform=ax.transAxes, color=PALETTE.text_muted)
        return

    lo, hi = _trace_span(records)

    if func is not None:
        xs = np.linspace(lo, hi, n_points)
        ys = np.array([func(float(x)) for x in xs], dtype=float)
        ax.plot(xs, ys, linestyle="-", linewidth=1.2, color=PALETTE.text_muted)

    cands = np.array(
        [(rec.candidate, rec.candidate_value) for rec in records if rec.candidate is not None],
        dtype=float,
    )
    if cands.size:
        ax.scatter(cands[:, 0], cands[:, 1], color=PALETTE.accent, marker="o", s=30, zorder=5)

    l, _, u = records[-1].bracket
    ax.axvline(l, color=PALETTE.warning, linestyle="--", linewidth=1.0)
    ax.axvline(u, color=PALETTE.warning, linestyle="--", linewidth=1.0)

    ax.set_xlabel("x")
    ax.set_ylabel("f(x)")
    ax.set_title(f"Квадратичний пошук: {len(records) - 1} ітерацій")


def save_search_trace(
    path: str,
    records: Sequence[SearchIteration],
    func: Optional[Callable[[float], float]] = None,
) -> Figure:
    """Зберегти графік траси у файл (без pyplot, через окремий Figure)."""
    fig = Figure(figsize=(7.0, 4.5), facecolor=PALETTE.surface)
    ax = fig.add_subplot(111)
    plot_search_trace(ax, records, func)
    fig.tight_layout()
    fig.savefig(path, facecolor=fig.get_facecolor())
    return fig


__all__ = [
    "plot_search_trace",
    "save_search_trace",
]
