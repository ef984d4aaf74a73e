"""
Лаконічна темна тема для графіків лінійного пошуку.

Основні принципи:
    - темні фони, мінімум рамок;
    - один акцентний колір для траси пошуку;
    - спокійні вторинні відтінки для тексту, сітки й обводок.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class AppPalette:
    background: str = "#0f1115"
    surface: str = "#171a1f"
    surface_alt: str = "#1f242b"

    text_main: str = "#e7ebf2"
    text_muted: str = "#9aa4b5"

    accent: str = "#5fb3f7"  # спокійний блакитний акцент
    accent_alt: str = "#7dcfff"
    warning: str = "#f7a35f"

    border: str = "#2a3039"


PALETTE = AppPalette()


def style_2d_axes(ax) -> None:
    """Застосувати темну тему до matplotlib Axes."""
    ax.set_facecolor(PALETTE.surface_alt)
    ax.tick_params(colors=PALETTE.text_muted, labelsize=9)
    for spine in ax.spines.values():
        spine.set_color(PALETTE.border)
        spine.set_linewidth(0.8)
    ax.grid(True, color=PALETTE.border, linestyle="--", linewidth=0.5, alpha=0.6)
    ax.title.set_color(PALETTE.text_main)
    ax.xaxis.label.set_color(PALETTE.text_main)
    ax.yaxis.label.set_color(PALETTE.text_main)
