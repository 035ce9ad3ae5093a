"""Matplotlib styles for pulsemeter visualisations."""

from __future__ import annotations

import matplotlib.pyplot as plt

# Values can be overridden by supplying a mapping to :func:`apply_style`.
BASE_STYLE = {
    "figure.figsize": (10, 4),
    "axes.grid": True,
    "grid.linestyle": "--",
    "grid.alpha": 0.5,
    "lines.linewidth": 1.0,
}

RISING_COLOR = "tab:green"
FALLING_COLOR = "tab:red"
BAND_COLOR = "tab:gray"


def apply_style(extra: dict | None = None) -> None:
    """Apply a consistent matplotlib style.

    Parameters
    ----------
    extra:
        Optional dictionary of rcParams that override the base style.
    """
    style = BASE_STYLE.copy()
    if extra:
        style.update(extra)
    plt.rcParams.update(style)
