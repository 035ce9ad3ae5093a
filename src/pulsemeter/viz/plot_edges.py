"""Plot a waveform together with its hysteresis band and detected edges."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np

from ..types import EdgeSequence
from .styles import BAND_COLOR, FALLING_COLOR, RISING_COLOR, apply_style


def plot_edges(
    samples: Sequence[float],
    edges: EdgeSequence | None = None,
    thresholds: tuple[float, float] | None = None,
    *,
    sample_rate: float | None = None,
    title: str = "Waveform",
    ax: plt.Axes | None = None,
) -> plt.Figure:
    """Draw ``samples`` with optional band and edge markers.

    The x axis is in seconds when ``sample_rate`` is given, otherwise in
    samples.  Returns the figure that holds ``ax``.
    """

    apply_style()
    if ax is None:
        fig, ax = plt.subplots()
    else:
        fig = ax.figure

    data = np.asarray(samples, dtype=float)
    scale = 1.0 / sample_rate if sample_rate else 1.0
    x = np.arange(data.size) * scale
    ax.plot(x, data, label="signal")

    if thresholds is not None:
        low, high = thresholds
        ax.axhspan(low, high, color=BAND_COLOR, alpha=0.2, label="hysteresis band")

    if edges is not None and len(edges):
        rising = edges.rising
        falling = edges.falling
        ax.scatter(rising * scale, data[rising], marker="^", color=RISING_COLOR, label="rising", zorder=3)
        ax.scatter(falling * scale, data[falling], marker="v", color=FALLING_COLOR, label="falling", zorder=3)

    ax.set_title(title)
    ax.set_xlabel("Time [s]" if sample_rate else "Sample")
    ax.set_ylabel("Amplitude")
    ax.legend(loc="upper right")
    return fig


def save_or_show(fig: plt.Figure, save: str | Path | None = None, show: bool = False) -> None:
    """Save ``fig`` to ``save`` or display it interactively.

    If ``save`` is ``None`` the figure will only be shown when ``show`` is
    True.  When both are unset the figure is shown by default to give quick
    feedback during inspection.
    """
    if save:
        fig.savefig(save, bbox_inches="tight")
    if show or not save:
        plt.show()
