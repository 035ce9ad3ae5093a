"""Matplotlib helpers for inspecting waveforms and detected edges."""

from .plot_edges import plot_edges, save_or_show
from .styles import apply_style

__all__ = ["plot_edges", "save_or_show", "apply_style"]
