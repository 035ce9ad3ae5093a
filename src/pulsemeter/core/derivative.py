"""Numerical slope of a sampled waveform.

The slope is useful for inspecting how sharp the transitions of a pulse train
are before choosing a hysteresis band.  Estimates are returned in signal units
per second for every sample, so the output matches the input length.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from scipy.signal import savgol_filter

from ..config import Settings
from .errors import InvalidInputError

METHODS = ("central", "savgol")


def _validate_window(W: int, n: int) -> None:
    """Validate window size ``W`` against ``n`` samples."""
    if W % 2 == 0:
        raise InvalidInputError("W must be an odd integer")
    if W < 3:
        raise InvalidInputError("W must be at least 3")
    if W > n:
        raise InvalidInputError("W must not exceed the length of the series")


def central_difference(samples: np.ndarray, dt: float, W: int) -> np.ndarray:
    """Slope over a symmetric ``W``-sample span.

    Samples closer than ``W//2`` to either end reuse the slope of the first or
    last full window.
    """
    n = samples.size
    half = W // 2
    span = (W - 1) * dt
    out = np.empty(n, dtype=float)
    out[half : n - half] = (samples[W - 1 :] - samples[: n - W + 1]) / span
    out[:half] = out[half]
    out[n - half :] = out[n - half - 1]
    return out


def derivative(
    samples: Sequence[float],
    sample_rate: float | None = None,
    W: int | None = None,
    *,
    method: str | None = None,
    settings: Settings | None = None,
    polyorder: int = 2,
) -> np.ndarray:
    """Estimate the first derivative of ``samples``.

    Parameters
    ----------
    samples:
        Sampled signal values.
    sample_rate:
        Samples per second.  Defaults to ``settings.acquisition.sample_rate``.
    W:
        Odd window length, at least 3.  Defaults to ``settings.derivative.W``.
    method:
        ``"central"`` for a windowed central difference or ``"savgol"`` for a
        Savitzky-Golay derivative filter.

    Returns
    -------
    numpy.ndarray
        Slope estimates matching the length of ``samples``.
    """

    if settings is None:
        settings = Settings()
    if sample_rate is None:
        sample_rate = settings.acquisition.sample_rate
    if W is None:
        W = settings.derivative.W
    if method is None:
        method = settings.derivative.method

    if sample_rate <= 0:
        raise InvalidInputError("sample_rate must be positive")
    if method not in METHODS:
        raise InvalidInputError(f"unknown derivative method {method!r}; expected one of {METHODS}")

    arr = np.asarray(samples, dtype=float).reshape(-1)
    _validate_window(W, arr.size)
    dt = 1.0 / sample_rate

    if method == "central":
        return central_difference(arr, dt, W)
    if polyorder >= W:
        raise InvalidInputError("polyorder must be less than W")
    return savgol_filter(arr, window_length=W, polyorder=polyorder, deriv=1, delta=dt, mode="interp")
