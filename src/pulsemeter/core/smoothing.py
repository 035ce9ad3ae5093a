"""Moving-average pre-filter for raw sample buffers.

Each interior sample is replaced by the mean of ``kernel_size`` consecutive
input samples.  Odd kernels are centred on the sample; even kernels reach one
sample further forward than backward.  Samples without a full window on both
sides are copied through unchanged so the output always matches the input
length.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..config import Settings
from .errors import InvalidInputError


def kernel_offsets(kernel_size: int) -> tuple[int, int]:
    """Return ``(start_offset, end_offset)`` for ``kernel_size``.

    ``start_offset`` samples at the head and ``end_offset`` samples at the
    tail of the buffer are left unsmoothed.
    """

    if kernel_size % 2 == 0:
        return kernel_size // 2 - 1, kernel_size // 2
    half = kernel_size // 2
    return half, half


def _validate_kernel(kernel_size: int, n: int) -> None:
    """Validate ``kernel_size`` against ``n`` samples."""
    if n <= 0:
        raise InvalidInputError("samples must not be empty")
    if kernel_size < 3:
        raise InvalidInputError("kernel_size must be at least 3")
    if n < kernel_size:
        raise InvalidInputError("kernel_size must not exceed the number of samples")


def smooth(
    samples: Sequence[float],
    kernel_size: int | None = None,
    *,
    settings: Settings | None = None,
) -> np.ndarray:
    """Apply a moving-average filter to ``samples``.

    Parameters
    ----------
    samples:
        Raw sample values.  The input is not modified.
    kernel_size:
        Number of samples averaged per output value, at least 3 and not more
        than ``len(samples)``.  Defaults to ``settings.smoothing.kernel_size``.

    Returns
    -------
    numpy.ndarray
        Filtered samples with the same length as ``samples``.
    """

    if kernel_size is None:
        if settings is None:
            settings = Settings()
        kernel_size = settings.smoothing.kernel_size

    arr = np.asarray(samples, dtype=float).reshape(-1)
    n = arr.size
    _validate_kernel(kernel_size, n)
    start, end = kernel_offsets(kernel_size)

    out = arr.copy()
    means = np.convolve(arr, np.full(kernel_size, 1.0 / kernel_size), mode="valid")
    out[start : n - end] = means
    return out
