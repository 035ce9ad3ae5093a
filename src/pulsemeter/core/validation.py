"""Acceptance checks for derived pulse measurements."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..config import Settings
from .errors import InvalidInputError


def count_outliers(values: Sequence[float], minimum: float, maximum: float) -> int:
    """Return how many ``values`` fall strictly outside ``[minimum, maximum]``."""
    arr = np.asarray(values, dtype=float).reshape(-1)
    if arr.size == 0:
        return 0
    return int(np.count_nonzero((arr < minimum) | (arr > maximum)))


def validate_range(
    values: Sequence[float],
    minimum: float,
    maximum: float,
    ignore_count: int = 0,
) -> bool:
    """Return ``True`` when at most ``ignore_count`` values are out of range.

    The band is inclusive on both ends.  An empty ``values`` sequence always
    passes.
    """

    if ignore_count < 0:
        raise InvalidInputError("ignore_count must be non-negative")
    return count_outliers(values, minimum, maximum) <= ignore_count


def check_frequency(
    frequencies: Sequence[float],
    minimum: float | None = None,
    maximum: float | None = None,
    ignore_count: int | None = None,
    *,
    settings: Settings | None = None,
) -> bool:
    """Validate ``frequencies`` against the configured acceptance band."""

    if settings is None:
        settings = Settings()
    acc = settings.acceptance
    return validate_range(
        frequencies,
        acc.frequency_min if minimum is None else minimum,
        acc.frequency_max if maximum is None else maximum,
        acc.ignore_count if ignore_count is None else ignore_count,
    )


def check_duty_ratio(
    duty_ratios: Sequence[float],
    minimum: float | None = None,
    maximum: float | None = None,
    ignore_count: int | None = None,
    *,
    settings: Settings | None = None,
) -> bool:
    """Validate ``duty_ratios`` against the configured acceptance band."""

    if settings is None:
        settings = Settings()
    acc = settings.acceptance
    return validate_range(
        duty_ratios,
        acc.duty_min if minimum is None else minimum,
        acc.duty_max if maximum is None else maximum,
        acc.ignore_count if ignore_count is None else ignore_count,
    )
