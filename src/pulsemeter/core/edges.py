"""Hysteresis edge detection.

The detector tracks the last confirmed signal level as one of three states:

``ABOVE``
    the last decisive sample was ``>= max_threshold``.
``BELOW``
    the last decisive sample was ``<= min_threshold``.
``BETWEEN``
    no decisive sample has been seen yet.

An edge is only recorded when the level flips between ``ABOVE`` and
``BELOW``.  Leaving ``BETWEEN`` establishes the baseline without emitting an
edge, because the prior level is unknown.
"""

from __future__ import annotations

import enum
import logging
from typing import Sequence

import numpy as np

from .errors import InvalidInputError

logger = logging.getLogger(__name__)


class Level(enum.Enum):
    ABOVE = "above"
    BELOW = "below"
    BETWEEN = "between"


class EdgeKind(enum.Enum):
    RISING = "rising"
    FALLING = "falling"


def classify(value: float, min_threshold: float, max_threshold: float) -> Level:
    """Return the level of a single sample with no history."""
    if value >= max_threshold:
        return Level.ABOVE
    if value <= min_threshold:
        return Level.BELOW
    return Level.BETWEEN


def next_level(
    level: Level, value: float, min_threshold: float, max_threshold: float
) -> tuple[Level, EdgeKind | None]:
    """Advance the hysteresis state by one sample.

    Returns the new level and the edge produced by the transition, if any.
    """

    if level is Level.ABOVE:
        if value <= min_threshold:
            return Level.BELOW, EdgeKind.FALLING
        return level, None
    if level is Level.BELOW:
        if value >= max_threshold:
            return Level.ABOVE, EdgeKind.RISING
        return level, None

    if value <= min_threshold:
        level = Level.BELOW
    if value >= max_threshold:
        level = Level.ABOVE
    return level, None


def _validate_band(min_threshold: float, max_threshold: float, n: int) -> None:
    if max_threshold < min_threshold:
        raise InvalidInputError("max_threshold must not be smaller than min_threshold")
    if n <= 0:
        raise InvalidInputError("samples must not be empty")


def detect_edges(
    samples: Sequence[float],
    min_threshold: float,
    max_threshold: float,
) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(rising, falling)`` edge indices of ``samples``.

    Both arrays are strictly increasing and never share an index.  Sample 0
    only seeds the initial level and is never reported as an edge.
    """

    arr = np.asarray(samples, dtype=float).reshape(-1)
    _validate_band(min_threshold, max_threshold, arr.size)

    rising: list[int] = []
    falling: list[int] = []
    level = classify(arr[0], min_threshold, max_threshold)
    for i in range(1, arr.size):
        level, edge = next_level(level, arr[i], min_threshold, max_threshold)
        if edge is EdgeKind.RISING:
            rising.append(i)
        elif edge is EdgeKind.FALLING:
            falling.append(i)

    logger.debug("detected %d rising and %d falling edges", len(rising), len(falling))
    return np.asarray(rising, dtype=np.int64), np.asarray(falling, dtype=np.int64)
