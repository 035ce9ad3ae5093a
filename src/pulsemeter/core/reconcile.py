"""Merge rising and falling edge lists into one chronological sequence."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ..types import EdgeSequence
from .edges import detect_edges
from .errors import CountMismatchError, EmptyEdgesError, NonMonotonicError

logger = logging.getLogger(__name__)


def is_strictly_increasing(indices: Sequence[int]) -> bool:
    """Return ``True`` if every entry of ``indices`` is below its successor.

    Sequences with fewer than two entries are trivially increasing.
    """

    arr = np.asarray(indices).reshape(-1)
    if arr.size < 2:
        return True
    return bool(np.all(arr[:-1] < arr[1:]))


def reconcile_edges(rising: Sequence[int], falling: Sequence[int]) -> EdgeSequence:
    """Interleave ``rising`` and ``falling`` edge indices.

    The list holding the earliest edge leads and may carry one extra
    trailing edge.  A lone edge in a single non-empty list is accepted as a
    one-element sequence.

    Raises
    ------
    CountMismatchError
        The list lengths differ by two or more, the trailing list is longer
        than the leading one, or a single non-empty list holds more than one
        edge.
    EmptyEdgesError
        Both lists are empty.
    NonMonotonicError
        The merged sequence is not strictly increasing.
    """

    r = np.asarray(rising, dtype=np.int64).reshape(-1)
    f = np.asarray(falling, dtype=np.int64).reshape(-1)

    if abs(r.size - f.size) >= 2:
        raise CountMismatchError(
            f"rising and falling edge counts differ by {abs(r.size - f.size)} ({r.size} vs {f.size})"
        )

    if r.size and f.size:
        is_rising_first = bool(r[0] < f[0])
        lead, trail = (r, f) if is_rising_first else (f, r)
        if trail.size > lead.size:
            raise CountMismatchError(
                "edge lists cannot alternate: the list starting later holds an extra edge"
            )
        indices = np.empty(lead.size + trail.size, dtype=np.int64)
        indices[0::2] = lead
        indices[1::2] = trail
    elif r.size or f.size:
        single = r if r.size else f
        if single.size != 1:
            raise CountMismatchError(
                f"{single.size} edges of a single type cannot form an alternating sequence"
            )
        is_rising_first = bool(r.size)
        indices = single.copy()
    else:
        raise EmptyEdgesError("no rising or falling edges to reconcile")

    if not is_strictly_increasing(indices):
        raise NonMonotonicError("reconciled edge sequence is not strictly increasing")

    logger.debug(
        "reconciled %d edges (%s first)", indices.size, "rising" if is_rising_first else "falling"
    )
    return EdgeSequence(indices, is_rising_first)


def detect_and_reconcile(
    samples: Sequence[float],
    min_threshold: float,
    max_threshold: float,
) -> EdgeSequence:
    """Detect hysteresis edges in ``samples`` and reconcile them."""

    rising, falling = detect_edges(samples, min_threshold, max_threshold)
    return reconcile_edges(rising, falling)
