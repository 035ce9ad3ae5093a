"""Per-cycle frequency and duty ratio from a reconciled edge sequence.

A cycle is the window ``e[i], e[i+1], e[i+2]`` starting on a rising edge:
the period spans ``e[i]`` to ``e[i+2]`` and the active (high) interval spans
``e[i]`` to ``e[i+1]``.  Windows advance by two edges so consecutive cycles
share their boundary edge.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ..config import Settings
from ..types import EdgeSequence, PulseMeasurements
from .errors import InvalidInputError, NonMonotonicError, TooFewEdgesError
from .reconcile import is_strictly_increasing

logger = logging.getLogger(__name__)


def analyze_pulses(
    edges: Sequence[int] | EdgeSequence,
    is_rising_first: bool | None = None,
    sample_rate: float | None = None,
    *,
    settings: Settings | None = None,
) -> PulseMeasurements:
    """Compute frequency and duty ratio for each complete cycle.

    Parameters
    ----------
    edges:
        Strictly increasing edge indices alternating between rising and
        falling edges, or an :class:`~pulsemeter.types.EdgeSequence`.
    is_rising_first:
        Type of ``edges[0]``.  Taken from ``edges`` when it is an
        :class:`EdgeSequence` and the argument is omitted.
    sample_rate:
        Samples per second.  Must be positive.  Defaults to
        ``settings.acquisition.sample_rate``.

    Returns
    -------
    PulseMeasurements
        One entry per complete cycle.  Trailing edges that do not close a
        cycle are ignored.
    """

    if sample_rate is None:
        if settings is None:
            settings = Settings()
        sample_rate = settings.acquisition.sample_rate

    if isinstance(edges, EdgeSequence):
        if is_rising_first is None:
            is_rising_first = edges.is_rising_first
        edges = edges.indices
    if is_rising_first is None:
        raise InvalidInputError("is_rising_first is required for a plain index sequence")

    e = np.asarray(edges, dtype=np.int64).reshape(-1)
    if e.size < 3:
        raise TooFewEdgesError(f"at least 3 edges are required, got {e.size}")
    if sample_rate <= 0:
        raise InvalidInputError("sample_rate must be positive")
    if not is_strictly_increasing(e):
        raise NonMonotonicError("edge sequence is not strictly increasing")

    first = 0 if is_rising_first else 1
    # number of full windows e[i], e[i+1], e[i+2] with i = first, first + 2, ...
    n_cycles = max(0, (e.size - first - 1) // 2)
    starts = e[first : first + 2 * n_cycles : 2]
    middles = e[first + 1 : first + 1 + 2 * n_cycles : 2]
    ends = e[first + 2 : first + 2 + 2 * n_cycles : 2]

    periods = ends - starts
    frequencies = sample_rate / periods.astype(float)
    duty_ratios = (middles - starts) / periods.astype(float)

    logger.debug("measured %d cycles from %d edges", n_cycles, e.size)
    return PulseMeasurements(
        frequencies=frequencies,
        duty_ratios=duty_ratios,
        cycle_starts=starts,
        periods=periods,
    )
