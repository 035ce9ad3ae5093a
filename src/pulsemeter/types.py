"""Common type helpers for pulsemeter.

This module defines the lightweight containers exchanged between the
pipeline stages.  Index arrays are always stored as ``numpy`` integer
arrays and measurement arrays as ``float`` arrays so downstream code can
rely on vectorised arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True)
class EdgeSequence:
    """Chronological edge indices alternating between rising and falling.

    ``is_rising_first`` tells the type of ``indices[0]``; every following
    entry flips the type.
    """

    indices: np.ndarray
    is_rising_first: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "indices", np.asarray(self.indices, dtype=np.int64).reshape(-1))

    def __len__(self) -> int:
        return int(self.indices.size)

    @property
    def rising(self) -> np.ndarray:
        """Return the rising-edge indices contained in the sequence."""

        start = 0 if self.is_rising_first else 1
        return self.indices[start::2]

    @property
    def falling(self) -> np.ndarray:
        """Return the falling-edge indices contained in the sequence."""

        start = 1 if self.is_rising_first else 0
        return self.indices[start::2]


@dataclass
class PulseMeasurements:
    """Per-cycle frequency and duty ratio derived from an edge sequence."""

    frequencies: np.ndarray
    duty_ratios: np.ndarray
    cycle_starts: np.ndarray = field(default_factory=lambda: np.array([], dtype=np.int64))
    periods: np.ndarray = field(default_factory=lambda: np.array([], dtype=np.int64))

    def __post_init__(self) -> None:
        self.frequencies = np.asarray(self.frequencies, dtype=float)
        self.duty_ratios = np.asarray(self.duty_ratios, dtype=float)
        self.cycle_starts = np.asarray(self.cycle_starts, dtype=np.int64)
        self.periods = np.asarray(self.periods, dtype=np.int64)
        if self.frequencies.shape != self.duty_ratios.shape:
            raise ValueError("frequencies and duty_ratios must have the same length")

    def __len__(self) -> int:
        return int(self.frequencies.size)


@dataclass
class Waveform:
    """Container for a loaded sample buffer."""

    samples: np.ndarray
    sample_rate: float | None = None
    source: str = "<memory>"

    def __post_init__(self) -> None:
        self.samples = np.asarray(self.samples, dtype=float).reshape(-1)

    @property
    def duration(self) -> float | None:
        """Return the buffer length in seconds when the rate is known."""

        if not self.sample_rate:
            return None
        return self.samples.size / self.sample_rate
