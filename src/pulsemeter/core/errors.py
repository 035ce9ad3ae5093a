"""Exceptions raised by the pulse analysis pipeline."""

from __future__ import annotations


class PulseAnalysisError(ValueError):
    """Base class for every failure reported by :mod:`pulsemeter.core`."""


class InvalidInputError(PulseAnalysisError):
    """Bad lengths, inverted thresholds, or a non-positive rate or kernel."""


class CountMismatchError(PulseAnalysisError):
    """Rising and falling edge lists cannot be interleaved."""


class EmptyEdgesError(PulseAnalysisError):
    """Neither a rising nor a falling edge was supplied."""


class NonMonotonicError(PulseAnalysisError):
    """An edge sequence is not strictly increasing."""


class TooFewEdgesError(PulseAnalysisError):
    """Fewer than three edges, so no complete cycle can be measured."""
