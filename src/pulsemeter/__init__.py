"""Pulse timing analysis for sampled waveforms.

The package reduces a digitized signal to hysteresis edges, reconciles them
into an alternating edge sequence and derives per-cycle frequency and duty
ratio that can be checked against acceptance bounds.
"""

from .config import Settings, load_settings
from .core import (
    CountMismatchError,
    EmptyEdgesError,
    InvalidInputError,
    NonMonotonicError,
    PulseAnalysisError,
    TooFewEdgesError,
    analyze_pulses,
    derivative,
    detect_and_reconcile,
    detect_edges,
    reconcile_edges,
    smooth,
    validate_range,
)
from .pipeline import PulseReport, analyze_waveform
from .types import EdgeSequence, PulseMeasurements, Waveform

__all__ = [
    "Settings",
    "load_settings",
    "smooth",
    "detect_edges",
    "reconcile_edges",
    "detect_and_reconcile",
    "analyze_pulses",
    "validate_range",
    "derivative",
    "analyze_waveform",
    "PulseReport",
    "EdgeSequence",
    "PulseMeasurements",
    "Waveform",
    "PulseAnalysisError",
    "InvalidInputError",
    "CountMismatchError",
    "EmptyEdgesError",
    "NonMonotonicError",
    "TooFewEdgesError",
]
