"""Core algorithms for hysteresis edge extraction and pulse analysis."""

from .derivative import derivative
from .edges import EdgeKind, Level, classify, detect_edges, next_level
from .errors import (
    CountMismatchError,
    EmptyEdgesError,
    InvalidInputError,
    NonMonotonicError,
    PulseAnalysisError,
    TooFewEdgesError,
)
from .pulses import analyze_pulses
from .reconcile import detect_and_reconcile, is_strictly_increasing, reconcile_edges
from .smoothing import smooth
from .validation import check_duty_ratio, check_frequency, count_outliers, validate_range

__all__ = [
    "smooth",
    "Level",
    "EdgeKind",
    "classify",
    "next_level",
    "detect_edges",
    "is_strictly_increasing",
    "reconcile_edges",
    "detect_and_reconcile",
    "analyze_pulses",
    "count_outliers",
    "validate_range",
    "check_frequency",
    "check_duty_ratio",
    "derivative",
    "PulseAnalysisError",
    "InvalidInputError",
    "CountMismatchError",
    "EmptyEdgesError",
    "NonMonotonicError",
    "TooFewEdgesError",
]
