"""End-to-end pulse analysis of a sampled waveform.

:func:`analyze_waveform` chains the core stages

``smooth -> detect_edges -> reconcile_edges -> analyze_pulses -> validate_range``

using the defaults from :class:`~pulsemeter.config.Settings`.  Each stage
raises its own :class:`~pulsemeter.core.errors.PulseAnalysisError` subclass,
which is propagated unchanged to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .config import Settings
from .core.pulses import analyze_pulses
from .core.reconcile import detect_and_reconcile
from .core.smoothing import smooth
from .core.validation import check_duty_ratio, check_frequency
from .types import EdgeSequence, PulseMeasurements

logger = logging.getLogger(__name__)


@dataclass
class PulseReport:
    """Result of :func:`analyze_waveform`.

    Attributes
    ----------
    samples:
        Samples the edges were detected on (smoothed when smoothing is
        enabled).
    edges:
        Reconciled edge sequence.
    measurements:
        Per-cycle frequency and duty ratio.
    frequency_ok, duty_ok:
        Outcome of the acceptance checks.
    """

    samples: np.ndarray
    edges: EdgeSequence
    measurements: PulseMeasurements
    sample_rate: float
    frequency_ok: bool
    duty_ok: bool

    @property
    def passed(self) -> bool:
        return self.frequency_ok and self.duty_ok

    def summary(self) -> dict:
        m = self.measurements
        return {
            "edges": len(self.edges),
            "rising_first": self.edges.is_rising_first,
            "cycles": len(m),
            "frequency_mean": float(np.mean(m.frequencies)) if len(m) else None,
            "duty_ratio_mean": float(np.mean(m.duty_ratios)) if len(m) else None,
            "frequency_ok": self.frequency_ok,
            "duty_ok": self.duty_ok,
            "passed": self.passed,
        }


def analyze_waveform(
    samples: Sequence[float],
    *,
    settings: Settings | None = None,
    sample_rate: float | None = None,
) -> PulseReport:
    """Run the complete pulse analysis on ``samples``.

    ``sample_rate`` overrides ``settings.acquisition.sample_rate``.
    """

    if settings is None:
        settings = Settings()
    if sample_rate is None:
        sample_rate = settings.acquisition.sample_rate

    data = np.asarray(samples, dtype=float).reshape(-1)
    if settings.smoothing.enabled:
        data = smooth(data, settings.smoothing.kernel_size)

    edges = detect_and_reconcile(data, settings.thresholds.min, settings.thresholds.max)
    measurements = analyze_pulses(edges, edges.is_rising_first, sample_rate)

    frequency_ok = check_frequency(measurements.frequencies, settings=settings)
    duty_ok = check_duty_ratio(measurements.duty_ratios, settings=settings)
    report = PulseReport(
        samples=data,
        edges=edges,
        measurements=measurements,
        sample_rate=sample_rate,
        frequency_ok=frequency_ok,
        duty_ok=duty_ok,
    )
    if not report.passed:
        logger.warning(
            "pulse train rejected: frequency_ok=%s duty_ok=%s (%d cycles)",
            frequency_ok,
            duty_ok,
            len(measurements),
        )
    else:
        logger.info("pulse train accepted (%d cycles)", len(measurements))
    return report
