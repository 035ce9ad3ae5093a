"""Utilities for converting pulse measurements into tabular form.

This module turns a :class:`~pulsemeter.types.PulseMeasurements` object into a
pandas ``DataFrame`` with one row per cycle.  The table can optionally be
persisted to disk in either CSV or NPZ formats.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from ..types import PulseMeasurements

COLUMNS = ["cycle", "start_index", "period_samples", "frequency", "duty_ratio"]


def measurements_to_frame(measurements: PulseMeasurements) -> pd.DataFrame:
    """Return a :class:`~pandas.DataFrame` with one row per cycle."""

    n = len(measurements)
    starts = measurements.cycle_starts if measurements.cycle_starts.size == n else np.full(n, -1)
    periods = measurements.periods if measurements.periods.size == n else np.full(n, -1)
    return pd.DataFrame(
        {
            "cycle": np.arange(n),
            "start_index": starts,
            "period_samples": periods,
            "frequency": measurements.frequencies,
            "duty_ratio": measurements.duty_ratios,
        },
        columns=COLUMNS,
    )


def save_measurements(
    measurements: PulseMeasurements,
    *,
    save_csv: Optional[Path] = None,
    save_npz: Optional[Path] = None,
) -> pd.DataFrame:
    """Persist ``measurements`` and return the table that was written.

    Parameters
    ----------
    save_csv:
        When provided, the table is written to this path using
        :meth:`pandas.DataFrame.to_csv`.
    save_npz:
        When provided, a compressed ``npz`` archive containing one array per
        column is written to this path using :func:`numpy.savez_compressed`.
    """

    df = measurements_to_frame(measurements)

    if save_csv is not None:
        Path(save_csv).parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(save_csv, index=False)

    if save_npz is not None:
        Path(save_npz).parent.mkdir(parents=True, exist_ok=True)
        np.savez_compressed(save_npz, **{col: df[col].to_numpy() for col in COLUMNS})

    return df
