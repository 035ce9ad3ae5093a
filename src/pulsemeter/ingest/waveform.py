# src/pulsemeter/ingest/waveform.py
"""Loader for captured waveform buffers.

Supports:
A) Headerless CSV / text, one sample per line (or several comma separated
   columns, pick one with ``column``)
B) CSV with a single header row; ``column`` may then be a header name
C) ``.npy`` arrays
D) ``.npz`` archives with a ``samples`` entry and optional ``sample_rate``
"""

from __future__ import annotations

import csv
import pathlib
from typing import List, Optional, Union

import numpy as np

from ..types import Waveform


class WaveformLoadError(ValueError):
    """Raised when a waveform file cannot be parsed."""

    def __init__(self, message: str, *, path: Union[str, pathlib.Path], line: int):
        self.path = str(path)
        self.line = line
        super().__init__(f"{self.path}:{self.line}: {message}")


def _is_number(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def _read_text_column(
    p: pathlib.Path, *, column: Union[int, str], skip_rows: int
) -> np.ndarray:
    values: List[float] = []
    col_idx: Optional[int] = column if isinstance(column, int) else None
    seen_data = False
    with open(p, "r", encoding="utf8", newline="") as fh:
        reader = csv.reader(fh)
        for lineno, row in enumerate(reader, start=1):
            if lineno <= skip_rows:
                continue
            cells = [c.strip().lstrip("\ufeff") for c in row]
            if not cells or not any(cells) or cells[0].startswith("#"):
                continue

            # Header row: only accepted before the first numeric row
            if not seen_data and not all(_is_number(c) for c in cells if c):
                names = [c.lower() for c in cells]
                if isinstance(column, str):
                    try:
                        col_idx = names.index(column.lower())
                    except ValueError:
                        raise WaveformLoadError(
                            f"Column {column!r} not found in header {cells}", path=p, line=lineno
                        ) from None
                seen_data = True
                continue

            if col_idx is None:
                raise WaveformLoadError(
                    f"Column {column!r} requires a header row", path=p, line=lineno
                )
            if col_idx >= len(cells):
                raise WaveformLoadError(
                    f"Row has {len(cells)} columns; requested column {col_idx}", path=p, line=lineno
                )
            try:
                values.append(float(cells[col_idx]))
            except ValueError as exc:
                raise WaveformLoadError(
                    f"Invalid sample value {cells[col_idx]!r}", path=p, line=lineno
                ) from exc
            seen_data = True
    return np.asarray(values, dtype=float)


def load_waveform(
    path: Union[str, pathlib.Path],
    *,
    column: Union[int, str] = 0,
    skip_rows: int = 0,
    sample_rate: Optional[float] = None,
) -> Waveform:
    """Load a :class:`~pulsemeter.types.Waveform` from ``path``.

    ``sample_rate`` overrides a rate stored inside ``.npz`` archives.
    """

    p = pathlib.Path(path)
    if not p.exists():
        raise FileNotFoundError(p)

    stored_rate: Optional[float] = None
    suffix = p.suffix.lower()
    if suffix == ".npy":
        samples = np.load(p)
    elif suffix == ".npz":
        with np.load(p, allow_pickle=False) as data:
            if "samples" in data.files:
                samples = data["samples"]
            elif data.files:
                samples = data[data.files[0]]
            else:
                raise WaveformLoadError("Archive holds no arrays", path=p, line=0)
            if "sample_rate" in data.files:
                stored_rate = float(data["sample_rate"])
    else:
        samples = _read_text_column(p, column=column, skip_rows=skip_rows)

    samples = np.asarray(samples, dtype=float)
    if samples.ndim == 2 and suffix in {".npy", ".npz"}:
        if not isinstance(column, int) or column >= samples.shape[1]:
            raise WaveformLoadError(f"Column {column!r} not available", path=p, line=0)
        samples = samples[:, column]
    if samples.ndim != 1:
        raise WaveformLoadError("Waveform must be one-dimensional", path=p, line=0)

    rate = sample_rate if sample_rate is not None else stored_rate
    return Waveform(samples=samples, sample_rate=rate, source=str(p))
