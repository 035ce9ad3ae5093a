"""Command line interface for pulsemeter using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, NoReturn, Optional

import json
import logging

import numpy as np
import typer
from pydantic import ValidationError

from .config import Settings, load_settings
from .core import PulseAnalysisError, derivative as estimate_derivative, detect_edges, reconcile_edges, smooth
from .export import save_measurements
from .ingest import WaveformLoadError, load_waveform
from .pipeline import analyze_waveform
from .types import Waveform
from .utils.logging import get_logger, verbosity_to_level

app = typer.Typer(help="Pulse frequency and duty-ratio analysis for sampled waveforms")
logger = logging.getLogger(__name__)


def _parse_override_value(raw: str) -> object:
    lower = raw.lower()
    if lower in {"true", "false"}:
        return lower == "true"
    if lower in {"null", "none"}:
        return None
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        pass
    if raw.startswith("[") or raw.startswith("{"):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            raise typer.BadParameter(f"invalid JSON override value: {raw}") from None
    return raw


def _ensure_path(settings: Settings, keys: List[str]) -> None:
    current: object = settings
    for key in keys[:-1]:
        if not hasattr(current, key):
            raise typer.BadParameter(f"unknown configuration key: {'.'.join(keys)}")
        current = getattr(current, key)
    if not hasattr(current, keys[-1]):
        raise typer.BadParameter(f"unknown configuration key: {'.'.join(keys)}")


def _apply_override(data: Dict[str, object], keys: List[str], value: object) -> None:
    target = data
    for key in keys[:-1]:
        existing = target.get(key)
        if not isinstance(existing, dict):
            existing = {}
            target[key] = existing
        target = existing
    target[keys[-1]] = value


def _load_input(cfg: Settings, source: Optional[Path]) -> Waveform:
    path = source if source is not None else cfg.dataset.waveform
    if path is None:
        raise typer.BadParameter("no waveform given and dataset.waveform is not configured")
    path = Path(path)
    if not path.is_absolute() and source is None:
        path = Path(cfg.dataset.root) / path
    try:
        waveform = load_waveform(
            path,
            column=cfg.acquisition.column,
            skip_rows=cfg.acquisition.skip_rows,
        )
    except FileNotFoundError:
        raise typer.BadParameter(f"waveform file not found: {path}") from None
    except WaveformLoadError as exc:
        typer.secho(str(exc), err=True)
        raise typer.Exit(code=2) from exc
    if waveform.sample_rate is None:
        waveform.sample_rate = cfg.acquisition.sample_rate
    logger.debug("loaded %d samples from %s", waveform.samples.size, waveform.source)
    return waveform


def _fail(exc: PulseAnalysisError) -> NoReturn:
    typer.secho(f"analysis failed: {type(exc).__name__}: {exc}", err=True)
    raise typer.Exit(code=2) from exc


def _save_array(data: np.ndarray, output: str) -> None:
    if output.endswith(".csv"):
        np.savetxt(output, data, delimiter=",")
    else:
        np.save(output, data)


@app.callback()
def init(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        dir_okay=False,
        file_okay=True,
        exists=False,
        help="Path to a YAML or JSON configuration file.",
    ),
    set_overrides: List[str] = typer.Option(
        [],
        "--set",
        help="Override configuration values using dotted paths, e.g. thresholds.max=3.5",
    ),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase log verbosity."),
) -> None:
    """Initialise the Typer context with validated settings."""

    get_logger("pulsemeter", level=verbosity_to_level(verbose))

    if config is not None and not config.exists():
        raise typer.BadParameter(f"configuration file not found: {config}")

    try:
        settings = load_settings(config) if config else Settings()
    except (FileNotFoundError, RuntimeError, TypeError, json.JSONDecodeError, ValidationError) as exc:
        raise typer.BadParameter(f"failed to load configuration: {exc}") from exc

    if set_overrides:
        data = settings.model_dump()
        for override in set_overrides:
            if "=" not in override:
                raise typer.BadParameter(
                    "overrides must be of the form --set section.key=value"
                )
            key, raw_value = override.split("=", 1)
            if not key:
                raise typer.BadParameter("override key cannot be empty")
            keys = key.split(".")
            _ensure_path(settings, keys)
            value = _parse_override_value(raw_value)
            _apply_override(data, keys, value)
        try:
            settings = Settings.model_validate(data)
        except ValidationError as exc:
            raise typer.BadParameter(f"invalid configuration override: {exc}") from exc

    ctx.obj = settings


@app.command("smooth")
def smooth_cmd(
    ctx: typer.Context,
    input: Optional[Path] = typer.Argument(None, help="Waveform file (.csv, .npy, .npz)."),
    kernel: Optional[int] = typer.Option(None, "--kernel", "-k", help="Moving-average kernel size."),
    output: Optional[str] = typer.Option(None, "--output", "-o"),
) -> None:
    """Apply the moving-average filter to a waveform."""

    cfg: Settings = ctx.obj
    waveform = _load_input(cfg, input)
    try:
        smoothed = smooth(waveform.samples, kernel if kernel is not None else cfg.smoothing.kernel_size)
    except PulseAnalysisError as exc:
        _fail(exc)
    if output:
        _save_array(smoothed, output)
        typer.echo(f"saved {smoothed.size} smoothed samples to {output}")
    else:
        typer.echo(" ".join(map(str, smoothed)))


@app.command()
def edges(
    ctx: typer.Context,
    input: Optional[Path] = typer.Argument(None, help="Waveform file (.csv, .npy, .npz)."),
    min_threshold: Optional[float] = typer.Option(None, "--min", help="Lower hysteresis threshold."),
    max_threshold: Optional[float] = typer.Option(None, "--max", help="Upper hysteresis threshold."),
    smoothing: Optional[bool] = typer.Option(None, "--smooth/--no-smooth"),
) -> None:
    """Detect rising and falling edges and print the reconciled sequence."""

    cfg: Settings = ctx.obj
    waveform = _load_input(cfg, input)
    low = cfg.thresholds.min if min_threshold is None else min_threshold
    high = cfg.thresholds.max if max_threshold is None else max_threshold
    if smoothing is None:
        smoothing = cfg.smoothing.enabled

    try:
        data = smooth(waveform.samples, cfg.smoothing.kernel_size) if smoothing else waveform.samples
        rising, falling = detect_edges(data, low, high)
        typer.echo(f"rising: {' '.join(map(str, rising))}")
        typer.echo(f"falling: {' '.join(map(str, falling))}")
        sequence = reconcile_edges(rising, falling)
    except PulseAnalysisError as exc:
        _fail(exc)
    first = "rising" if sequence.is_rising_first else "falling"
    typer.echo(f"edges ({first} first): {' '.join(map(str, sequence.indices))}")


@app.command()
def analyze(
    ctx: typer.Context,
    input: Optional[Path] = typer.Argument(None, help="Waveform file (.csv, .npy, .npz)."),
    sample_rate: Optional[float] = typer.Option(None, "--sample-rate", "-r", help="Samples per second."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write per-cycle table as CSV."),
    npz: Optional[Path] = typer.Option(None, "--npz", help="Write per-cycle table as NPZ."),
) -> None:
    """Measure frequency and duty ratio and check them against the acceptance bounds.

    Exits with status 1 when the measurements are rejected and 2 when the
    waveform cannot be analysed at all.
    """

    cfg: Settings = ctx.obj
    waveform = _load_input(cfg, input)
    rate = sample_rate if sample_rate is not None else waveform.sample_rate

    try:
        report = analyze_waveform(waveform.samples, settings=cfg, sample_rate=rate)
    except PulseAnalysisError as exc:
        _fail(exc)

    if output is not None or npz is not None:
        save_measurements(report.measurements, save_csv=output, save_npz=npz)

    summary = report.summary()
    typer.echo(" ".join(f"{key}={value}" for key, value in summary.items()))
    if not report.passed:
        raise typer.Exit(code=1)


@app.command("derivative")
def derivative_cmd(
    ctx: typer.Context,
    input: Optional[Path] = typer.Argument(None, help="Waveform file (.csv, .npy, .npz)."),
    method: Optional[str] = typer.Option(None, "--method", "-m", help="central or savgol"),
    window: Optional[int] = typer.Option(None, "--window", "-w", help="Odd window length."),
    output: Optional[str] = typer.Option(None, "--output", "-o"),
) -> None:
    """Estimate the slope of a waveform in units per second."""

    cfg: Settings = ctx.obj
    waveform = _load_input(cfg, input)
    try:
        slope = estimate_derivative(
            waveform.samples,
            waveform.sample_rate,
            window,
            method=method,
            settings=cfg,
        )
    except PulseAnalysisError as exc:
        _fail(exc)
    if output:
        _save_array(slope, output)
        typer.echo(f"saved {slope.size} slope values to {output}")
    else:
        typer.echo(" ".join(map(str, slope)))


@app.command()
def plot(
    ctx: typer.Context,
    input: Optional[Path] = typer.Argument(None, help="Waveform file (.csv, .npy, .npz)."),
    save: Optional[str] = typer.Option(None, "--save", help="Path to save the figure."),
    show: bool = typer.Option(False, "--show", help="Display the figure interactively."),
) -> None:
    """Plot a waveform with its hysteresis band and detected edges."""

    cfg: Settings = ctx.obj
    waveform = _load_input(cfg, input)
    save = save or cfg.viz.save

    from .viz import plot_edges, save_or_show

    try:
        data = smooth(waveform.samples, cfg.smoothing.kernel_size) if cfg.smoothing.enabled else waveform.samples
    except PulseAnalysisError as exc:
        _fail(exc)
    try:
        sequence = reconcile_edges(*detect_edges(data, cfg.thresholds.min, cfg.thresholds.max))
    except PulseAnalysisError as exc:
        logger.warning("plotting without edges: %s", exc)
        sequence = None

    fig = plot_edges(
        data,
        sequence,
        cfg.thresholds.band,
        sample_rate=waveform.sample_rate,
        title=cfg.viz.title,
    )
    save_or_show(fig, save, show)
    if save:
        typer.echo(f"saved figure to {save}")


def main() -> None:
    """Execute the Typer application."""

    app()


if __name__ == "__main__":
    main()
