"""Configuration utilities for pulsemeter.

This module defines a hierarchical configuration schema using Pydantic models.
The :class:`Settings` container groups the hysteresis thresholds, smoothing
kernel, acquisition parameters and acceptance bounds used by the analysis
pipeline.  Instances can be populated from environment variables or from
YAML/JSON files with matching nested keys.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import EnvSettingsSource

try:  # pragma: no cover - optional dependency
    import yaml  # type: ignore
except Exception:  # pragma: no cover
    yaml = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class SectionModel(BaseModel):
    """Base model for configuration subsections that ignores unknown fields."""

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Settings schema
# ---------------------------------------------------------------------------


class SmoothingSettings(SectionModel):
    """Moving-average pre-filter applied before edge detection."""

    enabled: bool = True
    kernel_size: int = 15


class ThresholdSettings(SectionModel):
    """Hysteresis band used by the edge detector."""

    min: float = 2.0
    max: float = 3.0

    @model_validator(mode="after")
    def _check_order(self) -> "ThresholdSettings":
        if self.max < self.min:
            raise ValueError("thresholds.max must not be smaller than thresholds.min")
        return self

    @property
    def band(self) -> tuple[float, float]:
        return self.min, self.max


class AcquisitionSettings(SectionModel):
    """Sampling parameters of the captured waveform."""

    sample_rate: float = 1000.0
    column: int = 0
    skip_rows: int = 0


class AcceptanceSettings(SectionModel):
    """Acceptance bounds checked against the per-cycle measurements."""

    frequency_min: float = 0.0
    frequency_max: float = float("inf")
    duty_min: float = 0.0
    duty_max: float = 1.0
    ignore_count: int = 0

    @field_validator("ignore_count")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("ignore_count must be non-negative")
        return value


class DerivativeSettings(SectionModel):
    """Parameters of the numerical derivative helper."""

    W: int = 5
    method: str = "central"


class DatasetSettings(SectionModel):
    """Location of input waveforms."""

    root: str = "."
    waveform: str | None = None


class VizSettings(SectionModel):
    """Configuration for simple visualisation helpers."""

    title: str = "Waveform"
    save: str | None = None


class Settings(BaseSettings):
    """Container for all runtime configuration sections."""

    smoothing: SmoothingSettings = Field(default_factory=SmoothingSettings)
    thresholds: ThresholdSettings = Field(default_factory=ThresholdSettings)
    acquisition: AcquisitionSettings = Field(default_factory=AcquisitionSettings)
    acceptance: AcceptanceSettings = Field(default_factory=AcceptanceSettings)
    derivative: DerivativeSettings = Field(default_factory=DerivativeSettings)
    dataset: DatasetSettings = Field(default_factory=DatasetSettings)
    viz: VizSettings = Field(default_factory=VizSettings)

    model_config = SettingsConfigDict(
        env_prefix="PULSEMETER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        class LenientEnvSettingsSource(EnvSettingsSource):
            def decode_complex_value(self, field_name, target_field, value):  # type: ignore[override]
                try:
                    return super().decode_complex_value(field_name, target_field, value)
                except json.JSONDecodeError:
                    return value

        env_settings.__class__ = LenientEnvSettingsSource
        return init_settings, env_settings, dotenv_settings, file_secret_settings

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``PULSEMETER_*`` environment variables only."""

        return cls()


# ---------------------------------------------------------------------------
# Loading utilities
# ---------------------------------------------------------------------------


def load_settings(path: str | Path) -> Settings:
    """Load settings from a JSON or YAML file."""

    p = Path(path)
    text = p.read_text()
    if p.suffix.lower() in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("PyYAML is required to load YAML files")
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise TypeError("Configuration file must define a mapping")
    return Settings.model_validate(data)
