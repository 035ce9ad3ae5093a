"""Utility modules for loading sampled waveforms."""

from .waveform import WaveformLoadError, load_waveform

__all__ = [
    "load_waveform",
    "WaveformLoadError",
]
