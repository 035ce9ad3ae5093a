"""Helpers for persisting pulse measurements."""

from .measurements import measurements_to_frame, save_measurements

__all__ = ["measurements_to_frame", "save_measurements"]
