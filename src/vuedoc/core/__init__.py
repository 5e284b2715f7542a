"""Core configuration and logging helpers for :mod:`vuedoc`."""

from __future__ import annotations

from .config import (
    ExtractionSettings,
    Feature,
    NameCase,
    SettingsError,
    Visibility,
    load_settings,
    settings_from_mapping,
)
from .logging import Logger, configure_logging, get_logger

__all__ = [
    "ExtractionSettings",
    "Feature",
    "Logger",
    "NameCase",
    "SettingsError",
    "Visibility",
    "configure_logging",
    "get_logger",
    "load_settings",
    "settings_from_mapping",
]
