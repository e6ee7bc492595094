"""Public API for faultline configuration."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    ClientSettings,
    DecoderSettings,
    FaultlineSettings,
    HttpSettings,
    LoggingSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ClientSettings",
    "DecoderSettings",
    "FaultlineSettings",
    "HttpSettings",
    "LoggingSettings",
    "load_settings",
]
