from .loader import build_settings, load_settings
from .types import ConfigError, RunSettings, UnsupportedConfigFormatError

__all__ = [
    "load_settings",
    "build_settings",
    "RunSettings",
    "ConfigError",
    "UnsupportedConfigFormatError",
]
