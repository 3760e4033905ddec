"""
Settings package for bn-data-editor.

This package provides a modular, type-safe configuration management system
using Qt's QSettings for cross-platform storage.

Usage:
    from bn_data_editor.settings import AppSettings, ValidationResult

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import ConfigError, GamePathInfo, ValidationResult
from .paths import validate_game_path
from .mods import ModSettings

__all__ = [
    "AppSettings",
    "ConfigError",
    "GamePathInfo",
    "ValidationResult",
    "validate_game_path",
    "ModSettings",
]
