"""
Core settings management for bn-data-editor.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from PySide6.QtCore import QSettings

from .types import ValidationResult
from .validation import SettingsValidator
from .paths import PathSettings
from .editor import EditorSettings
from .logging import LoggingSettings
from .mods import ModSettings

logger = logging.getLogger(__name__)

ORGANIZATION_NAME = "bn_data_editor"
APPLICATION_NAME = "bn_data_editor"


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to application settings with automatic
    cross-platform storage and validation.
    """

    def __init__(
        self, profile: str = "default", settings_file: Optional[Union[str, Path]] = None
    ):
        """Initialize settings storage and subsystems.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: INI file to use instead of the platform store
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings(ORGANIZATION_NAME, APPLICATION_NAME)
        self.profile = profile

        # Use profile as a group: bn_data_editor/default/...
        self.settings.beginGroup(profile)

        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._editor = EditorSettings(self.settings)
        self._logging = LoggingSettings(self.settings)
        self._mods = ModSettings(self.settings)

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def game_path(self) -> Optional[Path]:
        return self._paths.game_path

    @game_path.setter
    def game_path(self, value: Optional[Path]) -> None:
        self._paths.game_path = value

    @property
    def data_path(self) -> Optional[Path]:
        return self._paths.data_path

    @property
    def tilesets_path(self) -> Optional[Path]:
        return self._paths.tilesets_path

    # === EDITOR SETTINGS (DELEGATED) ===

    @property
    def tileset(self) -> Optional[str]:
        return self._editor.tileset

    @tileset.setter
    def tileset(self, value: Optional[str]) -> None:
        self._editor.tileset = value

    # === MOD SETTINGS (DELEGATED) ===

    @property
    def mod_directories(self) -> List[str]:
        return self._mods.mod_directories

    @mod_directories.setter
    def mod_directories(self, value: List[str]) -> None:
        self._mods.mod_directories = value

    def add_mod_directory(self, path: Union[str, Path]) -> bool:
        """Add a mod directory if not already present."""
        return self._mods.add_mod_directory(path)

    def remove_mod_directory(self, path: Union[str, Path]) -> bool:
        """Remove a mod directory."""
        return self._mods.remove_mod_directory(path)

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        return self._logging.console_use_colors

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._logging.console_use_colors = value

    @property
    def file_logging(self) -> bool:
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        return self._logging.log_file_path

    @property
    def buffer_log_level(self) -> str:
        return self._logging.buffer_log_level

    @buffer_log_level.setter
    def buffer_log_level(self, value: str) -> None:
        self._logging.buffer_log_level = value

    @property
    def buffer_max_lines(self) -> int:
        return self._logging.buffer_max_lines

    @buffer_max_lines.setter
    def buffer_max_lines(self, value: int) -> None:
        self._logging.buffer_max_lines = value

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
