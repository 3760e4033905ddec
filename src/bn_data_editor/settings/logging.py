"""
Logging-related settings for bn-data-editor.
"""

import logging

from .base import SettingsGroup

logger = logging.getLogger(__name__)

LOG_FILE_PATH = "logs/bn_data_editor.csv"

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_BUFFER_LINES = 1000


class LoggingSettings(SettingsGroup):
    """Console, file and in-memory buffer logging options."""

    def _set_level(self, key: str, value: str, current: str) -> None:
        if value.upper() not in VALID_LEVELS:
            logger.warning(f"Invalid log level {value!r} for {key}, keeping {current}")
            return
        self._set(key, value.upper())

    # === CONSOLE ===

    @property
    def console_logging(self) -> bool:
        return self._get_bool("logging/console_enabled", True)

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._set("logging/console_enabled", value)

    @property
    def console_log_level(self) -> str:
        """Minimum level printed to stderr (WARNING unless changed)."""
        return self._get_str("logging/console_level", "WARNING")

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        self._set_level("logging/console_level", value, self.console_log_level)

    @property
    def console_use_colors(self) -> bool:
        return self._get_bool("logging/console_use_colors", True)

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._set("logging/console_use_colors", value)

    # === FILE ===

    @property
    def file_logging(self) -> bool:
        return self._get_bool("logging/file_enabled", False)

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._set("logging/file_enabled", value)

    @property
    def log_file_path(self) -> str:
        """CSV log location, relative to the working directory. Not configurable."""
        return LOG_FILE_PATH

    # === BUFFER ===

    @property
    def buffer_log_level(self) -> str:
        """Level an attached log view displays; the buffer itself keeps DEBUG."""
        return self._get_str("logging/buffer_level", "INFO")

    @buffer_log_level.setter
    def buffer_log_level(self, value: str) -> None:
        self._set_level("logging/buffer_level", value, self.buffer_log_level)

    @property
    def buffer_max_lines(self) -> int:
        return self._get_int("logging/buffer_max_lines", DEFAULT_BUFFER_LINES)

    @buffer_max_lines.setter
    def buffer_max_lines(self, value: int) -> None:
        if value <= 0:
            logger.warning(f"Invalid buffer size {value}, keeping {self.buffer_max_lines}")
            return
        self._set("logging/buffer_max_lines", value)
