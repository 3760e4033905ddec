"""
Logging configuration for bn-data-editor.
"""

import logging
import logging.handlers
from pathlib import Path
from collections import deque
from typing import Optional, List, Callable, Union, TYPE_CHECKING

from PySide6.QtCore import QObject, Signal

if TYPE_CHECKING:
    from ..settings import AppSettings

PROJECT_LOGGER = "bn_data_editor"


LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
RESET = "\033[0m"

class ColoredFormatter(logging.Formatter):
    """Wraps the first occurrence of the level name in an ANSI color."""

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if color is None:
            return formatted
        return formatted.replace(record.levelname, f"{color}{record.levelname}{RESET}", 1)


class CSVFormatter(logging.Formatter):
    """Semicolon-separated rows: timestamp, level, elapsed, logger, line, message.

    The level column is padded and unquoted so the file stays readable in a
    plain text viewer.
    """

    @staticmethod
    def _quote(value: str) -> str:
        return '"' + value.replace('"', '""') + '"'

    def format(self, record: logging.LogRecord) -> str:
        return ";".join(
            [
                self._quote(self.formatTime(record, self.datefmt)),
                record.levelname.ljust(8),
                self._quote(f"{int(record.relativeCreated)} ms"),
                self._quote(record.name),
                self._quote(str(record.lineno)),
                self._quote(record.getMessage()),
            ]
        )


class LogEmitter(QObject):
    """Qt object for emitting log signals safely across threads."""

    log_received = Signal(logging.LogRecord, str)
    error_occurred = Signal(logging.LogRecord, str)


class BufferedLogHandler(logging.Handler):
    """
    Keeps the most recent records in memory for a log view to replay.

    The handler itself always accepts DEBUG; `setLevel` only changes
    `display_level`, which `visible_records` filters on, so a view can lower
    its level later and still see earlier debug output. Each record is also
    forwarded to an optional callback and to the Qt `LogEmitter` signals.
    """

    def __init__(self, max_lines: int = 1000):
        super().__init__(logging.DEBUG)
        self.max_lines = max_lines
        self.buffer: deque[logging.LogRecord] = deque(maxlen=max_lines)
        self.display_level = logging.INFO
        self.log_callback: Optional[Callable[[logging.LogRecord, str], None]] = None
        self.log_emitter: Optional[LogEmitter] = LogEmitter()

    def setLevel(self, level: Union[int, str]) -> None:
        self.display_level = logging.getLevelName(level) if isinstance(level, str) else level
        super().setLevel(logging.DEBUG)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:
            self.handleError(record)
            return

        self.buffer.append(record)
        if self.log_callback:
            self.log_callback(record, msg)
        if self.log_emitter:
            self.log_emitter.log_received.emit(record, msg)  # type: ignore
            if record.levelno >= logging.ERROR:
                self.log_emitter.error_occurred.emit(record, msg)  # type: ignore

    def get_buffer(self) -> List[logging.LogRecord]:
        return list(self.buffer)

    def visible_records(self) -> List[logging.LogRecord]:
        """Buffered records at or above the display level."""
        return [r for r in self.buffer if r.levelno >= self.display_level]

    def clear_buffer(self) -> None:
        self.buffer.clear()

    def set_log_callback(self, callback: Callable[[logging.LogRecord, str], None]) -> None:
        self.log_callback = callback


_buffer_handler: Optional[BufferedLogHandler] = None


def get_buffer_handler() -> Optional[BufferedLogHandler]:
    """Return the handler installed by the last `setup_logging` call."""
    return _buffer_handler


def setup_logging(
    settings: "AppSettings", console_level: Optional[str] = None
) -> BufferedLogHandler:
    """
    Setup application logging with console, file, and buffer handlers.

    Args:
        settings: AppSettings instance for all logging configuration
        console_level: Console level to use instead of the stored one

    Returns:
        The in-memory buffer handler, for a log view to attach to
    """
    global _buffer_handler

    console_enabled = settings.console_logging
    console_level = console_level or settings.console_log_level
    use_colors = settings.console_use_colors
    file_enabled = settings.file_logging
    log_file = settings.log_file_path

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    project_logger = logging.getLogger(PROJECT_LOGGER)
    project_logger.setLevel(logging.DEBUG)

    # Drop handlers of a previous setup
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    if console_enabled:
        fmt = "%(asctime)s : %(levelname)-8s : %(message)s"
        if use_colors:
            console_formatter: logging.Formatter = ColoredFormatter(fmt=fmt, datefmt="%H:%M:%S")
        else:
            console_formatter = logging.Formatter(fmt=fmt, datefmt="%H:%M:%S")

        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper(), logging.INFO))
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    log_path = None
    if file_enabled:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(CSVFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
            root_logger.addHandler(file_handler)
        except OSError as e:
            # Continue with the remaining handlers
            root_logger.warning(f"Could not setup file logging: {e}")
            log_path = None

    # Suppress DEBUG logs from noisy libraries
    logging.getLogger("PIL").setLevel(logging.INFO)

    buffer_handler = BufferedLogHandler(max_lines=settings.buffer_max_lines)
    buffer_handler.setFormatter(
        logging.Formatter(fmt="%(asctime)s : %(levelname)-8s : %(message)s : %(name)s:%(lineno)d")
    )
    buffer_handler.setLevel(settings.buffer_log_level)
    root_logger.addHandler(buffer_handler)
    _buffer_handler = buffer_handler

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized")
    if console_enabled:
        logger.debug(f"Console logging: {console_level} (colors: {use_colors})")
    if log_path:
        logger.debug(f"File logging: DEBUG at {log_path.absolute()}")

    return buffer_handler
