"""Tests for logging configuration."""

import logging
from pathlib import Path
from typing import List, Tuple

import pytest

from bn_data_editor.settings import AppSettings
from bn_data_editor.utils.logging_config import (
    BufferedLogHandler,
    ColoredFormatter,
    CSVFormatter,
    get_buffer_handler,
    setup_logging,
)


def make_record(message: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("bn_data_editor.test", level, __file__, 42, message, None, None)


class TestFormatters:
    """Test console and file formatters."""

    def test_colored_level_name(self) -> None:
        """Test only the level name is wrapped in color codes."""
        formatter = ColoredFormatter(fmt="%(levelname)s : %(message)s")
        output = formatter.format(make_record("hello", logging.WARNING))
        assert output == "\033[33mWARNING\033[0m : hello"

    def test_csv_quotes_escaped(self) -> None:
        """Test quotes in messages are doubled."""
        output = CSVFormatter().format(make_record('say "hi"'))
        assert output.endswith('"bn_data_editor.test";"42";"say ""hi"""')
        assert ";INFO    ;" in output


class TestBufferedLogHandler:
    """Test the in-memory handler."""

    def test_buffer_is_bounded(self) -> None:
        """Test only the newest records are kept."""
        handler = BufferedLogHandler(max_lines=2)
        for i in range(3):
            handler.emit(make_record(f"msg {i}"))
        assert [r.getMessage() for r in handler.get_buffer()] == ["msg 1", "msg 2"]
        handler.clear_buffer()
        assert handler.get_buffer() == []

    def test_callback_receives_formatted(self) -> None:
        """Test the callback gets record and formatted text."""
        received: List[Tuple[logging.LogRecord, str]] = []
        handler = BufferedLogHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        handler.set_log_callback(lambda record, msg: received.append((record, msg)))

        handler.emit(make_record("boom", logging.ERROR))
        assert received[0][1] == "ERROR boom"

    def test_set_level_keeps_capturing(self) -> None:
        """Test the display level does not filter captured records."""
        handler = BufferedLogHandler()
        handler.setLevel("ERROR")
        assert handler.level == logging.DEBUG
        assert handler.display_level == logging.ERROR

        handler.emit(make_record("quiet", logging.INFO))
        handler.emit(make_record("loud", logging.ERROR))
        assert [r.getMessage() for r in handler.visible_records()] == ["loud"]
        assert len(handler.get_buffer()) == 2


class TestSetupLogging:
    """Test setup_logging from settings."""

    def test_setup_with_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test console, file and buffer handlers are installed."""
        monkeypatch.chdir(tmp_path)
        settings = AppSettings(settings_file=tmp_path / "settings.ini")
        settings.file_logging = True
        settings.buffer_max_lines = 10

        handler = setup_logging(settings)
        logging.getLogger("bn_data_editor.test").info("written")

        assert get_buffer_handler() is handler
        assert handler.max_lines == 10
        assert any(r.getMessage() == "written" for r in handler.get_buffer())
        assert logging.getLogger("bn_data_editor").level == logging.DEBUG
        log_file = tmp_path / "logs" / "bn_data_editor.csv"
        for h in logging.getLogger().handlers:
            h.flush()
        assert "written" in log_file.read_text(encoding="utf-8")

    def test_console_disabled(self, tmp_path: Path) -> None:
        """Test only the buffer handler remains without console and file."""
        settings = AppSettings(settings_file=tmp_path / "settings.ini")
        settings.console_logging = False

        handler = setup_logging(settings)
        assert logging.getLogger().handlers == [handler]

    def test_console_level_override(self, tmp_path: Path) -> None:
        """Test an explicit console level beats the stored one."""
        settings = AppSettings(settings_file=tmp_path / "settings.ini")
        setup_logging(settings, console_level="DEBUG")

        console = [
            h for h in logging.getLogger().handlers
            if type(h) is logging.StreamHandler
        ]
        assert console[0].level == logging.DEBUG
        assert settings.console_log_level == "WARNING"
