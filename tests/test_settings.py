"""Tests for settings persistence and game path detection."""

from pathlib import Path

import pytest

from bn_data_editor.settings import AppSettings, ConfigError, validate_game_path


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(settings_file=tmp_path / "settings.ini")


class TestAppSettings:
    """Test AppSettings values and defaults."""

    def test_defaults(self, settings: AppSettings) -> None:
        """Test defaults of a fresh settings file."""
        assert settings.game_path is None
        assert settings.tileset is None
        assert settings.mod_directories == []
        assert settings.console_logging is True
        assert settings.console_log_level == "WARNING"
        assert settings.file_logging is False
        assert settings.buffer_max_lines == 1000
        assert settings.get_settings_file_path().endswith("settings.ini")

    def test_values_persist(self, tmp_path: Path) -> None:
        """Test values survive a new AppSettings on the same file."""
        settings_file = tmp_path / "settings.ini"
        settings = AppSettings(settings_file=settings_file)
        settings.game_path = tmp_path / "game"
        settings.tileset = "UltimateCataclysm"
        settings.file_logging = True
        settings.buffer_max_lines = 250
        settings.sync()

        reopened = AppSettings(settings_file=settings_file)
        assert reopened.game_path == tmp_path / "game"
        assert reopened.data_path == tmp_path / "game" / "data"
        assert reopened.tilesets_path == tmp_path / "game" / "gfx"
        assert reopened.tileset == "UltimateCataclysm"
        assert reopened.file_logging is True
        assert reopened.buffer_max_lines == 250

    def test_profiles_are_separate(self, tmp_path: Path) -> None:
        """Test profiles do not share values."""
        settings_file = tmp_path / "settings.ini"
        AppSettings(profile="one", settings_file=settings_file).tileset = "A"
        assert AppSettings(profile="two", settings_file=settings_file).tileset is None

    def test_mod_directories(self, settings: AppSettings, tmp_path: Path) -> None:
        """Test adding and removing mod directories."""
        assert settings.add_mod_directory(tmp_path / "mods_a") is True
        assert settings.add_mod_directory(tmp_path / "mods_a") is False
        assert settings.mod_directories == [str(tmp_path / "mods_a")]

        settings.add_mod_directory(tmp_path / "mods_b")
        assert settings.remove_mod_directory(tmp_path / "mods_a") is True
        assert settings.remove_mod_directory(tmp_path / "mods_a") is False
        assert settings.mod_directories == [str(tmp_path / "mods_b")]

    def test_invalid_log_level_ignored(self, settings: AppSettings) -> None:
        """Test unknown log levels keep the current value."""
        settings.console_log_level = "debug"
        assert settings.console_log_level == "DEBUG"
        settings.console_log_level = "LOUD"
        assert settings.console_log_level == "DEBUG"


class TestSettingsValidation:
    """Test settings validation."""

    def test_unset_game_path_warns(self, settings: AppSettings) -> None:
        """Test a missing game path is a warning only."""
        result = settings.validate()
        assert result.is_valid
        assert "Game path not set" in result.warnings

    def test_invalid_game_path_is_error(self, settings: AppSettings, tmp_path: Path) -> None:
        """Test a directory without data/json is an error."""
        settings.game_path = tmp_path
        result = settings.validate()
        assert not result.is_valid
        assert len(result.errors) == 1

    def test_missing_mod_directory_warns(self, settings: AppSettings, game_dir: Path, tmp_path: Path) -> None:
        """Test vanished mod directories are reported."""
        settings.game_path = game_dir
        settings.add_mod_directory(tmp_path / "gone")
        result = settings.validate()
        assert result.is_valid
        assert any("gone" in w for w in result.warnings)


class TestValidateGamePath:
    """Test game path detection."""

    def test_missing_path(self, tmp_path: Path) -> None:
        """Test a nonexistent path raises ConfigError."""
        with pytest.raises(ConfigError):
            validate_game_path(tmp_path / "nope")

    def test_missing_data_json(self, tmp_path: Path) -> None:
        """Test a directory without data/json raises ConfigError."""
        with pytest.raises(ConfigError):
            validate_game_path(tmp_path)

    def test_installed_game(self, game_dir: Path) -> None:
        """Test an installation with a binary."""
        (game_dir / "cataclysm-bn-tiles").write_text("", encoding="utf-8")
        info = validate_game_path(game_dir)
        assert info.valid
        assert info.path_type == "installed"
        assert info.is_bn_root
        assert info.data_path == str(game_dir)

    def test_repository(self, game_dir: Path) -> None:
        """Test a source checkout counts as a game root."""
        (game_dir / "src").mkdir()
        info = validate_game_path(game_dir)
        assert info.path_type == "repository"
        assert info.is_bn_root

    def test_macos_bundle(self, tmp_path: Path) -> None:
        """Test an app bundle resolves to Contents/Resources."""
        bundle = tmp_path / "Cataclysm.app"
        resources = bundle / "Contents" / "Resources"
        (resources / "data" / "json").mkdir(parents=True)
        info = validate_game_path(bundle)
        assert info.path_type == "macos_app"
        assert info.data_path == str(resources)
        assert info.is_bn_root is False
