"""
Path-related settings for bn-data-editor.
"""

from pathlib import Path
from typing import Optional, Union

from .base import SettingsGroup
from .types import ConfigError, GamePathInfo

# Game binaries across platforms and releases
GAME_BINARY_NAMES = (
    "cataclysm-bn-tiles",
    "cataclysm-bn-tiles.exe",
    "cataclysm-bn",
    "cataclysm-bn.exe",
    "cataclysm-tiles",
    "cataclysm-tiles.exe",
)


def has_game_binary(path: Path) -> bool:
    """Check if a directory contains a Cataclysm-BN executable."""
    return any((path / name).exists() for name in GAME_BINARY_NAMES)


def validate_game_path(path: Union[str, Path]) -> GamePathInfo:
    """Check whether a directory looks like a Cataclysm-BN installation.

    Accepts an installed game or a source checkout (both have data/json),
    and a macOS .app bundle (data lives under Contents/Resources).

    Args:
        path: Candidate game directory

    Returns:
        Description of the installation

    Raises:
        ConfigError: If the path does not exist or has no data/json
    """
    game_path = Path(path)
    if not game_path.exists():
        raise ConfigError("Path does not exist")

    if not (game_path / "data" / "json").exists():
        resources = game_path / "Contents" / "Resources"
        if (resources / "data" / "json").exists():
            return GamePathInfo(
                valid=True,
                path_type="macos_app",
                data_path=str(resources),
                is_bn_root=has_game_binary(resources)
                or (game_path / "Contents" / "MacOS" / "cataclysm-bn-tiles").exists(),
            )
        raise ConfigError("Not a valid Cataclysm-BN directory (missing data/json)")

    is_repo = (game_path / ".git").exists() or (game_path / "src").exists()
    return GamePathInfo(
        valid=True,
        path_type="repository" if is_repo else "installed",
        data_path=str(game_path),
        is_bn_root=has_game_binary(game_path) or is_repo,
    )


class PathSettings(SettingsGroup):
    """Game directory and the paths derived from it."""

    @property
    def game_path(self) -> Optional[Path]:
        """Get Cataclysm-BN game directory path."""
        path_str = self._get_str("paths/game", "")
        return Path(path_str) if path_str else None

    @game_path.setter
    def game_path(self, value: Optional[Path]) -> None:
        """Set Cataclysm-BN game directory path."""
        self._set("paths/game", str(value) if value else "")

    @property
    def data_path(self) -> Optional[Path]:
        """Get game data directory path (derived from game_path)."""
        if self.game_path:
            return self.game_path / "data"
        return None

    @property
    def tilesets_path(self) -> Optional[Path]:
        """Get tilesets directory path (derived from game_path)."""
        if self.game_path:
            return self.game_path / "gfx"
        return None
