"""
Settings validation system for bn-data-editor.
"""

import logging
from pathlib import Path
from typing import List, TYPE_CHECKING

from .paths import validate_game_path
from .types import ConfigError, ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        game_path = self.settings.game_path
        if game_path:
            try:
                info = validate_game_path(game_path)
                if not info.is_bn_root:
                    warnings.append(
                        f"No Cataclysm-BN executable found in game path: {game_path}"
                    )
            except ConfigError as e:
                errors.append(f"Invalid game path {game_path}: {e}")
        else:
            warnings.append("Game path not set")

        for directory in self.settings.mod_directories:
            if not Path(directory).is_dir():
                warnings.append(f"Mod directory no longer exists: {directory}")

        if errors:
            logger.debug(f"Settings validation failed with {len(errors)} errors")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
