"""
Mod-related settings for bn-data-editor.
"""

from pathlib import Path
from typing import List, Union

from .base import SettingsGroup


class ModSettings(SettingsGroup):
    """Extra mod directories, searched in addition to the game's data/mods."""

    @property
    def mod_directories(self) -> List[str]:
        return self._get_list("mods/directories")

    @mod_directories.setter
    def mod_directories(self, value: List[str]) -> None:
        self._set("mods/directories", list(value))

    def add_mod_directory(self, path: Union[str, Path]) -> bool:
        """Add a mod directory if not already present.

        Returns:
            True if it was added
        """
        directories = self.mod_directories
        if str(path) in directories:
            return False
        self.mod_directories = directories + [str(path)]
        return True

    def remove_mod_directory(self, path: Union[str, Path]) -> bool:
        """Remove a mod directory.

        Returns:
            True if it was present
        """
        directories = self.mod_directories
        if str(path) not in directories:
            return False
        directories.remove(str(path))
        self.mod_directories = directories
        return True
