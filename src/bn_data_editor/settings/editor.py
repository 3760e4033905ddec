"""
Editor-related settings for bn-data-editor.
"""

from typing import Optional

from .base import SettingsGroup


class EditorSettings(SettingsGroup):
    """Manages editor-related settings."""

    @property
    def tileset(self) -> Optional[str]:
        """Selected tileset directory name, None until one is chosen."""
        value = self._get_str("editor/tileset")
        return value or None

    @tileset.setter
    def tileset(self, value: Optional[str]) -> None:
        self._set("editor/tileset", value or "")
