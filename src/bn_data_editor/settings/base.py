"""
Typed access to a QSettings store shared by all settings subsystems.
"""

from typing import Any, List, TYPE_CHECKING, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


class SettingsGroup:
    """Base class of settings subsystems.

    QSettings hands back strings for everything stored in INI files (and a
    bare string for one-element lists), so every read goes through a typed
    getter.
    """

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    def _get_int(self, key: str, default: int = 0) -> int:
        value = self.settings.value(key, default)
        try:
            return int(str(value)) if value is not None else default
        except (ValueError, TypeError):
            return default

    def _get_list(self, key: str) -> List[str]:
        value = self.settings.value(key, [])
        if isinstance(value, str):
            return [value] if value else []
        if isinstance(value, list):
            return [str(item) for item in cast(list[object], value) if item]
        return []

    def _set(self, key: str, value: Any) -> None:
        """Store a value and write it through immediately."""
        self.settings.setValue(key, value)
        self.settings.sync()
