"""
Data models for Cataclysm-BN tilesets.

Lightweight dataclasses only: no file-system or service logic.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class TilesetInfo:
    """A tileset directory found under gfx/."""

    name: str
    path: str


@dataclass
class SpriteSheet:
    """One sprite sheet image of a tileset."""

    file: str
    sprite_width: int
    sprite_height: int
    sprite_offset_x: int = 0
    sprite_offset_y: int = 0


@dataclass
class SheetRange:
    """Global sprite index range [start_index, end_index) covered by a sheet."""

    file: str
    start_index: int
    end_index: int

    def contains(self, index: int) -> bool:
        return self.start_index <= index < self.end_index


@dataclass
class TileMapping:
    """Sprites of one tile id.

    fg/bg are LOCAL indices within `file`, converted from the global
    indices used in tile_config.json.
    """

    id: str
    fg: Optional[int]
    bg: Optional[int]
    file: str


@dataclass
class TilesetConfig:
    """Resolved tileset configuration."""

    name: str
    tile_width: int
    tile_height: int
    sprite_sheets: List[SpriteSheet] = field(default_factory=list)
    mappings: Dict[str, TileMapping] = field(default_factory=dict)
