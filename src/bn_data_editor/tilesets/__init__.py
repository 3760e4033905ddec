"""
Module for working with Cataclysm-BN tilesets.

Lists installed tilesets and resolves tile ids to sprite sheet positions.
"""

from .service import TilesetService
from .models import TilesetInfo, SpriteSheet, SheetRange, TileMapping, TilesetConfig

__all__ = [
    "TilesetService",
    "TilesetInfo",
    "SpriteSheet",
    "SheetRange",
    "TileMapping",
    "TilesetConfig",
]
