"""
Map-editing helpers built on game data.

Extracts palette symbol mappings and the terrain/furniture catalogue used
when painting mapgen rows.
"""

from .palette import PaletteData, SymbolMapping, load_palette, parse_palette_json
from .terrain import (
    TerrainInfo,
    FurnitureInfo,
    list_terrain_types,
    list_furniture_types,
)

__all__ = [
    "PaletteData",
    "SymbolMapping",
    "load_palette",
    "parse_palette_json",
    "TerrainInfo",
    "FurnitureInfo",
    "list_terrain_types",
    "list_furniture_types",
]
