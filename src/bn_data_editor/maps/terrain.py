"""
Terrain and furniture catalogue for map painting.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List

from ..game_data.errors import PackIOError
from ..game_data.identity import extract_display_name
from .scanner import game_json_path, iter_json_objects


@dataclass
class TerrainInfo:
    id: str
    name: str
    symbol: str
    color: str


@dataclass
class FurnitureInfo:
    id: str
    name: str
    symbol: str
    color: str


def _collect(game_path: str | Path, object_type: str, default_symbol: str) -> List[Any]:
    data_path = game_json_path(game_path)
    if not data_path.exists():
        raise PackIOError(data_path, "data/json directory not found")

    found: dict[str, tuple[str, str, str]] = {}
    for obj in iter_json_objects(data_path):
        if obj.get("type") != object_type:
            continue
        obj_id = obj.get("id")
        if not isinstance(obj_id, str) or obj_id in found:
            continue

        symbol = obj.get("symbol")
        color = obj.get("color")
        found[obj_id] = (
            extract_display_name(obj) or obj_id,
            symbol if isinstance(symbol, str) else default_symbol,
            color if isinstance(color, str) else "white",
        )

    return sorted(found.items())


def list_terrain_types(game_path: str | Path) -> List[TerrainInfo]:
    """List terrain definitions of the game, sorted and unique by id.

    Raises:
        PackIOError: If the game has no data/json directory
    """
    return [
        TerrainInfo(id=obj_id, name=name, symbol=symbol, color=color)
        for obj_id, (name, symbol, color) in _collect(game_path, "terrain", ".")
    ]


def list_furniture_types(game_path: str | Path) -> List[FurnitureInfo]:
    """List furniture definitions of the game, sorted and unique by id.

    Raises:
        PackIOError: If the game has no data/json directory
    """
    return [
        FurnitureInfo(id=obj_id, name=name, symbol=symbol, color=color)
        for obj_id, (name, symbol, color) in _collect(game_path, "furniture", "#")
    ]
