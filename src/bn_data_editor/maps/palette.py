"""
Palette symbol mapping extraction.

A mapgen palette maps single-character symbols to terrain and furniture
ids. Values can be a plain id, a list of ids, or a list of weighted
[id, weight] pairs; the first id is what a map preview shows.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..game_data.errors import NotFoundError
from ..game_data.models import GameDataObject
from .scanner import game_json_path, iter_json_objects

if TYPE_CHECKING:
    from ..game_data.service import Workspace

logger = logging.getLogger(__name__)


@dataclass
class SymbolMapping:
    """What a single palette symbol places."""

    symbol: str
    terrain: Optional[str] = None
    furniture: Optional[str] = None


@dataclass
class PaletteData:
    """Symbol mappings of a palette, sorted by symbol."""

    id: str
    mappings: List[SymbolMapping] = field(default_factory=list)
    includes: List[str] = field(default_factory=list)


def extract_first_id(value: Any) -> Optional[str]:
    """Return the first id of "t_floor", ["t_floor", ...] or [["t_floor", 2], ...]."""
    if isinstance(value, str):
        return value
    if isinstance(value, list) and value:
        first: Any = value[0]
        if isinstance(first, str):
            return first
        if isinstance(first, list) and first and isinstance(first[0], str):
            return first[0]
    return None


def parse_palette_json(obj: Any, palette_id: str) -> PaletteData:
    """Build `PaletteData` from a palette object.

    Raises:
        ValueError: If `obj` is not a JSON object
    """
    if not isinstance(obj, dict):
        raise ValueError(f"Palette '{palette_id}' is not an object")

    symbols: Dict[str, SymbolMapping] = {}
    for layer in ("terrain", "furniture"):
        section: Any = obj.get(layer)
        if not isinstance(section, dict):
            continue
        for symbol, value in section.items():  # type: ignore
            mapping = symbols.setdefault(symbol, SymbolMapping(symbol=symbol))
            setattr(mapping, layer, extract_first_id(value))

    includes: Any = obj.get("palettes")
    return PaletteData(
        id=palette_id,
        mappings=sorted(symbols.values(), key=lambda m: m.symbol),
        includes=[p for p in includes if isinstance(p, str)]
        if isinstance(includes, list)
        else [],
    )


def _find_in_game_data(data_path: Path, palette_id: str) -> Optional[GameDataObject]:
    for obj in iter_json_objects(data_path):
        if obj.get("type") == "palette" and obj.get("id") == palette_id:
            return obj
    return None


def load_palette(
    workspace: Optional["Workspace"], game_path: Optional[str | Path], palette_id: str
) -> PaletteData:
    """Load a palette by id.

    Loaded packs are searched first (highest priority pack wins), then the
    game's data/json tree.

    Raises:
        NotFoundError: If no palette with this id exists
    """
    palette: Optional[GameDataObject] = None
    if workspace is not None:
        palette = workspace.find_entity_json(f"palette:{palette_id}")

    if palette is None and game_path is not None:
        data_path = game_json_path(game_path)
        if data_path.exists():
            logger.debug(f"Palette '{palette_id}' not in workspace, scanning {data_path}")
            palette = _find_in_game_data(data_path, palette_id)

    if palette is None:
        raise NotFoundError("Palette", palette_id)

    return parse_palette_json(palette, palette_id)
