"""
High-level service for working with tilesets.

Resolves the global sprite indices of tile_config.json into (sheet, local
index) pairs the same way the game does:
    * each sheet holds (image_width // sprite_width) * (image_height // sprite_height) sprites
    * sheets are numbered consecutively in "tiles-new" order
    * a tile's fg/bg is a global index into that numbering.
"""

import base64
import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple

import orjson
from PIL import Image

from ..game_data.errors import PackIOError, PackParseError
from .models import SheetRange, SpriteSheet, TileMapping, TilesetConfig, TilesetInfo

DEFAULT_TILE_SIZE = 32


def _int_field(obj: dict[str, Any], key: str, default: int) -> int:
    value = obj.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


def extract_first_sprite_index(value: Any) -> Optional[int]:
    """First sprite of an int, a rotation list or a weighted list."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, list) and value:
        first: Any = value[0]
        if isinstance(first, int) and not isinstance(first, bool):
            return first
        if isinstance(first, dict):
            sprite: Any = first.get("sprite")
            if isinstance(sprite, int):
                return sprite
            # Weighted entries may list rotation frames
            if isinstance(sprite, list) and sprite and isinstance(sprite[0], int):
                return sprite[0]
    return None


def convert_global_to_local(
    global_index: Optional[int], ranges: List[SheetRange]
) -> Tuple[Optional[int], Optional[str]]:
    """Map a global sprite index to (local index, sheet file)."""
    if global_index is None or global_index < 0:
        return None, None

    for sheet_range in ranges:
        if sheet_range.contains(global_index):
            return global_index - sheet_range.start_index, sheet_range.file

    return None, None


class TilesetService:
    """Facade for tileset operations of one game installation."""

    def __init__(self, game_path: str | Path):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.game_path = Path(game_path)

    @property
    def gfx_path(self) -> Path:
        return self.game_path / "gfx"

    def list_tilesets(self) -> List[TilesetInfo]:
        """List gfx/ subdirectories containing a tile_config.json.

        Raises:
            PackIOError: If the gfx directory does not exist
        """
        if not self.gfx_path.is_dir():
            raise PackIOError(self.gfx_path, "gfx directory not found")

        tilesets = [
            TilesetInfo(name=ts_dir.name, path=ts_dir.name)
            for ts_dir in self.gfx_path.iterdir()
            if ts_dir.is_dir() and (ts_dir / "tile_config.json").exists()
        ]
        tilesets.sort(key=lambda t: t.name)
        self.logger.debug(f"Found {len(tilesets)} tilesets in {self.gfx_path}")
        return tilesets

    def _image_size(self, image_path: Path) -> Tuple[int, int]:
        try:
            with Image.open(image_path) as img:
                return img.size
        except (OSError, ValueError) as e:
            self.logger.warning(f"Cannot read sprite sheet {image_path}: {e}")
            return 0, 0

    def load_tileset_config(self, tileset_name: str) -> TilesetConfig:
        """Load tile_config.json and resolve sprite indices.

        Args:
            tileset_name: Directory name of the tileset under gfx/

        Returns:
            Configuration with sprite sheets and per-tile local sprite indices

        Raises:
            PackIOError: If the config cannot be read
            PackParseError: If it is not valid JSON or lacks tile_info
        """
        tileset_dir = self.gfx_path / tileset_name
        config_path = tileset_dir / "tile_config.json"

        try:
            with config_path.open("rb") as f:
                data: Any = orjson.loads(f.read())
        except OSError as e:
            raise PackIOError(config_path, f"Failed to read config: {e}") from e
        except orjson.JSONDecodeError as e:
            raise PackParseError(config_path, f"Failed to parse config: {e}") from e

        tile_info_list: Any = data.get("tile_info") if isinstance(data, dict) else None
        if not isinstance(tile_info_list, list) or not tile_info_list:
            raise PackParseError(config_path, "Missing tile_info")
        tile_info: Any = tile_info_list[0]
        if not isinstance(tile_info, dict):
            tile_info = {}

        config = TilesetConfig(
            name=tileset_name,
            tile_width=_int_field(tile_info, "width", DEFAULT_TILE_SIZE),
            tile_height=_int_field(tile_info, "height", DEFAULT_TILE_SIZE),
        )

        tiles_new: Any = data.get("tiles-new")
        if not isinstance(tiles_new, list):
            return config
        sheets = [sheet for sheet in tiles_new if isinstance(sheet, dict)]

        # First pass: sprite counts and global offset ranges
        ranges: List[SheetRange] = []
        offset = 0
        for sheet in sheets:
            file = sheet.get("file")
            if not isinstance(file, str):
                file = "normal.png"
            sprite_sheet = SpriteSheet(
                file=file,
                sprite_width=_int_field(sheet, "sprite_width", config.tile_width),
                sprite_height=_int_field(sheet, "sprite_height", config.tile_height),
                sprite_offset_x=_int_field(sheet, "sprite_offset_x", 0),
                sprite_offset_y=_int_field(sheet, "sprite_offset_y", 0),
            )
            config.sprite_sheets.append(sprite_sheet)

            width, height = self._image_size(tileset_dir / file)
            count = 0
            if sprite_sheet.sprite_width > 0 and sprite_sheet.sprite_height > 0:
                count = (width // sprite_sheet.sprite_width) * (
                    height // sprite_sheet.sprite_height
                )
            ranges.append(SheetRange(file=file, start_index=offset, end_index=offset + count))
            offset += count

        # Second pass: tiles, global indices to local
        for sheet in sheets:
            tiles: Any = sheet.get("tiles")
            if not isinstance(tiles, list):
                continue
            for tile in tiles:
                if not isinstance(tile, dict):
                    continue
                tile_id: Any = tile.get("id")
                if isinstance(tile_id, str):
                    ids = [tile_id]
                elif isinstance(tile_id, list):
                    ids = [i for i in tile_id if isinstance(i, str)]
                else:
                    continue

                fg, fg_file = convert_global_to_local(
                    extract_first_sprite_index(tile.get("fg")), ranges
                )
                bg, bg_file = convert_global_to_local(
                    extract_first_sprite_index(tile.get("bg")), ranges
                )
                file = fg_file or bg_file or ""
                for i in ids:
                    config.mappings[i] = TileMapping(id=i, fg=fg, bg=bg, file=file)

        self.logger.info(
            f"Tileset '{tileset_name}': {len(config.sprite_sheets)} sheets, "
            f"{offset} sprites, {len(config.mappings)} tiles"
        )
        return config

    def load_tileset_image(self, tileset_name: str, image_file: str) -> str:
        """Return a sprite sheet's file contents as base64.

        Raises:
            PackIOError: If the image cannot be read
        """
        image_path = self.gfx_path / tileset_name / image_file
        try:
            return base64.b64encode(image_path.read_bytes()).decode("ascii")
        except OSError as e:
            raise PackIOError(image_path, f"Failed to read image: {e}") from e
