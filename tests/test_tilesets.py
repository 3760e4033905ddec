"""Tests for tileset discovery and sprite index resolution."""

import base64
from pathlib import Path

import pytest
from PIL import Image

from bn_data_editor.game_data import PackIOError, PackParseError
from bn_data_editor.tilesets import TilesetService
from bn_data_editor.tilesets.models import SheetRange
from bn_data_editor.tilesets.service import convert_global_to_local, extract_first_sprite_index

from conftest import write_json


@pytest.fixture
def tileset_game(game_dir: Path) -> Path:
    """Game with one tileset of two sheets: 2 sprites + 1 sprite."""
    ts_dir = game_dir / "gfx" / "TestTiles"
    ts_dir.mkdir(parents=True)
    Image.new("RGBA", (64, 32)).save(ts_dir / "tiles.png")
    Image.new("RGBA", (16, 16)).save(ts_dir / "small.png")
    write_json(
        ts_dir / "tile_config.json",
        {
            "tile_info": [{"width": 32, "height": 32}],
            "tiles-new": [
                {
                    "file": "tiles.png",
                    "tiles": [{"id": "t_floor", "fg": 1}],
                },
                {
                    "file": "small.png",
                    "sprite_width": 16,
                    "sprite_height": 16,
                    "tiles": [
                        {
                            "id": ["t_wall", "t_wall_half"],
                            "fg": [{"weight": 1, "sprite": 2}],
                            "bg": 0,
                        }
                    ],
                },
                {"file": "missing.png", "tiles": [{"id": "t_lost", "fg": 3}]},
            ],
        },
    )
    (game_dir / "gfx" / "NotATileset").mkdir()
    write_json(
        game_dir / "gfx" / "AAA" / "tile_config.json",
        {"tile_info": [{}], "tiles-new": []},
    )
    return game_dir


class TestSpriteIndices:
    """Test sprite index helpers."""

    def test_first_sprite_forms(self) -> None:
        """Test int, rotation list and weighted list forms."""
        assert extract_first_sprite_index(5) == 5
        assert extract_first_sprite_index([7, 8, 9, 10]) == 7
        assert extract_first_sprite_index([{"weight": 2, "sprite": 4}]) == 4
        assert extract_first_sprite_index([{"weight": 2, "sprite": [6, 7]}]) == 6
        assert extract_first_sprite_index([]) is None
        assert extract_first_sprite_index(True) is None

    def test_global_to_local(self) -> None:
        """Test global indices map into the right sheet."""
        ranges = [SheetRange("a.png", 0, 4), SheetRange("b.png", 4, 6)]
        assert convert_global_to_local(3, ranges) == (3, "a.png")
        assert convert_global_to_local(5, ranges) == (1, "b.png")
        assert convert_global_to_local(6, ranges) == (None, None)
        assert convert_global_to_local(-1, ranges) == (None, None)


class TestTilesetService:
    """Test TilesetService against a tileset on disk."""

    def test_list_tilesets(self, tileset_game: Path) -> None:
        """Test only directories with tile_config.json are listed, sorted."""
        names = [t.name for t in TilesetService(tileset_game).list_tilesets()]
        assert names == ["AAA", "TestTiles"]

    def test_missing_gfx(self, tmp_path: Path) -> None:
        """Test a game without gfx raises PackIOError."""
        with pytest.raises(PackIOError):
            TilesetService(tmp_path).list_tilesets()

    def test_load_config(self, tileset_game: Path) -> None:
        """Test sheets, sizes and local sprite indices."""
        config = TilesetService(tileset_game).load_tileset_config("TestTiles")

        assert (config.tile_width, config.tile_height) == (32, 32)
        assert [s.file for s in config.sprite_sheets] == ["tiles.png", "small.png", "missing.png"]
        assert config.sprite_sheets[1].sprite_width == 16

        floor = config.mappings["t_floor"]
        assert (floor.fg, floor.bg, floor.file) == (1, None, "tiles.png")

        # small.png holds global sprite 2; bg 0 is in tiles.png
        for tile_id in ("t_wall", "t_wall_half"):
            wall = config.mappings[tile_id]
            assert (wall.fg, wall.bg, wall.file) == (0, 0, "small.png")

        # Unreadable sheet has no sprites
        lost = config.mappings["t_lost"]
        assert (lost.fg, lost.file) == (None, "")

    def test_default_tile_size(self, tileset_game: Path) -> None:
        """Test tile_info without sizes defaults to 32."""
        config = TilesetService(tileset_game).load_tileset_config("AAA")
        assert (config.tile_width, config.tile_height) == (32, 32)
        assert config.mappings == {}

    def test_missing_tile_info(self, tileset_game: Path) -> None:
        """Test configs without tile_info raise PackParseError."""
        write_json(tileset_game / "gfx" / "AAA" / "tile_config.json", {"tiles-new": []})
        with pytest.raises(PackParseError):
            TilesetService(tileset_game).load_tileset_config("AAA")

    def test_missing_config(self, tileset_game: Path) -> None:
        """Test an unknown tileset raises PackIOError."""
        with pytest.raises(PackIOError):
            TilesetService(tileset_game).load_tileset_config("Nope")

    def test_load_image(self, tileset_game: Path) -> None:
        """Test images are returned base64-encoded."""
        encoded = TilesetService(tileset_game).load_tileset_image("TestTiles", "small.png")
        raw = (tileset_game / "gfx" / "TestTiles" / "small.png").read_bytes()
        assert base64.b64decode(encoded) == raw
