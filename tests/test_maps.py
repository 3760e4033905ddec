"""Tests for palette extraction and the terrain/furniture catalogue."""

from pathlib import Path

import pytest

from bn_data_editor.game_data import NotFoundError, PackIOError, Workspace
from bn_data_editor.maps import list_furniture_types, list_terrain_types, load_palette, parse_palette_json

from conftest import write_json


class TestPalette:
    """Test palette symbol mappings."""

    def test_parse_value_forms(self) -> None:
        """Test string, list and weighted values use the first id."""
        palette = parse_palette_json(
            {
                "terrain": {".": "t_floor", "#": ["t_wall", "t_wall_half"]},
                "furniture": {"c": [["f_chair", 5], ["f_stool", 1]], ".": "f_rug"},
            },
            "p",
        )
        assert [(m.symbol, m.terrain, m.furniture) for m in palette.mappings] == [
            ("#", "t_wall", None),
            (".", "t_floor", "f_rug"),
            ("c", None, "f_chair"),
        ]
        assert palette.includes == []

    def test_parse_rejects_non_object(self) -> None:
        """Test a non-object palette raises ValueError."""
        with pytest.raises(ValueError):
            parse_palette_json([], "p")

    def test_load_from_game_data(self, game_dir: Path) -> None:
        """Test palettes are found in data/json."""
        palette = load_palette(None, game_dir, "house_palette")
        assert palette.id == "house_palette"
        assert palette.includes == ["base_palette"]
        assert len(palette.mappings) == 3

    def test_workspace_first(self, game_dir: Path, tmp_path: Path) -> None:
        """Test a palette in a loaded pack overrides the game's."""
        mod = tmp_path / "palette_mod"
        write_json(
            mod / "palettes.json",
            [{"type": "palette", "id": "house_palette", "terrain": {"x": "t_grass"}}],
        )
        workspace = Workspace()
        workspace.load_content_pack(mod)

        palette = load_palette(workspace, game_dir, "house_palette")
        assert [(m.symbol, m.terrain) for m in palette.mappings] == [("x", "t_grass")]

    def test_not_found(self, game_dir: Path) -> None:
        """Test unknown palettes raise NotFoundError."""
        with pytest.raises(NotFoundError):
            load_palette(Workspace(), game_dir, "nope")
        with pytest.raises(NotFoundError):
            load_palette(None, None, "nope")


class TestTerrainCatalogue:
    """Test terrain and furniture listing."""

    def test_terrain(self, game_dir: Path) -> None:
        """Test terrain sorted by id with defaults filled in."""
        terrain = list_terrain_types(game_dir)
        assert [t.id for t in terrain] == ["t_dirt", "t_floor", "t_wall"]
        dirt = terrain[0]
        assert (dirt.name, dirt.symbol, dirt.color) == ("t_dirt", ".", "white")

    def test_furniture(self, game_dir: Path) -> None:
        """Test furniture defaults and {"str": ...} names."""
        furniture = list_furniture_types(game_dir)
        assert [f.id for f in furniture] == ["f_chair", "f_table"]
        table = furniture[1]
        assert (table.name, table.symbol, table.color) == ("table", "#", "white")

    def test_duplicates_keep_first(self, game_dir: Path) -> None:
        """Test a later definition of an id is ignored."""
        write_json(
            game_dir / "data" / "json" / "zz_more.json",
            [{"type": "terrain", "id": "t_floor", "name": "other floor"}],
        )
        floor = [t for t in list_terrain_types(game_dir) if t.id == "t_floor"]
        assert len(floor) == 1
        assert floor[0].name == "floor"

    def test_missing_data_dir(self, tmp_path: Path) -> None:
        """Test a game without data/json raises PackIOError."""
        with pytest.raises(PackIOError):
            list_terrain_types(tmp_path)
