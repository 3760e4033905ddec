"""Shared fixtures for bn-data-editor tests."""

import logging
from pathlib import Path
from typing import Any, Iterator

import orjson
import pytest


def write_json(path: Path, data: Any) -> Path:
    """Write `data` as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))
    return path


@pytest.fixture
def mod_dir(tmp_path: Path) -> Path:
    """A small mod on disk.

    Files in path order: items/tools.json, monsters.json, overrides/hammer.json.
    The second TOOL:hammer lives in overrides/hammer.json.
    """
    root = tmp_path / "test_mod"
    write_json(
        root / "modinfo.json",
        [
            {
                "type": "MOD_INFO",
                "id": "test_mod",
                "name": "Test Mod",
                "authors": "Alice",
                "dependencies": ["bn"],
                "category": "content",
            }
        ],
    )
    write_json(
        root / "items" / "tools.json",
        [
            {"type": "TOOL", "id": "hammer", "name": {"str": "hammer"}, "weight": "1 kg"},
            {"//": "comment entry without type"},
            {"id": "saw", "type": "TOOL", "name": "saw", "weight": "700 g"},
        ],
    )
    write_json(
        root / "monsters.json",
        [{"type": "MONSTER", "id": "mon_zed", "name": "zombie", "hp": 80, "speed": 70}],
    )
    write_json(
        root / "overrides" / "hammer.json",
        [{"type": "TOOL", "id": "hammer", "name": "heavy hammer"}],
    )
    return root


@pytest.fixture
def game_dir(tmp_path: Path) -> Path:
    """A minimal game installation with data/json, data/mods and gfx."""
    root = tmp_path / "game"
    write_json(
        root / "data" / "json" / "furniture_and_terrain" / "terrain.json",
        [
            {"type": "terrain", "id": "t_floor", "name": "floor", "symbol": ".", "color": "cyan"},
            {"type": "terrain", "id": "t_wall", "name": "wall", "symbol": "#", "color": "light_gray"},
            {"type": "terrain", "id": "t_dirt"},
        ],
    )
    write_json(
        root / "data" / "json" / "furniture_and_terrain" / "furniture.json",
        [
            {"type": "furniture", "id": "f_chair", "name": "chair", "symbol": "#", "color": "brown"},
            {"type": "furniture", "id": "f_table", "name": {"str": "table"}},
        ],
    )
    write_json(
        root / "data" / "json" / "mapgen_palettes" / "house.json",
        [
            {
                "type": "palette",
                "id": "house_palette",
                "palettes": ["base_palette"],
                "terrain": {".": "t_floor", "#": ["t_wall", "t_wall_half"]},
                "furniture": {"c": [["f_chair", 5], ["f_stool", 1]]},
            }
        ],
    )
    write_json(
        root / "data" / "mods" / "bn" / "modinfo.json",
        [{"type": "MOD_INFO", "id": "bn", "name": "Bright Nights"}],
    )
    write_json(
        root / "data" / "mods" / "zeta" / "modinfo.json",
        {"type": "MOD_INFO", "id": "zeta_mod", "name": "Zeta"},
    )
    write_json(
        root / "data" / "mods" / "alpha" / "modinfo.json",
        [{"type": "MOD_INFO", "id": "alpha_mod", "name": "Alpha", "authors": ["A", "B"]}],
    )
    (root / "data" / "mods" / "no_manifest").mkdir(parents=True)
    (root / "gfx").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Undo handler changes made by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
