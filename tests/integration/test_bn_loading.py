import os
from pathlib import Path

import pytest

from bn_data_editor.game_data import Workspace, list_available_mods

BN_PATH = os.environ.get("BN_PATH", "")

requires_bn = pytest.mark.skipif(
    not BN_PATH or not (Path(BN_PATH) / "data" / "json").exists(),
    reason="Cataclysm-BN checkout not found (set BN_PATH)",
)


@requires_bn
def test_load_base_game():
    workspace = Workspace()
    result = workspace.load_content_pack(
        Path(BN_PATH) / "data",
        read_only=True,
        name_override="Bright Nights",
        exclude_dirs=["mods"],
        is_base_game=True,
    )
    print(f"✓ {result.load_stats.entities_loaded} entities, {len(result.load_stats.errors)} errors")
    assert result.load_stats.entities_loaded > 1000
    assert "terrain" in result.entity_tree.by_type

    t_floor = workspace.get_entity(result.pack_id, "terrain:t_floor")
    assert t_floor.meta.id == "t_floor"


@requires_bn
def test_list_bundled_mods():
    mods = list_available_mods(BN_PATH)
    assert mods, "no mods found"
    assert all(m.metadata.mod_id != "bn" for m in mods)
