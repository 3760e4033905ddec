"""
Main entry point for bn-data-editor.
Usage: python -m bn_data_editor <command> [options]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import orjson

from . import __version__
from .game_data import (
    PackLoader,
    Workspace,
    WorkspaceError,
    list_available_mods,
    list_mods_in_directory,
    validate_json_text,
)
from .game_data.models import PackId
from .maps import load_palette
from .settings import AppSettings, ConfigError, validate_game_path
from .tilesets import TilesetService
from .utils.logging_config import setup_logging


def print_json(value: Any) -> None:
    """Dump dataclasses, dicts and lists as indented JSON on stdout."""
    sys.stdout.write(
        orjson.dumps(value, default=str, option=orjson.OPT_INDENT_2).decode("utf-8")
    )
    sys.stdout.write("\n")


def _resolve_game_path(args: argparse.Namespace, settings: AppSettings) -> Path:
    game_path = Path(args.game) if args.game else settings.game_path
    if game_path is None:
        raise ConfigError("Game path not set (use --game or 'config --game-path')")
    return game_path


def _load_packs(workspace: Workspace, paths: List[str], read_only: bool) -> List[PackId]:
    pack_ids: List[PackId] = []
    for path in paths:
        result = workspace.load_content_pack(path, read_only=read_only)
        pack_ids.append(result.pack_id)
    return pack_ids


# === COMMANDS ===


def cmd_load(args: argparse.Namespace, settings: AppSettings) -> int:
    workspace = Workspace(PackLoader(max_workers=args.workers))
    result = workspace.load_content_pack(
        args.path,
        read_only=args.read_only,
        name_override=args.name,
        exclude_dirs=args.exclude,
        is_base_game=args.base_game,
    )

    summary: Dict[str, Any] = {
        "pack_id": result.pack_id,
        "name": result.name,
        "stats": result.load_stats,
        "types": {t: len(entries) for t, entries in sorted(result.entity_tree.by_type.items())},
    }
    if args.tree:
        summary["by_file"] = result.entity_tree.by_file
    print_json(summary)
    return 1 if result.load_stats.errors and args.strict else 0


def cmd_show(args: argparse.Namespace, settings: AppSettings) -> int:
    workspace = Workspace()
    (pack_id,) = _load_packs(workspace, [args.path], read_only=True)
    entity = workspace.get_entity(pack_id, args.key)
    if args.meta:
        print_json(entity)
    else:
        sys.stdout.write(entity.json_text + "\n")
    return 0


def cmd_search(args: argparse.Namespace, settings: AppSettings) -> int:
    workspace = Workspace()
    _load_packs(workspace, args.pack, read_only=True)
    results = workspace.search_entities(args.query, entity_types=args.type or None)
    print_json(results)
    return 0 if results else 1


def cmd_edit(args: argparse.Namespace, settings: AppSettings) -> int:
    if args.json_file == "-":
        new_text = sys.stdin.read()
    else:
        new_text = Path(args.json_file).read_text(encoding="utf-8")

    workspace = Workspace()
    (pack_id,) = _load_packs(workspace, [args.path], read_only=False)
    update = workspace.update_entity(pack_id, args.key, new_text)
    if not update.accepted:
        print_json(update.validation)
        return 1

    if args.dry_run:
        print_json(update)
        return 0

    saved = workspace.save_pack(pack_id)
    print_json({"update": update, "save": saved})
    return 0


def cmd_validate(args: argparse.Namespace, settings: AppSettings) -> int:
    if args.json_file == "-":
        text = sys.stdin.read()
    else:
        text = Path(args.json_file).read_text(encoding="utf-8")

    result = validate_json_text(text)
    print_json(result)
    return 0 if result.is_valid else 1


def cmd_mods(args: argparse.Namespace, settings: AppSettings) -> int:
    if args.directory:
        mods = list_mods_in_directory(args.directory)
    else:
        mods = list_available_mods(_resolve_game_path(args, settings))
        for directory in settings.mod_directories:
            mods.extend(list_mods_in_directory(directory))
    print_json(mods)
    return 0


def cmd_tilesets(args: argparse.Namespace, settings: AppSettings) -> int:
    service = TilesetService(_resolve_game_path(args, settings))
    if args.name:
        print_json(service.load_tileset_config(args.name))
    else:
        print_json(service.list_tilesets())
    return 0


def cmd_palette(args: argparse.Namespace, settings: AppSettings) -> int:
    workspace = Workspace()
    _load_packs(workspace, args.pack, read_only=True)
    game_path = Path(args.game) if args.game else settings.game_path
    print_json(load_palette(workspace, game_path, args.palette_id))
    return 0


def cmd_config(args: argparse.Namespace, settings: AppSettings) -> int:
    if args.game_path:
        validate_game_path(args.game_path)
        settings.game_path = Path(args.game_path)
    if args.tileset:
        settings.tileset = args.tileset
    if args.add_mod_dir:
        settings.add_mod_directory(args.add_mod_dir)
    if args.remove_mod_dir:
        settings.remove_mod_directory(args.remove_mod_dir)

    validation = settings.validate()
    print_json(
        {
            "settings_file": settings.get_settings_file_path(),
            "profile": settings.profile,
            "game_path": settings.game_path,
            "tileset": settings.tileset,
            "mod_directories": settings.mod_directories,
            "validation": validation,
        }
    )
    return 0 if validation.is_valid else 1


# === ARGUMENT PARSING ===


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bn-data-editor",
        description="Inspect and edit Cataclysm: Bright Nights content packs",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--profile", default="default", help="Settings profile")
    parser.add_argument("--settings-file", help="INI file to use instead of the system store")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("load", help="Load a pack and print a summary")
    p.add_argument("path")
    p.add_argument("--read-only", action="store_true")
    p.add_argument("--name", help="Display name override")
    p.add_argument("--exclude", action="append", default=[], help="Directory name to skip")
    p.add_argument("--base-game", action="store_true", help="Pack is the base game data dir")
    p.add_argument("--workers", type=int, default=32)
    p.add_argument("--tree", action="store_true", help="Include the per-file tree")
    p.add_argument("--strict", action="store_true", help="Fail if any file had errors")
    p.set_defaults(func=cmd_load)

    p = sub.add_parser("show", help="Print one entity")
    p.add_argument("path")
    p.add_argument("key", help="Storage key, e.g. MONSTER:mon_zombie")
    p.add_argument("--meta", action="store_true", help="Print metadata as well")
    p.set_defaults(func=cmd_show)

    p = sub.add_parser("search", help="Search entities by id or name")
    p.add_argument("query")
    p.add_argument("--pack", action="append", required=True, help="Pack directory")
    p.add_argument("--type", action="append", default=[], help="Restrict to entity type")
    p.set_defaults(func=cmd_search)

    p = sub.add_parser("edit", help="Replace an entity's JSON and save the pack")
    p.add_argument("path")
    p.add_argument("key")
    p.add_argument("json_file", help="File with the new JSON, '-' for stdin")
    p.add_argument("--dry-run", action="store_true", help="Validate and apply without saving")
    p.set_defaults(func=cmd_edit)

    p = sub.add_parser("validate", help="Validate entity JSON")
    p.add_argument("json_file", help="File with entity JSON, '-' for stdin")
    p.set_defaults(func=cmd_validate)

    p = sub.add_parser("mods", help="List available mods")
    p.add_argument("directory", nargs="?", help="Mods directory (default: game data/mods)")
    p.add_argument("--game", help="Game directory")
    p.set_defaults(func=cmd_mods)

    p = sub.add_parser("tilesets", help="List tilesets or show one")
    p.add_argument("name", nargs="?")
    p.add_argument("--game", help="Game directory")
    p.set_defaults(func=cmd_tilesets)

    p = sub.add_parser("palette", help="Show palette symbol mappings")
    p.add_argument("palette_id")
    p.add_argument("--pack", action="append", default=[], help="Pack directory to search first")
    p.add_argument("--game", help="Game directory")
    p.set_defaults(func=cmd_palette)

    p = sub.add_parser("config", help="Show or change settings")
    p.add_argument("--game-path")
    p.add_argument("--tileset")
    p.add_argument("--add-mod-dir")
    p.add_argument("--remove-mod-dir")
    p.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")

    try:
        # Load configuration first
        settings = AppSettings(profile=args.profile, settings_file=args.settings_file)
        setup_logging(settings, console_level="DEBUG" if args.verbose else None)

        logger.info(f"Configuration loaded from {settings.get_settings_file_path()}")

        validation = settings.validate()
        for warning in validation.warnings:
            logger.debug(f"Configuration warning: {warning}")

        return args.func(args, settings)

    except (WorkspaceError, ConfigError) as e:
        logger.error(str(e))
        return 2
    except Exception:
        logger.exception("Unhandled exception in main")
        return 1


if __name__ == "__main__":
    sys.exit(main())
