"""
Pack loading for Cataclysm-BN content.

Walks a pack directory, parses every JSON data file in parallel using
ThreadPoolExecutor and orjson, and assembles a `ContentPack`. Loading is
best-effort: a broken file is reported in the load statistics and the rest
of the pack still loads.
"""

import logging
import os
import uuid
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

import orjson

from .errors import PackIOError, PackParseError
from .identity import extract_meta
from .models import (
    MODINFO_FILE,
    AvailableModInfo,
    EntityRecord,
    LoadStats,
    PackId,
    PackLoadResult,
    PackMetadata,
)
from .pack import ContentPack, LoadOptions

logger = logging.getLogger(__name__)

# Directory holding the base game's own manifest inside data/
BASE_GAME_MODINFO_DIR = Path("mods") / "bn"


def _optional_str(info: dict[str, Any], key: str) -> Optional[str]:
    value = info.get(key)
    return value if isinstance(value, str) else None


def _str_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]  # type: ignore
    return []


def _read_manifest(manifest_path: Path) -> Optional[dict[str, Any]]:
    """Read a modinfo.json file; it may hold an object or an array of objects."""
    try:
        with manifest_path.open("rb") as f:
            data = orjson.loads(f.read())
    except (OSError, orjson.JSONDecodeError) as e:
        logger.warning(f"Could not read manifest {manifest_path}: {e}")
        return None

    if isinstance(data, list):
        data = data[0] if data else None
    return data if isinstance(data, dict) else None


def load_pack_metadata(path: Path, is_base_game: bool = False) -> Optional[PackMetadata]:
    """Load pack metadata from the pack's modinfo.json.

    For the base game only, `<root>/mods/bn/modinfo.json` is used when the
    root has no manifest of its own.

    Args:
        path: Pack root directory
        is_base_game: Whether to apply the base game fallback

    Returns:
        Parsed metadata, or None if no readable manifest exists
    """
    manifest_path = path / MODINFO_FILE
    if not manifest_path.is_file():
        if not is_base_game:
            return None
        manifest_path = path / BASE_GAME_MODINFO_DIR / MODINFO_FILE
        if not manifest_path.is_file():
            return None

    info = _read_manifest(manifest_path)
    if info is None:
        return None

    return PackMetadata(
        mod_id=_optional_str(info, "id"),
        mod_type=_optional_str(info, "type"),
        name=_optional_str(info, "name"),
        dependencies=_str_list(info.get("dependencies")),
        description=_optional_str(info, "description"),
        version=_optional_str(info, "version"),
        lua_api_version=_optional_str(info, "lua_api_version"),
        authors=_str_list(info.get("authors")),
        category=_optional_str(info, "category"),
    )


def detect_pack_name(path: Path) -> str:
    """Pack name from the root modinfo.json, falling back to the directory name."""
    manifest_path = path / MODINFO_FILE
    if manifest_path.is_file():
        info = _read_manifest(manifest_path)
        if info is not None:
            name = _optional_str(info, "name")
            if name is not None:
                return name
    return path.name or "Unknown Pack"


def list_mods_in_directory(dir_path: str | Path) -> List[AvailableModInfo]:
    """List mods found directly under `dir_path`.

    Only subdirectories with a readable modinfo.json count. The "bn"
    directory holds the base game's manifest and is skipped.

    Raises:
        PackIOError: If the directory does not exist or cannot be listed
    """
    mods_path = Path(dir_path)
    if not mods_path.exists():
        raise PackIOError(mods_path, "Directory not found")

    mods: List[AvailableModInfo] = []
    try:
        entries = sorted(mods_path.iterdir())
    except OSError as e:
        raise PackIOError(mods_path, f"Failed to read directory: {e}") from e

    for entry in entries:
        if not entry.is_dir() or entry.name == BASE_GAME_MODINFO_DIR.name:
            continue
        metadata = load_pack_metadata(entry)
        if metadata is not None:
            mods.append(AvailableModInfo(path=entry, metadata=metadata))

    mods.sort(key=lambda m: m.metadata.mod_id or "")
    return mods


def list_available_mods(game_path: str | Path) -> List[AvailableModInfo]:
    """List mods shipped with a game installation (under data/mods)."""
    return list_mods_in_directory(Path(game_path) / "data" / "mods")


class PackLoader:
    """Builds `ContentPack` objects from directories on disk."""

    def __init__(self, max_workers: int = 32):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.max_workers = max_workers

    @staticmethod
    def find_json_files(
        root: Path, exclude_dirs: Optional[Iterable[str]] = None
    ) -> List[Path]:
        """Find data files under `root`, sorted by path.

        Excluded directory names are pruned at every level of the walk, not
        only at the root. Symlinked directories are followed, but a directory
        already visited through another path is skipped, so symlink loops
        terminate and no file is returned twice. Manifest files are never
        returned.
        """
        excludes = set(exclude_dirs or ())
        files: List[Path] = []
        root_stat = os.stat(root)
        visited = {(root_stat.st_dev, root_stat.st_ino)}

        for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
            kept: List[str] = []
            for dirname in sorted(dirnames):
                if dirname in excludes:
                    continue
                try:
                    st = os.stat(os.path.join(dirpath, dirname))
                except OSError:
                    continue
                key = (st.st_dev, st.st_ino)
                if key in visited:
                    continue
                visited.add(key)
                kept.append(dirname)
            dirnames[:] = kept

            for filename in filenames:
                if filename.endswith(".json") and filename != MODINFO_FILE:
                    files.append(Path(dirpath) / filename)

        files.sort(key=lambda p: p.relative_to(root).as_posix())
        return files

    @staticmethod
    def read_entity_file(json_file: Path, pack_root: Path) -> List[EntityRecord]:
        """Read one data file and build records for its identifiable objects.

        Non-object elements and objects without type/id (comments and the
        like) are skipped; the array index of every record is its position in
        the original array.

        Raises:
            PackIOError: If the file cannot be read
            PackParseError: If it is not JSON or its root is not an array
        """
        try:
            with json_file.open("rb") as f:  # orjson works with bytes
                content = f.read()
        except OSError as e:
            raise PackIOError(json_file, str(e)) from e

        try:
            data = orjson.loads(content)
        except orjson.JSONDecodeError as e:
            raise PackParseError(json_file, str(e)) from e

        if not isinstance(data, list):
            raise PackParseError(json_file, "Expected JSON array at root")

        relative_path = json_file.relative_to(pack_root)
        records: List[EntityRecord] = []
        for index, value in enumerate(data):  # type: ignore
            meta = extract_meta(value)
            if meta is None:
                continue
            records.append(
                EntityRecord(
                    meta=meta,
                    raw=value,
                    source_file=relative_path,
                    array_index=index,
                )
            )
        return records

    def load(
        self,
        root_path: str | Path,
        read_only: bool = False,
        name_override: Optional[str] = None,
        exclude_dirs: Optional[List[str]] = None,
        is_base_game: bool = False,
        pack_id: Optional[PackId] = None,
    ) -> Tuple[PackLoadResult, ContentPack]:
        """Load a content pack from a directory.

        Args:
            root_path: Pack root directory
            read_only: Whether the pack rejects edits and saves
            name_override: Display name to use instead of the detected one
            exclude_dirs: Directory names skipped anywhere in the tree
            is_base_game: Enables the mods/bn manifest fallback
            pack_id: Identifier to reuse (reload); a new one is generated if None

        Returns:
            Load result (summary, navigation tree, statistics) and the pack

        Raises:
            PackIOError: If the root path cannot be resolved
        """
        try:
            root = Path(root_path).resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise PackIOError(root_path, str(e)) from e
        if not root.is_dir():
            raise PackIOError(root, "Not a directory")

        options = LoadOptions(
            read_only=read_only,
            name_override=name_override,
            exclude_dirs=list(exclude_dirs or []),
            is_base_game=is_base_game,
        )
        name = name_override or detect_pack_name(root)
        pack = ContentPack(
            pack_id=pack_id or uuid.uuid4().hex,
            name=name,
            path=root,
            options=options,
            metadata=load_pack_metadata(root, is_base_game),
        )

        self.logger.info(f"Loading pack '{name}' from {root}")
        json_files = self.find_json_files(root, options.exclude_dirs)
        stats = LoadStats(files_scanned=len(json_files))

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(self.read_entity_file, json_file, root)
                for json_file in json_files
            ]

            # Insert in path order so collision suffixes are deterministic
            for json_file, future in zip(json_files, futures):
                try:
                    records = future.result()
                except (PackIOError, PackParseError) as e:
                    message = f"{json_file}: {e.message}"
                    self.logger.warning(message)
                    stats.errors.append(message)
                    continue

                for record in records:
                    pack.add_entity(record)
                    stats.entities_loaded += 1

        self.logger.info(
            f"Pack '{name}' loaded: {stats.entities_loaded} entities from "
            f"{stats.files_scanned} files ({len(stats.errors)} errors)"
        )

        result = PackLoadResult(
            pack_id=pack.id,
            name=name,
            entity_tree=pack.to_entity_tree(),
            load_stats=stats,
        )
        return result, pack
