"""
Workspace service for editing Cataclysm-BN content packs.

Provides the high-level API a UI or CLI binds to: load, inspect, edit,
save and close packs. One workspace lock serializes every operation; only
the directory walk and parsing of a load run outside it.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

import orjson

from .errors import MetadataExtractionError, NotFoundError, ReadOnlyError, DirtyStateError
from .identity import extract_meta
from .loaders import PackLoader
from .models import (
    EntityData,
    EntityKey,
    GameDataObject,
    PackId,
    PackLoadResult,
    SaveResult,
    SearchResult,
    UpdateResult,
    WorkspaceState,
)
from .pack import ContentPack
from .search import search_packs
from .validator import validate_json_text
from .writer import pretty_json, save_pack


class Workspace:
    """All loaded content packs plus their load order.

    The first pack in `load_order` has the lowest priority for cross-pack
    inheritance, the last one the highest. Every public method holds the
    workspace lock for its critical section, so operations never interleave;
    a slow save blocks everything else until it finishes.
    """

    def __init__(self, loader: Optional[PackLoader] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.loader = loader or PackLoader()

        self.packs: Dict[PackId, ContentPack] = {}
        self.load_order: List[PackId] = []
        self._lock = threading.Lock()

    def _get_pack(self, pack_id: PackId) -> ContentPack:
        pack = self.packs.get(pack_id)
        if pack is None:
            raise NotFoundError("Pack", pack_id)
        return pack

    # === PACK LIFECYCLE ===

    def load_content_pack(
        self,
        path: str | Path,
        read_only: bool = False,
        name_override: Optional[str] = None,
        exclude_dirs: Optional[List[str]] = None,
        is_base_game: bool = False,
    ) -> PackLoadResult:
        """Load a pack from disk and append it to the load order.

        Raises:
            PackIOError: If the path cannot be resolved
        """
        result, pack = self.loader.load(
            path,
            read_only=read_only,
            name_override=name_override,
            exclude_dirs=exclude_dirs,
            is_base_game=is_base_game,
        )

        with self._lock:
            self.packs[pack.id] = pack
            self.load_order.append(pack.id)

        self.logger.info(f"Pack '{pack.name}' added to workspace as {pack.id}")
        return result

    def get_workspace_state(self) -> WorkspaceState:
        with self._lock:
            return WorkspaceState(
                packs=[self.packs[pid].to_info() for pid in self.load_order],
                load_order=list(self.load_order),
            )

    def close_pack(self, pack_id: PackId, force: bool = False) -> None:
        """Remove a pack from the workspace.

        Raises:
            NotFoundError: If the pack is not loaded
            DirtyStateError: If it has unsaved files and `force` is False
        """
        with self._lock:
            pack = self._get_pack(pack_id)
            if pack.dirty_files and not force:
                raise DirtyStateError(pack_id, len(pack.dirty_files))

            del self.packs[pack_id]
            self.load_order.remove(pack_id)

        self.logger.info(f"Pack '{pack.name}' closed")

    def reload_pack(self, pack_id: PackId) -> PackLoadResult:
        """Discard in-memory state of a pack and load it again from disk.

        The pack keeps its id, its load options and its load-order position.

        Raises:
            NotFoundError: If the pack is not loaded (or was closed meanwhile)
            PackIOError: If its directory can no longer be resolved
        """
        with self._lock:
            old = self._get_pack(pack_id)
            path, options = old.path, old.options

        result, pack = self.loader.load(
            path,
            read_only=options.read_only,
            name_override=options.name_override,
            exclude_dirs=options.exclude_dirs,
            is_base_game=options.is_base_game,
            pack_id=pack_id,
        )

        with self._lock:
            self._get_pack(pack_id)
            self.packs[pack_id] = pack

        self.logger.info(f"Pack '{pack.name}' reloaded")
        return result

    # === ENTITIES ===

    def get_entity(self, pack_id: PackId, key: EntityKey) -> EntityData:
        """Return an editable view of an entity.

        Raises:
            NotFoundError: If the pack or the entity does not exist
        """
        with self._lock:
            pack = self._get_pack(pack_id)
            record = pack.get_entity(key)
            if record is None:
                raise NotFoundError("Entity", key, pack_id)

            return EntityData(
                key=key,
                meta=record.meta,
                json_text=pretty_json(record.raw),
                source_file=record.source_file,
                read_only=pack.read_only,
                dirty=record.dirty,
            )

    def update_entity(
        self, pack_id: PackId, key: EntityKey, new_json_text: str
    ) -> UpdateResult:
        """Replace an entity's JSON with edited text.

        Invalid text is not an error: the result comes back with
        `accepted=False` and the entity untouched. If the edit changes type or
        id, the entity is re-keyed and `new_key` tells the caller where it
        went.

        Raises:
            NotFoundError: If the pack or the entity does not exist
            ReadOnlyError: If the pack is read-only
            MetadataExtractionError: If valid JSON yields no type/id
        """
        with self._lock:
            pack = self._get_pack(pack_id)
            if pack.read_only:
                raise ReadOnlyError(pack_id, "modify entities")

            record = pack.get_entity(key)
            if record is None:
                raise NotFoundError("Entity", key, pack_id)

            validation = validate_json_text(new_json_text, previous=record.raw)
            if not validation.is_valid:
                self.logger.debug(
                    f"Update of {key} rejected: {len(validation.errors)} errors"
                )
                return UpdateResult(validation=validation, accepted=False)

            new_raw = orjson.loads(new_json_text)
            new_meta = extract_meta(new_raw)
            if new_meta is None:
                raise MetadataExtractionError(key)

            key_changed = new_meta.key != record.key
            record.raw = new_raw
            record.meta = new_meta
            pack.mark_dirty(record)

            new_key: Optional[EntityKey] = None
            if key_changed:
                new_key = pack.rekey_entity(key)

            self.logger.debug(f"Entity {key} updated in {pack.name}")
            return UpdateResult(
                validation=validation, accepted=True, new_key=new_key, meta=new_meta
            )

    def find_entity_json(self, key: EntityKey) -> Optional[GameDataObject]:
        """Find an entity by storage key, highest-priority pack first."""
        with self._lock:
            for pack_id in reversed(self.load_order):
                record = self.packs[pack_id].get_entity(key)
                if record is not None:
                    return record.raw
        return None

    # === SAVE ===

    def save_pack(self, pack_id: PackId) -> SaveResult:
        """Write a pack's dirty entities back to disk.

        Raises:
            NotFoundError: If the pack is not loaded
            ReadOnlyError: If the pack is read-only
            PackIOError: If a file cannot be read or written
            PackParseError: If a file on disk is no longer a JSON array
        """
        with self._lock:
            pack = self._get_pack(pack_id)
            result = save_pack(pack)

        if result.files_written:
            self.logger.info(
                f"Pack '{pack.name}' saved: {result.entities_saved} entities in "
                f"{len(result.files_written)} files"
            )
        return result

    # === SEARCH ===

    def search_entities(
        self,
        query: str,
        entity_types: Optional[List[str]] = None,
        pack_ids: Optional[List[PackId]] = None,
    ) -> List[SearchResult]:
        """Search entities by id or display name across (some) packs."""
        with self._lock:
            packs = [
                self.packs[pid]
                for pid in self.load_order
                if pack_ids is None or pid in pack_ids
            ]
            return search_packs(packs, query, entity_types)
