"""
In-memory content pack.

A `ContentPack` owns the entity records of one loaded directory (base game
or mod), keyed by unique storage key, plus the set of source files holding
unsaved edits.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .keys import make_unique_key
from .models import (
    EntityKey,
    EntityRecord,
    EntitySummary,
    EntityTree,
    PackId,
    PackInfo,
    PackMetadata,
)


@dataclass
class LoadOptions:
    """Options a pack was loaded with, kept so reload can repeat them."""

    read_only: bool = False
    name_override: Optional[str] = None
    exclude_dirs: List[str] = field(default_factory=list)
    is_base_game: bool = False


class ContentPack:
    """Entity storage for a single pack.

    Storage keys are unique by construction: `add_entity` suffixes colliding
    logical keys, `rekey_entity` does the same for renamed records.
    """

    def __init__(
        self,
        pack_id: PackId,
        name: str,
        path: Path,
        options: Optional[LoadOptions] = None,
        metadata: Optional[PackMetadata] = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.id = pack_id
        self.name = name
        self.path = path
        self.options = options or LoadOptions()
        self.metadata = metadata

        self.entities: Dict[EntityKey, EntityRecord] = {}
        self.dirty_files: Set[Path] = set()

    @property
    def read_only(self) -> bool:
        return self.options.read_only

    # === ENTITY STORAGE ===

    def add_entity(self, record: EntityRecord) -> EntityKey:
        """Store a record under its logical key, or a suffixed one on collision.

        Returns:
            Storage key the record was stored under
        """
        key = make_unique_key(record.key, record.source_file, self.entities)
        if key != record.key:
            self.logger.warning(
                f"Duplicate key {record.key} in {self.name}: "
                f"{record.source_file}[{record.array_index}] stored as {key}"
            )
        self.entities[key] = record
        return key

    def get_entity(self, key: EntityKey) -> Optional[EntityRecord]:
        return self.entities.get(key)

    def rekey_entity(self, old_key: EntityKey) -> EntityKey:
        """Move a record whose logical key changed to a new storage key.

        Args:
            old_key: Current storage key of the record

        Returns:
            New storage key (the logical key, suffixed if already taken)
        """
        record = self.entities.pop(old_key)
        new_key = self.add_entity(record)
        self.logger.debug(f"Entity {old_key} re-keyed to {new_key}")
        return new_key

    def mark_dirty(self, record: EntityRecord) -> None:
        record.dirty = True
        self.dirty_files.add(record.source_file)

    def dirty_entities_by_file(self) -> Dict[Path, List[EntityRecord]]:
        """Group dirty records by their source file."""
        grouped: Dict[Path, List[EntityRecord]] = {}
        for record in self.entities.values():
            if record.dirty:
                grouped.setdefault(record.source_file, []).append(record)
        return grouped

    def mark_file_clean(self, source_file: Path) -> None:
        """Clear dirty state of every record of `source_file`."""
        for record in self.entities.values():
            if record.source_file == source_file:
                record.dirty = False
        self.dirty_files.discard(source_file)

    def items(self) -> Iterator[Tuple[EntityKey, EntityRecord]]:
        return iter(self.entities.items())

    def __len__(self) -> int:
        return len(self.entities)

    # === VIEWS ===

    def to_entity_tree(self) -> EntityTree:
        """Build navigation tree.

        Type groups are sorted by display name (or id), file groups by array
        index so they follow the file's own order.
        """
        tree = EntityTree()

        for key, record in self.entities.items():
            summary = EntitySummary(
                key=key,
                entity_type=record.meta.entity_type,
                id=record.meta.id,
                display_name=record.meta.display_name,
                source_file=record.source_file.as_posix(),
                array_index=record.array_index,
                dirty=record.dirty,
            )
            tree.by_type.setdefault(record.meta.entity_type, []).append(summary)
            tree.by_file.setdefault(summary.source_file, []).append(summary)

        for summaries in tree.by_type.values():
            summaries.sort(key=lambda s: s.sort_name)
        for summaries in tree.by_file.values():
            summaries.sort(key=lambda s: s.array_index)

        return tree

    def to_info(self) -> PackInfo:
        return PackInfo(
            id=self.id,
            name=self.name,
            path=self.path,
            read_only=self.read_only,
            entity_count=len(self.entities),
            has_dirty_files=bool(self.dirty_files),
            metadata=self.metadata,
        )
