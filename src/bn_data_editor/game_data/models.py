"""
Data models for Cataclysm-BN content packs.

Contains the entity record, pack-level result types and the lightweight
summaries handed to callers. Entity payloads stay plain dicts (orjson keeps
key insertion order, which the save pipeline relies on).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, TypeAlias

if TYPE_CHECKING:
    from .validator import ValidationResult

# Type aliases for clarity
GameDataObject: TypeAlias = Dict[str, Any]
"""A single JSON object from a data file (monster, item, recipe...)."""

PackId: TypeAlias = str
"""Opaque identifier of a loaded pack (uuid4 hex string)."""

EntityKey: TypeAlias = str
"""Storage key of an entity inside a pack: "{type}:{id}", suffixed on collision."""


# Well-known fields
INHERITANCE_KEY = "copy-from"
ABSTRACT_KEY = "abstract"
MODINFO_FILE = "modinfo.json"


@dataclass
class EntityRef:
    """Outbound reference from one entity to another (recorded, not resolved)."""

    field_path: str
    target_id: str
    expected_type: Optional[str] = None


@dataclass
class EntityMeta:
    """Metadata extracted from an entity's JSON for indexing and display."""

    entity_type: str
    id: str
    display_name: Optional[str] = None
    copy_from: Optional[str] = None
    references: List[EntityRef] = field(default_factory=list)

    @property
    def key(self) -> EntityKey:
        """Logical key derived purely from type and id."""
        return f"{self.entity_type}:{self.id}"


@dataclass
class EntityRecord:
    """One JSON object of a pack together with its on-disk coordinates.

    `array_index` is the position inside the source file's top-level array
    and never changes while the record lives; only a reload moves it.
    """

    meta: EntityMeta
    raw: GameDataObject
    source_file: Path
    array_index: int
    dirty: bool = False

    @property
    def key(self) -> EntityKey:
        """Logical key of the record (may differ from its storage key)."""
        return self.meta.key


@dataclass
class PackMetadata:
    """Pack manifest fields read from modinfo.json."""

    mod_id: Optional[str] = None
    mod_type: Optional[str] = None
    name: Optional[str] = None
    dependencies: List[str] = field(default_factory=list)
    description: Optional[str] = None
    version: Optional[str] = None
    lua_api_version: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    category: Optional[str] = None


@dataclass
class LoadStats:
    """Statistics about a pack load operation."""

    files_scanned: int = 0
    entities_loaded: int = 0
    errors: List[str] = field(default_factory=list)


@dataclass
class EntitySummary:
    """Entity summary for navigation trees (no JSON payload)."""

    key: EntityKey
    entity_type: str
    id: str
    display_name: Optional[str]
    source_file: str
    array_index: int
    dirty: bool

    @property
    def sort_name(self) -> str:
        return self.display_name if self.display_name is not None else self.id


@dataclass
class EntityTree:
    """Entities grouped by type and by source file."""

    by_type: Dict[str, List[EntitySummary]] = field(default_factory=dict)
    by_file: Dict[str, List[EntitySummary]] = field(default_factory=dict)


@dataclass
class PackLoadResult:
    """Result of loading (or reloading) a pack."""

    pack_id: PackId
    name: str
    entity_tree: EntityTree
    load_stats: LoadStats


@dataclass
class PackInfo:
    """Basic info about a loaded pack (for listings)."""

    id: PackId
    name: str
    path: Path
    read_only: bool
    entity_count: int
    has_dirty_files: bool
    metadata: Optional[PackMetadata] = None


@dataclass
class WorkspaceState:
    """Read-only snapshot of the workspace."""

    packs: List[PackInfo]
    load_order: List[PackId]


@dataclass
class EntityData:
    """Editable view of an entity."""

    key: EntityKey
    meta: EntityMeta
    json_text: str
    source_file: Path
    read_only: bool
    dirty: bool


@dataclass
class UpdateResult:
    """Outcome of an entity update.

    `accepted` is False when validation rejected the submission; nothing was
    changed in that case.
    """

    validation: "ValidationResult"
    accepted: bool
    new_key: Optional[EntityKey] = None
    meta: Optional[EntityMeta] = None


@dataclass
class SaveResult:
    """Files rewritten by a save and the number of array slots patched."""

    files_written: List[str] = field(default_factory=list)
    entities_saved: int = 0


@dataclass
class SearchResult:
    """Single hit of a free-text entity search."""

    pack_id: PackId
    pack_name: str
    entity_key: EntityKey
    entity_id: str
    entity_type: str
    display_name: Optional[str] = None


@dataclass
class AvailableModInfo:
    """A mod found on disk but not necessarily loaded."""

    path: Path
    metadata: PackMetadata
