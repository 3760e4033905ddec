"""
Module for working with Cataclysm-BN content packs.

Provides loading of base game and mod packs into an editable workspace,
entity lookup and mutation by storage key, validation of edited JSON, and
saving changed entities back to their original file and array slot.
"""

from .service import Workspace
from .models import (
    GameDataObject,
    PackId,
    EntityKey,
    EntityMeta,
    EntityRef,
    EntityRecord,
    PackMetadata,
    LoadStats,
    EntitySummary,
    EntityTree,
    PackLoadResult,
    PackInfo,
    WorkspaceState,
    EntityData,
    UpdateResult,
    SaveResult,
    SearchResult,
    AvailableModInfo,
    INHERITANCE_KEY,
    MODINFO_FILE,
)
from .errors import (
    WorkspaceError,
    PackIOError,
    PackParseError,
    NotFoundError,
    ReadOnlyError,
    DirtyStateError,
    MetadataExtractionError,
)
from .pack import ContentPack, LoadOptions
from .loaders import PackLoader, list_available_mods, list_mods_in_directory
from .validator import ValidationIssue, ValidationResult, validate_json_text
from .writer import serialize_with_priority_fields

# Public exports
__all__ = [
    # Main service
    "Workspace",
    # Type aliases
    "GameDataObject",
    "PackId",
    "EntityKey",
    # Models
    "EntityMeta",
    "EntityRef",
    "EntityRecord",
    "PackMetadata",
    "LoadStats",
    "EntitySummary",
    "EntityTree",
    "PackLoadResult",
    "PackInfo",
    "WorkspaceState",
    "EntityData",
    "UpdateResult",
    "SaveResult",
    "SearchResult",
    "AvailableModInfo",
    # Constants
    "INHERITANCE_KEY",
    "MODINFO_FILE",
    # Errors
    "WorkspaceError",
    "PackIOError",
    "PackParseError",
    "NotFoundError",
    "ReadOnlyError",
    "DirtyStateError",
    "MetadataExtractionError",
    # Component classes (for advanced usage)
    "ContentPack",
    "LoadOptions",
    "PackLoader",
    "list_available_mods",
    "list_mods_in_directory",
    "ValidationIssue",
    "ValidationResult",
    "validate_json_text",
    "serialize_with_priority_fields",
]
