"""
Exception types raised by workspace operations.

Validation failures are not exceptions: they come back as data inside
`UpdateResult` so the caller can show them next to the edited text.
"""

from pathlib import Path
from typing import Optional, Union


class WorkspaceError(Exception):
    """Base class for all workspace failures."""
    pass


class PackIOError(WorkspaceError):
    """A path could not be resolved, read or written."""

    def __init__(self, path: Union[str, Path], message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"IO error at {path}: {message}")


class PackParseError(WorkspaceError):
    """Malformed JSON, or a data file whose root is not an array."""

    def __init__(self, path: Union[str, Path], message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"Parse error in {path}: {message}")


class NotFoundError(WorkspaceError):
    """Unknown pack id or entity key."""

    def __init__(self, kind: str, identifier: str, pack_id: Optional[str] = None):
        self.kind = kind
        self.identifier = identifier
        self.pack_id = pack_id
        where = f" in pack {pack_id}" if pack_id else ""
        super().__init__(f"{kind} {identifier} not found{where}")


class ReadOnlyError(WorkspaceError):
    """Mutation attempted on a read-only pack."""

    def __init__(self, pack_id: str, action: str):
        self.pack_id = pack_id
        self.action = action
        super().__init__(f"Cannot {action} in read-only pack {pack_id}")


class DirtyStateError(WorkspaceError):
    """Pack closed without force while it still has unsaved files."""

    def __init__(self, pack_id: str, dirty_count: int):
        self.pack_id = pack_id
        self.dirty_count = dirty_count
        super().__init__(
            f"Pack {pack_id} has {dirty_count} unsaved files. "
            f"Use force=True to close anyway."
        )


class MetadataExtractionError(WorkspaceError):
    """Submitted JSON passed validation but yields no usable type/id."""

    def __init__(self, entity_key: str):
        self.entity_key = entity_key
        super().__init__(
            f"Could not extract entity metadata from JSON submitted for {entity_key}"
        )
