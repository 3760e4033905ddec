"""
Save pipeline for content packs.

Dirty entities are written back into their original array slot: each
affected file is re-read from disk, only the changed slots are replaced, and
the whole array is re-serialized with a printer that follows the game's
data-file conventions ("type", "id", "name" first, 2-space indent).
"""

import logging
from pathlib import Path
from typing import Any, List, Sequence

import orjson

from .errors import PackIOError, PackParseError, ReadOnlyError
from .models import EntityRecord, SaveResult
from .pack import ContentPack

logger = logging.getLogger(__name__)

# Fields emitted first in every object, in this order
PRIORITY_FIELDS = ("type", "id", "name")

INDENT = "  "


def _write_value(out: List[str], value: Any, level: int) -> None:
    if isinstance(value, dict):
        _write_object(out, value, level)  # type: ignore
    elif isinstance(value, list):
        _write_array(out, value, level)  # type: ignore
    else:
        # Scalars use the standard JSON encoding
        out.append(orjson.dumps(value).decode("utf-8"))


def _write_array(out: List[str], items: Sequence[Any], level: int) -> None:
    if not items:
        out.append("[]")
        return

    inner = INDENT * (level + 1)
    out.append("[\n")
    for i, item in enumerate(items):
        out.append(inner)
        _write_value(out, item, level + 1)
        out.append(",\n" if i < len(items) - 1 else "\n")
    out.append(INDENT * level + "]")


def _write_object(out: List[str], obj: dict[str, Any], level: int) -> None:
    if not obj:
        out.append("{}")
        return

    keys = [k for k in PRIORITY_FIELDS if k in obj]
    keys.extend(k for k in obj if k not in PRIORITY_FIELDS)

    inner = INDENT * (level + 1)
    out.append("{\n")
    for i, key in enumerate(keys):
        out.append(inner)
        out.append(orjson.dumps(key).decode("utf-8"))
        out.append(": ")
        _write_value(out, obj[key], level + 1)
        out.append(",\n" if i < len(keys) - 1 else "\n")
    out.append(INDENT * level + "}")


def serialize_with_priority_fields(value: Any) -> str:
    """Serialize a JSON value with priority fields hoisted in every object.

    Objects and arrays are multi-line unless empty; remaining keys keep
    their original relative order.
    """
    out: List[str] = []
    _write_value(out, value, 0)
    return "".join(out)


def pretty_json(value: Any) -> str:
    """Pretty-print a value for editing, keeping its own key order."""
    return orjson.dumps(value, option=orjson.OPT_INDENT_2).decode("utf-8")


def _read_array(full_path: Path, relative_path: Path) -> List[Any]:
    try:
        with full_path.open("rb") as f:
            data = orjson.loads(f.read())
    except OSError as e:
        raise PackIOError(relative_path, f"Failed to read: {e}") from e
    except orjson.JSONDecodeError as e:
        raise PackParseError(relative_path, f"Failed to parse: {e}") from e

    if not isinstance(data, list):
        raise PackParseError(relative_path, "Expected JSON array at root")
    return data  # type: ignore


def write_file(full_path: Path, relative_path: Path, records: List[EntityRecord]) -> int:
    """Patch dirty records into one file on disk.

    Slots beyond the current length of the on-disk array are skipped (the
    file shrank after loading).

    Returns:
        Number of array slots patched
    """
    array = _read_array(full_path, relative_path)

    patched = 0
    for record in records:
        if record.array_index < len(array):
            array[record.array_index] = record.raw
            patched += 1
        else:
            logger.warning(
                f"{relative_path}: index {record.array_index} of {record.key} is "
                f"past the end of the file ({len(array)} entries), skipped"
            )

    output = serialize_with_priority_fields(array) + "\n"
    try:
        with full_path.open("w", encoding="utf-8", newline="\n") as f:
            f.write(output)
    except OSError as e:
        raise PackIOError(relative_path, f"Failed to write: {e}") from e

    return patched


def save_pack(pack: ContentPack) -> SaveResult:
    """Write all dirty entities of `pack` back to their source files.

    Files are processed in path order. Each successfully written file is
    marked clean immediately; a failure aborts the save and leaves files
    written before it in place.

    Raises:
        ReadOnlyError: If the pack is read-only
        PackIOError: If a file cannot be read or written
        PackParseError: If a file on disk is no longer a JSON array
    """
    if pack.read_only:
        raise ReadOnlyError(pack.id, "save")

    result = SaveResult()
    if not pack.dirty_files:
        return result

    grouped = pack.dirty_entities_by_file()
    for relative_path in sorted(pack.dirty_files, key=lambda p: p.as_posix()):
        records = grouped.get(relative_path)
        if not records:
            pack.mark_file_clean(relative_path)
            continue

        records.sort(key=lambda r: r.array_index)
        result.entities_saved += write_file(pack.path / relative_path, relative_path, records)
        result.files_written.append(relative_path.as_posix())
        pack.mark_file_clean(relative_path)
        logger.info(f"Saved {len(records)} entities to {relative_path}")

    return result
