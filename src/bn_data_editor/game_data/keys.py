"""
Storage key helpers.

The logical key of an entity is "{type}:{id}". Two records in one pack can
share it (split definitions, leftovers in another file), so the second and
later records get a storage key suffixed with their file stem.
"""

from pathlib import Path
from typing import Container

from .models import EntityKey


def make_unique_key(
    base_key: EntityKey, source_file: Path, existing: Container[str]
) -> EntityKey:
    """Return a storage key for `base_key` that is not in `existing`.

    The bare key is used when free. Otherwise "{key}@{file_stem}" is tried,
    then "{key}@{file_stem}_1", "_2" and so on.

    Args:
        base_key: Logical key of the record being stored
        source_file: Source file of the record (only its stem is used)
        existing: Keys already taken

    Returns:
        First free storage key
    """
    if base_key not in existing:
        return base_key

    file_stem = Path(source_file).stem or "unknown"
    key = f"{base_key}@{file_stem}"
    counter = 1
    while key in existing:
        key = f"{base_key}@{file_stem}_{counter}"
        counter += 1

    return key
