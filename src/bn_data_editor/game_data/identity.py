"""
Identity extraction for Cataclysm-BN entities.

Every JSON object needs a (type, id) pair to become an addressable entity.
Most types carry a plain "id" field; a few derive it from other fields.
Those are registered in `ID_EXTRACTORS`, keyed by type string, so adding a
new special case is a one-line addition.
"""

from typing import Any, Callable, Dict, List, Optional

from .models import ABSTRACT_KEY, INHERITANCE_KEY, EntityMeta, EntityRef, GameDataObject

IdExtractor = Callable[[GameDataObject], Optional[str]]


def _str_field(obj: GameDataObject, key: str) -> Optional[str]:
    value = obj.get(key)
    return value if isinstance(value, str) else None


def _default_id(obj: GameDataObject) -> Optional[str]:
    return _str_field(obj, "id")


def _recipe_id(obj: GameDataObject) -> Optional[str]:
    """Recipes are named after their result unless they carry an explicit id."""
    explicit = _str_field(obj, "id")
    if explicit is not None:
        return explicit

    result = _str_field(obj, "result")
    if result is None:
        return None

    suffix = _str_field(obj, "id_suffix")
    return f"{result}_{suffix}" if suffix is not None else result


def _mapgen_id(obj: GameDataObject) -> Optional[str]:
    """Mapgen uses om_terrain (string, list or 2D list), else nested_mapgen_id."""
    om_terrain: Any = obj.get("om_terrain")
    if isinstance(om_terrain, str):
        return om_terrain
    if isinstance(om_terrain, list) and om_terrain:
        first: Any = om_terrain[0]
        if isinstance(first, str):
            return first
        if isinstance(first, list) and first and isinstance(first[0], str):
            return first[0]

    return _str_field(obj, "nested_mapgen_id")


ID_EXTRACTORS: Dict[str, IdExtractor] = {
    "recipe": _recipe_id,
    "uncraft": _recipe_id,
    "mapgen": _mapgen_id,
    "palette": _default_id,
}


def extract_id(obj: GameDataObject, entity_type: str) -> Optional[str]:
    """Return the identifier of an object, or None if it has none.

    Abstract templates are identified by their "abstract" value regardless
    of type.
    """
    abstract = _str_field(obj, ABSTRACT_KEY)
    if abstract is not None:
        return abstract

    extractor = ID_EXTRACTORS.get(entity_type, _default_id)
    return extractor(obj)


def extract_display_name(obj: GameDataObject) -> Optional[str]:
    """Name can be a plain string or an object with a "str" field."""
    name: Any = obj.get("name")
    if isinstance(name, str):
        return name
    if isinstance(name, dict):
        value: Any = name.get("str")
        if isinstance(value, str):
            return value
    return None


def extract_references(obj: GameDataObject) -> List[EntityRef]:
    refs: List[EntityRef] = []

    copy_from = _str_field(obj, INHERITANCE_KEY)
    if copy_from is not None:
        refs.append(
            EntityRef(
                field_path=INHERITANCE_KEY,
                target_id=copy_from,
                expected_type=_str_field(obj, "type"),
            )
        )

    # Recipe results may point at any item type
    result = _str_field(obj, "result")
    if result is not None:
        refs.append(EntityRef(field_path="result", target_id=result))

    return refs


def extract_meta(obj: Any) -> Optional[EntityMeta]:
    """Build `EntityMeta` for a JSON value.

    Args:
        obj: Parsed JSON value

    Returns:
        Metadata, or None when the value is not an object or lacks a string
        type or an identifier
    """
    if not isinstance(obj, dict):
        return None

    entity_type = _str_field(obj, "type")
    if entity_type is None:
        return None

    entity_id = extract_id(obj, entity_type)
    if entity_id is None:
        return None

    return EntityMeta(
        entity_type=entity_type,
        id=entity_id,
        display_name=extract_display_name(obj),
        copy_from=_str_field(obj, INHERITANCE_KEY),
        references=extract_references(obj),
    )
