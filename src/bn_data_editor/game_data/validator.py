"""
Structural validation of entity JSON.

Reports errors (which block an update) and warnings (which do not). The
validator never touches workspace state.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import orjson

from .models import ABSTRACT_KEY, INHERITANCE_KEY, GameDataObject


@dataclass
class ValidationIssue:
    """A single validation error or warning."""

    code: str
    message: str
    path: Optional[str] = None
    line: Optional[int] = None


@dataclass
class ValidationResult:
    """Result of validating one entity."""

    is_valid: bool = True
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    def add_error(
        self,
        code: str,
        message: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        self.is_valid = False
        self.errors.append(ValidationIssue(code, message, path, line))

    def add_warning(self, code: str, message: str, path: Optional[str] = None) -> None:
        self.warnings.append(ValidationIssue(code, message, path))


def _validate_recipe(value: GameDataObject, result: ValidationResult) -> None:
    if INHERITANCE_KEY in value:
        return
    if "category" not in value:
        result.add_warning(
            "MISSING_CATEGORY",
            "Recipe should have a 'category' field for menu organization",
        )
    if "components" not in value and "using" not in value:
        result.add_warning("NO_COMPONENTS", "Recipe has no 'components' or 'using' field")


def _validate_monster(value: GameDataObject, result: ValidationResult) -> None:
    if INHERITANCE_KEY in value:
        return
    if "hp" not in value:
        result.add_warning("MISSING_HP", "Monster should have an 'hp' field")
    if "speed" not in value:
        result.add_warning("MISSING_SPEED", "Monster should have a 'speed' field")


def _validate_vehicle(value: GameDataObject, result: ValidationResult) -> None:
    if "parts" not in value and INHERITANCE_KEY not in value:
        result.add_warning("MISSING_PARTS", "Vehicle should have a 'parts' array")


def _validate_mapgen(value: GameDataObject, result: ValidationResult) -> None:
    if "om_terrain" not in value:
        result.add_warning(
            "MISSING_OM_TERRAIN", "Mapgen should have an 'om_terrain' field"
        )

    obj: Any = value.get("object")
    if isinstance(obj, dict):
        if "rows" not in obj and "fill_ter" not in obj:
            result.add_warning(
                "MISSING_ROWS", "Mapgen object should have 'rows' or 'fill_ter'"
            )
    elif obj is None and INHERITANCE_KEY not in value:
        result.add_warning("MISSING_OBJECT", "Mapgen should have an 'object' field")


TYPE_VALIDATORS: Dict[str, Callable[[GameDataObject, ValidationResult], None]] = {
    "recipe": _validate_recipe,
    "uncraft": _validate_recipe,
    "MONSTER": _validate_monster,
    "vehicle": _validate_vehicle,
    "mapgen": _validate_mapgen,
}


def validate_entity_json(value: Any) -> ValidationResult:
    """Validate a parsed JSON value as an entity."""
    result = ValidationResult()

    if not isinstance(value, dict):
        result.add_error("NOT_OBJECT", "Entity must be a JSON object")
        return result

    if "type" not in value:
        result.add_error("MISSING_TYPE", "Entity must have a 'type' field", "$")

    entity_type = value.get("type")
    if not isinstance(entity_type, str):
        entity_type = ""

    if ABSTRACT_KEY not in value:
        is_recipe = entity_type in ("recipe", "uncraft")
        if "id" not in value and not (is_recipe and "result" in value):
            result.add_error(
                "MISSING_ID",
                "Entity must have an 'id' field (or 'result' for recipes)",
                "$",
            )

    type_validator = TYPE_VALIDATORS.get(entity_type)
    if type_validator is not None:
        type_validator(value, result)

    return result


def validate_json_text(
    text: str, previous: Optional[GameDataObject] = None
) -> ValidationResult:
    """Parse and validate entity text as typed in an editor.

    Args:
        text: Raw JSON text
        previous: Current value of the entity being replaced, if any
    """
    try:
        value = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        result = ValidationResult()
        result.add_error("INVALID_JSON", f"Invalid JSON syntax: {e}", line=e.lineno)
        return result

    if previous is not None:
        return validate_update(previous, value)
    return validate_entity_json(value)


def validate_update(old_value: GameDataObject, new_value: Any) -> ValidationResult:
    """Validate a replacement value, warning when it changes the entity type."""
    result = validate_entity_json(new_value)

    old_type = old_value.get("type")
    new_type = new_value.get("type") if isinstance(new_value, dict) else None
    if old_type != new_type:
        result.add_warning(
            "TYPE_CHANGED", f"Entity type changed from {old_type!r} to {new_type!r}"
        )

    return result
