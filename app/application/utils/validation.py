from __future__ import annotations

from typing import Any, Collection, Mapping

from app.application.utils.schema_reader import SATELLITE_KEY, parse_attribute_schema
from app.domain.entities.attribute_schema import AttributeSchema
from app.domain.entities.selection_state import Selection
from app.domain.entities.validation import ValidationResult


def required_attributes(schema: AttributeSchema | Mapping[str, Any] | None) -> list[str]:
    """Names of groups with at least one definition flagged `required`/`is_required`."""
    if schema is None:
        return []
    if not isinstance(schema, AttributeSchema):
        schema = parse_attribute_schema(schema)
    return [name for name, group in schema.groups.items() if group.required and name != SATELLITE_KEY]


def validate_selections(
    selections: Mapping[str, Any] | None,
    required: Collection[str],
    available_ids: Mapping[str, Collection[str]] | None = None,
) -> ValidationResult:
    """
    Check that every required attribute has a non-empty selection.

    When `available_ids` is given, a selection whose id is not offered for its
    attribute any more counts as missing.
    """
    selections = selections if isinstance(selections, Mapping) else {}
    missing: list[str] = []
    errors: list[str] = []

    for attribute_name in required:
        if attribute_name == SATELLITE_KEY:
            continue
        if not _is_selected(attribute_name, selections.get(attribute_name), available_ids):
            missing.append(attribute_name)
            errors.append(f"{attribute_name} is required")

    return ValidationResult(is_valid=not missing, missing=missing, errors=errors)


def is_ready_for_booking(schema: AttributeSchema, validation: ValidationResult) -> bool:
    return schema.is_valid and validation.is_valid and schema.supported_count > 0


def _is_selected(
    attribute_name: str,
    raw_selection: Any,
    available_ids: Mapping[str, Collection[str]] | None,
) -> bool:
    selection = Selection.coerce(raw_selection)
    if selection is None or selection.is_empty:
        return False
    if available_ids is not None and attribute_name in available_ids:
        return selection.id in available_ids[attribute_name]
    return True
