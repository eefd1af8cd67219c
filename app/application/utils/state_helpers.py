from __future__ import annotations

from typing import Any, Mapping

from app.domain.entities.attribute_schema import AttributeGroup, AttributeSchema
from app.domain.entities.selection_state import Selection


def attribute_display_info(name: str, group: AttributeGroup | None) -> dict[str, Any]:
    """Display info for one group, read from its first definition."""
    if group is None or group.first_definition is None:
        return {"name": name, "display_name": name, "type": "unknown", "option_count": 0, "is_required": False}
    first = group.first_definition
    return {
        "name": name,
        "display_name": first.name or name,
        "type": group.kind.value,
        "option_count": len(first.options),
        "is_required": first.required,
    }


def selection_summary(selections: Mapping[str, Any], schema: AttributeSchema) -> list[dict[str, Any]]:
    summary: list[dict[str, Any]] = []
    for attribute_name, raw_selection in selections.items():
        selection = Selection.coerce(raw_selection)
        group = schema.get(attribute_name)
        if selection is None or selection.is_empty or group is None:
            continue
        info = attribute_display_info(attribute_name, group)
        summary.append(
            {
                "attribute_name": attribute_name,
                "display_name": info["display_name"],
                "selected_value": selection.value or selection.id,
                "selected_id": selection.id,
                "type": info["type"],
            }
        )
    return summary


def has_selections_changed(previous: Mapping[str, Any] | None, current: Mapping[str, Any] | None) -> bool:
    """True when the selected keys or any selected id differ (used to decide on a segment refetch)."""
    if previous is None and current is None:
        return False
    if previous is None or current is None:
        return True
    if sorted(previous) != sorted(current):
        return True
    for key in previous:
        before = Selection.coerce(previous[key])
        after = Selection.coerce(current[key])
        if before is None and after is None:
            continue
        if before is None or after is None or before.id != after.id:
            return True
    return False
