from __future__ import annotations

import logging
from typing import Any, Collection, Iterable, Mapping

from app.application.utils.schema_reader import SATELLITE_KEY
from app.domain.entities.attribute_schema import AttributeSchema
from app.domain.entities.filter_entry import FilterEntry
from app.domain.entities.selection_state import NA_OPTION_ID, SEGMENT_KEY, Selection

logger = logging.getLogger(__name__)


def normalize_filters(
    selections: Mapping[str, Any],
    schema: AttributeSchema,
    excluded_keys: Iterable[str] = (),
    diagnostics: list[str] | None = None,
    available_ids: Mapping[str, Collection[str]] | None = None,
) -> list[FilterEntry]:
    """
    Convert selections keyed by group name into the wire filter list.

    The attribute id is the id of the group's first definition, since the
    backend expects definition ids rather than display names. Entries whose id
    cannot be resolved are dropped and reported, never guessed.
    When `available_ids` is given, a selection whose option is no longer
    offered for its group is dropped the same way (the NA sentinel is kept).
    Output keeps the insertion order of `selections`.
    """
    excluded = {SEGMENT_KEY, SATELLITE_KEY, *excluded_keys}
    entries: list[FilterEntry] = []

    for attribute_name, raw_selection in selections.items():
        if attribute_name in excluded:
            continue
        selection = Selection.coerce(raw_selection)
        if selection is None or selection.is_empty:
            continue

        group = schema.get(attribute_name)
        definition = group.first_definition if group else None
        if definition is None or not definition.id:
            reason = "unknown attribute group" if group is None else "definition has no id"
            logger.warning(
                "Filter entry dropped",
                extra={"attribute": attribute_name, "option_id": selection.id, "reason": reason},
            )
            if diagnostics is not None:
                diagnostics.append(f'Could not resolve attribute id for "{attribute_name}": {reason}')
            continue

        offered = available_ids.get(attribute_name) if available_ids is not None else None
        if offered is not None and selection.id != NA_OPTION_ID and selection.id not in offered:
            logger.warning(
                "Filter entry dropped",
                extra={"attribute": attribute_name, "option_id": selection.id, "reason": "stale option"},
            )
            if diagnostics is not None:
                diagnostics.append(f'Option "{selection.id}" is not offered for "{attribute_name}"')
            continue

        entries.append(
            FilterEntry(
                attribute_id=definition.id,
                option_id="" if selection.id == NA_OPTION_ID else selection.id,
                attribute_name=attribute_name,
                option_name=selection.value or str(selection.data.get("name") or ""),
            )
        )

    return entries


def selections_from_filters(entries: Iterable[FilterEntry]) -> dict[str, Selection]:
    """Rebuild a selection set from filter entries; empty option ids map back to the NA sentinel."""
    return {
        entry.attribute_name: Selection(id=entry.option_id or NA_OPTION_ID, value=entry.option_name)
        for entry in entries
    }
