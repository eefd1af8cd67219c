from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from app.domain.entities.filter_entry import FilterEntry

SEGMENT_KEY = "serviceSegments"  # reserved key; routed to the selected-segment slot
NA_OPTION_ID = "NA"  # backend sentinel for "explicitly no selection"


@dataclass(frozen=True)
class Selection:
    id: str
    value: str = ""
    data: dict[str, Any] = field(default_factory=dict, compare=False)
    timestamp: int = 0  # epoch ms

    @property
    def is_empty(self) -> bool:
        return not self.id

    @staticmethod
    def coerce(value: Any) -> "Selection | None":
        """Accept a Selection, a mapping with an `id`, or a bare id; anything else is unselected."""
        if value is None:
            return None
        if isinstance(value, Selection):
            return value
        if isinstance(value, Mapping):
            raw_id = value.get("id")
            if raw_id is None or isinstance(raw_id, (dict, list)):
                return None
            data = value.get("data")
            timestamp = value.get("timestamp")
            return Selection(
                id=str(raw_id),
                value=str(value.get("value") or value.get("name") or ""),
                data=dict(data) if isinstance(data, Mapping) else {},
                timestamp=timestamp if isinstance(timestamp, int) else 0,
            )
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            return Selection(id=str(value), value=str(value))
        return None


@dataclass(frozen=True)
class SelectionState:
    selections: dict[str, Selection] = field(default_factory=dict)
    selected_segment: Selection | None = None
    filter_list: tuple[FilterEntry, ...] = ()  # derived from selections

    @property
    def selected_segment_id(self) -> str:
        return self.selected_segment.id if self.selected_segment else ""

    def get(self, attribute_name: str) -> Selection | None:
        if attribute_name == SEGMENT_KEY:
            return self.selected_segment
        return self.selections.get(attribute_name)

    def selected_id(self, attribute_name: str) -> str:
        selection = self.get(attribute_name)
        return selection.id if selection else ""
