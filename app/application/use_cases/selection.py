from __future__ import annotations

import logging
import time
from typing import Any, Callable, Collection, Iterable, Mapping

from app.application.utils.normalizer import normalize_filters
from app.domain.entities.attribute_schema import AttributeSchema
from app.domain.entities.filter_entry import FilterEntry
from app.domain.entities.selection_state import SEGMENT_KEY, Selection, SelectionState


class SelectionStore:
    """
    Owns the selection set of one service-details session.

    Accepts any well-formed selection; required-field checks live in the
    validator. The filter list is derived and recomputed after every select;
    `offered_ids` maps a snapshot to the option ids currently offered per
    group, so options that are no longer offered stay out of the filters.
    """

    def __init__(
        self,
        schema: AttributeSchema,
        excluded_keys: Iterable[str] = (),
        offered_ids: Callable[[SelectionState], Mapping[str, Collection[str]]] | None = None,
    ) -> None:
        self._schema = schema
        self._excluded_keys = frozenset(excluded_keys)
        self._offered_ids = offered_ids
        self._selections: dict[str, Selection] = {}
        self._selected_segment: Selection | None = None
        self._filter_list: tuple[FilterEntry, ...] = ()
        self._last_timestamp = 0
        self._logger = logging.getLogger(__name__)

    def select(
        self,
        attribute_name: str,
        option_id_or_selection: Any,
        display_value: str | None = None,
        option_data: Mapping[str, Any] | None = None,
    ) -> bool:
        if not attribute_name:
            self._logger.warning("Selection ignored", extra={"reason": "missing attribute name"})
            return False

        selection = self._build_selection(option_id_or_selection, display_value, option_data)
        if selection is None:
            self._logger.warning(
                "Selection ignored", extra={"attribute": attribute_name, "reason": "malformed selection"}
            )
            return False

        if attribute_name == SEGMENT_KEY:
            self._selected_segment = None if selection.is_empty else selection
        else:
            self._selections[attribute_name] = selection

        self._refresh_filters()
        self._logger.debug("Attribute selected", extra={"attribute": attribute_name, "option_id": selection.id})
        return True

    def clear_all(self) -> None:
        self._selections = {}
        self._selected_segment = None
        self._filter_list = ()

    def get(self, attribute_name: str) -> Selection | None:
        if attribute_name == SEGMENT_KEY:
            return self._selected_segment
        return self._selections.get(attribute_name)

    def current(self) -> SelectionState:
        return SelectionState(
            selections=dict(self._selections),
            selected_segment=self._selected_segment,
            filter_list=self._filter_list,
        )

    @property
    def filter_list(self) -> tuple[FilterEntry, ...]:
        return self._filter_list

    def _build_selection(
        self,
        option_id_or_selection: Any,
        display_value: str | None,
        option_data: Mapping[str, Any] | None,
    ) -> Selection | None:
        if isinstance(option_id_or_selection, (Selection, Mapping)):
            base = Selection.coerce(option_id_or_selection)
            if base is None:
                return None
            return Selection(id=base.id, value=base.value, data=base.data, timestamp=self._next_timestamp())

        if option_id_or_selection is None:
            option_id = ""
        elif isinstance(option_id_or_selection, (str, int)) and not isinstance(option_id_or_selection, bool):
            option_id = str(option_id_or_selection)
        else:
            return None

        return Selection(
            id=option_id,
            value=display_value or option_id,
            data=dict(option_data or {}),
            timestamp=self._next_timestamp(),
        )

    def _next_timestamp(self) -> int:
        now = int(time.time() * 1000)
        self._last_timestamp = now if now > self._last_timestamp else self._last_timestamp + 1
        return self._last_timestamp

    def _refresh_filters(self) -> None:
        available = self._offered_ids(self.current()) if self._offered_ids else None
        self._filter_list = tuple(
            normalize_filters(self._selections, self._schema, self._excluded_keys, available_ids=available)
        )
