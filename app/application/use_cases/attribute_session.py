from __future__ import annotations

import logging
from typing import Any, Mapping

from app.application.use_cases.cascade import CascadeResolver
from app.application.use_cases.selection import SelectionStore
from app.application.utils.schema_reader import parse_attribute_schema, parse_segments
from app.application.utils.state_helpers import has_selections_changed, selection_summary
from app.application.utils.validation import is_ready_for_booking, required_attributes, validate_selections
from app.domain.entities.attribute_schema import AttributeSchema, Segment
from app.domain.entities.booking_request import BookingRequest, SegmentQuery
from app.domain.entities.cascade import CascadeOutcome, CascadeView
from app.domain.entities.filter_entry import FilterEntry
from app.domain.entities.selection_state import SEGMENT_KEY, SelectionState
from app.domain.entities.service_details import ServiceDetails
from app.domain.entities.validation import ValidationResult


class AttributeSession:
    """
    One service-details session: the parsed schema and the selections made
    against it. Loading a new service replaces both at once, so selections
    from a previous schema never leak into the next one.
    """

    def __init__(
        self,
        resolver: CascadeResolver,
        session_id: str = "",
        auto_select_first_segment: bool = True,
    ) -> None:
        self.session_id = session_id
        self._resolver = resolver
        self._auto_select_first_segment = auto_select_first_segment
        self._details = ServiceDetails(service_id="", category_id="", name="")
        self._schema = AttributeSchema()
        self._store = SelectionStore(self._schema)
        self._available_segments: tuple[Segment, ...] = ()
        self._logger = logging.getLogger(__name__)

    @property
    def schema(self) -> AttributeSchema:
        return self._schema

    @property
    def details(self) -> ServiceDetails:
        return self._details

    @property
    def available_segments(self) -> tuple[Segment, ...]:
        return self._available_segments

    def load(self, payload: Mapping[str, Any] | None, service_id: str | None = None) -> AttributeSchema:
        details = ServiceDetails.from_payload(payload, service_id)
        schema = parse_attribute_schema(details.attributes)
        store = SelectionStore(
            schema,
            excluded_keys=self._resolver.registry.pricing_only_keys(schema),
            offered_ids=lambda state: self._resolver.available_ids(schema, state),
        )

        # Swap everything in one step
        self._details, self._schema, self._store = details, schema, store
        self._available_segments = ()

        for message in schema.diagnostics:
            self._logger.warning(
                "Attribute schema diagnostic", extra={"session_id": self.session_id, "reason": message}
            )
        self._logger.info(
            "Service attributes loaded",
            extra={"session_id": self.session_id, "service": details.service_id, "attribute": len(schema.groups)},
        )

        self._resolver.auto_select(self._store, self._schema)
        return schema

    def select(
        self,
        attribute_name: str,
        option_id_or_selection: Any,
        display_value: str | None = None,
        option_data: Mapping[str, Any] | None = None,
    ) -> CascadeOutcome:
        return self._resolver.select(
            self._store, self._schema, attribute_name, option_id_or_selection, display_value, option_data
        )

    def clear_all(self) -> None:
        self._store.clear_all()

    def state(self) -> SelectionState:
        return self._store.current()

    def view(self) -> CascadeView:
        return self._resolver.reveal(self._schema, self._store.current())

    def required_attributes(self) -> list[str]:
        return required_attributes(self._schema)

    def validate(self) -> ValidationResult:
        state = self._store.current()
        return validate_selections(
            state.selections,
            self.required_attributes(),
            self._resolver.available_ids(self._schema, state),
        )

    def is_ready_for_booking(self) -> bool:
        return is_ready_for_booking(self._schema, self.validate())

    def filters(self) -> list[FilterEntry]:
        return list(self._store.filter_list)

    def summary(self) -> list[dict[str, Any]]:
        return selection_summary(self._store.current().selections, self._schema)

    def has_changed_since(self, previous: Mapping[str, Any] | None) -> bool:
        return has_selections_changed(previous, self._store.current().selections)

    def stats(self) -> dict[str, Any]:
        validation = self.validate()
        return {
            "total": self._schema.attribute_count,
            "supported": self._schema.supported_count,
            "unsupported": self._schema.unsupported_count,
            "required": len(self.required_attributes()),
            "selected": len(self._store.current().selections),
            "valid": validation.is_valid,
        }

    def segment_query(self, segment_id: str | None = None, subcategory_id: str = "") -> SegmentQuery:
        state = self._store.current()
        return SegmentQuery(
            category_id=self._details.category_id,
            subcategory_id=subcategory_id,
            segment_id=segment_id if segment_id is not None else self._offered_segment_id(),
            attribute=state.filter_list,
        )

    def _offered_segment_id(self) -> str:
        """Selected segment id, or "" when the segment is neither in the cascade view nor in the pricing results."""
        segment_id = self._store.current().selected_segment_id
        if not segment_id:
            return ""
        offered = {s.id for s in self.view().segments} | {s.id for s in self._available_segments}
        if segment_id not in offered:
            self._logger.warning(
                "Selected segment not offered",
                extra={"session_id": self.session_id, "option_id": segment_id, "reason": "stale option"},
            )
            return ""
        return segment_id

    def receive_segments(self, raw_segments: Any) -> tuple[Segment, ...]:
        """Take the segments returned by a segment-pricing fetch."""
        self._available_segments = parse_segments(raw_segments)
        if self._auto_select_first_segment and self._available_segments and self._store.get(SEGMENT_KEY) is None:
            first = self._available_segments[0]
            self._store.select(SEGMENT_KEY, first.id, first.segment_name, first.raw)
            self._logger.info(
                "Segment auto-selected", extra={"session_id": self.session_id, "option_id": first.id}
            )
        return self._available_segments

    def booking_request(self) -> BookingRequest | None:
        """Payload for the provider-selection step, or None while required choices are missing."""
        if not self.is_ready_for_booking():
            self._logger.info(
                "Booking request refused", extra={"session_id": self.session_id, "reason": "not ready"}
            )
            return None
        state = self._store.current()
        return BookingRequest(
            cat_id=self._details.category_id,
            sub_cat_id=self._details.service_id,
            filter_list=state.filter_list,
            segment_id=self._offered_segment_id(),
            service_name=self._details.name,
            time_required=self._details.service_time,
        )
