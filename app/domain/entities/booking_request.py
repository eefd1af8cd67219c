from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.domain.entities.filter_entry import FilterEntry


@dataclass(frozen=True)
class SegmentQuery:
    category_id: str
    subcategory_id: str = ""
    segment_id: str = ""
    attribute: tuple[FilterEntry, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        return {
            "category_id": self.category_id,
            "subcategory_id": self.subcategory_id,
            "segment_id": self.segment_id,
            "attribute": [entry.to_payload() for entry in self.attribute],
        }


@dataclass(frozen=True)
class BookingRequest:
    cat_id: str
    sub_cat_id: str
    filter_list: tuple[FilterEntry, ...] = ()
    segment_id: str = ""
    service_name: str = ""
    time_required: str = ""

    def to_payload(self) -> dict[str, Any]:
        # Field names are the ones the provider-selection step reads
        return {
            "catIdValue": self.cat_id,
            "subCatIdValue": self.sub_cat_id,
            "filterList": [entry.to_payload() for entry in self.filter_list],
            "segmentId": self.segment_id,
            "serviceNameValue": self.service_name,
            "timeRequired": self.time_required,
        }
