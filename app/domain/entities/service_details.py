from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class ServiceDetails:
    service_id: str
    category_id: str
    name: str
    service_time: str = ""
    attributes: Any = field(default_factory=dict, compare=False)  # raw map, parsed by the schema reader

    @staticmethod
    def from_payload(payload: Mapping[str, Any] | None, service_id: str | None = None) -> "ServiceDetails":
        payload = payload if isinstance(payload, Mapping) else {}
        attributes = payload.get("attributes", {})
        resolved_id = service_id or payload.get("id") or payload.get("subcategory_id") or ""
        return ServiceDetails(
            service_id=str(resolved_id).strip(),
            category_id=str(payload.get("category_id") or resolved_id or "").strip(),
            name=str(payload.get("name") or "").strip(),
            service_time=str(payload.get("serviceTime") or ""),
            attributes=dict(attributes) if isinstance(attributes, Mapping) else attributes,
        )
