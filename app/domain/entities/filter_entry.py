from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FilterEntry:
    attribute_id: str
    option_id: str
    attribute_name: str
    option_name: str

    def to_payload(self) -> dict[str, str]:
        return {
            "attribute_id": self.attribute_id,
            "option_id": self.option_id,
            "attribute_name": self.attribute_name,
            "option_name": self.option_name,
        }
