from __future__ import annotations

from typing import Iterable

from app.domain.entities.attribute_schema import AttributeSchema, Option
from app.infrastructure.cascade_rules.nested_options import NestedOptionsCascadeRule


class MergeRootCascadeRule(NestedOptionsCascadeRule):
    """
    A root group whose definitions are themselves the choices, extended with
    the definitions of its satellite groups (e.g. "Type of AC" plus the deal
    sent under the empty key).
    """

    def __init__(
        self,
        root: str,
        satellites: Iterable[str] = ("",),
        preferred_tokens: Iterable[str] = (),
        unlabeled_labels: Iterable[str] = (),
    ) -> None:
        super().__init__(unlabeled_labels=unlabeled_labels, preferred_tokens=preferred_tokens)
        self.root = root
        self._satellites = tuple(satellites)

    def applies_to(self, attribute_name: str) -> bool:
        return attribute_name == self.root

    def hidden_keys(self) -> frozenset[str]:
        return frozenset(self._satellites)

    def choices(self, attribute_name: str, schema: AttributeSchema) -> list[Option]:
        result: list[Option] = []
        for key in (attribute_name, *self._satellites):
            group = schema.get(key)
            if group is None:
                continue
            result.extend(definition.as_option() for definition in group.definitions)
        return result
