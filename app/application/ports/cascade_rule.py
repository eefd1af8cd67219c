from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.attribute_schema import AttributeSchema, Option
from app.domain.entities.cascade import CascadeOutcome, DependentGroup
from app.domain.entities.selection_state import SelectionState


class CascadeRulePort(ABC):
    preferred_tokens: tuple[str, ...] = ()

    @abstractmethod
    def applies_to(self, attribute_name: str) -> bool:
        raise NotImplementedError

    def hidden_keys(self) -> frozenset[str]:
        """Schema keys this rule folds into another group; they are never shown or validated alone."""
        return frozenset()

    @abstractmethod
    def choices(self, attribute_name: str, schema: AttributeSchema) -> list[Option]:
        """Options offered for a top-level group, in display order."""
        raise NotImplementedError

    @abstractmethod
    def dependents_of(self, attribute_name: str, option: Option, level: int = 2) -> list[DependentGroup]:
        """Groups revealed one level below `option`."""
        raise NotImplementedError

    @abstractmethod
    def resolve_dependents(
        self,
        attribute_name: str,
        option: Option | None,
        siblings: tuple[Option, ...],
        state: SelectionState,
        level: int = 1,
    ) -> CascadeOutcome:
        """
        Work out what `option` reveals and which existing dependent selections
        (including the selected segment) are no longer reachable from it.
        `option` is None when the selection was cleared or is unknown.
        """
        raise NotImplementedError

    @abstractmethod
    def pricing_only_keys(self, attribute_name: str, schema: AttributeSchema) -> set[str]:
        """Dependent keys that only steer pricing and never appear in the filter list."""
        raise NotImplementedError
