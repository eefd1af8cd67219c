from __future__ import annotations

from typing import Iterable

from app.application.ports.cascade_rule import CascadeRulePort
from app.domain.entities.attribute_schema import AttributeSchema, Option
from app.domain.entities.cascade import CascadeOutcome, DependentGroup
from app.domain.entities.selection_state import SEGMENT_KEY, Selection, SelectionState


class NestedOptionsCascadeRule(CascadeRulePort):
    """
    Schema-driven cascade: a chosen option's nested `options` map reveals one
    dependent group per label, and its `serviceSegments` become the segment
    choices. Labels listed in `unlabeled_labels` name their group after the
    parent option instead (e.g. a deal's plans sent under a "null" label).
    """

    def __init__(self, unlabeled_labels: Iterable[str] = (), preferred_tokens: Iterable[str] = ()) -> None:
        self._unlabeled_labels = frozenset(unlabeled_labels)
        self.preferred_tokens = tuple(preferred_tokens)

    def applies_to(self, attribute_name: str) -> bool:
        return True

    def choices(self, attribute_name: str, schema: AttributeSchema) -> list[Option]:
        group = schema.get(attribute_name)
        return group.options() if group else []

    def dependent_key(self, option: Option, label: str) -> str:
        if label in self._unlabeled_labels:
            return option.name or option.value or label
        return label

    def dependents_of(self, attribute_name: str, option: Option, level: int = 2) -> list[DependentGroup]:
        dependents: list[DependentGroup] = []
        for label, options in option.options:
            if not options:
                continue
            dependents.append(
                DependentGroup(
                    name=self.dependent_key(option, label),
                    parent=attribute_name,
                    options=options,
                    level=level,
                )
            )
        return dependents

    def resolve_dependents(
        self,
        attribute_name: str,
        option: Option | None,
        siblings: tuple[Option, ...],
        state: SelectionState,
        level: int = 1,
    ) -> CascadeOutcome:
        reveal = tuple(self.dependents_of(attribute_name, option, level + 1)) if option else ()
        segments = option.service_segments if option else ()

        reachable: dict[str, set[str]] = {}
        if option is not None:
            self._collect_reachable(attribute_name, option, state, reachable, level + 1)

        reset: list[str] = []
        for key in self._descendant_keys(attribute_name, siblings, level + 1):
            if key == attribute_name:
                continue
            selection = state.selections.get(key)
            if selection is not None and not selection.is_empty and selection.id not in reachable.get(key, ()):
                reset.append(key)

        segment = state.selected_segment
        if segment is not None and any(sibling.service_segments for sibling in siblings):
            if segment.id not in {s.id for s in segments}:
                reset.append(SEGMENT_KEY)

        return CascadeOutcome(reveal=reveal, segments=segments, reset=tuple(reset))

    def pricing_only_keys(self, attribute_name: str, schema: AttributeSchema) -> set[str]:
        choices = tuple(self.choices(attribute_name, schema))
        segment_bearing = any(choice.service_segments for choice in choices)
        return {
            key
            for key in self._descendant_keys(attribute_name, choices, 2)
            if segment_bearing or key not in schema
        }

    def _collect_reachable(
        self,
        attribute_name: str,
        option: Option,
        state: SelectionState,
        reachable: dict[str, set[str]],
        level: int,
    ) -> None:
        for dependent in self.dependents_of(attribute_name, option, level):
            reachable.setdefault(dependent.name, set()).update(o.id for o in dependent.options)
            selection: Selection | None = state.selections.get(dependent.name)
            if selection is None or selection.is_empty:
                continue
            chosen = next((o for o in dependent.options if o.id == selection.id), None)
            if chosen is not None:
                self._collect_reachable(dependent.name, chosen, state, reachable, level + 1)

    def _descendant_keys(self, attribute_name: str, options: Iterable[Option], level: int) -> list[str]:
        keys: list[str] = []
        for option in options:
            for dependent in self.dependents_of(attribute_name, option, level):
                if dependent.name not in keys:
                    keys.append(dependent.name)
                for key in self._descendant_keys(dependent.name, dependent.options, level + 1):
                    if key not in keys:
                        keys.append(key)
        return keys
