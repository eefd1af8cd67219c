from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from app.application.ports.cascade_rule import CascadeRulePort
from app.application.use_cases.selection import SelectionStore
from app.application.utils.schema_reader import SATELLITE_KEY
from app.domain.entities.attribute_schema import AttributeSchema, Option, Segment
from app.domain.entities.cascade import CascadeOutcome, CascadeView, VisibleGroup
from app.domain.entities.selection_state import SEGMENT_KEY, Selection, SelectionState


class CascadeRuleRegistry:
    """Named cascade rules keyed by attribute; unmatched groups fall back to the default rule."""

    def __init__(self, default_rule: CascadeRulePort, rules: Iterable[CascadeRulePort] = ()) -> None:
        self._default_rule = default_rule
        self._rules: list[CascadeRulePort] = list(rules)

    def register(self, rule: CascadeRulePort) -> None:
        self._rules.append(rule)

    def rule_for(self, attribute_name: str) -> CascadeRulePort:
        for rule in self._rules:
            if rule.applies_to(attribute_name):
                return rule
        return self._default_rule

    def hidden_keys(self) -> frozenset[str]:
        keys = {SATELLITE_KEY}
        for rule in self._rules:
            keys.update(rule.hidden_keys())
        return frozenset(keys)

    def root_names(self, schema: AttributeSchema) -> list[str]:
        hidden = self.hidden_keys()
        return [name for name in schema.groups if name not in hidden]

    def pricing_only_keys(self, schema: AttributeSchema) -> frozenset[str]:
        keys: set[str] = set()
        for name in self.root_names(schema):
            keys.update(self.rule_for(name).pricing_only_keys(name, schema))
        return frozenset(keys)


class CascadeResolver:
    """
    Applies selections through the cascade rules: overwrites the chosen
    attribute, then clears dependents and segments the new option no longer
    reaches. Missing nested data just means there is no further level.
    """

    def __init__(
        self,
        registry: CascadeRuleRegistry,
        preferred_tokens: Iterable[str] = ("split",),
        auto_select: bool = False,
        max_depth: int = 6,
    ) -> None:
        self._registry = registry
        self._preferred_tokens = tuple(preferred_tokens)
        self._auto_select = auto_select
        self._max_depth = max_depth
        self._logger = logging.getLogger(__name__)

    @property
    def registry(self) -> CascadeRuleRegistry:
        return self._registry

    @property
    def auto_select_enabled(self) -> bool:
        return self._auto_select

    def reveal(self, schema: AttributeSchema, state: SelectionState) -> CascadeView:
        groups: list[VisibleGroup] = []
        segments: tuple[Segment, ...] = ()
        for name in self._registry.root_names(schema):
            group = schema.groups[name]
            rule = self._registry.rule_for(name)
            choices = tuple(rule.choices(name, schema))
            groups.append(
                VisibleGroup(
                    name=name,
                    options=choices,
                    selected_id=state.selected_id(name),
                    kind=group.kind,
                    required=group.required,
                )
            )
            segments = self._walk(rule, name, choices, state, groups, 1) or segments
        return CascadeView(groups=tuple(groups), segments=segments)

    def available_ids(self, schema: AttributeSchema, state: SelectionState) -> dict[str, set[str]]:
        view = self.reveal(schema, state)
        return {group.name: {option.id for option in group.options} for group in view.groups}

    def select(
        self,
        store: SelectionStore,
        schema: AttributeSchema,
        attribute_name: str,
        option_id_or_selection: Any,
        display_value: str | None = None,
        option_data: Mapping[str, Any] | None = None,
    ) -> CascadeOutcome:
        if attribute_name == SEGMENT_KEY:
            store.select(attribute_name, option_id_or_selection, display_value, option_data)
            return CascadeOutcome()

        if attribute_name in self._registry.hidden_keys():
            self._logger.warning(
                "Selection ignored", extra={"attribute": attribute_name, "reason": "satellite key"}
            )
            return CascadeOutcome()

        view = self.reveal(schema, store.current())
        group = view.find(attribute_name)
        if group is None:
            # Not a top-level group and not revealed yet; the store still records it
            store.select(attribute_name, option_id_or_selection, display_value, option_data)
            self._logger.debug("Selection outside cascade", extra={"attribute": attribute_name})
            return CascadeOutcome()

        option_id = _option_id(option_id_or_selection)
        option = _find_option(group.options, option_id)
        if option is None and option_id:
            self._logger.warning(
                "Selected option not offered",
                extra={"attribute": attribute_name, "option_id": option_id, "reason": "stale or unknown id"},
            )

        if isinstance(option_id_or_selection, (Selection, Mapping)):
            store.select(attribute_name, option_id_or_selection)
        else:
            store.select(
                attribute_name,
                option_id,
                display_value or (option.display_name if option else None),
                option_data if option_data is not None else (option.raw if option else None),
            )

        rule = self._rule_for_group(view, group)
        outcome = rule.resolve_dependents(attribute_name, option, group.options, store.current(), group.level)
        for key in outcome.reset:
            store.select(key, "", "", {})
        if outcome.reset:
            self._logger.info(
                "Dependent selections reset", extra={"attribute": attribute_name, "reset": ",".join(outcome.reset)}
            )
        return outcome

    def auto_select(self, store: SelectionStore, schema: AttributeSchema) -> list[str]:
        """Pick defaults for unselected groups; a no-op unless auto-selection is enabled."""
        if not self._auto_select:
            return []
        picked: list[str] = []
        for name in self._registry.root_names(schema):
            if _is_unselected(store.get(name)):
                self._auto_pick(store, schema, name, picked, 1)
            else:
                self._auto_pick_dependents(store, schema, name, picked, 1)
            view = self.reveal(schema, store.current())
            if view.segments and store.get(SEGMENT_KEY) is None:
                segment = self._preferred_segment(view.segments, self._registry.rule_for(name))
                store.select(SEGMENT_KEY, segment.id, segment.segment_name, segment.raw)
                picked.append(SEGMENT_KEY)
        if picked:
            self._logger.info("Default selections applied", extra={"attribute": ",".join(picked)})
        return picked

    def _auto_pick(
        self,
        store: SelectionStore,
        schema: AttributeSchema,
        name: str,
        picked: list[str],
        depth: int,
    ) -> None:
        view = self.reveal(schema, store.current())
        group = view.find(name)
        if group is None or not group.options:
            return
        option = self._preferred_option(group.options, self._rule_for_group(view, group))
        self.select(store, schema, name, option.id)
        picked.append(name)
        self._auto_pick_dependents(store, schema, name, picked, depth)

    def _auto_pick_dependents(
        self,
        store: SelectionStore,
        schema: AttributeSchema,
        name: str,
        picked: list[str],
        depth: int,
    ) -> None:
        if depth >= self._max_depth:
            return
        view = self.reveal(schema, store.current())
        for dependent in [g for g in view.groups if g.parent == name]:
            if _is_unselected(store.get(dependent.name)):
                self._auto_pick(store, schema, dependent.name, picked, depth + 1)
            else:
                self._auto_pick_dependents(store, schema, dependent.name, picked, depth + 1)

    def _preferred_option(self, options: tuple[Option, ...], rule: CascadeRulePort) -> Option:
        for token in rule.preferred_tokens or self._preferred_tokens:
            match = next((option for option in options if option.matches_token(token)), None)
            if match is not None:
                return match
        # min() keeps the first of equal weights
        return min(options, key=lambda option: option.weight)

    def _preferred_segment(self, segments: tuple[Segment, ...], rule: CascadeRulePort) -> Segment:
        for token in rule.preferred_tokens or self._preferred_tokens:
            token = token.strip().lower()
            match = next((s for s in segments if token and s.segment_name.strip().lower() == token), None)
            if match is not None:
                return match
        return segments[0]

    def _walk(
        self,
        rule: CascadeRulePort,
        name: str,
        choices: tuple[Option, ...],
        state: SelectionState,
        groups: list[VisibleGroup],
        level: int,
    ) -> tuple[Segment, ...]:
        option = _find_option(choices, state.selected_id(name))
        if option is None or level >= self._max_depth:
            return ()
        segments = option.service_segments
        for dependent in rule.dependents_of(name, option, level + 1):
            groups.append(
                VisibleGroup(
                    name=dependent.name,
                    options=dependent.options,
                    selected_id=state.selected_id(dependent.name),
                    parent=name,
                    level=dependent.level,
                )
            )
            segments = self._walk(rule, dependent.name, dependent.options, state, groups, level + 1) or segments
        return segments

    def _rule_for_group(self, view: CascadeView, group: VisibleGroup) -> CascadeRulePort:
        root = group
        while root.parent is not None:
            parent = view.find(root.parent)
            if parent is None:
                break
            root = parent
        return self._registry.rule_for(root.name)


def _option_id(option_id_or_selection: Any) -> str:
    selection = Selection.coerce(option_id_or_selection)
    return selection.id if selection else ""


def _find_option(options: tuple[Option, ...], option_id: str) -> Option | None:
    if not option_id:
        return None
    return next((option for option in options if option.id == option_id), None)


def _is_unselected(selection: Selection | None) -> bool:
    return selection is None or selection.is_empty
