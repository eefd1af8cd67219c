from __future__ import annotations

import math
from typing import Any, Mapping

from app.domain.entities.attribute_schema import (
    AttributeDefinition,
    AttributeGroup,
    AttributeSchema,
    GroupKind,
    Option,
    Segment,
)

SATELLITE_KEY = ""  # reserved: merged into a merge-root group, never handled on its own


def parse_attribute_schema(raw_schema: Any) -> AttributeSchema:
    """
    Parse the `attributes` map of a service-details response.

    Never raises: groups that are not objects or carry none of the
    list/dropdown/search arrays are dropped and reported in errors/warnings.
    """
    if not isinstance(raw_schema, Mapping):
        return AttributeSchema(errors=("Attributes must be an object",))

    groups: dict[str, AttributeGroup] = {}
    errors: list[str] = []
    warnings: list[str] = []
    unsupported = 0

    if not raw_schema:
        warnings.append("No attributes found in response")

    for raw_name, raw_group in raw_schema.items():
        name = str(raw_name) if raw_name is not None else SATELLITE_KEY
        if not isinstance(raw_group, Mapping):
            errors.append(f'Invalid attribute group for "{name}"')
            unsupported += 1
            continue

        group = _parse_group(name, raw_group, warnings)
        if group is None:
            warnings.append(f'No supported attribute types found for "{name}"')
            unsupported += 1
            continue
        groups[name] = group

    return AttributeSchema(
        groups=groups,
        errors=tuple(errors),
        warnings=tuple(warnings),
        attribute_count=len(raw_schema),
        supported_count=len(groups),
        unsupported_count=unsupported,
    )


def extract_options(raw_options: Any) -> list[Option]:
    """Flatten an option-group map ({label: [option, ...]}) into one list sorted by weight."""
    return sort_by_weight(option for _, group in _parse_option_groups(raw_options) for option in group)


def sort_by_weight(options) -> list[Option]:
    # sorted() is stable: equal weights keep their original order
    return sorted(options, key=lambda option: option.weight)


def parse_segments(raw_segments: Any) -> tuple[Segment, ...]:
    if not isinstance(raw_segments, list):
        return ()
    segments: list[Segment] = []
    for item in raw_segments:
        if not isinstance(item, Mapping):
            continue
        segment_id = item.get("id")
        if segment_id in (None, ""):
            continue
        name = item.get("segment_name") or item.get("segmentName") or ""
        segments.append(Segment(id=str(segment_id), segment_name=str(name), raw=dict(item)))
    return tuple(segments)


def _parse_group(name: str, raw_group: Mapping[str, Any], warnings: list[str]) -> AttributeGroup | None:
    kind: GroupKind | None = None
    required = False
    definitions: tuple[AttributeDefinition, ...] = ()

    for candidate in GroupKind:
        items = raw_group.get(candidate.value)
        if not isinstance(items, list):
            continue
        parsed = _parse_definitions(name, candidate, items, warnings)
        required = required or any(definition.required for definition in parsed)
        if kind is None and parsed:
            kind = candidate
            definitions = parsed

    if kind is None:
        return None
    return AttributeGroup(name=name, kind=kind, definitions=definitions, required=required)


def _parse_definitions(
    group_name: str,
    kind: GroupKind,
    items: list[Any],
    warnings: list[str],
) -> tuple[AttributeDefinition, ...]:
    definitions: list[AttributeDefinition] = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            warnings.append(f"Invalid attribute item at {group_name}.{kind.value}[{index}]")
            continue
        raw_options = item.get("options")
        if not isinstance(raw_options, Mapping):
            warnings.append(f"Missing or invalid options for {group_name}.{kind.value}[{index}]")
        option_groups = _parse_option_groups(raw_options)
        definitions.append(
            AttributeDefinition(
                id=_text(item.get("id")),
                name=_text(item.get("name")),
                required=bool(item.get("required") or item.get("is_required")),
                option_groups=option_groups,
                options=tuple(sort_by_weight(o for _, group in option_groups for o in group)),
                service_segments=parse_segments(item.get("serviceSegments")),
                weight=_weight(item.get("weight")),
                raw=dict(item),
            )
        )
    return tuple(definitions)


def _parse_option_groups(raw_options: Any) -> tuple[tuple[str, tuple[Option, ...]], ...]:
    if not isinstance(raw_options, Mapping):
        return ()
    groups: list[tuple[str, tuple[Option, ...]]] = []
    for label, raw_group in raw_options.items():
        if not isinstance(raw_group, list):
            continue
        options = [option for option in (_parse_option(raw) for raw in raw_group) if option is not None]
        groups.append((str(label), tuple(sort_by_weight(options))))
    return tuple(groups)


def _parse_option(raw: Any) -> Option | None:
    if not isinstance(raw, Mapping):
        return None
    option_id = _text(raw.get("id"))
    value = _text(raw.get("value"))
    if not (option_id or value):
        return None
    return Option(
        id=option_id,
        name=_text(raw.get("name")),
        value=value,
        weight=_weight(raw.get("weight")),
        options=_parse_option_groups(raw.get("options")),
        service_segments=parse_segments(raw.get("serviceSegments")),
        raw=dict(raw),
    )


def _text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


def _weight(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return 0
    try:
        weight = float(value)
    except (TypeError, ValueError):
        return 0
    # nan/inf would break the sort order
    return weight if math.isfinite(weight) else 0
