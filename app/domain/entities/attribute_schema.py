from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class GroupKind(str, Enum):
    # Declaration order is the precedence order when a group carries several kinds
    list = "list"
    dropdown = "dropdown"
    search = "search"


@dataclass(frozen=True)
class Segment:
    id: str
    segment_name: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class Option:
    id: str
    name: str
    value: str
    weight: float = 0
    options: tuple[tuple[str, tuple["Option", ...]], ...] = ()  # nested (label, options) pairs
    service_segments: tuple[Segment, ...] = ()
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def display_name(self) -> str:
        return self.value or self.name or self.id

    def matches_token(self, token: str) -> bool:
        token = token.strip().lower()
        return bool(token) and token in (self.name.strip().lower(), self.value.strip().lower())


@dataclass(frozen=True)
class AttributeDefinition:
    id: str
    name: str
    required: bool
    option_groups: tuple[tuple[str, tuple[Option, ...]], ...]
    options: tuple[Option, ...]  # flattened, ascending weight
    service_segments: tuple[Segment, ...] = ()
    weight: float = 0
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def as_option(self) -> Option:
        """View this definition as a selectable choice (merge-root groups list their definitions)."""
        return Option(
            id=self.id,
            name=self.name,
            value=self.name,
            weight=self.weight,
            options=self.option_groups,
            service_segments=self.service_segments,
            raw=self.raw,
        )


@dataclass(frozen=True)
class AttributeGroup:
    name: str
    kind: GroupKind
    definitions: tuple[AttributeDefinition, ...]
    required: bool = False

    @property
    def first_definition(self) -> AttributeDefinition | None:
        return self.definitions[0] if self.definitions else None

    @property
    def display_name(self) -> str:
        first = self.first_definition
        return (first.name if first else "") or self.name

    def options(self) -> list[Option]:
        result: list[Option] = []
        for definition in self.definitions:
            result.extend(definition.options)
        return result


@dataclass(frozen=True)
class AttributeSchema:
    groups: dict[str, AttributeGroup] = field(default_factory=dict)
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    attribute_count: int = 0
    supported_count: int = 0
    unsupported_count: int = 0

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def diagnostics(self) -> tuple[str, ...]:
        return self.errors + self.warnings

    def get(self, name: str) -> AttributeGroup | None:
        return self.groups.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.groups
