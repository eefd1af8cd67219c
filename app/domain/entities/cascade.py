from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.attribute_schema import GroupKind, Option, Segment


@dataclass(frozen=True)
class DependentGroup:
    name: str
    parent: str
    options: tuple[Option, ...]
    level: int = 2


@dataclass(frozen=True)
class CascadeOutcome:
    reveal: tuple[DependentGroup, ...] = ()
    segments: tuple[Segment, ...] = ()
    reset: tuple[str, ...] = ()


@dataclass(frozen=True)
class VisibleGroup:
    name: str
    options: tuple[Option, ...]
    selected_id: str = ""
    kind: GroupKind | None = None  # None for revealed dependents
    parent: str | None = None
    level: int = 1
    required: bool = False


@dataclass(frozen=True)
class CascadeView:
    groups: tuple[VisibleGroup, ...] = ()
    segments: tuple[Segment, ...] = ()

    def find(self, name: str) -> VisibleGroup | None:
        return next((group for group in self.groups if group.name == name), None)
