# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, NamedTuple
from uuid import UUID, uuid4

__all__ = ("ClassDescriptor", "Member")


class Member(NamedTuple):
    """A template entry together with the level that defined it."""

    value: Any
    owner: ClassDescriptor


@dataclass(slots=True, frozen=True, eq=False)
class ClassDescriptor:
    """The composed, shareable definition of one class.

    A descriptor is created once per composition and never changes
    afterwards. ``properties``, ``class_properties`` and ``initializer``
    are this level's own contributions; ``template`` and
    ``class_members`` are the flattened views with the most-derived
    definition winning per name.
    """

    name: str
    parent: ClassDescriptor | None = None
    properties: Mapping[str, Any] = field(default_factory=dict)
    class_properties: Mapping[str, Any] = field(default_factory=dict)
    initializer: Callable[..., Any] | None = None
    id: UUID = field(default_factory=uuid4)
    template: Mapping[str, Member] = field(init=False, repr=False)
    class_members: Mapping[str, Any] = field(init=False, repr=False)

    def __post_init__(self):
        props = MappingProxyType(dict(self.properties))
        class_props = MappingProxyType(dict(self.class_properties))
        object.__setattr__(self, "properties", props)
        object.__setattr__(self, "class_properties", class_props)

        template = dict(self.parent.template) if self.parent else {}
        for key, value in props.items():
            template[key] = Member(value, self)

        # parent keys are inherited verbatim unless overridden here
        class_members = dict(self.parent.class_members) if self.parent else {}
        class_members.update(class_props)

        object.__setattr__(self, "template", MappingProxyType(template))
        object.__setattr__(
            self, "class_members", MappingProxyType(class_members)
        )

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ClassDescriptor):
            return NotImplemented
        return self.id == other.id

    def ancestry(self) -> Iterator[ClassDescriptor]:
        """Yield this descriptor, then each parent up to the root."""
        current = self
        while current is not None:
            yield current
            current = current.parent

    def is_descendant_of(self, other: Any) -> bool:
        if not isinstance(other, ClassDescriptor):
            return False
        return any(level.id == other.id for level in self.ancestry())

    def resolve_initializer(
        self,
    ) -> tuple[Callable[..., Any] | None, ClassDescriptor | None]:
        """Return the nearest own-or-inherited initializer and its owner.

        A level without an initializer forwards to its parent, bottoming
        out at ``(None, None)`` when no level defines one.
        """
        for level in self.ancestry():
            if level.initializer is not None:
                return level.initializer, level
        return None, None

    def own_members(self) -> dict[str, Any]:
        """This level's own members, as seen by super-dispatch."""
        members: dict[str, Any] = {}
        if self.initializer is not None:
            members["initializer"] = self.initializer
        members.update(self.properties)
        return members
