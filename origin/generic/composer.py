# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Class composition without native inheritance.

``compose`` derives a new class from a parent class and an options bundle.
Classes are explicit :class:`ClassDescriptor` records linked by parent
references; instances hold a reference to their exact class and only their
own state, and template members are served through the descriptor.

Example::

    Animal = Root.extend(
        name="Animal",
        initializer=lambda self, name: setattr(self, "label", name),
        properties={"speak": lambda self: f"{self.label} makes a sound"},
    )
    Dog = Animal.extend(
        name="Dog",
        properties={
            "speak": lambda self: self.parent(Animal).speak() + ", woof",
        },
    )
    Dog("rex").speak()  # "rex makes a sound, woof"
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .._errors import AncestorNotFoundError, FrozenClassError
from ..config import settings
from ..ln import NoParent, NoParentType
from .descriptor import ClassDescriptor
from .dispatch import (
    BoundMember,
    SuperShims,
    bind_class_member,
    bind_member,
    build_shims,
    running_level,
)

__all__ = (
    "ClassOptions",
    "OriginClass",
    "OriginObject",
    "Root",
    "compose",
    "extend",
    "get_class",
    "registered_classes",
)

logger = logging.getLogger(__name__)

_STATE_SLOTS = ("_cls", "_dispatch")
INSTANCE_RESERVED = frozenset({"cls", "parent", *_STATE_SLOTS})
CLASS_RESERVED = frozenset(
    {
        "extend",
        "inherits_from",
        "superclass",
        "ancestors",
        "descriptor",
        "id",
        "name",
    }
)

_REGISTRY: dict[UUID, OriginClass] = {}


class ClassOptions(BaseModel):
    """Options bundle accepted by :func:`compose`.

    Malformed values fall back to their defaults instead of raising.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    name: str | None = None
    initializer: Callable[..., Any] | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    class_properties: dict[str, Any] = Field(
        default_factory=dict, alias="classProperties"
    )

    @field_validator("name", mode="before")
    def _validate_name(cls, value: Any) -> str | None:
        return value if isinstance(value, str) and value else None

    @field_validator("initializer", mode="before")
    def _validate_initializer(cls, value: Any) -> Callable[..., Any] | None:
        return value if callable(value) else None

    @field_validator("properties", "class_properties", mode="before")
    def _validate_members(cls, value: Any) -> dict[str, Any]:
        if not isinstance(value, Mapping):
            return {}
        return {k: v for k, v in value.items() if isinstance(k, str)}

    @classmethod
    def coerce(cls, options: Any = None, /, **kwargs: Any) -> ClassOptions:
        """Build options from a mapping, an existing instance or nothing.

        Keyword arguments are merged over ``options``.
        """
        if isinstance(options, ClassOptions):
            data = {
                "name": options.name,
                "initializer": options.initializer,
                "properties": options.properties,
                "class_properties": options.class_properties,
            }
        elif isinstance(options, Mapping):
            data = dict(options)
        else:
            data = {}
        data.update(kwargs)
        if "classProperties" in data and "class_properties" in data:
            data.pop("classProperties")
        return cls.model_validate(data)


class OriginClass:
    """A callable class produced by :func:`compose`.

    Calling it creates an :class:`OriginObject`. Class-level members from
    ``class_properties`` are available as attributes; functions among them
    are bound to the class. Classes are immutable once composed.
    """

    __slots__ = ("_descriptor", "_parent", "__weakref__")

    def __init__(
        self,
        descriptor: ClassDescriptor,
        parent: OriginClass | NoParentType = NoParent,
    ):
        object.__setattr__(self, "_descriptor", descriptor)
        object.__setattr__(self, "_parent", parent)

    @property
    def descriptor(self) -> ClassDescriptor:
        return self._descriptor

    @property
    def id(self) -> UUID:
        return self._descriptor.id

    @property
    def name(self) -> str:
        return self._descriptor.name

    def __call__(self, *args: Any, **kwargs: Any) -> OriginObject:
        instance = object.__new__(OriginObject)
        object.__setattr__(instance, "_cls", self)
        object.__setattr__(instance, "_dispatch", [])

        initializer, owner = self._descriptor.resolve_initializer()
        if initializer is not None:
            BoundMember(initializer, instance, owner)(*args, **kwargs)
        return instance

    def extend(self, options: Any = None, /, **kwargs: Any) -> OriginClass:
        """Create a subclass of this class; see :func:`compose`."""
        return compose(self, options, **kwargs)

    def inherits_from(self, candidate: Any) -> bool:
        """Whether ``candidate`` is this class or one of its ancestors.

        Anything that is not a composed class is never an ancestor.
        """
        if not isinstance(candidate, OriginClass):
            return False
        return self._descriptor.is_descendant_of(candidate.descriptor)

    def superclass(self) -> OriginClass | NoParentType:
        return self._parent

    def ancestors(self) -> tuple[OriginClass, ...]:
        out = []
        current = self._parent
        while isinstance(current, OriginClass):
            out.append(current)
            current = current._parent
        return tuple(out)

    def __getattr__(self, name: str) -> Any:
        if name in ("_descriptor", "_parent"):
            raise AttributeError(name)
        members = self._descriptor.class_members
        if name not in members:
            raise AttributeError(
                f"class '{self.name}' has no attribute '{name}'"
            )
        return bind_class_member(members[name], self)

    def __setattr__(self, name: str, value: Any) -> None:
        raise FrozenClassError(
            f"Cannot set '{name}' on class '{self.name}'",
            details={"class": self.name, "attribute": name},
        )

    def __delattr__(self, name: str) -> None:
        raise FrozenClassError(
            f"Cannot delete '{name}' on class '{self.name}'",
            details={"class": self.name, "attribute": name},
        )

    def __dir__(self):
        members = self._descriptor.class_members
        return sorted(set(super().__dir__()) | set(members))

    def __repr__(self) -> str:
        return f"<class '{self.name}'>"


class OriginObject:
    """An instance of a composed class.

    Holds a read-only reference to its exact class plus its own state.
    Names missing from the instance are resolved through the class
    template; assigning a name only affects this instance.
    """

    __slots__ = ("_cls", "_dispatch", "__dict__", "__weakref__")

    def cls(self) -> OriginClass:
        """The exact class this instance was constructed from."""
        return self._cls

    def parent(self, ancestor: Any = None) -> SuperShims:
        """Project ``ancestor``'s members onto this instance.

        When called from the body of a member running on this instance,
        levels are collected from just above the level defining that
        member; otherwise from the instance's own class. ``ancestor``
        itself is never skipped, and collection continues up to the root.
        Only the calling function counts, so other members that happen to
        be running on this instance (an event dispatch, for one) do not
        change the result. Each level's own members are layered from the
        root down, so the nearest definition wins, and functions come back
        bound to this instance.

        Raises:
            AncestorNotFoundError: If ``ancestor`` is a class outside this
                instance's ancestry.
        """
        if not isinstance(ancestor, OriginClass):
            return SuperShims()

        chain = list(self._cls.descriptor.ancestry())
        target = next(
            (i for i, level in enumerate(chain) if level.id == ancestor.id),
            None,
        )
        if target is None:
            raise AncestorNotFoundError.from_classes(self._cls, ancestor)

        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        running = running_level(
            self._dispatch, caller.f_code if caller is not None else None
        )
        del frame, caller

        start = 0
        if running is not None:
            for i, level in enumerate(chain):
                if level.id == running.id:
                    start = i + 1
                    break
        return build_shims(chain[min(start, target) :], self)

    def __getattr__(self, name: str) -> Any:
        if name in _STATE_SLOTS:
            raise AttributeError(name)
        member = self._cls.descriptor.template.get(name)
        if member is None:
            raise AttributeError(
                f"'{self._cls.name}' object has no attribute '{name}'"
            )
        return bind_member(member.value, member.owner, self)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _STATE_SLOTS:
            raise AttributeError(f"'{name}' is read-only")
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        if name in _STATE_SLOTS:
            raise AttributeError(f"'{name}' is read-only")
        object.__delattr__(self, name)

    def __dir__(self):
        template = self._cls.descriptor.template
        return sorted(set(super().__dir__()) | set(template))

    def __repr__(self) -> str:
        return f"<{self._cls.name} object at {hex(id(self))}>"


def _warn_reserved(name: str, keys: Any, reserved: frozenset[str]) -> None:
    for key in reserved.intersection(keys):
        logger.warning(
            f"Member '{key}' of class '{name}' is shadowed by the built-in "
            "operation of the same name; it stays reachable through parent()."
        )


def compose(
    parent: OriginClass | NoParentType = NoParent,
    options: Any = None,
    /,
    **kwargs: Any,
) -> OriginClass:
    """Derive a new class from ``parent`` and an options bundle.

    Args:
        parent: The class to extend, or ``NoParent`` for a root class.
            Anything else is treated as ``NoParent``.
        options: A mapping or :class:`ClassOptions` with ``initializer``,
            ``properties``, ``class_properties`` (or ``classProperties``)
            and ``name``. Keyword arguments are merged over it.

    Returns:
        The new class. ``parent`` is left untouched.
    """
    opts = ClassOptions.coerce(options, **kwargs)
    if not isinstance(parent, OriginClass):
        parent = NoParent
    name = opts.name or settings.DEFAULT_CLASS_NAME

    _warn_reserved(name, opts.properties, INSTANCE_RESERVED)
    _warn_reserved(name, opts.class_properties, CLASS_RESERVED)

    descriptor = ClassDescriptor(
        name=name,
        parent=parent.descriptor if parent else None,
        properties=opts.properties,
        class_properties=opts.class_properties,
        initializer=opts.initializer,
    )
    klass = OriginClass(descriptor, parent)
    _REGISTRY[descriptor.id] = klass
    logger.debug(
        f"Composed class '{name}' ({descriptor.id}) from "
        f"{parent!r} with {len(descriptor.template)} instance members"
    )
    return klass


extend = compose


def get_class(class_id: UUID | str) -> OriginClass | None:
    """Look up a composed class by its identity."""
    if isinstance(class_id, str):
        try:
            class_id = UUID(class_id)
        except ValueError:
            return None
    return _REGISTRY.get(class_id)


def registered_classes() -> list[OriginClass]:
    """All composed classes, in creation order."""
    return list(_REGISTRY.values())


Root = compose(NoParent, name="Root")
