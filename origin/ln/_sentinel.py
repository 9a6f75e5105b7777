# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Final, Literal

__all__ = (
    "NoParent",
    "NoParentType",
    "SingletonType",
    "Unset",
    "UnsetType",
)


class _SingletonMeta(type):
    """Metaclass that guarantees exactly one instance per subclass."""

    _cache: dict[type, SingletonType] = {}

    def __call__(cls, *a, **kw):
        if cls not in cls._cache:
            cls._cache[cls] = super().__call__(*a, **kw)
        return cls._cache[cls]


class SingletonType(metaclass=_SingletonMeta):
    """Base class for singleton sentinel types.

    Provides consistent interface for sentinel values with:
    - Identity preservation across deepcopy
    - Falsy boolean evaluation
    - Clear string representation
    """

    __slots__: tuple[str, ...] = ()

    def __deepcopy__(self, memo):
        return self

    def __copy__(self):
        return self

    # concrete classes *must* override the two methods below
    def __bool__(self) -> bool: ...
    def __repr__(self) -> str: ...


class UnsetType(SingletonType):
    """Sentinel for an argument that was not provided by the caller.

    Use this where ``None`` is itself a meaningful value.
    """

    __slots__ = ()

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> Literal["Unset"]:
        return "Unset"

    def __reduce__(self):
        return "Unset"


class NoParentType(SingletonType):
    """Sentinel standing in for the parent of the root class.

    ``Root.superclass()`` returns it, and composing from it produces a
    class with no ancestors.
    """

    __slots__ = ()

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> Literal["NoParent"]:
        return "NoParent"

    def __reduce__(self):
        return "NoParent"


Unset: Final = UnsetType()
"""An argument the caller did not provide."""
NoParent: Final = NoParentType()
"""The parent link of a root class."""

