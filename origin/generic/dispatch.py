# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import inspect
from collections.abc import Generator, Iterable, Iterator, Mapping
from types import CodeType, FunctionType, MethodType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .descriptor import ClassDescriptor

__all__ = (
    "BoundMember",
    "SuperShims",
    "bind_class_member",
    "bind_member",
    "build_shims",
    "running_level",
)

DispatchEntry = tuple["ClassDescriptor", FunctionType]


class BoundMember:
    """A template function bound to one instance.

    While it runs, the defining level and the function are recorded on the
    receiver's dispatch stack, which is what lets ``parent()`` resolve
    relative to the member that calls it. Generator members keep their
    entry for every resume of the generator. Equality follows bound-method
    semantics: same function, same receiver.
    """

    __slots__ = ("__func__", "__self__", "level")

    def __init__(self, func: FunctionType, receiver: Any, level: ClassDescriptor):
        self.__func__ = func
        self.__self__ = receiver
        self.level = level

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        stack = self.__self__._dispatch
        entry = (self.level, self.__func__)
        if inspect.isgeneratorfunction(self.__func__):
            gen = self.__func__(self.__self__, *args, **kwargs)
            return _DispatchingGenerator(gen, stack, entry)
        stack.append(entry)
        try:
            return self.__func__(self.__self__, *args, **kwargs)
        finally:
            stack.pop()

    @property
    def __name__(self) -> str:
        return self.__func__.__name__

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BoundMember):
            return NotImplemented
        return (
            self.__func__ is other.__func__
            and self.__self__ is other.__self__
        )

    def __hash__(self) -> int:
        return hash((id(self.__func__), id(self.__self__)))

    def __repr__(self) -> str:
        return (
            f"<bound member {self.level.name}.{self.__func__.__name__} "
            f"of {self.__self__!r}>"
        )


def bind_member(value: Any, level: ClassDescriptor, receiver: Any) -> Any:
    """Resolve a template value for ``receiver``.

    Plain functions are bound to the receiver, ``classmethod`` members to
    the receiver's class, ``staticmethod`` members are unwrapped and
    anything else is returned unchanged.
    """
    if isinstance(value, FunctionType):
        return BoundMember(value, receiver, level)
    if isinstance(value, staticmethod):
        return value.__func__
    if isinstance(value, classmethod):
        return MethodType(value.__func__, receiver.cls())
    return value


def bind_class_member(value: Any, klass: Any) -> Any:
    if isinstance(value, FunctionType):
        return MethodType(value, klass)
    if isinstance(value, staticmethod):
        return value.__func__
    if isinstance(value, classmethod):
        return MethodType(value.__func__, klass)
    return value


class _DispatchingGenerator(Generator):
    """Wraps a generator member so its entry is on the stack while it runs."""

    __slots__ = ("_gen", "_stack", "_entry")

    def __init__(self, gen: Generator, stack: list, entry: DispatchEntry):
        self._gen = gen
        self._stack = stack
        self._entry = entry

    def _resume(self, method, *args: Any) -> Any:
        self._stack.append(self._entry)
        try:
            return method(*args)
        finally:
            self._stack.pop()

    def send(self, value: Any) -> Any:
        return self._resume(self._gen.send, value)

    def throw(self, *args: Any) -> Any:
        return self._resume(self._gen.throw, *args)

    def close(self) -> None:
        self._resume(self._gen.close)

    def __repr__(self) -> str:
        return f"<dispatching {self._gen!r}>"


def running_level(
    stack: list[DispatchEntry], code: CodeType | None
) -> ClassDescriptor | None:
    """The level of the innermost running member whose code is ``code``.

    Entries of other members on the stack, such as one that is delivering
    an event to a listener, are ignored.
    """
    if code is None:
        return None
    for level, func in reversed(stack):
        if getattr(func, "__code__", None) is code:
            return level
    return None


class SuperShims:
    """Read-only view of an ancestor's members bound to one receiver.

    Supports ``shims["method"]()``, ``shims.method()``, ``in``, ``len`` and
    iteration over member names. It has no public methods of its own, so
    every attribute name reaches a member, including ``get``, ``keys``,
    ``items`` and ``values``.
    """

    __slots__ = ("_members",)

    def __init__(self, members: Mapping[str, Any] | None = None):
        object.__setattr__(self, "_members", dict(members or {}))

    def __getitem__(self, key: str) -> Any:
        return self._members[key]

    def __contains__(self, key: object) -> bool:
        return key in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"'{type(self).__name__}' object is read-only")

    def __getattr__(self, name: str) -> Any:
        if name == "_members":
            raise AttributeError(name)
        try:
            return self._members[name]
        except KeyError:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            ) from None

    def __repr__(self) -> str:
        return f"SuperShims({sorted(self._members)})"


def build_shims(levels: Iterable[ClassDescriptor], receiver: Any) -> SuperShims:
    """Merge the own members of ``levels`` into receiver-bound shims.

    ``levels`` is ordered most-derived first; shims are layered from the
    most ancestral level down so that derived definitions win.
    """
    shims: dict[str, Any] = {}
    for level in reversed(list(levels)):
        for key, value in level.own_members().items():
            shims[key] = bind_member(value, level, receiver)
    return SuperShims(shims)
