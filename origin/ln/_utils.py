# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import copy
from collections.abc import Callable, Iterable, Iterator, Mapping
from datetime import datetime, timezone
from typing import Any, TypeVar

T = TypeVar("T")

__all__ = (
    "filter_values",
    "iter_values",
    "now_utc",
    "shallow_clone",
    "union",
    "unique",
)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def iter_values(value: Any, /) -> Iterator[Any]:
    """Iterate over the values of a mapping or the items of a sequence.

    ``None`` yields nothing; strings and other scalars are yielded once.
    """
    if value is None:
        return
    if isinstance(value, Mapping):
        yield from value.values()
    elif isinstance(value, (str, bytes)):
        yield value
    elif isinstance(value, Iterable):
        yield from value
    else:
        yield value


def unique(
    items: Iterable[T],
    /,
    key: Callable[[T], Any] | None = None,
) -> list[T]:
    """Drop repeated items, keeping first occurrences in order.

    Items are compared with ``==`` on ``key(item)`` (or the item itself),
    so neither needs to be hashable.
    """
    out: list[T] = []
    seen: list[Any] = []
    for item in items:
        k = key(item) if key is not None else item
        if k in seen:
            continue
        seen.append(k)
        out.append(item)
    return out


def union(*sequences: Any, key: Callable[[Any], Any] | None = None) -> list[Any]:
    """Ordered union of ``sequences``; see :func:`unique` for comparison."""
    return unique(
        (item for seq in sequences for item in iter_values(seq)), key=key
    )


def filter_values(
    items: Iterable[T], predicate: Callable[[T], bool], /
) -> list[T]:
    return [i for i in items if predicate(i)]


def shallow_clone(value: T, /) -> T:
    """Shallow copy; pydantic models are copied with ``model_copy``."""
    if hasattr(value, "model_copy") and callable(value.model_copy):
        return value.model_copy()
    if isinstance(value, Mapping):
        return dict(value)
    return copy.copy(value)
