# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from ..ln import now_utc

__all__ = ("Binding", "Event", "Registration")


class Event(BaseModel):
    """The record delivered to listeners by ``trigger``/``repeat``."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: Hashable
    """The event name; any hashable value a listener can register under."""

    sender: Any = None
    """The object that triggered the event."""

    payload: Any = None
    """Arbitrary data attached by the sender."""

    created_at: datetime = Field(default_factory=now_utc)
    """When the event was triggered."""


@dataclass(slots=True, frozen=True, eq=False)
class Registration:
    """A callback registered under one event name.

    Two registrations are the same when their callbacks compare equal and
    their contexts are the same object.
    """

    callback: Callable[..., Any]
    context: Any = None

    def matches(self, callback: Any, context: Any) -> bool:
        return self.callback == callback and self.context is context

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Registration):
            return NotImplemented
        return self.matches(other.callback, other.context)

    def __hash__(self) -> int:
        return hash((self.callback, id(self.context)))

    def invoke(self, event: Event) -> Any:
        """Call the callback with ``event``.

        When a context was given, it is passed first as
        ``callback(context, event)`` whatever kind of callable the callback
        is; otherwise the call is ``callback(event)``.
        """
        if self.context is not None:
            return self.callback(self.context, event)
        return self.callback(event)


@dataclass(slots=True, frozen=True, eq=False)
class Binding:
    """A listener-side record of a registration made on another object."""

    source: Any
    event: Hashable
    callback: Callable[..., Any]
    context: Any = None

    def matches(
        self, source: Any, event: Hashable, callback: Any, context: Any
    ) -> bool:
        return (
            self.source is source
            and self.event == event
            and self.callback == callback
            and self.context is context
        )
