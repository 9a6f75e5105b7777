# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Publish/subscribe mixin built on the class composer.

``Responder`` keeps, per instance, an ordered list of registrations for
each event name and a list of the bindings it made on other responders so
they can be dropped in bulk. Dispatch is synchronous: listeners of the
event name run first, then wildcard listeners, each with its own shallow
copy of the event. An exception raised by a listener propagates out of
``trigger`` and the remaining listeners are skipped.

Example::

    source, listener = Responder(), Responder()
    listener.bind_to(source, "changed", lambda event: print(event.payload))
    source.trigger("changed", {"v": 1})
    listener.unbind_from_all()
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Any, Callable

from ..config import settings
from ..generic import Root
from ..ln import Unset, filter_values, shallow_clone, union
from .event import Binding, Event, Registration

__all__ = ("Responder",)

logger = logging.getLogger(__name__)


def _callbacks(self) -> dict[Hashable, list[Registration]]:
    return vars(self).setdefault("_callbacks", {})


def _bindings(self) -> list[Binding]:
    return vars(self).setdefault("_bindings", [])


def _selects(
    registration: Registration,
    callback: Any,
    context: Any,
    exact: bool,
) -> bool:
    if callback is not None:
        if registration.callback != callback:
            return False
        if context is Unset:
            return not exact or registration.context is None
        return registration.context is context
    return registration.context is context


def on(
    self,
    event: Hashable | None = None,
    callback: Callable[..., Any] | None = None,
    context: Any = None,
) -> bool:
    """Register ``callback`` for ``event`` (the wildcard when omitted).

    Returns:
        True if the (callback, context) pair was newly added.
    """
    if callback is None:
        return False
    event = settings.WILDCARD_EVENT if event is None else event
    registrations = _callbacks(self).setdefault(event, [])
    if any(r.matches(callback, context) for r in registrations):
        return False
    registrations.append(Registration(callback, context))
    return True


def off(
    self,
    event: Hashable | None = None,
    callback: Callable[..., Any] | None = None,
    context: Any = Unset,
) -> bool:
    """Remove registrations selected by the arguments given.

    With an event name, only that name is affected: a callback selects the
    exact (callback, context) pair, where an omitted context means "no
    context"; a context alone selects every registration with that context;
    and nothing else drops the whole list. Without an event name the same
    selection applies to every name, except that a callback without a
    context matches it under any context. A context of ``None`` is a real
    argument and selects the registrations made without one. With no
    arguments at all every registration is cleared.

    Returns:
        True if at least one registration was removed.
    """
    callbacks = _callbacks(self)

    if event is None and callback is None and context is Unset:
        existed = any(callbacks.values())
        callbacks.clear()
        return existed

    if callback is None and context is Unset:
        return bool(callbacks.pop(event, None))

    removed = False
    names = [event] if event is not None else list(callbacks)
    for name in names:
        registrations = callbacks.get(name)
        if registrations is None:
            continue
        kept = filter_values(
            registrations,
            lambda r: not _selects(r, callback, context, event is not None),
        )
        if len(kept) != len(registrations):
            removed = True
        if kept:
            callbacks[name] = kept
        else:
            del callbacks[name]
    return removed


def bind_to(
    self,
    source: Any,
    event: Hashable | None,
    callback: Callable[..., Any],
    context: Any = None,
) -> bool:
    """Register on ``source`` and remember the binding for bulk cleanup."""
    event = settings.WILDCARD_EVENT if event is None else event
    if not source.on(event, callback, context):
        return False
    _bindings(self).append(Binding(source, event, callback, context))
    return True


def unbind_from(
    self,
    source: Any,
    event: Hashable | None,
    callback: Callable[..., Any],
    context: Any = None,
) -> bool:
    """Unregister from ``source`` and forget the matching bindings.

    Returns:
        The result of ``source.off``; False when nothing was removed.
    """
    event = settings.WILDCARD_EVENT if event is None else event
    if not source.off(event, callback, context):
        return False
    bindings = _bindings(self)
    bindings[:] = [
        b for b in bindings if not b.matches(source, event, callback, context)
    ]
    return True


def unbind_from_all(self) -> bool:
    bindings = _bindings(self)
    for b in bindings:
        b.source.off(b.event, b.callback, b.context)
    bindings.clear()
    return True


def trigger(self, event: Hashable, payload: Any = None) -> None:
    """Dispatch ``Event(sender=self, name=event, payload=payload)``."""
    self.repeat(Event(sender=self, name=event, payload=payload))


def repeat(self, event: Event | dict[str, Any]) -> None:
    """Dispatch an existing event record to this object's listeners.

    The record keeps its original sender, which makes it suitable for
    forwarding events received from another responder.
    """
    if not isinstance(event, Event):
        event = Event.model_validate(event)
    callbacks = _callbacks(self)
    targets = union(
        callbacks.get(event.name, ()),
        callbacks.get(settings.WILDCARD_EVENT, ()),
    )
    for registration in targets:
        if settings.TRACE_DISPATCH:
            logger.debug(
                f"Dispatching '{event.name}' to {registration.callback!r}"
            )
        registration.invoke(shallow_clone(event))


def listeners(self, event: Hashable | None = None) -> list[Registration]:
    """Registrations for ``event``, or all of them in name order."""
    callbacks = _callbacks(self)
    if event is not None:
        return list(callbacks.get(event, ()))
    return [r for registrations in callbacks.values() for r in registrations]


def bindings(self) -> list[Binding]:
    return list(_bindings(self))


Responder = Root.extend(
    name="Responder",
    properties={
        "on": on,
        "off": off,
        "bind_to": bind_to,
        "unbind_from": unbind_from,
        "unbind_from_all": unbind_from_all,
        "trigger": trigger,
        "repeat": repeat,
        "listeners": listeners,
        "bindings": bindings,
    },
)
