"""Tests for Event, Registration and Binding records."""

from datetime import timezone
from functools import partial

import pytest
from pydantic import ValidationError

from origin import Binding, Event, Registration


class TestEvent:
    def test_fields(self):
        sender = object()
        event = Event(sender=sender, name="x", payload={"v": 1})
        assert event.sender is sender
        assert event.name == "x"
        assert event.payload == {"v": 1}
        assert event.created_at.tzinfo is timezone.utc

    def test_name_required(self):
        with pytest.raises(ValidationError):
            Event(payload=1)

    def test_name_may_be_any_hashable(self):
        assert Event(name=123).name == 123
        assert Event(name=("a", 1)).name == ("a", 1)

    def test_unhashable_name_rejected(self):
        with pytest.raises(ValidationError):
            Event(name=["x"])

    def test_copy_is_shallow(self):
        event = Event(name="x", payload={"v": 1})
        clone = event.model_copy()
        clone.payload = None
        assert event.payload == {"v": 1}


class TestRegistration:
    def test_equality_by_callback_and_context_identity(self):
        def cb(*a):
            pass

        ctx = {"k": 1}
        assert Registration(cb, ctx) == Registration(cb, ctx)
        assert Registration(cb, ctx) != Registration(cb, {"k": 1})
        assert Registration(cb) == Registration(cb, None)

    def test_invoke_without_context(self):
        received = []
        Registration(received.append).invoke("event")
        assert received == ["event"]

    def test_invoke_binds_context_for_functions(self):
        def cb(ctx, event):
            return ctx, event

        ctx = object()
        assert Registration(cb, ctx).invoke("e") == (ctx, "e")

    def test_invoke_passes_context_to_any_callable(self):
        class Handler:
            def handle(self, ctx, event):
                return self, ctx, event

        def cb(prefix, ctx, event):
            return prefix, ctx, event

        handler, ctx = Handler(), object()
        assert Registration(handler.handle, ctx).invoke("e") == (
            handler,
            ctx,
            "e",
        )
        assert Registration(partial(cb, "p"), ctx).invoke("e") == (
            "p",
            ctx,
            "e",
        )

    def test_invoke_lambda_with_context(self):
        ctx = object()
        reg = Registration(lambda c, e: (c, e), ctx)
        assert reg.invoke("e") == (ctx, "e")

    def test_bound_methods_compare_equal(self):
        class Handler:
            def handle(self, event):
                pass

        handler = Handler()
        assert Registration(handler.handle) == Registration(handler.handle)


class TestBinding:
    def test_matches(self):
        def cb(*a):
            pass

        source, ctx = object(), object()
        binding = Binding(source, "x", cb, ctx)
        assert binding.matches(source, "x", cb, ctx)
        assert not binding.matches(object(), "x", cb, ctx)
        assert not binding.matches(source, "y", cb, ctx)
        assert not binding.matches(source, "x", cb, None)
