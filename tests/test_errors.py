# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for origin error classes."""

import pytest

from origin import Root
from origin._errors import (
    AncestorNotFoundError,
    FrozenClassError,
    OriginError,
)


class TestOriginError:
    """Tests for base OriginError class."""

    def test_default_initialization(self):
        error = OriginError()
        assert str(error) == "origin error"
        assert error.message == "origin error"
        assert error.details == {}

    def test_custom_message(self):
        error = OriginError("Custom error message")
        assert str(error) == "Custom error message"

    def test_with_details(self):
        error = OriginError("Error", details={"key": "value"})
        assert error.details == {"key": "value"}

    def test_with_cause(self):
        cause = ValueError("Original error")
        error = OriginError("Wrapped error", cause=cause)
        assert error.get_cause() is cause
        assert error.__cause__ is cause

    def test_to_dict_basic(self):
        assert OriginError("Test error").to_dict() == {
            "error": "OriginError",
            "message": "Test error",
        }

    def test_to_dict_with_details_and_cause(self):
        error = OriginError(
            "Error", details={"field": "value"}, cause=KeyError("k")
        )
        result = error.to_dict(include_cause=True)
        assert result["details"] == {"field": "value"}
        assert "KeyError" in result["cause"]

    def test_to_dict_without_cause(self):
        error = OriginError("Error", cause=KeyError("k"))
        assert "cause" not in error.to_dict()


class TestAncestorNotFoundError:
    """Tests for AncestorNotFoundError."""

    def test_is_lookup_error(self):
        assert issubclass(AncestorNotFoundError, OriginError)
        assert issubclass(AncestorNotFoundError, LookupError)

    def test_default_message(self):
        error = AncestorNotFoundError()
        assert "not an ancestor" in error.message

    def test_from_classes_records_names(self):
        Left = Root.extend(name="Left")
        Right = Root.extend(name="Right")
        error = AncestorNotFoundError.from_classes(Left, Right)
        assert error.details == {"receiver": "Left", "ancestor": "Right"}

    def test_from_classes_with_non_class(self):
        Left = Root.extend(name="Left")
        error = AncestorNotFoundError.from_classes(Left, 42)
        assert error.details["ancestor"] == "42"

    def test_catchable_as_lookup_error(self):
        with pytest.raises(LookupError):
            raise AncestorNotFoundError()


class TestFrozenClassError:
    """Tests for FrozenClassError."""

    def test_is_attribute_error(self):
        assert issubclass(FrozenClassError, OriginError)
        assert issubclass(FrozenClassError, AttributeError)

    def test_message(self):
        error = FrozenClassError("Cannot set 'x'")
        assert str(error) == "Cannot set 'x'"
