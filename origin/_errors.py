# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from typing import Any, ClassVar


class OriginError(Exception):
    default_message: ClassVar[str] = "origin error"

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message or self.default_message)
        if cause:
            self.__cause__ = cause  # preserves traceback
        self.message = message or self.default_message
        self.details = details or {}

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        data = {
            "error": self.__class__.__name__,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }
        if include_cause and (cause := self.get_cause()):
            data["cause"] = repr(cause)
        return data

    def get_cause(self) -> Exception | None:
        """Get the cause of this error, if any."""
        return self.__cause__ if hasattr(self, "__cause__") else None


class AncestorNotFoundError(OriginError, LookupError):
    """Raised by ``parent()`` when the requested class is not an ancestor."""

    default_message = "The class given to parent() is not an ancestor of this object"

    @classmethod
    def from_classes(
        cls,
        receiver: Any,
        ancestor: Any,
        *,
        message: str | None = None,
    ):
        details = {
            "receiver": getattr(receiver, "name", type(receiver).__name__),
            "ancestor": getattr(ancestor, "name", repr(ancestor)),
        }
        return cls(message=message, details=details)


class FrozenClassError(OriginError, AttributeError):
    """Raised when assigning an attribute on a composed class."""

    default_message = "Composed classes are immutable"


__all__ = (
    "AncestorNotFoundError",
    "FrozenClassError",
    "OriginError",
)
