# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from typing import Any, ClassVar

__all__ = (
    "LionArrayError",
    "PreconditionViolation",
    "SelfReferenceError",
    "InvalidContentError",
    "ArrangedMutationError",
    "MissingContentError",
    "DestroyedProxyError",
    "ReentrantSwapError",
    "ItemNotFoundError",
)


class LionArrayError(Exception):
    default_message: ClassVar[str] = "lionarray error"
    default_status_code: ClassVar[int] = 500

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message or self.default_message)
        if cause:
            self.__cause__ = cause  # preserves traceback
        self.message = message or self.default_message
        self.details = details or {}
        self.status_code = status_code or self.default_status_code

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        data = {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            **({"details": self.details} if self.details else {}),
        }
        if include_cause and (cause := self.get_cause()):
            data["cause"] = repr(cause)
        return data

    def get_cause(self) -> Exception | None:
        """Get the cause of this error, if any."""
        return self.__cause__ if hasattr(self, "__cause__") else None

    @classmethod
    def from_value(
        cls,
        value: Any,
        *,
        expected: str | None = None,
        message: str | None = None,
        cause: Exception | None = None,
        **extra: Any,
    ):
        """Create an error from an offending value, recording its type."""
        details = {
            "value": value,
            "type": type(value).__name__,
            **({"expected": expected} if expected else {}),
            **extra,
        }
        return cls(message=message, details=details, cause=cause)


class PreconditionViolation(LionArrayError):
    """A caller broke an array contract. Raised at the point of violation."""

    default_message = "Array precondition violated"
    default_status_code = 412  # Precondition Failed


class SelfReferenceError(PreconditionViolation):
    """An ArrayProxy was asked to proxy itself."""

    default_message = "Can't set ArrayProxy's content to itself"


class InvalidContentError(PreconditionViolation):
    """Content is neither an observable array nor a destroyed element."""

    default_message = "ArrayProxy expects an ObservableArray or ArrayProxy"


class ArrangedMutationError(PreconditionViolation):
    default_message = "Mutating an arranged ArrayProxy is not allowed"


class MissingContentError(PreconditionViolation):
    default_message = "Can't mutate an ArrayProxy without content"


class DestroyedProxyError(PreconditionViolation):
    default_message = "Can't set the content of a destroyed ArrayProxy"


class ReentrantSwapError(PreconditionViolation):
    """Content was swapped while a change notification was in flight."""

    default_message = (
        "Can't swap ArrayProxy content while a change is in flight"
    )


class ItemNotFoundError(LionArrayError, IndexError):
    default_message = "Index out of range"
    default_status_code = 404
