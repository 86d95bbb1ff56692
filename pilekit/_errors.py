# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from enum import IntEnum
from typing import Any, ClassVar

__all__ = (
    "PileError",
    "UnknownIndexError",
    "BoundsError",
    "UnknownMemberError",
    "InvalidArgumentError",
    "SearchError",
    "BadSearchCallbackError",
    "BadSearchCallbackReturnError",
)


class PileError(Exception):
    default_message: ClassVar[str] = "pilekit error"
    status_code: ClassVar[int] = 500

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
        self.status_code = status_code or self.status_code

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


class UnknownIndexError(PileError):
    """Raised when a read key resolves to nothing."""

    default_message = "Unknown index"
    status_code = 404

    @classmethod
    def for_key(cls, key: Any, message: str | None = None):
        return cls(
            message or f"Unknown index: {key!r}",
            details={"key": key},
        )


class BoundsError(PileError):
    """Raised when a range splice cannot be satisfied."""

    class Code(IntEnum):
        START_OUT_OF_RANGE = 1
        START_GT_END = 2

    default_message = "Splice bounds error"
    status_code = 416  # Range Not Satisfiable

    def __init__(
        self,
        message: str | None = None,
        *,
        code: "BoundsError.Code",
        start: int | None = None,
        end: int | None = None,
        **kwargs: Any,
    ):
        details = kwargs.pop("details", None) or {}
        details.update(start=start, end=end)
        super().__init__(message, details=details, **kwargs)
        self.code = BoundsError.Code(code)


class UnknownMemberError(PileError):
    """Raised when an item exposes no field, method or callable by a name."""

    default_message = "Unknown member"
    status_code = 404


class InvalidArgumentError(PileError):
    """Exception raised when an argument is not one of the accepted values."""

    default_message = "Invalid argument"
    status_code = 422  # Unprocessable Entity

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
        """Create an InvalidArgumentError describing the rejected value."""
        details = {
            "value": value,
            "type": type(value).__name__,
            **({"expected": expected} if expected else {}),
            **extra,
        }
        return cls(message=message, details=details, cause=cause)


class SearchError(PileError):
    """Raised when searching has gone awry."""

    class Code(IntEnum):
        BAD_CALLBACK = 0
        BAD_CALLBACK_RETURN = 1

    default_message = "Search failed"
    status_code = 400


class BadSearchCallbackError(SearchError):
    default_message = "Search predicate is not callable"
    code = SearchError.Code.BAD_CALLBACK


class BadSearchCallbackReturnError(SearchError):
    default_message = "Search predicate must return a bool"
    code = SearchError.Code.BAD_CALLBACK_RETURN
