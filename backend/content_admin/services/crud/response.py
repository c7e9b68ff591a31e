"""
Uniform result envelope returned by every repository operation.

Callers check the flag before trusting data; expected failures never
raise out of a repository.

Usage:
    response = await projects.get_by_id(project_id)
    if not response.ok:
        notify(response.error_message("Failed to load project"))
    elif response.data is None:
        ...  # not found
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from shared.utils.exceptions import (
    BackendAPIError,
    InternalError,
    ValidationError,
)

T = TypeVar("T")


class Flag(str, Enum):
    """Outcome of a repository call."""

    SUCCESS = "SUCCESS"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    API_ERROR = "API_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    # No explicit error and no definitive success signal; treat as success for reads
    UNKNOWN_OR_SUCCESS = "UNKNOWN_OR_SUCCESS"
    UNKNOWN = "UNKNOWN"


SUCCESS_FLAGS = frozenset({Flag.SUCCESS, Flag.UNKNOWN_OR_SUCCESS})


@dataclass(frozen=True)
class ResponseError:
    """Structured error carried by a failed Response."""

    output: Any = None
    hints: Any = None
    message: str | None = None


@dataclass(frozen=True)
class Response(Generic[T]):
    """A status flag, optional data and optional error."""

    flag: Flag = Flag.UNKNOWN_OR_SUCCESS
    data: T | None = None
    error: ResponseError | None = None

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def success(cls, data: T | None = None) -> Response[T]:
        return cls(Flag.SUCCESS, data)

    @classmethod
    def validation_error(cls, message: str, hints: Any = None) -> Response[T]:
        return cls(Flag.VALIDATION_ERROR, None, ResponseError(message=message, hints=hints))

    @classmethod
    def api_error(cls, exc: BackendAPIError) -> Response[T]:
        return cls(
            Flag.API_ERROR,
            None,
            ResponseError(output=exc.to_dict(), hints=exc.hint, message=exc.message),
        )

    @classmethod
    def internal_error(cls, exc: BaseException | None = None) -> Response[T]:
        output = repr(exc) if exc is not None else None
        return cls(Flag.INTERNAL_ERROR, None, ResponseError(output=output, message=str(exc) if exc else None))

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def ok(self) -> bool:
        return self.flag in SUCCESS_FLAGS

    def error_message(self, default: str = "Something went wrong") -> str:
        """Backend message first, then the envelope message, then default."""
        if self.error is None:
            return default
        output = self.error.output
        if isinstance(output, dict) and output.get("message"):
            return str(output["message"])
        if self.error.message:
            return self.error.message
        return default

    def as_list(self) -> list[Any]:
        """Data as a list: [] for None, [row] for a single row."""
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return self.data
        return [self.data]

    def unwrap(self) -> T | None:
        """
        Return data, or raise the exception matching the flag.

        For services that propagate failures instead of returning envelopes.
        """
        if self.ok:
            return self.data
        message = self.error_message("Request failed")
        if self.flag == Flag.VALIDATION_ERROR:
            raise ValidationError(message)
        if self.flag == Flag.API_ERROR:
            output = self.error.output if self.error and isinstance(self.error.output, dict) else {}
            raise BackendAPIError(
                message,
                code=output.get("code"),
                details=output.get("details"),
                hint=output.get("hint"),
            )
        raise InternalError(message, flag=self.flag.value)
