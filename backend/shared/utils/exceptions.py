"""
Centralized exceptions for consistent error handling.

Repositories never let these escape for expected failures: the CRUD
boundary converts them into a tagged Response. Services that propagate
errors (tag search, backend client) raise them directly.

Usage:
    from shared.utils.exceptions import ValidationError, BackendAPIError

    raise ValidationError("No updates found.", table="projects")
    raise BackendAPIError("duplicate key value", code="23505", status_code=409)
"""

from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(Exception):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and message format.
    """

    def __init__(
        self,
        detail: str,
        log_level: str = "warning",
        **log_context: Any,
    ):
        # Log the error with context
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, **log_context)

        self.detail = detail
        super().__init__(detail)


# =============================================================================
# Caller-side Errors
# =============================================================================


class ValidationError(AppException):
    """
    Caller precondition failed.

    Usage:
        raise ValidationError("No updates found.")
        raise ValidationError("Already paired", source_id=source_id)
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(detail, log_level="warning", **log_context)


class SoftDeleteNotSupportedError(ValidationError):
    """Soft delete requested on a table that only supports hard delete."""

    def __init__(self, table: str, **log_context: Any):
        super().__init__(
            f"Table '{table}' doesn't support soft deletion.",
            table=table,
            **log_context,
        )


class SelfPairingError(ValidationError):
    """Both ends of a pairing resolve to the same entity."""

    def __init__(self, entity_id: str, **log_context: Any):
        super().__init__("An item cannot be paired with itself", entity_id=entity_id, **log_context)


class DuplicatePairingError(ValidationError):
    """A pairing between the two entities already exists."""

    def __init__(self, source_id: str, target_id: str, **log_context: Any):
        super().__init__(
            "Already paired",
            source_id=source_id,
            target_id=target_id,
            **log_context,
        )


# =============================================================================
# Backend Errors
# =============================================================================


class BackendAPIError(AppException):
    """
    The backend rejected the operation (validation, permission, constraint).

    Carries the backend's error body fields so callers can surface the
    message verbatim.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: str | None = None,
        hint: str | None = None,
        status_code: int | None = None,
        **log_context: Any,
    ):
        self.message = message
        self.code = code
        self.details = details
        self.hint = hint
        self.status_code = status_code
        super().__init__(
            message,
            log_level="warning",
            code=code,
            status_code=status_code,
            **log_context,
        )

    def to_dict(self) -> dict[str, Any]:
        """Error body in the backend's own shape."""
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
            "hint": self.hint,
        }


class InternalError(AppException):
    """
    Unexpected failure (transport, serialization, programming error).

    Usage:
        raise InternalError("Failed to decode backend response", table="projects")
    """

    def __init__(self, detail: str = "Internal error", **log_context: Any):
        super().__init__(detail, log_level="error", **log_context)


class ConfigurationError(AppException):
    """Required configuration is missing at startup."""

    def __init__(self, problems: list[str], **log_context: Any):
        self.problems = problems
        super().__init__(
            "Invalid configuration: " + "; ".join(problems),
            log_level="critical",
            **log_context,
        )
