"""
Custom exception classes for the application.
"""

from typing import Any

NETWORK_ERROR_MESSAGE = "Network error. Please try again."


class AppException(Exception):
    """Base exception for application errors."""

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


# =============================================================================
# Client-side errors (auth pages)
# =============================================================================

class NotReadyError(AppException):
    """Raised when the user acts before the page finished initializing."""

    def __init__(
        self,
        message: str = "Application is still loading. Please try again.",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "NOT_READY", details)


class RemoteCallError(AppException):
    """Raised when a remote auth call fails at the network or application level.

    ``message`` may be empty when the failure carried no usable text; callers
    substitute their own fallback in that case.
    """

    def __init__(
        self,
        message: str = "",
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "REMOTE_CALL_FAILED", details)
        self.status_code = status_code


class StorageError(AppException):
    """Raised by a client storage backend when a read or write fails."""

    def __init__(
        self,
        message: str = "Client storage operation failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "STORAGE_ERROR", details)


class StorageUnavailableError(StorageError):
    """Raised when the environment restricts access to client storage."""

    def __init__(
        self,
        message: str = "Client storage is not available",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.code = "STORAGE_UNAVAILABLE"


# =============================================================================
# Betting domain errors
# =============================================================================

class NotFoundError(AppException):
    """Raised when a requested entity does not exist."""

    def __init__(
        self,
        entity: str,
        entity_id: Any,
        message: str | None = None,
    ) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            message or f"{entity} not found: {entity_id}",
            "NOT_FOUND",
            {"entity": entity, "id": str(entity_id)},
        )


class ValidationError(AppException):
    """Raised when business validation fails (distinct from pydantic ValidationError)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidStatusTransitionError(ValidationError):
    """Raised when a game status transition is not allowed."""

    def __init__(self, current_status: Any, target_status: Any) -> None:
        self.current_status = current_status
        self.target_status = target_status

        def _val(x: Any) -> str:
            return getattr(x, "value", str(x))

        super().__init__(
            f"Cannot transition from '{_val(current_status)}' to '{_val(target_status)}'",
            {
                "current_status": _val(current_status),
                "target_status": _val(target_status),
            },
        )
        self.code = "INVALID_STATUS_TRANSITION"
