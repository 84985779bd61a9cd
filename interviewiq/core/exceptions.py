from __future__ import annotations

from typing import Any


class InterviewIQError(Exception):
    """Base exception rendered by the envelope error handler."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_SERVER_ERROR",
        status_code: int = 500,
        detail: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.detail = detail


class ValidationError(InterviewIQError):
    """Client input failed validation."""

    def __init__(self, message: str = "Invalid request", detail: Any | None = None) -> None:
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            detail=detail,
        )


class AuthenticationError(InterviewIQError):
    """Missing or invalid caller identity."""

    def __init__(self, message: str = "Invalid credentials", detail: Any | None = None) -> None:
        super().__init__(
            message=message,
            code="AUTH_INVALID_CREDENTIALS",
            status_code=401,
            detail=detail,
        )


class PermissionDeniedError(InterviewIQError):
    """Authenticated, but not the owner."""

    def __init__(self, message: str = "Permission denied", detail: Any | None = None) -> None:
        super().__init__(
            message=message,
            code="PERMISSION_DENIED",
            status_code=403,
            detail=detail,
        )


class NotFoundError(InterviewIQError):
    """Resource not found."""

    def __init__(self, message: str = "Resource not found", detail: Any | None = None) -> None:
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404,
            detail=detail,
        )


class ConflictError(InterviewIQError):
    """Unique constraint conflict."""

    def __init__(self, message: str = "Conflict occurred", detail: Any | None = None) -> None:
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=409,
            detail=detail,
        )


class ServiceUnavailableError(InterviewIQError):
    """AI or audio provider unavailable: not configured, out of quota, throttled."""

    def __init__(self, message: str = "Service temporarily unavailable", detail: Any | None = None) -> None:
        super().__init__(
            message=message,
            code="SERVICE_UNAVAILABLE",
            status_code=503,
            detail=detail,
        )


class UpstreamServiceError(InterviewIQError):
    """Unclassified provider failure."""

    def __init__(self, message: str = "Upstream service failed", detail: Any | None = None) -> None:
        super().__init__(
            message=message,
            code="UPSTREAM_ERROR",
            status_code=500,
            detail=detail,
        )
