"""Public error exports for gdriveaudit."""

from __future__ import annotations

from .exceptions import (
    AccessDeniedError,
    ApiError,
    AuthError,
    ConflictError,
    GDriveAuditError,
    HierarchyCycleError,
    HttpErrorInfo,
    InvalidArgumentError,
    LocalFileError,
    NetworkError,
    NotFoundError,
    PreconditionError,
    QuotaExceededError,
    RateLimitError,
    TransportError,
    map_http_error,
)

__all__ = [
    "GDriveAuditError",
    "LocalFileError",
    "PreconditionError",
    "HierarchyCycleError",
    "TransportError",
    "AuthError",
    "AccessDeniedError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
