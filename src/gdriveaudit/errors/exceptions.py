"""Exception hierarchy and HTTP error mapping for gdriveaudit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDriveAuditError(Exception):
    """
    Root of every error raised by gdriveaudit.

    `details` carries machine-readable context such as the failing API
    operation, the item and permission ids involved and the HTTP status.
    `cause` is the library or OS exception that was translated, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class LocalFileError(GDriveAuditError):
    """Raised when a local upload source is missing or unreadable."""


class PreconditionError(GDriveAuditError):
    """Raised when remote data breaks an assumption the caller relies on."""


class HierarchyCycleError(PreconditionError):
    """Raised when a folder is found among its own ancestors during a scan."""


class TransportError(GDriveAuditError):
    """Base class for every failed remote call."""


class AuthError(TransportError):
    """Credentials could not be loaded, refreshed or obtained, or Drive answered 401."""


class AccessDeniedError(TransportError):
    """Drive refused the call for the signed-in user (403)."""


class InvalidArgumentError(TransportError):
    """Drive rejected the request as malformed (400)."""


class NotFoundError(TransportError):
    """The referenced file, folder or permission does not exist (404)."""


class ConflictError(TransportError):
    """409 or 412 from Drive."""


class RateLimitError(TransportError):
    """Too many requests (429, or 403 with a rate-limit reason)."""


class QuotaExceededError(TransportError):
    """Storage or daily usage quota exhausted."""


class NetworkError(TransportError):
    """The request never got an HTTP answer (socket error, timeout)."""


class ApiError(TransportError):
    """Anything else: 5xx, unexpected 4xx, malformed responses."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Status, reason and message pulled out of a googleapiclient HttpError."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> TransportError:
    """
    Map an HTTP error to a gdriveaudit exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> AccessDeniedError, or QuotaExceededError if quota-related,
                 or RateLimitError for (user)rateLimitExceeded
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if info.reason in ("rateLimitExceeded", "userRateLimitExceeded"):
            return RateLimitError(message, details=details, cause=cause)
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return AccessDeniedError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
