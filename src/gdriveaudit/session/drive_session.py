"""Authenticated Drive session handle shared by every component."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional, Sequence, TypeVar

from googleapiclient.errors import HttpError

from gdriveaudit.auth import AuthInfo, OAuthClient
from gdriveaudit.errors import (
    ApiError,
    GDriveAuditError,
    HttpErrorInfo,
    NetworkError,
    TransportError,
    map_http_error,
)

from .fields import ABOUT_FIELDS

T = TypeVar("T")

logger = logging.getLogger(__name__)


class DriveSession:
    """
    Injected capability wrapping one Drive v3 service.

    Notes:
        - Every request runs exactly once; failures are mapped and raised.
        - `supports_all_drives` is applied to all requests consistently.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> None:
        self._supports_all_drives = supports_all_drives

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = OAuthClient(auth_info)
        self._service = client.build_drive_service(use_scopes, ensure_valid=True)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
    ) -> "DriveSession":
        """Create a session from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._service = service
        return obj

    # ----------------------------
    # Resources
    # ----------------------------
    def files(self) -> Any:
        return self._service.files()

    def permissions(self) -> Any:
        return self._service.permissions()

    def about(self) -> dict[str, Any]:
        """Fetch the signed-in user; forces token acquisition on a fresh session."""
        req = self._service.about().get(fields=ABOUT_FIELDS)
        return self.execute(req.execute, operation="about.get")

    # ----------------------------
    # Request plumbing
    # ----------------------------
    def list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def execute(self, func: Callable[[], T], *, operation: str, **details: Any) -> T:
        """
        Run one blocking request and map its failure.

        Args:
            func: zero-argument callable issuing the request
                (e.g. `request.execute`, `request.next_chunk`).
            operation: API method name recorded on the raised error.
            details: identifiers recorded on the raised error.

        Raises:
            TransportError: subclass matching the failure.
        """
        try:
            return func()
        except GDriveAuditError:
            raise
        except Exception as exc:
            mapped = _map_exception(exc)
            mapped.details["operation"] = operation
            mapped.details.update(details)
            logger.debug("%s failed: %s", operation, mapped)
            raise mapped from exc


def _map_exception(exc: Exception) -> TransportError:
    if isinstance(exc, HttpError):
        info = _http_error_to_info(exc)
        return map_http_error(info, cause=exc)

    if isinstance(exc, (OSError, TimeoutError)):
        return NetworkError("Network error", cause=exc)

    return ApiError("Drive API error", cause=exc)


def _http_error_to_info(exc: HttpError) -> HttpErrorInfo:
    resp = getattr(exc, "resp", None)
    status_code = getattr(resp, "status", None)
    reason = getattr(resp, "reason", None)

    # Drive puts the useful reason in error.errors[0].reason of the JSON body.
    error = _error_payload(exc.content)
    first = next(iter(error.get("errors") or []), None)
    details: dict[str, Any] = {}
    if isinstance(first, dict):
        details = {"domain": first.get("domain"), "reason_detail": first.get("reason")}
        if isinstance(first.get("reason"), str):
            reason = first["reason"]

    return HttpErrorInfo(
        status_code=status_code if isinstance(status_code, int) else 0,
        reason=reason if isinstance(reason, str) else None,
        message=error.get("message") or None,
        details=details or None,
    )


def _error_payload(content: Any) -> dict[str, Any]:
    if not isinstance(content, (bytes, bytearray)):
        return {}
    try:
        payload = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return {}
    error = payload.get("error") if isinstance(payload, dict) else None
    return error if isinstance(error, dict) else {}
