"""gdriveaudit public API."""

from __future__ import annotations

import logging

from gdriveaudit.auth import AuthInfo, OAuthClient
from gdriveaudit.errors import (
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
from gdriveaudit.listing import ROOT_FOLDER_ID, RemoteListingClient
from gdriveaudit.manager import GoogleDriveAuditor
from gdriveaudit.models import FileInfo, FolderInfo, RemoteItem, ScanResult, UploadResult
from gdriveaudit.permissions import (
    PermissionAuditor,
    is_link_sharing_permission,
    is_stale_link_permission,
)
from gdriveaudit.scanner import TreeScanner
from gdriveaudit.session import DriveSession
from gdriveaudit.transfer import TransferManager

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # High-level
    "GoogleDriveAuditor",
    "DriveSession",
    # Components
    "RemoteListingClient",
    "PermissionAuditor",
    "TreeScanner",
    "TransferManager",
    "ROOT_FOLDER_ID",
    "is_link_sharing_permission",
    "is_stale_link_permission",
    # Auth
    "AuthInfo",
    "OAuthClient",
    # Models
    "RemoteItem",
    "FileInfo",
    "FolderInfo",
    "ScanResult",
    "UploadResult",
    # Errors
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
