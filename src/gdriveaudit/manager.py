"""GoogleDriveAuditor: one session shared by listing, audit, scan and transfer."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from googleapiclient.http import DEFAULT_CHUNK_SIZE

from gdriveaudit.auth import AuthInfo
from gdriveaudit.listing import MAX_PAGE_SIZE, RemoteListingClient
from gdriveaudit.models import RemoteItem, ScanResult, UploadResult
from gdriveaudit.permissions import PermissionAuditor
from gdriveaudit.scanner import TreeScanner
from gdriveaudit.session import DriveSession
from gdriveaudit.transfer import PathLike, TransferManager
from gdriveaudit.util.mime import UPLOAD_CONTENT_TYPE


class GoogleDriveAuditor:
    """High-level entry point: inventory, permission cleanup and uploads."""

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
        page_size: int = MAX_PAGE_SIZE,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        content_type: str = UPLOAD_CONTENT_TYPE,
    ) -> None:
        session = DriveSession(
            auth_info,
            scopes=scopes,
            supports_all_drives=supports_all_drives,
        )
        self._wire(session, page_size=page_size, chunk_size=chunk_size, content_type=content_type)

    @classmethod
    def from_session(
        cls,
        session: DriveSession,
        *,
        page_size: int = MAX_PAGE_SIZE,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        content_type: str = UPLOAD_CONTENT_TYPE,
    ) -> "GoogleDriveAuditor":
        """Create an auditor around an existing session (useful for tests)."""
        obj = cls.__new__(cls)
        obj._wire(session, page_size=page_size, chunk_size=chunk_size, content_type=content_type)
        return obj

    def _wire(self, session: DriveSession, *, page_size: int, chunk_size: int, content_type: str) -> None:
        self._session = session
        self._listing = RemoteListingClient(session, page_size=page_size)
        self._auditor = PermissionAuditor(session)
        self._scanner = TreeScanner(self._listing, self._auditor)
        self._transfers = TransferManager(
            session,
            self._listing,
            self._auditor,
            chunk_size=chunk_size,
            content_type=content_type,
        )

    @property
    def session(self) -> DriveSession:
        return self._session

    @property
    def listing(self) -> RemoteListingClient:
        return self._listing

    @property
    def permissions(self) -> PermissionAuditor:
        return self._auditor

    def check_auth(self) -> dict[str, Any]:
        """Issue a cheap authenticated call; returns the signed-in user payload."""
        return self._session.about()

    # ----------------------------
    # Listing
    # ----------------------------
    def list_files(self, folder_id: Optional[str] = None) -> list[RemoteItem]:
        if folder_id is None:
            return self._listing.list_root_files()
        return self._listing.list_files(folder_id)

    def list_folders(self, folder_id: Optional[str] = None) -> list[RemoteItem]:
        if folder_id is None:
            return self._listing.list_root_folders()
        return self._listing.list_folders(folder_id)

    # ----------------------------
    # Inventory / permissions
    # ----------------------------
    def scan(
        self,
        folder_id: str,
        recursive: bool = False,
        *,
        include_nested_folders: bool = False,
    ) -> ScanResult:
        return self._scanner.scan(
            folder_id,
            recursive,
            include_nested_folders=include_nested_folders,
        )

    def is_shared(self, item: RemoteItem) -> bool:
        return self._auditor.audit(item)

    def share(self, item_id: str) -> str:
        return self._auditor.share(item_id)

    def revoke_permission(self, item_id: str, permission_id: str) -> None:
        self._auditor.revoke_permission(item_id, permission_id)

    # ----------------------------
    # Transfer
    # ----------------------------
    def upload(
        self,
        local_path: PathLike,
        destination_folder_id: Optional[str] = None,
    ) -> tuple[str, bool]:
        return self._transfers.upload(local_path, destination_folder_id)

    def upload_with_result(
        self,
        local_path: PathLike,
        destination_folder_id: Optional[str] = None,
    ) -> UploadResult:
        return self._transfers.transfer(local_path, destination_folder_id)
