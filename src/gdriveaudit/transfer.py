"""Upload-or-replace of local files into a Drive folder."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Union

from googleapiclient.http import DEFAULT_CHUNK_SIZE, MediaFileUpload

from gdriveaudit.errors import ApiError, LocalFileError
from gdriveaudit.listing import ROOT_FOLDER_ID, RemoteListingClient
from gdriveaudit.models import RemoteItem, UploadResult
from gdriveaudit.permissions import PermissionAuditor
from gdriveaudit.session import DriveSession
from gdriveaudit.session.fields import ITEM_FIELDS
from gdriveaudit.util.mime import UPLOAD_CONTENT_TYPE

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

_CHUNK_GRANULARITY: int = 256 * 1024


class TransferManager:
    """
    Idempotent uploader: replaces the content of a same-named file in the
    destination folder, or creates one when none exists.
    """

    def __init__(
        self,
        session: DriveSession,
        listing: RemoteListingClient,
        auditor: PermissionAuditor,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        content_type: str = UPLOAD_CONTENT_TYPE,
    ) -> None:
        if chunk_size != -1 and (chunk_size <= 0 or chunk_size % _CHUNK_GRANULARITY):
            raise ValueError("chunk_size must be -1 or a positive multiple of 256 KiB")
        self._session = session
        self._listing = listing
        self._auditor = auditor
        self._chunk_size = chunk_size
        self._content_type = content_type

    def upload(
        self,
        local_path: PathLike,
        destination_folder_id: Optional[str] = None,
    ) -> tuple[str, bool]:
        """Upload `local_path`; return the remote id and whether it is link-shared."""
        result = self.transfer(local_path, destination_folder_id)
        return result.file_id, result.shared

    def transfer(
        self,
        local_path: PathLike,
        destination_folder_id: Optional[str] = None,
    ) -> UploadResult:
        """
        Upload `local_path` into `destination_folder_id` (My Drive root if None).

        Raises:
            LocalFileError: if `local_path` is not a readable file.
            TransportError: on the first failed listing, write or chunk.
        """
        path = os.fspath(local_path)
        if not os.path.isfile(path):
            raise LocalFileError("Local file does not exist", details={"local_path": path})
        name = os.path.basename(path)

        existing = self.find_existing(name, destination_folder_id)

        media = self._open_media(path)
        try:
            if existing is not None:
                req = self._session.files().update(
                    fileId=existing.item_id,
                    body={"name": existing.name},
                    media_body=media,
                    fields=ITEM_FIELDS,
                    **self._session.write_kwargs(),
                )
                data = self._run_resumable(req, operation="files.update", file_id=existing.item_id)
            else:
                body: dict[str, Any] = {"name": name}
                if destination_folder_id is not None:
                    body["parents"] = [destination_folder_id]
                req = self._session.files().create(
                    body=body,
                    media_body=media,
                    fields=ITEM_FIELDS,
                    **self._session.write_kwargs(),
                )
                data = self._run_resumable(req, operation="files.create", name=name)
        finally:
            media.stream().close()

        item = RemoteItem.from_api(data)
        if not item.item_id:
            raise ApiError("Drive did not return an id for the uploaded file", details={"name": name})

        logger.info(
            "%s %s as %s",
            "Created" if existing is None else "Updated",
            path,
            item.item_id,
        )
        return UploadResult(
            file_id=item.item_id,
            name=item.name or name,
            shared=self._auditor.audit(item),
            created=existing is None,
        )

    def find_existing(
        self,
        name: str,
        destination_folder_id: Optional[str] = None,
    ) -> Optional[RemoteItem]:
        """Return the file named `name` directly under the destination; last match wins."""
        parent_id = destination_folder_id if destination_folder_id is not None else ROOT_FOLDER_ID
        match = None
        for item in self._listing.list_files(parent_id):
            if item.name == name:
                match = item
        if match is None:
            logger.debug("No file named %r under %s", name, parent_id)
        else:
            logger.debug("Found %r under %s as %s", name, parent_id, match.item_id)
        return match

    def _open_media(self, path: str) -> MediaFileUpload:
        try:
            return MediaFileUpload(
                path,
                mimetype=self._content_type,
                chunksize=self._chunk_size,
                resumable=True,
            )
        except OSError as exc:
            raise LocalFileError(
                "Local file cannot be opened",
                details={"local_path": path},
                cause=exc,
            ) from exc

    def _run_resumable(self, req: Any, *, operation: str, **details: Any) -> dict[str, Any]:
        response = None
        while response is None:
            status, response = self._session.execute(req.next_chunk, operation=operation, **details)
            if status is not None:
                logger.debug("%s: %d%% sent", operation, int(status.progress() * 100))
        return response
