"""Recursive inventory of a Drive folder."""

from __future__ import annotations

import logging

from gdriveaudit.errors import HierarchyCycleError
from gdriveaudit.listing import RemoteListingClient
from gdriveaudit.models import FileInfo, FolderInfo, RemoteItem, ScanResult
from gdriveaudit.permissions import PermissionAuditor

logger = logging.getLogger(__name__)


class TreeScanner:
    """
    Builds a ScanResult for a folder by listing it and auditing every item.

    Subtrees are scanned one at a time, depth-first, in listing order.
    """

    def __init__(self, listing: RemoteListingClient, auditor: PermissionAuditor) -> None:
        self._listing = listing
        self._auditor = auditor

    def scan(
        self,
        folder_id: str,
        recursive: bool = False,
        *,
        include_nested_folders: bool = False,
    ) -> ScanResult:
        """
        Inventory `folder_id`.

        Args:
            folder_id: Drive folder to scan.
            recursive: Descend into child folders. Files from every level are
                collected; folders are reported for the first level only.
            include_nested_folders: With `recursive`, report folders from
                every level instead of the first level only.

        Raises:
            HierarchyCycleError: if a folder turns out to be its own ancestor.
            TransportError: on the first failed listing or permission call.
        """
        result = self._scan(
            folder_id,
            recursive=recursive,
            nested=recursive and include_nested_folders,
            ancestors=(),
            expanded=set(),
        )
        logger.info(
            "Scanned %s: %d files, %d folders",
            folder_id,
            len(result.files),
            len(result.folders),
        )
        return result

    def _scan(
        self,
        folder_id: str,
        *,
        recursive: bool,
        nested: bool,
        ancestors: tuple[str, ...],
        expanded: set[str],
    ) -> ScanResult:
        logger.debug("Entering folder %s (depth %d)", folder_id, len(ancestors))
        expanded.add(folder_id)
        result = ScanResult()

        for item in self._listing.list_files(folder_id):
            if item.size is None:
                continue
            result.files.append(
                FileInfo(
                    file_id=item.item_id,
                    size=item.size,
                    name=item.name,
                    shared=self._auditor.audit(item),
                )
            )

        if not recursive:
            return result

        path = ancestors + (folder_id,)
        for folder in self._listing.list_folders(folder_id):
            if folder.item_id in path:
                raise HierarchyCycleError(
                    "Folder hierarchy contains a cycle",
                    details={"folder_id": folder.item_id, "path": list(path)},
                )

            if folder.item_id in expanded:
                # Reached again through a second parent; its files are already in.
                if not nested:
                    result.folders.append(self._folder_info(folder))
                continue

            child = self._scan(
                folder.item_id,
                recursive=recursive,
                nested=nested,
                ancestors=path,
                expanded=expanded,
            )
            result.files.extend(child.files)
            result.folders.append(self._folder_info(folder))
            if nested:
                result.folders.extend(child.folders)

        return result

    def _folder_info(self, folder: RemoteItem) -> FolderInfo:
        return FolderInfo(
            folder_id=folder.item_id,
            name=folder.name,
            shared=self._auditor.audit(folder),
        )
