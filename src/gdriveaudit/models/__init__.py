"""Public model exports for gdriveaudit."""

from __future__ import annotations

from .file_info import FileInfo, FolderInfo
from .remote_item import RemoteItem
from .results import ScanResult, UploadResult

__all__ = [
    "RemoteItem",
    "FileInfo",
    "FolderInfo",
    "ScanResult",
    "UploadResult",
]
