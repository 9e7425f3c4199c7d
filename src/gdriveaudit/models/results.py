"""Result models for scan and upload operations."""

from __future__ import annotations

from dataclasses import dataclass, field

from .file_info import FileInfo, FolderInfo


@dataclass(slots=True)
class ScanResult:
    """
    Aggregate result of one scan.

    `files` holds every file found under the scanned folder (transitively when
    the scan was recursive). `folders` holds the direct child folders only,
    unless the scan was asked to include nested folders.
    """

    files: list[FileInfo] = field(default_factory=list)
    folders: list[FolderInfo] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class UploadResult:
    """Outcome of one upload-or-replace transfer."""

    file_id: str
    name: str
    shared: bool
    created: bool
