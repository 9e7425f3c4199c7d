"""Inventory records produced by scans and uploads."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class FileInfo:
    """A file seen during a scan, with its link-sharing state."""

    file_id: str
    size: int
    name: str
    shared: bool


@dataclass(slots=True, frozen=True)
class FolderInfo:
    """A folder seen during a scan, with its link-sharing state."""

    folder_id: str
    name: str
    shared: bool
