"""Remote session handle for gdriveaudit."""

from __future__ import annotations

from .drive_session import DriveSession

__all__ = ["DriveSession"]
