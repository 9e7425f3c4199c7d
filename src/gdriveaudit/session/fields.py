"""Field selections for Google Drive API requests."""

from __future__ import annotations

ITEM_FIELDS: str = "id,name,size,permissionIds"

LIST_FIELDS: str = f"files({ITEM_FIELDS}),nextPageToken"

PERMISSION_FIELDS: str = "id"

ABOUT_FIELDS: str = "user(displayName,emailAddress)"
