from __future__ import annotations

FOLDER_MIME: str = "application/vnd.google-apps.folder"

# Content type sent with every resumable upload; bytes are never sniffed.
UPLOAD_CONTENT_TYPE: str = "application/octet-stream"


def folder_filter(folders: bool) -> str:
    """Query predicate selecting folders (True) or everything else (False)."""
    predicate = f"mimeType contains '{FOLDER_MIME}'"
    return predicate if folders else f"not {predicate}"
