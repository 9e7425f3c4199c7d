from .mime import FOLDER_MIME, UPLOAD_CONTENT_TYPE, folder_filter

__all__ = [
    "FOLDER_MIME",
    "UPLOAD_CONTENT_TYPE",
    "folder_filter",
]
