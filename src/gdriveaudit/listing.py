"""Paginated, filtered listing of Drive folder contents."""

from __future__ import annotations

import logging
from typing import Any, Optional

from gdriveaudit.models import RemoteItem
from gdriveaudit.session import DriveSession
from gdriveaudit.session.fields import LIST_FIELDS
from gdriveaudit.util.mime import folder_filter

logger = logging.getLogger(__name__)

ROOT_FOLDER_ID: str = "root"
MAX_PAGE_SIZE: int = 1000


class RemoteListingClient:
    """
    Lists the non-trashed children of a folder, one page request at a time.

    A failed page request aborts the listing; pages fetched before it are
    discarded with the error.
    """

    def __init__(self, session: DriveSession, *, page_size: int = MAX_PAGE_SIZE) -> None:
        if isinstance(page_size, bool) or not isinstance(page_size, int):
            raise TypeError("page_size must be an int")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")
        self._session = session
        self._page_size = page_size

    def list(self, parent_id: str, extra_filter: Optional[str] = None) -> list[RemoteItem]:
        q = build_query(parent_id, extra_filter)
        items: list[RemoteItem] = []
        page_token: Optional[str] = None
        page = 0

        while True:
            kwargs: dict[str, Any] = {
                "q": q,
                "pageSize": self._page_size,
                "fields": LIST_FIELDS,
            }
            if page_token:
                kwargs["pageToken"] = page_token

            req = self._session.files().list(**kwargs, **self._session.list_kwargs())
            data = self._session.execute(
                req.execute,
                operation="files.list",
                parent_id=parent_id,
                page=page,
            )
            batch = data.get("files") or []
            for raw in batch:
                item = RemoteItem.from_api(raw)
                if not item.item_id:
                    logger.debug("Skipping entry without id under %s: %r", parent_id, raw)
                    continue
                items.append(item)
            logger.debug("Listed page %d of %s: %d items", page, parent_id, len(batch))

            page_token = data.get("nextPageToken")
            if not page_token:
                break
            page += 1

        return items

    def list_folders(self, parent_id: str) -> list[RemoteItem]:
        return self.list(parent_id, folder_filter(True))

    def list_files(self, parent_id: str) -> list[RemoteItem]:
        return self.list(parent_id, folder_filter(False))

    def list_root_folders(self) -> list[RemoteItem]:
        return self.list_folders(ROOT_FOLDER_ID)

    def list_root_files(self) -> list[RemoteItem]:
        return self.list_files(ROOT_FOLDER_ID)


def build_query(parent_id: str, extra_filter: Optional[str] = None) -> str:
    """AND together the parent predicate, an optional filter and `trashed = false`."""
    if not parent_id or not isinstance(parent_id, str):
        raise ValueError("parent_id must be a non-empty string")

    parts = [f"'{_escape(parent_id)}' in parents"]
    if extra_filter and extra_filter.strip():
        parts.append(extra_filter.strip())
    parts.append("trashed = false")
    return " and ".join(parts)


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")
