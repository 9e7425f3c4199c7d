"""Read-only snapshot of a Drive item as returned by the listing path."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(slots=True, frozen=True)
class RemoteItem:
    """
    One item from a files.list / files.create / files.update response.

    Notes:
        - `size` is only reported for items with binary content; folders and
          native Google documents have no size.
        - `permission_ids` is None when the response omitted the field.
    """

    item_id: str
    name: str
    size: Optional[int] = None
    permission_ids: Optional[tuple[str, ...]] = field(default=None)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RemoteItem":
        item_id = data.get("id")
        name = data.get("name", "")

        size = None
        raw_size = data.get("size")
        if isinstance(raw_size, str) and raw_size.isdecimal():
            size = int(raw_size)
        elif isinstance(raw_size, int) and not isinstance(raw_size, bool):
            size = raw_size

        permission_ids = None
        raw_ids = data.get("permissionIds")
        if isinstance(raw_ids, list):
            permission_ids = tuple(pid for pid in raw_ids if isinstance(pid, str))

        return cls(
            item_id=item_id if isinstance(item_id, str) else "",
            name=name if isinstance(name, str) else "",
            size=size,
            permission_ids=permission_ids,
        )
