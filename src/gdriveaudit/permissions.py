"""Classification and cleanup of Drive permission identifiers."""

from __future__ import annotations

import logging
import unicodedata

from gdriveaudit.models import RemoteItem
from gdriveaudit.session import DriveSession
from gdriveaudit.session.fields import PERMISSION_FIELDS

logger = logging.getLogger(__name__)

LINK_SHARING_PERMISSION_ID: str = "anyoneWithLink"
STALE_LINK_SUFFIX: str = "k"

_NUMERIC_CATEGORIES: frozenset[str] = frozenset(("Nd", "Nl", "No"))


def is_link_sharing_permission(permission_id: str) -> bool:
    return permission_id == LINK_SHARING_PERMISSION_ID


def is_stale_link_permission(permission_id: str) -> bool:
    """
    Return True for identifiers shaped like an orphaned anyone-with-link grant.

    The shape is a run of numeric characters (Unicode categories Nd, Nl and
    No) followed by a trailing "k". A lone "k" matches (the run may be empty).
    """
    if not permission_id.endswith(STALE_LINK_SUFFIX):
        return False
    prefix = permission_id[: -len(STALE_LINK_SUFFIX)]
    return all(_is_numeric_char(c) for c in prefix)


def _is_numeric_char(char: str) -> bool:
    return unicodedata.category(char) in _NUMERIC_CATEGORIES


class PermissionAuditor:
    """Reports link-sharing state and revokes stale grants as it goes."""

    def __init__(self, session: DriveSession) -> None:
        self._session = session

    def audit(self, item: RemoteItem) -> bool:
        """
        Return True if `item` is shared with anyone holding the link.

        Every stale-shaped permission is revoked before the next identifier
        is looked at. A failed revoke aborts the audit.
        """
        shared = False
        for permission_id in item.permission_ids or ():
            if is_stale_link_permission(permission_id):
                self.revoke_permission(item.item_id, permission_id)
            if is_link_sharing_permission(permission_id):
                shared = True
        return shared

    def revoke_permission(self, item_id: str, permission_id: str) -> None:
        req = self._session.permissions().delete(
            fileId=item_id,
            permissionId=permission_id,
            **self._session.write_kwargs(),
        )
        self._session.execute(
            req.execute,
            operation="permissions.delete",
            file_id=item_id,
            permission_id=permission_id,
        )
        logger.info("Revoked permission %s on %s", permission_id, item_id)

    def share(self, item_id: str) -> str:
        """Grant read access to anyone with the link; return the new permission id."""
        body = {"role": "reader", "type": "anyone"}
        req = self._session.permissions().create(
            fileId=item_id,
            body=body,
            fields=PERMISSION_FIELDS,
            **self._session.write_kwargs(),
        )
        data = self._session.execute(
            req.execute,
            operation="permissions.create",
            file_id=item_id,
        )
        permission_id = data.get("id", "")
        logger.info("Shared %s with anyone (permission %s)", item_id, permission_id)
        return permission_id
