"""Public auth exports for gdriveaudit."""

from __future__ import annotations

from .auth_info import AuthInfo
from .oauth_client import OAuthClient

__all__ = ["AuthInfo", "OAuthClient"]
