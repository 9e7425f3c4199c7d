"""Installed-app OAuth for gdriveaudit: token file first, browser flow second."""

from __future__ import annotations

import logging
import os
from typing import Sequence

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from gdriveaudit.errors import AuthError

from .auth_info import AuthInfo

logger = logging.getLogger(__name__)


class OAuthClient:
    """Produces user credentials and the Drive v3 resource built on them."""

    def __init__(self, auth_info: AuthInfo) -> None:
        if auth_info.kind != "oauth":
            raise ValueError("OAuthClient requires AuthInfo(kind='oauth')")
        self._auth_info = auth_info

    def get_credentials(self, scopes: Sequence[str], ensure_valid: bool = True) -> Credentials:
        """
        Load the cached token, refreshing it when `ensure_valid` is set;
        without a usable token run the authorization flow and cache its result.

        Raises:
            AuthError: the token cannot be read, refreshed or obtained.
            ValueError: `scopes` is empty or holds blank entries.
        """
        if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
            raise ValueError("scopes must be a non-empty sequence of strings")
        scope_list = list(scopes)

        creds = self._load_token(scope_list)
        if creds is not None:
            if not ensure_valid:
                return creds
            if not creds.valid and creds.refresh_token:
                self._refresh(creds)
            if creds.valid:
                return creds

        return self._authorize(scope_list)

    def build_drive_service(self, scopes: Sequence[str], ensure_valid: bool = True):
        """Return a `googleapiclient.discovery.Resource` for Drive v3."""
        creds = self.get_credentials(scopes=scopes, ensure_valid=ensure_valid)
        try:
            return build("drive", "v3", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc

    def _load_token(self, scopes: list[str]) -> Credentials | None:
        token_file = self._auth_info.token_file
        if not os.path.exists(token_file):
            return None
        try:
            return Credentials.from_authorized_user_file(token_file, scopes=scopes)
        except Exception as exc:
            raise AuthError(
                "Failed to load token_file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc

    def _refresh(self, creds: Credentials) -> None:
        logger.debug("Refreshing OAuth token from %s", self._auth_info.token_file)
        try:
            creds.refresh(Request())
        except Exception as exc:
            raise AuthError(
                "Failed to refresh OAuth credentials",
                details={"token_file": self._auth_info.token_file},
                cause=exc,
            ) from exc
        self._save_credentials(creds)

    def _authorize(self, scopes: list[str]) -> Credentials:
        info = self._auth_info
        logger.info("Starting OAuth authorization flow (headless=%s)", info.headless)
        try:
            flow = InstalledAppFlow.from_client_secrets_file(info.client_secrets_file, scopes=scopes)
            if info.headless:
                creds = flow.run_local_server(port=0, open_browser=False)
            else:
                creds = flow.run_local_server(port=info.redirect_port)
        except Exception as exc:
            raise AuthError(
                "OAuth authorization flow failed",
                details={"client_secrets_file": info.client_secrets_file},
                cause=exc,
            ) from exc
        self._save_credentials(creds)
        return creds

    def _save_credentials(self, creds: Credentials) -> None:
        token_file = self._auth_info.token_file
        try:
            os.makedirs(os.path.dirname(token_file) or ".", exist_ok=True)
            with open(token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json())
        except OSError as exc:
            raise AuthError(
                "Failed to save OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc
