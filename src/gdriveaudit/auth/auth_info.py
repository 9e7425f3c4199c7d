"""Authentication information for gdriveaudit (OAuth installed-app flow)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_REDIRECT_PORT: int = 3333


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    kind = "oauth"
    data must include:
        - client_secrets_file
        - token_file
    data may include:
        - headless: bool, run the flow without opening a browser
        - redirect_port: int, local redirect port for the browser flow
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind != "oauth":
            raise ValueError("AuthInfo.kind must be 'oauth'")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        for key in ("client_secrets_file", "token_file"):
            value = self.data.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.data['{key}'] must be a non-empty string")

        port = self.data.get("redirect_port", DEFAULT_REDIRECT_PORT)
        if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 65535:
            raise ValueError("AuthInfo.data['redirect_port'] must be a port number")

    @property
    def client_secrets_file(self) -> str:
        """Path to OAuth client secrets JSON."""
        return str(self.data["client_secrets_file"])

    @property
    def token_file(self) -> str:
        """Path to OAuth token JSON (authorized user)."""
        return str(self.data["token_file"])

    @property
    def headless(self) -> bool:
        return bool(self.data.get("headless", False))

    @property
    def redirect_port(self) -> int:
        return int(self.data.get("redirect_port", DEFAULT_REDIRECT_PORT))
