import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from gdriveaudit.auth import AuthInfo, OAuthClient
from gdriveaudit.errors import AuthError


class TestOAuthClient(unittest.TestCase):
    def test_get_credentials_loads_token_file_without_refresh(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            token_file = tmp_path / "token.json"

            token_payload = {
                "token": "fake-token",
                "refresh_token": "fake-refresh-token",
                "token_uri": "https://oauth2.googleapis.com/token",
                "client_id": "fake-client-id",
                "client_secret": "fake-client-secret",
                "scopes": ["https://www.googleapis.com/auth/drive.readonly"],
                "type": "authorized_user",
            }
            token_file.write_text(json.dumps(token_payload), encoding="utf-8")

            info = AuthInfo(
                kind="oauth",
                data={
                    "client_secrets_file": str(tmp_path / "client_secrets.json"),
                    "token_file": str(token_file),
                },
            )
            client = OAuthClient(info)
            creds = client.get_credentials(
                scopes=["https://www.googleapis.com/auth/drive.readonly"],
                ensure_valid=False,
            )

            # Credentials object should be created and have a refresh_token.
            self.assertTrue(hasattr(creds, "refresh_token"))
            self.assertEqual(creds.refresh_token, "fake-refresh-token")

    def test_headless_flow_runs_without_browser_and_saves_token(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            token_file = tmp_path / "nested" / "token.json"
            info = AuthInfo(
                kind="oauth",
                data={
                    "client_secrets_file": str(tmp_path / "client_secrets.json"),
                    "token_file": str(token_file),
                    "headless": True,
                },
            )

            creds = Mock()
            creds.to_json.return_value = '{"token": "t"}'
            flow = Mock()
            flow.run_local_server.return_value = creds

            with patch(
                "google_auth_oauthlib.flow.InstalledAppFlow.from_client_secrets_file",
                return_value=flow,
            ):
                result = OAuthClient(info).get_credentials(
                    scopes=["https://www.googleapis.com/auth/drive"]
                )

            self.assertIs(result, creds)
            flow.run_local_server.assert_called_once_with(port=0, open_browser=False)
            self.assertEqual(token_file.read_text(encoding="utf-8"), '{"token": "t"}')

    def test_browser_flow_uses_redirect_port(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            info = AuthInfo(
                kind="oauth",
                data={
                    "client_secrets_file": str(tmp_path / "client_secrets.json"),
                    "token_file": str(tmp_path / "token.json"),
                },
            )
            flow = Mock()
            flow.run_local_server.return_value.to_json.return_value = "{}"

            with patch(
                "google_auth_oauthlib.flow.InstalledAppFlow.from_client_secrets_file",
                return_value=flow,
            ):
                OAuthClient(info).get_credentials(scopes=["https://www.googleapis.com/auth/drive"])

            flow.run_local_server.assert_called_once_with(port=3333)

    def test_flow_failure_is_auth_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            info = AuthInfo(
                kind="oauth",
                data={
                    "client_secrets_file": str(Path(tmp) / "missing.json"),
                    "token_file": str(Path(tmp) / "token.json"),
                },
            )
            with self.assertRaises(AuthError):
                OAuthClient(info).get_credentials(scopes=["https://www.googleapis.com/auth/drive"])

    def test_empty_scopes_rejected(self) -> None:
        info = AuthInfo(kind="oauth", data={"client_secrets_file": "a", "token_file": "b"})
        with self.assertRaises(ValueError):
            OAuthClient(info).get_credentials(scopes=[])


if __name__ == "__main__":
    unittest.main()
