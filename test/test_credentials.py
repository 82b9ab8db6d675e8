"""Tests for the google-auth credential adapter."""

from unittest.mock import MagicMock, patch

from testlab.core.client.credentials import GoogleCredential, ScopedSigner

SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]


def _fake_credentials(valid: bool) -> MagicMock:
    creds = MagicMock()
    creds.valid = valid
    creds.token = "tok"

    def _apply(headers, token=None):
        headers["authorization"] = f"Bearer {token or creds.token}"

    creds.apply.side_effect = _apply
    return creds


class TestScopedSigner:
    def test_refreshes_when_invalid(self):
        creds = _fake_credentials(valid=False)
        request = MagicMock()
        signed = ScopedSigner(creds, request=request).apply({"Content-Type": "application/json"})

        creds.refresh.assert_called_once_with(request)
        assert signed == {"Content-Type": "application/json", "authorization": "Bearer tok"}

    def test_skips_refresh_when_valid(self):
        creds = _fake_credentials(valid=True)
        ScopedSigner(creds, request=MagicMock()).apply({})
        creds.refresh.assert_not_called()

    def test_does_not_mutate_input_headers(self):
        creds = _fake_credentials(valid=True)
        headers = {"Content-Type": "application/json"}
        ScopedSigner(creds, request=MagicMock()).apply(headers)
        assert headers == {"Content-Type": "application/json"}


class TestGoogleCredential:
    def test_key_file_uses_service_account(self):
        with patch(
            "testlab.core.client.credentials.service_account.Credentials.from_service_account_file"
        ) as from_file:
            signer = GoogleCredential("key.json").get_google_credential(SCOPES)

        from_file.assert_called_once_with("key.json", scopes=SCOPES)
        assert signer.credentials is from_file.return_value

    def test_default_credentials_without_key_file(self):
        creds = MagicMock()
        with patch("testlab.core.client.credentials.google.auth.default", return_value=(creds, "proj")) as default:
            signer = GoogleCredential().get_google_credential(SCOPES)

        default.assert_called_once_with(scopes=SCOPES)
        assert signer.credentials is creds
