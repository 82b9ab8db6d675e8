"""Credential adapters that sign outgoing Test Lab requests.

The client only depends on the two small protocols below. ``GoogleCredential``
implements them on top of google-auth; token acquisition and refresh are left
entirely to that library.
"""

from typing import Dict, List, Optional, Protocol

import google.auth
from google.auth.transport.requests import Request
from google.oauth2 import service_account


class RequestSigner(Protocol):
    def apply(self, headers: Dict[str, str]) -> Dict[str, str]:
        ...


class CredentialProvider(Protocol):
    def get_google_credential(self, scopes: List[str]) -> RequestSigner:
        ...


class ScopedSigner:
    """Applies a bearer token from google-auth credentials to request headers."""

    def __init__(self, credentials, request: Optional[Request] = None):
        self.credentials = credentials
        self._request = request or Request()

    def apply(self, headers: Dict[str, str]) -> Dict[str, str]:
        if not self.credentials.valid:
            self.credentials.refresh(self._request)
        signed = dict(headers)
        self.credentials.apply(signed)
        return signed


class GoogleCredential:
    """Service account key file when a path is given, Application Default Credentials otherwise."""

    def __init__(self, key_file_path: Optional[str] = None):
        self.key_file_path = key_file_path

    def get_google_credential(self, scopes: List[str]) -> ScopedSigner:
        if self.key_file_path:
            credentials = service_account.Credentials.from_service_account_file(
                self.key_file_path, scopes=scopes
            )
        else:
            credentials, _ = google.auth.default(scopes=scopes)
        return ScopedSigner(credentials)
