"""Service-account credentials and Drive service construction."""

from __future__ import annotations

import json
from typing import IO, Any, Optional, Sequence, Union

import google_auth_httplib2
import httplib2
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.http import set_user_agent

from gdrivedl.errors import AuthError, InvalidInputError


class ServiceAccountClient:
    """Create service-account credentials and Drive API service objects."""

    def __init__(self, info: dict[str, Any]) -> None:
        if not isinstance(info, dict):
            raise InvalidInputError("Service account info must be a dict")
        if info.get("type") != "service_account":
            raise AuthError(
                "Credential is not a service account key",
                details={"type": info.get("type")},
            )
        self._info = info

    @classmethod
    def from_stream(cls, stream: IO[Union[str, bytes]]) -> ServiceAccountClient:
        """
        Load a service-account JSON key from an open text or binary stream.

        Raises:
            AuthError: if the stream cannot be read or is not valid JSON.
        """
        try:
            raw = stream.read()
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            info = json.loads(raw)
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            raise AuthError("Failed to read service account credentials", cause=exc) from exc
        return cls(info)

    @classmethod
    def from_file(cls, path: str) -> ServiceAccountClient:
        try:
            with open(path, "rb") as f:
                return cls.from_stream(f)
        except OSError as exc:
            raise AuthError(
                "Failed to open service account file",
                details={"path": path},
                cause=exc,
            ) from exc

    @property
    def client_email(self) -> str | None:
        value = self._info.get("client_email")
        return value if isinstance(value, str) else None

    def get_credentials(self, scopes: Sequence[str]):
        """
        Return scoped service-account credentials.

        Returns:
            google.oauth2.service_account.Credentials

        Raises:
            AuthError: if the key material is incomplete or malformed.
            InvalidInputError: if scopes is invalid.
        """
        if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
            raise InvalidInputError("scopes must be a non-empty sequence of strings")

        try:
            return service_account.Credentials.from_service_account_info(
                self._info,
                scopes=list(scopes),
            )
        except Exception as exc:
            raise AuthError(
                "Failed to parse service account credentials",
                details={"client_email": self.client_email},
                cause=exc,
            ) from exc

    def build_drive_service(
        self,
        scopes: Sequence[str],
        *,
        timeout_sec: float,
        application_name: Optional[str] = None,
    ):
        """
        Build a Drive v3 service whose requests use the given timeout.

        application_name, when given, is sent as the User-Agent of every request.

        Returns:
            googleapiclient.discovery.Resource
        """
        creds = self.get_credentials(scopes)
        try:
            http = google_auth_httplib2.AuthorizedHttp(
                creds,
                http=httplib2.Http(timeout=timeout_sec),
            )
            if application_name:
                http = set_user_agent(http, application_name)
            return build("drive", "v3", http=http, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc
