"""
verifiedsms_core.auth
---------------------
Service-account authentication for the Verified SMS API.

The partner's service-account JSON (``client_email`` + PEM ``private_key``)
is exchanged for OAuth2 access tokens by google-auth; the returned
AuthorizedSession attaches and refreshes the bearer token on every request.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import json

from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

from .constants import AUTH_SCOPE, GOOGLE_TOKEN_URI
from .errors import ConfigError, DecodingError
from .logger import get_logger

log = get_logger("verifiedsms.auth")

REQUIRED_FIELDS = ("client_email", "private_key")


class ServiceAccountAuthenticator:
    def __init__(self, service_account_json: str | bytes, scope: str = AUTH_SCOPE):
        self.scope = scope
        self.info = self._parse(service_account_json)

    @staticmethod
    def _parse(raw: str | bytes) -> Dict[str, Any]:
        try:
            info = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise DecodingError(f"service account credentials are not valid JSON: {exc}") from exc
        if not isinstance(info, dict):
            raise DecodingError("service account credentials must be a JSON object")

        missing = [f for f in REQUIRED_FIELDS if not info.get(f)]
        if missing:
            raise DecodingError("service account credentials are missing fields",
                                {"missing": ",".join(missing)})
        info.setdefault("token_uri", GOOGLE_TOKEN_URI)
        return info

    @classmethod
    def from_file(cls, path: str, scope: str = AUTH_SCOPE) -> "ServiceAccountAuthenticator":
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as exc:
            raise ConfigError(f"cannot read service account file: {exc}", {"path": path}) from exc
        return cls(raw, scope)

    @property
    def client_email(self) -> str:
        return self.info["client_email"]

    def credentials(self) -> service_account.Credentials:
        try:
            return service_account.Credentials.from_service_account_info(self.info, scopes=[self.scope])
        except ValueError as exc:
            raise DecodingError(f"invalid service account private key: {exc}") from exc

    def session(self, credentials: Optional[service_account.Credentials] = None) -> AuthorizedSession:
        log.info(f"[AUTH] authorized session for {self.client_email} scope={self.scope}")
        return AuthorizedSession(credentials or self.credentials())
