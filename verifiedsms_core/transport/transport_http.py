# verifiedsms_core/transport/transport_http.py
from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence

import requests
from google.auth import exceptions as google_exceptions

from verifiedsms_core.config import VerifiedSMSConfig
from verifiedsms_core.constants import CONTENT_TYPE
from verifiedsms_core.errors import DecodingError, TransportError
from verifiedsms_core.logger import get_logger
from verifiedsms_core.models import MessageSubmission, UserKey
from verifiedsms_core.transport.transport_base import VerifiedSMSService
from verifiedsms_core.utils import to_json_bytes

log = get_logger("verifiedsms.transport.http")


class HTTPVerifiedSMSService(VerifiedSMSService):
    """
    HTTPS JSON transport for the Verified SMS API.

    ``session`` carries authorization; in production it is the
    AuthorizedSession returned by ServiceAccountAuthenticator. Every request
    is a POST with a JSON body, the fixed User-Agent and the configured
    timeout. No retries happen here.
    """
    name = "http"

    def __init__(self, session: requests.Session, config: Optional[VerifiedSMSConfig] = None):
        self.session = session
        self.config = config or VerifiedSMSConfig()

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": CONTENT_TYPE, "User-Agent": self.config.user_agent}

    def _post(self, url: str, body: Dict[str, Any]) -> requests.Response:
        log.debug(f"[HTTP POST] → {url}")
        try:
            res = self.session.post(
                url,
                data=to_json_bytes(body),
                headers=self._headers(),
                timeout=self.config.timeout_seconds,
            )
        except (requests.RequestException, google_exceptions.GoogleAuthError) as exc:
            log.error(f"[HTTP POST] {url} failed: {exc}")
            raise TransportError(f"request to {url} failed: {exc}", {"url": url}) from exc

        if not 200 <= res.status_code <= 299:
            log.error(f"[HTTP POST] {url} → {res.status_code} {res.reason}")
            raise TransportError(
                f"bad response from Verified SMS: {res.status_code} {res.reason}",
                {"url": url, "status": str(res.status_code), "reason": str(res.reason)},
            )
        log.debug(f"[HTTP POST] {url} → {res.status_code}")
        return res

    # ------------------------------------------------------------------
    # Key lookup
    # ------------------------------------------------------------------
    def batch_get_keys(self, phone_numbers: Sequence[str]) -> List[UserKey]:
        res = self._post(self.config.lookup_url, {"phoneNumbers": list(phone_numbers)})
        try:
            payload = res.json()
        except ValueError as exc:
            raise DecodingError(f"malformed JSON from key lookup: {exc}") from exc

        if not isinstance(payload, dict):
            raise DecodingError("key lookup response must be a JSON object")
        # An empty response body means no enabled keys
        entries = payload.get("userKeys") or []
        if not isinstance(entries, list):
            raise DecodingError("userKeys must be a JSON array")
        return [UserKey.from_dict(e) for e in entries]

    # ------------------------------------------------------------------
    # Hash submission
    # ------------------------------------------------------------------
    def batch_create(self, messages: Sequence[MessageSubmission]) -> None:
        self._post(self.config.submit_url, {"messages": [m.to_dict() for m in messages]})
        log.info(f"[HTTP SUBMIT] accepted {len(messages)} hash(es)")

    def close(self) -> None:
        self.session.close()
