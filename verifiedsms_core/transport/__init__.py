# verifiedsms_core/transport/__init__.py
from typing import Optional

import requests

from verifiedsms_core.config import VerifiedSMSConfig
from verifiedsms_core.errors import ConfigError
from verifiedsms_core.transport.transport_base import (
    HashSubmissionService, KeyLookupService, VerifiedSMSService,
)
from verifiedsms_core.transport.transport_http import HTTPVerifiedSMSService
from verifiedsms_core.transport.transport_memory import InMemoryVerifiedSMSService


def service_factory(config: Optional[VerifiedSMSConfig] = None,
                    session: Optional[requests.Session] = None) -> VerifiedSMSService:
    """
    config.transport:
      - "http"   → Verified SMS HTTPS API (authorized session required)
      - "memory" → in-process fake, for tests and dry runs
    """
    config = config or VerifiedSMSConfig()

    if config.transport == "memory":
        return InMemoryVerifiedSMSService()

    if session is None:
        if not config.service_account_file:
            raise ConfigError("http transport needs a session or VSMS_SERVICE_ACCOUNT_FILE")
        from verifiedsms_core.auth import ServiceAccountAuthenticator
        session = ServiceAccountAuthenticator.from_file(config.service_account_file, config.scope).session()

    return HTTPVerifiedSMSService(session, config)


__all__ = [
    "HashSubmissionService",
    "KeyLookupService",
    "VerifiedSMSService",
    "HTTPVerifiedSMSService",
    "InMemoryVerifiedSMSService",
    "service_factory",
]
