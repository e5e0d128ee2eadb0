import json

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from google.auth.transport.requests import AuthorizedSession

from verifiedsms_core.config import VerifiedSMSConfig, load_config
from verifiedsms_core.errors import ConfigError
from verifiedsms_core.transport import (
    HTTPVerifiedSMSService, InMemoryVerifiedSMSService, service_factory,
)


def test_memory_mode(monkeypatch):
    monkeypatch.setenv("VSMS_TRANSPORT", "memory")
    assert isinstance(service_factory(load_config()), InMemoryVerifiedSMSService)


def test_http_mode_with_session():
    session = requests.Session()
    svc = service_factory(VerifiedSMSConfig(), session=session)
    assert isinstance(svc, HTTPVerifiedSMSService)
    assert svc.session is session


def test_http_mode_needs_credentials():
    with pytest.raises(ConfigError):
        service_factory(VerifiedSMSConfig())


def test_http_mode_from_service_account_file(tmp_path):
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    pem = key.private_bytes(
        serialization.Encoding.PEM, serialization.PrivateFormat.PKCS8, serialization.NoEncryption()
    ).decode("ascii")
    path = tmp_path / "sa.json"
    path.write_text(json.dumps({"client_email": "p@example.iam.gserviceaccount.com", "private_key": pem}))

    svc = service_factory(VerifiedSMSConfig(service_account_file=str(path)))

    assert isinstance(svc.session, AuthorizedSession)
