import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from verifiedsms_core.models import Agent
from verifiedsms_core.transport.transport_memory import InMemoryVerifiedSMSService
from verifiedsms_core.utils import b64e


def spki_b64(public_key) -> str:
    return b64e(public_key.public_bytes(
        serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    ))


@pytest.fixture
def agent():
    return Agent(agent_id="bank-alerts", private_key=ec.generate_private_key(ec.SECP384R1()))


@pytest.fixture
def device_key():
    """Private key of a recipient device enrolled in Verified SMS."""
    return ec.generate_private_key(ec.SECP384R1())


@pytest.fixture
def device_pub_b64(device_key):
    return spki_b64(device_key.public_key())


@pytest.fixture
def service():
    return InMemoryVerifiedSMSService()
