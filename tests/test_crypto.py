import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from verifiedsms_core.crypto import (
    derive_message_hash, ecdh_shared_secret, hash_for_message, is_on_curve, load_public_key,
)
from verifiedsms_core.errors import DecodingError, DerivationError, ValidationError
from verifiedsms_core.utils import b64d, b64e

from conftest import spki_b64


def test_agent_and_device_agree(agent, device_key, device_pub_b64):
    sender = ecdh_shared_secret(agent.private_key, device_pub_b64)
    receiver = ecdh_shared_secret(device_key, agent.public_key_b64())
    assert sender == receiver


def test_shared_secret_is_minimal_big_endian_x(agent, device_key, device_pub_b64):
    raw = agent.private_key.exchange(ec.ECDH(), device_key.public_key())
    assert ecdh_shared_secret(agent.private_key, device_pub_b64) == raw.lstrip(b"\x00")


def fixed_key(d):
    return ec.derive_private_key(d, ec.SECP384R1())


@pytest.mark.parametrize("device_d, message, expected", [
    (2, b"hello!", "YLsg8vAsmKfMzh4UKpw1Zfqu9YZiyMHqsw4p6CHbJdo="),
    (2, b"  hello  ", "yzFjYkJyp8Ns7C60/J4smmwXqRLroRbPaE5cy4/Tetw="),
    # x-coordinate of the shared point starts with a zero byte
    (189, b"hello!", "6lsLo7zfskOyHmLb0w7sZaMQUHtRAcLNLPRfbFlhtYI="),
])
def test_known_p384_vectors(device_d, message, expected):
    agent_key = fixed_key(123456789)
    device_pub = spki_b64(fixed_key(device_d).public_key())
    assert b64e(hash_for_message(device_pub, agent_key, message)) == expected


def test_shared_secret_drops_leading_zero_bytes():
    agent_key = fixed_key(123456789)
    device = fixed_key(189)
    raw = agent_key.exchange(ec.ECDH(), device.public_key())
    assert raw[0] == 0

    secret = ecdh_shared_secret(agent_key, spki_b64(device.public_key()))
    assert len(secret) < 48
    assert secret[0] != 0
    assert int.from_bytes(secret, "big") == int.from_bytes(raw, "big")


def test_hkdf_sha256_rfc5869_vector():
    # RFC 5869 A.3: SHA-256, empty salt and info, first 32 bytes of OKM
    okm = derive_message_hash(b"\x0b" * 22, b"")
    assert okm == bytes.fromhex("8da4e775a563c18f715f802a063c5a31b8a11f5c5ee1879ec3454e5f3c738d2d")


def test_message_hash_is_hkdf_of_shared_secret(agent, device_pub_b64):
    message = "Your code is 1234".encode("utf-8")
    secret = ecdh_shared_secret(agent.private_key, device_pub_b64)
    expected = HKDF(algorithm=hashes.SHA256(), length=32, salt=None, info=message).derive(secret)

    digest = hash_for_message(device_pub_b64, agent.private_key, message)
    assert digest == expected
    assert len(digest) == 32


def test_hash_is_deterministic(agent, device_pub_b64):
    first = hash_for_message(device_pub_b64, agent.private_key, b"hello!")
    second = hash_for_message(device_pub_b64, agent.private_key, b"hello!")
    assert first == second


def test_trimmed_message_hashes_differently(agent, device_pub_b64):
    padded = hash_for_message(device_pub_b64, agent.private_key, b"  hello  ")
    trimmed = hash_for_message(device_pub_b64, agent.private_key, b"hello")
    assert padded != trimmed


def test_off_curve_point_rejected_with_coordinates(agent, device_pub_b64):
    der = b64d(device_pub_b64)
    tampered = b64e(der[:-1] + bytes([der[-1] ^ 0x01]))

    with pytest.raises(ValidationError) as exc_info:
        ecdh_shared_secret(agent.private_key, tampered)

    err = exc_info.value
    assert err.kind == "precondition_failed"
    assert err.metadata["expected_curve"] == "secp384r1"
    assert int(err.metadata["public_key.y"]) == int.from_bytes(der[-48:], "big") ^ 0x01
    assert "public_key.x" in err.metadata


def test_key_on_another_curve_rejected(agent):
    p256 = ec.generate_private_key(ec.SECP256R1())
    with pytest.raises(ValidationError) as exc_info:
        ecdh_shared_secret(agent.private_key, spki_b64(p256.public_key()))
    assert exc_info.value.metadata["public_key.curve_name"] == "secp256r1"


def test_agent_key_on_wrong_curve_rejected(device_pub_b64):
    p256_agent = ec.generate_private_key(ec.SECP256R1())
    with pytest.raises(ValidationError):
        ecdh_shared_secret(p256_agent, device_pub_b64)


def test_malformed_public_keys():
    with pytest.raises(DecodingError):
        load_public_key("not base64!!")
    with pytest.raises(DecodingError):
        load_public_key(b64e(b"\x30\x03\x02\x01\x01"))

    ed_pub = ed25519.Ed25519PrivateKey.generate().public_key()
    with pytest.raises(DecodingError):
        load_public_key(spki_b64(ed_pub))


def test_is_on_curve(device_key):
    numbers = device_key.public_key().public_numbers()
    assert is_on_curve(numbers.x, numbers.y, ec.SECP384R1())
    assert not is_on_curve(numbers.x, numbers.y + 1, ec.SECP384R1())


def test_oversized_hash_length_fails():
    with pytest.raises(DerivationError):
        derive_message_hash(b"secret", b"msg", length=255 * 32 + 1)
