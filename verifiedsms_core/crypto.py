"""
verifiedsms_core.crypto
-----------------------
Cryptographic pipeline for Verified SMS message hashes:

- Curve agreement: ECDH between the agent's private key and a recipient
  device public key (base64 SubjectPublicKeyInfo), after checking that the
  supplied point lies on the configured curve (secp384r1 by default)
- Hash derivation: HKDF-SHA256 keyed by the shared secret, no salt, with
  the message bytes as the info parameter

The shared secret is the x-coordinate of the agreed point as a big-endian
integer, so leading zero bytes are dropped. Receivers compute the same
value; changing this breaks hash matching.
"""

from __future__ import annotations
from typing import Optional, Tuple

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from .constants import DEFAULT_HASH_LENGTH
from .errors import DecodingError, DerivationError, ValidationError
from .utils import b64d


def _default_curve() -> ec.EllipticCurve:
    return ec.SECP384R1()


# --------- Curve validation ----------
def is_on_curve(x: int, y: int, curve: ec.EllipticCurve) -> bool:
    try:
        ec.EllipticCurvePublicNumbers(x, y, curve).public_key()
        return True
    except ValueError:
        return False


def _coordinate_size(curve: ec.EllipticCurve) -> int:
    return (curve.key_size + 7) // 8


def _point_from_spki(der: bytes, curve: ec.EllipticCurve) -> Optional[Tuple[int, int]]:
    """
    Pull the uncompressed point out of the tail of an EC SubjectPublicKeyInfo.

    Used only when the container is rejected by the loader, to tell an
    off-curve point apart from a structurally broken container.
    """
    size = _coordinate_size(curve)
    point_len = 1 + 2 * size
    if len(der) < point_len + 1:
        return None
    point = der[-point_len:]
    # BIT STRING unused-bits byte followed by the uncompressed point marker
    if der[-point_len - 1] != 0x00 or point[0] != 0x04:
        return None
    x = int.from_bytes(point[1:1 + size], "big")
    y = int.from_bytes(point[1 + size:], "big")
    return x, y


def _off_curve(x: int, y: int, key_curve: str, curve: ec.EllipticCurve) -> ValidationError:
    return ValidationError(
        f"Verified SMS public keys should be on curve {curve.name} but this public key is not on this curve.",
        {
            "public_key.x": str(x),
            "public_key.y": str(y),
            "public_key.curve_name": key_curve,
            "expected_curve": curve.name,
        },
    )


def load_public_key(public_key_b64: str, curve: Optional[ec.EllipticCurve] = None) -> ec.EllipticCurvePublicKey:
    """
    Decode a base64 SubjectPublicKeyInfo into a public key on ``curve``.

    Raises DecodingError for bad base64, a broken container or a non-EC key,
    and ValidationError when the point does not satisfy the curve equation.
    """
    curve = curve or _default_curve()
    der = b64d(public_key_b64)

    try:
        key = serialization.load_der_public_key(der)
    except (ValueError, UnsupportedAlgorithm) as exc:
        point = _point_from_spki(der, curve)
        if point is not None and not is_on_curve(*point, curve):
            raise _off_curve(point[0], point[1], "unknown", curve) from exc
        raise DecodingError(f"malformed public key container: {exc}") from exc

    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise DecodingError("public key is not an elliptic curve key", {"key_type": type(key).__name__})

    numbers = key.public_numbers()
    if not is_on_curve(numbers.x, numbers.y, curve):
        raise _off_curve(numbers.x, numbers.y, key.curve.name, curve)

    return ec.EllipticCurvePublicNumbers(numbers.x, numbers.y, curve).public_key()


# --------- ECDH (curve agreement) ----------
def ecdh_shared_secret(
    private_key: ec.EllipticCurvePrivateKey,
    public_key_b64: str,
    curve: Optional[ec.EllipticCurve] = None,
) -> bytes:
    curve = curve or _default_curve()
    if private_key.curve.name != curve.name:
        raise ValidationError(
            f"agent private key should be on curve {curve.name}",
            {"private_key.curve_name": private_key.curve.name, "expected_curve": curve.name},
        )

    peer = load_public_key(public_key_b64, curve)
    shared = private_key.exchange(ec.ECDH(), peer)
    # x-coordinate as a minimal big-endian integer
    return shared.lstrip(b"\x00")


# --------- HKDF (message hash) ----------
def derive_message_hash(shared_secret: bytes, message: bytes, length: int = DEFAULT_HASH_LENGTH) -> bytes:
    try:
        hkdf = HKDF(algorithm=hashes.SHA256(), length=length, salt=None, info=message)
        return hkdf.derive(shared_secret)
    except ValueError as exc:
        raise DerivationError(f"could not derive a {length} byte message hash: {exc}",
                              {"length": str(length)}) from exc


def hash_for_message(
    public_key_b64: str,
    private_key: ec.EllipticCurvePrivateKey,
    message: bytes,
    curve: Optional[ec.EllipticCurve] = None,
    length: int = DEFAULT_HASH_LENGTH,
) -> bytes:
    """Hash of ``message`` as sent by the holder of ``private_key`` to the owner of ``public_key_b64``."""
    shared_secret = ecdh_shared_secret(private_key, public_key_b64, curve)
    return derive_message_hash(shared_secret, message, length)
