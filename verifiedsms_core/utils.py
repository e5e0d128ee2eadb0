"""
verifiedsms_core.utils
----------------------
Base64 and JSON helpers shared by the crypto and transport layers.
Public keys and hashes cross the wire as standard (padded) base64.
"""

from __future__ import annotations
import base64, binascii, json
from typing import Any

from .errors import DecodingError


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")


def b64d(s: str) -> bytes:
    try:
        return base64.b64decode(s.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError, AttributeError) as exc:
        raise DecodingError(f"invalid base64 payload: {exc}") from exc


def to_json_bytes(obj: Any) -> bytes:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def mask_phone_number(phone_number: str) -> str:
    # Keep the last three digits for log correlation
    if len(phone_number) <= 3:
        return "***"
    return "*" * (len(phone_number) - 3) + phone_number[-3:]
