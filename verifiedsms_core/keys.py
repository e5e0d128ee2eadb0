"""Public key resolution for a single recipient phone number."""

from __future__ import annotations
from typing import List

from .logger import get_logger
from .transport.transport_base import KeyLookupService
from .utils import mask_phone_number

log = get_logger("verifiedsms.keys")


def resolve_public_keys(lookup: KeyLookupService, phone_number: str) -> List[str]:
    """
    Public keys registered for ``phone_number``, in the order the lookup
    service returned them. An empty list means the device does not take
    part in Verified SMS.

    Entries for any other phone number are dropped.
    """
    user_keys = lookup.batch_get_keys([phone_number])
    keys = [uk.public_key for uk in user_keys if uk.phone_number == phone_number]

    dropped = len(user_keys) - len(keys)
    if dropped:
        log.warning(f"[KEYS] dropped {dropped} key(s) returned for other phone numbers")
    log.debug(f"[KEYS] {mask_phone_number(phone_number)} → {len(keys)} key(s)")
    return keys
