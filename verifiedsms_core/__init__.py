"""
Verified SMS Core
=================
Sender-side hash derivation and verification workflow for Verified SMS.

Provides:
- ECDH (secp384r1) agreement with on-curve validation and HKDF-SHA256 message hashes
- Delivery variants of a message text
- Key lookup / hash submission over the Verified SMS HTTPS API (or in memory)
- Partner.mark_as_verified(): the verified / not_supported / error decision
"""

from .constants import __version__
from .config import VerifiedSMSConfig, load_config
from .errors import (
    VerifiedSMSError, ValidationError, TransportError, DecodingError, DerivationError, ConfigError,
)
from .models import Agent, UserKey, MessageSubmission, VerificationOutcome, VerificationResult
from .crypto import ecdh_shared_secret, derive_message_hash, hash_for_message, load_public_key
from .variants import message_variants
from .keys import resolve_public_keys
from .partner import Partner

__all__ = [
    "__version__",
    "Agent",
    "ConfigError",
    "DecodingError",
    "DerivationError",
    "MessageSubmission",
    "Partner",
    "TransportError",
    "UserKey",
    "ValidationError",
    "VerificationOutcome",
    "VerificationResult",
    "VerifiedSMSConfig",
    "VerifiedSMSError",
    "derive_message_hash",
    "ecdh_shared_secret",
    "hash_for_message",
    "load_config",
    "load_public_key",
    "message_variants",
    "resolve_public_keys",
]
