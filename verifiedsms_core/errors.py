"""
verifiedsms_core.errors
-----------------------
Error taxonomy for the Verified SMS sender core.

Every error is a tagged failure: a ``kind`` string, a human readable
message carrying context, and optional structured ``metadata``.
"""

from __future__ import annotations
from typing import Dict, Optional, Any


class VerifiedSMSError(Exception):
    kind: str = "internal"

    def __init__(self, message: str, metadata: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.metadata: Dict[str, str] = dict(metadata or {})

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message, "metadata": self.metadata}

    def __str__(self) -> str:
        if not self.metadata:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in sorted(self.metadata.items()))
        return f"{self.message} ({details})"


class ValidationError(VerifiedSMSError):
    """A key is unusable: not a point on the configured curve. Never retried."""
    kind = "precondition_failed"


class TransportError(VerifiedSMSError):
    kind = "transport"


class DecodingError(VerifiedSMSError):
    kind = "decoding"


class DerivationError(VerifiedSMSError):
    kind = "derivation"


class ConfigError(VerifiedSMSError):
    kind = "config"
