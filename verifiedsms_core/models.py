"""
verifiedsms_core.models
-----------------------
Data model for the sender side of Verified SMS:

- Agent: the sending identity and its EC private key
- UserKey: a public key registered for a recipient phone number
- MessageSubmission: one (hash, agent id) entry of a submission batch
- VerificationOutcome / VerificationResult: the tri-state verification answer
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from .errors import DecodingError, VerifiedSMSError
from .utils import b64e


@dataclass(frozen=True)
class Agent:
    agent_id: str
    private_key: ec.EllipticCurvePrivateKey

    @classmethod
    def from_pem(cls, agent_id: str, pem_data: bytes, password: Optional[bytes] = None) -> "Agent":
        try:
            key = serialization.load_pem_private_key(pem_data, password=password)
        except (ValueError, TypeError) as exc:
            raise DecodingError(f"could not load agent private key: {exc}") from exc
        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise DecodingError("agent private key is not an elliptic curve key",
                                {"agent_id": agent_id, "key_type": type(key).__name__})
        return cls(agent_id=agent_id, private_key=key)

    def public_key_b64(self) -> str:
        der = self.private_key.public_key().public_bytes(
            serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
        )
        return b64e(der)

    def __repr__(self) -> str:
        return f"Agent(agent_id={self.agent_id!r}, curve={self.private_key.curve.name!r})"


@dataclass(frozen=True)
class UserKey:
    phone_number: str
    public_key: str  # base64 SubjectPublicKeyInfo

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserKey":
        if not isinstance(data, dict):
            raise DecodingError(f"user key entry must be an object, got {type(data).__name__}")
        phone_number, public_key = data.get("phoneNumber"), data.get("publicKey")
        if not isinstance(phone_number, str) or not isinstance(public_key, str):
            raise DecodingError("user key entry needs string phoneNumber and publicKey",
                                {"phoneNumber": type(phone_number).__name__,
                                 "publicKey": type(public_key).__name__})
        return cls(phone_number=phone_number, public_key=public_key)


@dataclass(frozen=True)
class MessageSubmission:
    hash: str  # base64 message hash
    agent_id: str

    def to_dict(self) -> Dict[str, str]:
        return {"hash": self.hash, "agentId": self.agent_id}


class VerificationOutcome(str, Enum):
    VERIFIED = "verified"
    NOT_SUPPORTED = "not_supported"
    ERROR = "error"


@dataclass(frozen=True)
class VerificationResult:
    outcome: VerificationOutcome
    error: Optional[VerifiedSMSError] = None
    hashes_submitted: int = 0

    @property
    def verified(self) -> bool:
        return self.outcome is VerificationOutcome.VERIFIED

    def __iter__(self) -> Iterator[Any]:
        # verified, err = partner.mark_as_verified(...)
        yield self.verified
        yield self.error

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "error": self.error.to_dict() if self.error else None,
            "hashes_submitted": self.hashes_submitted,
        }

    @classmethod
    def verified_with(cls, count: int) -> "VerificationResult":
        return cls(VerificationOutcome.VERIFIED, hashes_submitted=count)

    @classmethod
    def not_supported(cls) -> "VerificationResult":
        return cls(VerificationOutcome.NOT_SUPPORTED)

    @classmethod
    def failed(cls, error: VerifiedSMSError) -> "VerificationResult":
        return cls(VerificationOutcome.ERROR, error=error)
