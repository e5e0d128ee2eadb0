"""
verifiedsms_core.config
-----------------------
Explicit configuration for a Verified SMS partner.

Endpoints, scope, curve and hash length live here rather than in module
globals so the core can be pointed at a mock endpoint or another curve.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional
import os

from cryptography.hazmat.primitives.asymmetric import ec

from .constants import (
    API_GET_PUBLIC_KEYS_URL, API_SUBMIT_HASHES_URL, AUTH_SCOPE, USER_AGENT,
    DEFAULT_CURVE, DEFAULT_HASH_LENGTH, DEFAULT_TIMEOUT_SECONDS, DEFAULT_TRANSPORT,
)
from .errors import ConfigError

CURVES = {
    "secp256r1": ec.SECP256R1,
    "secp384r1": ec.SECP384R1,
    "secp521r1": ec.SECP521R1,
}

TRANSPORTS = ("http", "memory")

_ENV = {
    "lookup_url": "VSMS_LOOKUP_URL",
    "submit_url": "VSMS_SUBMIT_URL",
    "scope": "VSMS_SCOPE",
    "curve": "VSMS_CURVE",
    "hash_length": "VSMS_HASH_LENGTH",
    "user_agent": "VSMS_USER_AGENT",
    "timeout_seconds": "VSMS_TIMEOUT",
    "transport": "VSMS_TRANSPORT",
    "service_account_file": "VSMS_SERVICE_ACCOUNT_FILE",
    "duplicate_untrimmed_variant": "VSMS_DUPLICATE_UNTRIMMED_VARIANT",
}


def curve_for_name(name: str) -> ec.EllipticCurve:
    try:
        return CURVES[name.lower()]()
    except KeyError:
        raise ConfigError(f"unsupported curve: {name}", {"supported": ",".join(sorted(CURVES))}) from None


def _env_values() -> Dict[str, str]:
    return {name: os.environ[var] for name, var in _ENV.items() if os.getenv(var)}


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class VerifiedSMSConfig:
    lookup_url: str = API_GET_PUBLIC_KEYS_URL
    submit_url: str = API_SUBMIT_HASHES_URL
    scope: str = AUTH_SCOPE
    curve: str = DEFAULT_CURVE
    hash_length: int = DEFAULT_HASH_LENGTH
    user_agent: str = USER_AGENT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    transport: str = DEFAULT_TRANSPORT
    service_account_file: Optional[str] = None
    # Re-append the untrimmed message instead of the trimmed one (legacy parity)
    duplicate_untrimmed_variant: bool = False

    def __post_init__(self):
        curve_for_name(self.curve)
        if self.transport not in TRANSPORTS:
            raise ConfigError(f"unknown transport: {self.transport}", {"supported": ",".join(TRANSPORTS)})
        if self.hash_length <= 0:
            raise ConfigError("hash_length must be positive", {"hash_length": str(self.hash_length)})
        if self.timeout_seconds <= 0:
            raise ConfigError("timeout_seconds must be positive", {"timeout_seconds": str(self.timeout_seconds)})

    @property
    def ec_curve(self) -> ec.EllipticCurve:
        return curve_for_name(self.curve)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VerifiedSMSConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")
        values = dict(data)
        try:
            if "hash_length" in values:
                values["hash_length"] = int(values["hash_length"])
            if "timeout_seconds" in values:
                values["timeout_seconds"] = float(values["timeout_seconds"])
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"invalid numeric config value: {exc}") from exc
        if "duplicate_untrimmed_variant" in values:
            values["duplicate_untrimmed_variant"] = _as_bool(values["duplicate_untrimmed_variant"])
        if "transport" in values:
            values["transport"] = str(values["transport"]).lower()
        return cls(**values)

    @classmethod
    def from_env(cls) -> "VerifiedSMSConfig":
        return cls.from_dict(_env_values())


def load_config(config: Dict[str, Any] | None = None) -> VerifiedSMSConfig:
    """
    Resolve the runtime configuration.

    Environment variables (VSMS_*) provide the base; keys in ``config``
    override them.
    """
    data = _env_values()
    data.update(config or {})
    return VerifiedSMSConfig.from_dict(data)
