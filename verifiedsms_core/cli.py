"""
Operator CLI for Verified SMS.

Usage:
    export VSMS_SERVICE_ACCOUNT_FILE=partner-service-account.json
    python -m verifiedsms_core keys +447700900123
    python -m verifiedsms_core verify --agent-id my-agent --agent-key agent.pem +447700900123 "Your code is 1234"
    python -m verifiedsms_core hash --agent-key agent.pem --public-key MHYwEAYH... "Your code is 1234"
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from verifiedsms_core.config import load_config
from verifiedsms_core.crypto import hash_for_message
from verifiedsms_core.errors import VerifiedSMSError
from verifiedsms_core.models import Agent, VerificationOutcome
from verifiedsms_core.partner import Partner
from verifiedsms_core.transport import service_factory
from verifiedsms_core.utils import b64e
from verifiedsms_core.variants import message_variants


def _load_agent(agent_id: str, key_path: str) -> Agent:
    return Agent.from_pem(agent_id, Path(key_path).read_bytes())


def cmd_keys(args, config) -> int:
    service = service_factory(config)
    try:
        for key in Partner(service, config=config).get_public_keys(args.phone_number):
            print(key)
    finally:
        service.close()
    return 0


def cmd_hash(args, config) -> int:
    agent = _load_agent(args.agent_id, args.agent_key)
    variants = message_variants(args.message, duplicate_untrimmed=config.duplicate_untrimmed_variant)
    for variant in variants:
        digest = hash_for_message(args.public_key, agent.private_key, variant.encode("utf-8"),
                                  curve=config.ec_curve, length=config.hash_length)
        print(json.dumps({"variant": variant, "hash": b64e(digest)}, ensure_ascii=False))
    return 0


def cmd_verify(args, config) -> int:
    agent = _load_agent(args.agent_id, args.agent_key)
    service = service_factory(config)
    try:
        result = Partner(service, config=config).mark_as_verified(args.phone_number, agent, args.message)
    finally:
        service.close()
    print(json.dumps(result.to_dict(), indent=2))
    return 1 if result.outcome is VerificationOutcome.ERROR else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="verifiedsms", description="Verified SMS sender tools")
    parser.add_argument("--transport", choices=["http", "memory"], default=None,
                        help="Override VSMS_TRANSPORT")
    parser.add_argument("--service-account", default=None,
                        help="Service account JSON file (default: VSMS_SERVICE_ACCOUNT_FILE)")
    sub = parser.add_subparsers(dest="command", required=True)

    keys = sub.add_parser("keys", help="List public keys registered for a phone number")
    keys.add_argument("phone_number")
    keys.set_defaults(func=cmd_keys)

    hsh = sub.add_parser("hash", help="Print message hashes for one public key (offline)")
    hsh.add_argument("--agent-id", default="local")
    hsh.add_argument("--agent-key", required=True, help="PEM private key of the agent")
    hsh.add_argument("--public-key", required=True, help="Base64 recipient public key")
    hsh.add_argument("message")
    hsh.set_defaults(func=cmd_hash)

    verify = sub.add_parser("verify", help="Mark an SMS as verified")
    verify.add_argument("--agent-id", required=True)
    verify.add_argument("--agent-key", required=True, help="PEM private key of the agent")
    verify.add_argument("phone_number")
    verify.add_argument("message")
    verify.set_defaults(func=cmd_verify)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.transport:
        overrides["transport"] = args.transport
    if args.service_account:
        overrides["service_account_file"] = args.service_account

    try:
        config = load_config(overrides)
        return args.func(args, config)
    except VerifiedSMSError as err:
        print(f"error: {err.kind}: {err}", file=sys.stderr)
        return 1
    except OSError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
