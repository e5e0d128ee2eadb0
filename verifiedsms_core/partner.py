"""
verifiedsms_core.partner
------------------------
Sender-side Verified SMS workflow.

mark_as_verified() runs one single pass, with no retries:

1. resolve the recipient's public keys (none → not_supported)
2. expand the message into its delivery variants
3. derive one hash per (key, variant), keys outer and variants inner
4. submit the whole batch in one request
5. map the outcome to verified / error

Nothing is submitted unless every hash in the batch was derived.
"""

from __future__ import annotations
from typing import List, Optional

from .config import VerifiedSMSConfig
from .crypto import hash_for_message
from .errors import VerifiedSMSError
from .keys import resolve_public_keys
from .logger import get_logger
from .models import Agent, MessageSubmission, VerificationResult
from .transport.transport_base import HashSubmissionService, KeyLookupService
from .utils import b64e, mask_phone_number
from .variants import encode_variants, message_variants

log = get_logger("verifiedsms.partner")


class Partner:
    def __init__(
        self,
        lookup: KeyLookupService,
        submission: Optional[HashSubmissionService] = None,
        config: Optional[VerifiedSMSConfig] = None,
    ):
        self.lookup = lookup
        self.submission = submission if submission is not None else lookup
        self.config = config or VerifiedSMSConfig()

    def get_public_keys(self, phone_number: str) -> List[str]:
        """Base64 public keys registered for ``phone_number``; raises on lookup failure."""
        return resolve_public_keys(self.lookup, phone_number)

    def build_submissions(self, public_keys: List[str], agent: Agent, message: str) -> List[MessageSubmission]:
        """
        One submission per (public key, message variant), keys outer.

        Raises on the first key that cannot be used; no partial batch is returned.
        """
        curve = self.config.ec_curve
        variants = encode_variants(
            message_variants(message, duplicate_untrimmed=self.config.duplicate_untrimmed_variant)
        )

        submissions = []
        for public_key in public_keys:
            for variant in variants:
                digest = hash_for_message(public_key, agent.private_key, variant,
                                          curve=curve, length=self.config.hash_length)
                submissions.append(MessageSubmission(hash=b64e(digest), agent_id=agent.agent_id))
        return submissions

    def mark_as_verified(self, phone_number: str, agent: Agent, message: str) -> VerificationResult:
        """
        Register ``message`` as sent by ``agent`` to ``phone_number``.

        Returns not_supported only when the phone number has no keys; any
        failure after that is an error result carrying the cause.
        """
        masked = mask_phone_number(phone_number)
        try:
            public_keys = self.get_public_keys(phone_number)
            if not public_keys:
                log.info(f"[VERIFY] {masked} has no Verified SMS keys, not supported")
                return VerificationResult.not_supported()

            submissions = self.build_submissions(public_keys, agent, message)
            log.debug(f"[VERIFY] {masked} keys={len(public_keys)} hashes={len(submissions)}")
            self.submission.batch_create(submissions)
        except VerifiedSMSError as err:
            log.error(f"[VERIFY] {masked} agent={agent.agent_id} failed: {err.kind}: {err}")
            return VerificationResult.failed(err)
        except Exception as exc:
            log.exception(f"[VERIFY] {masked} agent={agent.agent_id} unexpected failure")
            err = VerifiedSMSError(f"unexpected failure: {exc}", {"exception": type(exc).__name__})
            err.__cause__ = exc
            return VerificationResult.failed(err)

        log.info(f"[VERIFY] {masked} agent={agent.agent_id} verified with {len(submissions)} hash(es)")
        return VerificationResult.verified_with(len(submissions))
