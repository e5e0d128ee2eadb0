from __future__ import annotations
from typing import List, Sequence

from verifiedsms_core.models import MessageSubmission, UserKey


class KeyLookupService:
    """
    Capability contract for the key lookup endpoint.

    The wire shape accepts a batch of phone numbers; the core asks for one
    phone number per call.
    """
    name: str = "base"

    def batch_get_keys(self, phone_numbers: Sequence[str]) -> List[UserKey]:
        raise NotImplementedError


class HashSubmissionService:
    """
    Capability contract for the hash submission endpoint.

    ``batch_create`` returns only when the whole batch was accepted and
    raises TransportError otherwise.
    """
    name: str = "base"

    def batch_create(self, messages: Sequence[MessageSubmission]) -> None:
        raise NotImplementedError


class VerifiedSMSService(KeyLookupService, HashSubmissionService):
    """Both endpoints behind one transport."""

    def close(self) -> None:
        return
