from typing import Dict, List, Optional, Sequence

from verifiedsms_core.models import MessageSubmission, UserKey
from verifiedsms_core.transport.transport_base import VerifiedSMSService


class InMemoryVerifiedSMSService(VerifiedSMSService):
    """
    Dict-backed stand-in for the Verified SMS API.

    ``lookup_error`` / ``submit_error`` make the matching call raise, to
    exercise failure handling without a network.
    """
    name = "memory"

    def __init__(self):
        self.keys: Dict[str, List[str]] = {}
        self.submitted: List[MessageSubmission] = []
        self.lookup_calls: List[List[str]] = []
        self.submit_calls = 0
        self.lookup_error: Optional[Exception] = None
        self.submit_error: Optional[Exception] = None

    def register_key(self, phone_number: str, public_key_b64: str):
        self.keys.setdefault(phone_number, []).append(public_key_b64)

    # lookup
    def batch_get_keys(self, phone_numbers: Sequence[str]) -> List[UserKey]:
        self.lookup_calls.append(list(phone_numbers))
        if self.lookup_error:
            raise self.lookup_error
        return [
            UserKey(phone_number=number, public_key=key)
            for number in phone_numbers
            for key in self.keys.get(number, [])
        ]

    # submission
    def batch_create(self, messages: Sequence[MessageSubmission]) -> None:
        self.submit_calls += 1
        if self.submit_error:
            raise self.submit_error
        self.submitted.extend(messages)

    def submitted_hashes(self, agent_id: Optional[str] = None) -> List[str]:
        return [m.hash for m in self.submitted if agent_id is None or m.agent_id == agent_id]

