import pytest

from verifiedsms_core.errors import TransportError
from verifiedsms_core.keys import resolve_public_keys
from verifiedsms_core.models import UserKey
from verifiedsms_core.transport.transport_base import KeyLookupService


class StaticLookup(KeyLookupService):
    def __init__(self, entries):
        self.entries = entries
        self.calls = []

    def batch_get_keys(self, phone_numbers):
        self.calls.append(list(phone_numbers))
        return self.entries


def test_resolve_single_number_per_call(service):
    service.register_key("+447700900123", "key-a")
    service.register_key("+447700900123", "key-b")

    assert resolve_public_keys(service, "+447700900123") == ["key-a", "key-b"]
    assert service.lookup_calls == [["+447700900123"]]


def test_unknown_number_is_empty_not_error(service):
    assert resolve_public_keys(service, "+15550100") == []


def test_entries_for_other_numbers_are_dropped(caplog):
    lookup = StaticLookup([
        UserKey("+447700900123", "mine"),
        UserKey("+447700900999", "someone-else"),
        UserKey("+447700900123", "mine-too"),
    ])
    assert resolve_public_keys(lookup, "+447700900123") == ["mine", "mine-too"]
    assert "dropped 1 key" in caplog.text


def test_lookup_failure_propagates(service):
    service.lookup_error = TransportError("lookup down")
    with pytest.raises(TransportError):
        resolve_public_keys(service, "+447700900123")
