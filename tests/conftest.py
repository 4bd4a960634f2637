"""Shared fixtures: a stub resolver that records every call."""

import ipaddress
import threading
import time
from collections import Counter

import pytest

from dnslookup.modules.dns_records import MXRecord, RecordKind, ResolutionFailed


class StubResolver:
    """
    Resolver double. Each record kind answers from a queue of responses;
    an exception instance in the queue is raised instead of returned.
    The last response repeats once the queue is drained.
    """

    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay
        self.calls: Counter[str] = Counter()
        self.reverse_calls: list[str] = []
        self._lock = threading.Lock()
        self._responses: dict[str, list] = {
            "A": [()],
            "CNAME": [""],
            "MX": [()],
            "NS": [()],
            "TXT": [()],
        }
        self.reverse: dict[str, object] = {}

    def respond(self, kind: str, *responses) -> "StubResolver":
        self._responses[kind] = list(responses)
        return self

    def fail_everything(self) -> "StubResolver":
        for kind in self._responses:
            self._responses[kind] = [ResolutionFailed(RecordKind(kind), "stub", "down")]
        return self

    def _answer(self, kind: str):
        with self._lock:
            self.calls[kind] += 1
            queue = self._responses[kind]
            response = queue.pop(0) if len(queue) > 1 else queue[0]
        if self.delay:
            time.sleep(self.delay)
        if isinstance(response, Exception):
            raise response
        return response

    def resolve_addresses(self, name):
        return self._answer("A")

    def resolve_canonical_name(self, name):
        return self._answer("CNAME")

    def resolve_mail_exchange(self, name):
        return self._answer("MX")

    def resolve_name_servers(self, name):
        return self._answer("NS")

    def resolve_text(self, name):
        return self._answer("TXT")

    def resolve_reverse(self, address):
        with self._lock:
            self.reverse_calls.append(address)
        response = self.reverse.get(address, ())
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def resolver() -> StubResolver:
    return StubResolver()


@pytest.fixture
def example_resolver() -> StubResolver:
    stub = StubResolver()
    stub.respond("A", (ipaddress.ip_address("93.184.216.34"),))
    stub.respond("CNAME", "example.com.")
    stub.respond("MX", (MXRecord(exchange=".", preference=0),))
    stub.respond("NS", ("a.iana-servers.net.", "b.iana-servers.net."))
    stub.respond("TXT", ("v=spf1 -all",))
    stub.reverse["93.184.216.34"] = ("example.com.",)
    return stub
