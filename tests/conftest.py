"""
Shared pytest fixtures and transport fakes for the client tests.

No test touches the network: every builder is handed a FakeTransport that
records the prepared requests it is asked to send and answers with canned
responses.
"""

from __future__ import annotations

import io
import json

import pytest
import requests


# ---------------------------------------------------------------------------
# Response / transport fakes
# ---------------------------------------------------------------------------

class FakeResponse:
    """Minimal stand-in for ``requests.Response`` that records closing."""

    def __init__(self, status_code: int = 200, body: bytes | None = b"", read_error=None):
        self.status_code = status_code
        self._body = body
        self._read_error = read_error
        self.closed = False

    @property
    def content(self):
        if self._read_error is not None:
            raise self._read_error
        return self._body

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def json_response(status_code: int, document) -> FakeResponse:
    return FakeResponse(status_code, json.dumps(document).encode("utf-8"))


def make_response(status_code: int, body: bytes | None) -> requests.Response:
    """Real ``requests.Response`` backed by an in-memory stream (or no stream)."""
    response = requests.Response()
    response.status_code = status_code
    response.raw = io.BytesIO(body) if body is not None else None
    return response


class FakeTransport:
    """
    Records every prepared request and answers from a queue or a router.

    Args:
        responses: Returned in order, one per send.
        error: Raised from every send instead of answering.
        router: Callable ``(prepared) -> response`` used instead of the queue.
    """

    def __init__(self, *responses, error=None, router=None):
        self.responses = list(responses)
        self.error = error
        self.router = router
        self.sent: list[requests.PreparedRequest] = []
        self.send_kwargs: list[dict] = []

    def send(self, prepared, **kwargs):
        self.sent.append(prepared)
        self.send_kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.router is not None:
            return self.router(prepared)
        return self.responses.pop(0)

    @property
    def urls(self) -> list[str]:
        return [p.url for p in self.sent]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ok_transport():
    """Transport answering a single 200 with a small JSON body."""
    return FakeTransport(FakeResponse(200, b'{"id":"1"}'))
