import asyncio
import json

import httpx
import pytest

from animal_facts.schemas.fact import Fact


class TrickleStream(httpx.AsyncByteStream):
    """Response body that arrives one byte at a time."""

    def __init__(self, body: bytes, interval: float):
        self.body = body
        self.interval = interval

    async def __aiter__(self):
        for i in range(len(self.body)):
            await asyncio.sleep(self.interval)
            yield self.body[i:i + 1]


class Upstream:
    """A fake upstream behind httpx.MockTransport; records every request."""

    def __init__(self, status_code=200, payload=None, text=None, exc=None, delay=0.0, trickle=None):
        self.status_code = status_code
        self.payload = payload
        self.text = text
        self.exc = exc
        self.delay = delay
        self.trickle = trickle
        self.requests = []
        self.cancelled = False

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise

        body = self.text.encode() if self.text is not None else json.dumps(self.payload).encode()
        headers = {"content-type": "application/json"}
        if self.trickle:
            return httpx.Response(self.status_code, headers=headers, stream=TrickleStream(body, self.trickle))
        return httpx.Response(self.status_code, headers=headers, content=body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


class StubProvider:
    def __init__(self, kind, text=None, error=None):
        self.kind = kind
        self.text = text or f"A {kind} fact."
        self.error = error
        self.calls = 0

    async def fetch(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return Fact(text=self.text, animal=self.kind)


@pytest.fixture
def upstream():
    def _make(**kwargs):
        return Upstream(**kwargs)

    return _make


@pytest.fixture
def stub_provider():
    def _make(kind, text=None, error=None):
        return StubProvider(kind, text=text, error=error)

    return _make
