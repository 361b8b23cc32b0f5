"""Pytest fixtures: canned node replies and the in-process development node."""

import json

import httpx
import pytest

from ethgas.main import create_devnode
from ethgas.transaction import Transaction

NODE_URL = "http://node.test/"

SENDER = "0x84d82ac02AdE3a3d8a636Fb06E442ab701aA7BB4"
RECIPIENT = "0x1111111111111111111111111111111111111111"


class StubNode:
    """Answers every POST with the same reply and records what it received."""

    def __init__(self, reply=None, status_code=200, content=None, exc=None):
        self.reply = reply
        self.status_code = status_code
        self.content = content
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc(f"stubbed {self.exc.__name__}", request=request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.reply)

    @property
    def bodies(self):
        return [json.loads(r.content) for r in self.requests]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def stub_node():
    return StubNode


@pytest.fixture
def devnode_client():
    def _make():
        app = create_devnode().app
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url=NODE_URL)
    return _make


@pytest.fixture
def transfer_tx():
    return Transaction(**{
        "nonce": 123,
        "gas_price": 1000,
        "gas_limit": 1_000_000_000,
        "from": SENDER,
        "to": RECIPIENT,
        "value": 1,
        "data": b"",
        "v": 777,
        "r": 987654321,
        "s": 121212,
    })
