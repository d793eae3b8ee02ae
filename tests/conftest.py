"""
Shared pytest fixtures and configuration for cartsync tests.
"""

import asyncio
import json
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

import httpx
import pytest
import pytest_asyncio

from cartsync import CartApp, CartClient, CartStore
from cartsync.observable import Observable

BASE_URL = "https://cartsync-test.example.com"


@dataclass
class PlannedResponse:
    status_code: int = 200
    error: Optional[Exception] = None
    gate: Optional[asyncio.Event] = None


class FakeDatastore:
    """
    Stand-in for the remote JSON datastore, served through httpx.MockTransport.

    Requests are recorded. Each request consumes the next planned response
    when one is queued, otherwise it gets `default_status`.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.default_status = 200
        self._plan: Deque[PlannedResponse] = deque()

    def plan(
        self,
        status_code: int = 200,
        error: Optional[Exception] = None,
        hold: bool = False,
    ) -> Optional[asyncio.Event]:
        gate = asyncio.Event() if hold else None
        self._plan.append(PlannedResponse(status_code, error, gate))
        return gate

    @property
    def bodies(self) -> list:
        return [json.loads(request.content) for request in self.requests]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        planned = self._plan.popleft() if self._plan else PlannedResponse(self.default_status)
        if planned.gate is not None:
            await planned.gate.wait()
        if planned.error is not None:
            raise planned.error
        if planned.status_code >= 400:
            return httpx.Response(planned.status_code, json={"error": "Permission denied"})
        return httpx.Response(planned.status_code, content=request.content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(autouse=True)
def reset_notification_state():
    """Reset propagation state before each test to prevent state leakage."""
    Observable._reset_notification_state()


@pytest.fixture
def store():
    """Provide a fresh CartStore for tests that need it."""
    return CartStore()


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def datastore():
    return FakeDatastore()


@pytest.fixture
def offline_client(datastore):
    """A client for tests that never await it; closed on teardown."""
    cart_client = CartClient(BASE_URL, transport=datastore.transport())
    yield cart_client
    asyncio.run(cart_client.aclose())


@pytest_asyncio.fixture
async def client(datastore):
    async with CartClient(BASE_URL, transport=datastore.transport()) as cart_client:
        yield cart_client


@pytest_asyncio.fixture
async def app(store, client):
    cart_app = CartApp(store, client)
    yield cart_app
    cart_app.unmount()
    await cart_app.wait_idle()
