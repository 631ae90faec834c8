"""Shared test fixtures for CheckoutScan tests."""

from __future__ import annotations

import asyncio
from typing import Callable, Dict, List, Tuple, Union

import httpx
import pytest

from checkoutscan.core.engine import Engine


Route = Union[str, Tuple[int, str], httpx.Response]


class FakeSite:
    """In-memory site served through httpx.MockTransport.

    Routes map absolute URLs to a body (200), a (status, body) pair or a
    ready-made httpx.Response. Unknown URLs answer 404. Every request is
    kept in ``requests`` for assertions.
    """

    def __init__(self, routes: Dict[str, Route] | None = None):
        self.routes: Dict[str, Route] = dict(routes or {})
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, httpx.Response):
            return route
        if isinstance(route, tuple):
            status, body = route
            return httpx.Response(status, text=body)
        return httpx.Response(200, text=route)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requested(self) -> List[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture
def site() -> FakeSite:
    return FakeSite()


@pytest.fixture
def engine_for() -> Callable[[FakeSite], Engine]:
    def _make(fake: FakeSite, **kwargs) -> Engine:
        return Engine(transport=fake.transport, **kwargs)
    return _make


@pytest.fixture
def run():
    """Run a coroutine to completion inside a sync test."""
    return asyncio.run


@pytest.fixture
def client_for():
    def _make(fake: FakeSite) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=fake.transport, follow_redirects=True)
    return _make
