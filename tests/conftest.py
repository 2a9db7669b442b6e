"""Shared test helpers for the lnbot-client test suite."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from typing import Any

import httpx
import pytest

from lnbot_client import AsyncLnBot, LnBot

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class CapturedRequest:
    """Stores details about the HTTP request that was made."""

    def __init__(self) -> None:
        self.method: str = ""
        self.url: httpx.URL = httpx.URL("")
        self.headers: httpx.Headers = httpx.Headers()
        self.content: bytes = b""
        self.count = 0

    def record(self, request: httpx.Request) -> None:
        self.method = request.method
        self.url = request.url
        self.headers = request.headers
        self.content = request.read()
        self.count += 1

    @property
    def path(self) -> str:
        return self.url.raw_path.decode().split("?")[0]

    @property
    def query(self) -> str:
        return self.url.query.decode() if self.url.query else ""

    @property
    def json_body(self) -> Any:
        if self.content:
            return json.loads(self.content)
        return None


def json_handler(
    captured: CapturedRequest,
    status: int = 200,
    json_body: Any = None,
    *,
    content_type: str = "application/json",
    raw: bytes | None = None,
) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        captured.record(request)
        if raw is not None:
            body = raw
        else:
            body = json.dumps(json_body).encode() if json_body is not None else b""
        return httpx.Response(status, content=body, headers={"content-type": content_type})

    return handler


def sse_handler(captured: CapturedRequest, sse: str | Iterable[bytes], status: int = 200) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        captured.record(request)
        content = sse.encode() if isinstance(sse, str) else iter(sse)
        return httpx.Response(status, content=content, headers={"content-type": "text/event-stream"})

    return handler


def client_for(handler: Handler, api_key: str | None = "key_test") -> LnBot:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return LnBot(api_key=api_key, http_client=client)


def async_client_for(handler: Handler, api_key: str | None = "key_test") -> AsyncLnBot:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AsyncLnBot(api_key=api_key, http_client=client)


def create_client(
    status: int = 200,
    json_body: Any = None,
    *,
    content_type: str = "application/json",
    raw: bytes | None = None,
) -> tuple[LnBot, CapturedRequest]:
    """Create an LnBot client backed by a mock transport."""
    captured = CapturedRequest()
    handler = json_handler(captured, status, json_body, content_type=content_type, raw=raw)
    return client_for(handler), captured


def create_sse_client(sse: str | Iterable[bytes], status: int = 200) -> tuple[LnBot, CapturedRequest]:
    """Create an LnBot client that returns SSE content for streaming endpoints.

    *sse* may be a list of byte chunks to exercise re-chunking.
    """
    captured = CapturedRequest()
    return client_for(sse_handler(captured, sse, status)), captured


def create_async_client(status: int = 200, json_body: Any = None, **kwargs: Any) -> tuple[AsyncLnBot, CapturedRequest]:
    captured = CapturedRequest()
    return async_client_for(json_handler(captured, status, json_body, **kwargs)), captured


def create_async_sse_client(sse: str, status: int = 200) -> tuple[AsyncLnBot, CapturedRequest]:
    captured = CapturedRequest()
    return async_client_for(sse_handler(captured, sse, status)), captured


WALLET = {"walletId": "w", "name": "n", "balance": 0, "onHold": 0, "available": 0}
INVOICE = {"number": 1, "status": "pending", "amount": 100, "bolt11": "lnbc1..."}
PAYMENT = {"number": 1, "status": "pending", "amount": 50, "maxFee": 10, "serviceFee": 0, "address": "user@ln.bot"}
