from __future__ import annotations

import copy
import logging
import os
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from typing import Any, TypeVar

import httpx

from ._transport import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    EVENT_STREAM,
    acheck_response,
    build_headers,
    check_response,
    decode_json,
)
from .async_resources import (
    AsyncAddressesResource,
    AsyncBackupResource,
    AsyncEventsResource,
    AsyncInvoicesResource,
    AsyncKeysResource,
    AsyncL402Resource,
    AsyncPaymentsResource,
    AsyncRestoreResource,
    AsyncTransactionsResource,
    AsyncWalletsResource,
    AsyncWebhooksResource,
)
from .errors import TransportError
from .pagination import ListParams, QueryParams
from .resources import (
    AddressesResource,
    BackupResource,
    EventsResource,
    InvoicesResource,
    KeysResource,
    L402Resource,
    PaymentsResource,
    RestoreResource,
    TransactionsResource,
    WalletsResource,
    WebhooksResource,
)

logger = logging.getLogger(__name__)

_C = TypeVar("_C", bound="_BaseClient")

API_KEY_ENV = "LNBOT_API_KEY"


class _BaseClient:
    """Configuration shared by the sync and async clients.

    A client is never changed after construction; the ``with_*`` methods
    return a copy that shares the underlying HTTP client.
    """

    _http: Any

    def __init__(self, api_key: str | None, base_url: str) -> None:
        self._api_key = api_key or os.environ.get(API_KEY_ENV)
        self._base_url = base_url.rstrip("/")

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def authenticated(self) -> bool:
        return bool(self._api_key)

    def with_base_url(self: _C, base_url: str) -> _C:
        """Return a copy of this client talking to *base_url*."""
        return self._replace(_base_url=base_url.rstrip("/"))

    def with_api_key(self: _C, api_key: str | None) -> _C:
        """Return a copy of this client using *api_key* (``None`` for no auth)."""
        return self._replace(_api_key=api_key or None)

    def with_http_client(self: _C, http_client: Any) -> _C:
        return self._replace(_http=http_client)

    def _replace(self: _C, **attrs: Any) -> _C:
        clone = copy.copy(self)
        clone.__dict__.update(attrs)
        clone._bind_resources()
        return clone

    def _bind_resources(self) -> None:
        raise NotImplementedError

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _headers(self, *, accept: str | None = None) -> dict[str, str]:
        if accept is None:
            return build_headers(self._api_key)
        return build_headers(self._api_key, accept=accept)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self._base_url!r}, authenticated={self.authenticated})"


# ---------------------------------------------------------------------------
# Sync client
# ---------------------------------------------------------------------------

class LnBot(_BaseClient):
    """Synchronous LnBot API client.

    >>> with LnBot(api_key="key_...") as ln:
    ...     wallet = ln.wallets.current()

    *api_key* defaults to the ``LNBOT_API_KEY`` environment variable. Use
    :meth:`unauthenticated` for the endpoints that take no key.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        super().__init__(api_key, base_url)
        self._http: httpx.Client = http_client or httpx.Client(timeout=timeout)
        self._bind_resources()

    @classmethod
    def unauthenticated(cls, **kwargs: Any) -> LnBot:
        """Client without credentials, for wallet creation and public invoices."""
        return cls(**kwargs)._replace(_api_key=None)

    def _bind_resources(self) -> None:
        self.wallets = WalletsResource(self)
        self.keys = KeysResource(self)
        self.invoices = InvoicesResource(self)
        self.payments = PaymentsResource(self)
        self.addresses = AddressesResource(self)
        self.transactions = TransactionsResource(self)
        self.webhooks = WebhooksResource(self)
        self.events = EventsResource(self)
        self.backup = BackupResource(self)
        self.restore = RestoreResource(self)
        self.l402 = L402Resource(self)

    def _send(self, method: str, path: str, *, params: QueryParams | None = None, body: Any = None) -> httpx.Response:
        url = self._url(path)
        try:
            resp = self._http.request(method, url, headers=self._headers(), params=params, json=body)
        except httpx.RequestError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        logger.debug("%s %s -> %d", method, url, resp.status_code)
        check_response(resp)
        return resp

    def _get(self, path: str) -> Any:
        return decode_json(self._send("GET", path))

    def _get_page(self, path: str, page: ListParams) -> Any:
        return decode_json(self._send("GET", path, params=page.to_query()))

    def _post(self, path: str, body: Any = None) -> Any:
        return decode_json(self._send("POST", path, body=body))

    def _post_no_content(self, path: str, body: Any = None) -> None:
        self._send("POST", path, body=body)

    def _patch(self, path: str, body: Any) -> Any:
        return decode_json(self._send("PATCH", path, body=body))

    def _delete(self, path: str) -> None:
        self._send("DELETE", path)

    @contextmanager
    def _stream(self, path: str, *, params: QueryParams | None = None) -> Iterator[httpx.Response]:
        """Open an SSE response; leaving the block closes the connection."""
        url = self._url(path)
        try:
            with self._http.stream("GET", url, headers=self._headers(accept=EVENT_STREAM), params=params) as resp:
                logger.debug("stream GET %s -> %d", url, resp.status_code)
                check_response(resp)
                yield resp
        except httpx.RequestError as exc:
            raise TransportError(f"stream GET {url} failed: {exc}") from exc
        finally:
            logger.debug("stream GET %s closed", url)

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def __enter__(self) -> LnBot:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------

class AsyncLnBot(_BaseClient):
    """Asynchronous LnBot API client.

    >>> async with AsyncLnBot(api_key="key_...") as ln:
    ...     wallet = await ln.wallets.current()
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(api_key, base_url)
        self._http: httpx.AsyncClient = http_client or httpx.AsyncClient(timeout=timeout)
        self._bind_resources()

    @classmethod
    def unauthenticated(cls, **kwargs: Any) -> AsyncLnBot:
        """Client without credentials, for wallet creation and public invoices."""
        return cls(**kwargs)._replace(_api_key=None)

    def _bind_resources(self) -> None:
        self.wallets = AsyncWalletsResource(self)
        self.keys = AsyncKeysResource(self)
        self.invoices = AsyncInvoicesResource(self)
        self.payments = AsyncPaymentsResource(self)
        self.addresses = AsyncAddressesResource(self)
        self.transactions = AsyncTransactionsResource(self)
        self.webhooks = AsyncWebhooksResource(self)
        self.events = AsyncEventsResource(self)
        self.backup = AsyncBackupResource(self)
        self.restore = AsyncRestoreResource(self)
        self.l402 = AsyncL402Resource(self)

    async def _send(self, method: str, path: str, *, params: QueryParams | None = None, body: Any = None) -> httpx.Response:
        url = self._url(path)
        try:
            resp = await self._http.request(method, url, headers=self._headers(), params=params, json=body)
        except httpx.RequestError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        logger.debug("%s %s -> %d", method, url, resp.status_code)
        await acheck_response(resp)
        return resp

    async def _get(self, path: str) -> Any:
        return decode_json(await self._send("GET", path))

    async def _get_page(self, path: str, page: ListParams) -> Any:
        return decode_json(await self._send("GET", path, params=page.to_query()))

    async def _post(self, path: str, body: Any = None) -> Any:
        return decode_json(await self._send("POST", path, body=body))

    async def _post_no_content(self, path: str, body: Any = None) -> None:
        await self._send("POST", path, body=body)

    async def _patch(self, path: str, body: Any) -> Any:
        return decode_json(await self._send("PATCH", path, body=body))

    async def _delete(self, path: str) -> None:
        await self._send("DELETE", path)

    @asynccontextmanager
    async def _stream(self, path: str, *, params: QueryParams | None = None) -> AsyncIterator[httpx.Response]:
        url = self._url(path)
        try:
            async with self._http.stream("GET", url, headers=self._headers(accept=EVENT_STREAM), params=params) as resp:
                logger.debug("stream GET %s -> %d", url, resp.status_code)
                await acheck_response(resp)
                yield resp
        except httpx.RequestError as exc:
            raise TransportError(f"stream GET {url} failed: {exc}") from exc
        finally:
            logger.debug("stream GET %s closed", url)

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> AsyncLnBot:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
