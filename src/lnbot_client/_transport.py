from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version
from typing import Any

import httpx

from .errors import DecodeError, classify

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.ln.bot"
DEFAULT_TIMEOUT = 30.0

JSON = "application/json"
EVENT_STREAM = "text/event-stream"

try:
    _VERSION = version("lnbot-client")
except PackageNotFoundError:
    _VERSION = "0.0.0"

USER_AGENT = f"lnbot-client-python/{_VERSION}"


def build_headers(api_key: str | None, *, accept: str = JSON) -> dict[str, str]:
    h: dict[str, str] = {"Accept": accept, "User-Agent": USER_AGENT}
    if api_key:
        h["Authorization"] = f"Bearer {api_key}"
    return h


def _raise_classified(response: httpx.Response, body: str) -> None:
    logger.debug("%s %s failed with HTTP %d", response.request.method, response.request.url, response.status_code)
    raise classify(response.status_code, body)


def check_response(response: httpx.Response) -> None:
    """Raise the classified error for a 4xx/5xx response."""
    if response.status_code < 400:
        return
    try:
        response.read()
        body = response.text
    except (httpx.HTTPError, httpx.StreamError):
        body = ""
    _raise_classified(response, body)


async def acheck_response(response: httpx.Response) -> None:
    if response.status_code < 400:
        return
    try:
        await response.aread()
        body = response.text
    except (httpx.HTTPError, httpx.StreamError):
        body = ""
    _raise_classified(response, body)


def decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise DecodeError(f"response from {response.request.url} is not valid JSON: {exc}", response.text) from exc
