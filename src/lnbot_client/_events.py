from __future__ import annotations

import json
from typing import Any

from .errors import DecodeError
from .sse import ServerSentEvent
from .types import (
    InvoiceEvent,
    InvoiceEventType,
    InvoiceResponse,
    PaymentEvent,
    PaymentEventType,
    PaymentResponse,
    WalletEvent,
    WalletEventType,
    parse,
)


def _payload(frame: ServerSentEvent) -> Any:
    try:
        return json.loads(frame.data)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"invalid JSON in event payload: {exc}", frame.data) from exc


def invoice_event(frame: ServerSentEvent) -> InvoiceEvent:
    return InvoiceEvent(
        event=InvoiceEventType.from_label(frame.event),  # type: ignore[arg-type]
        data=parse(InvoiceResponse, _payload(frame)),
    )


def payment_event(frame: ServerSentEvent) -> PaymentEvent:
    return PaymentEvent(
        event=PaymentEventType.from_label(frame.event),  # type: ignore[arg-type]
        data=parse(PaymentResponse, _payload(frame)),
    )


def wallet_event(frame: ServerSentEvent) -> WalletEvent:
    """Wallet stream payloads carry their own type: ``{"event", "createdAt", "data"}``."""
    raw = _payload(frame)
    if not isinstance(raw, dict) or not isinstance(raw.get("event"), str):
        raise DecodeError("wallet event payload has no \"event\" label", frame.data)
    data = raw.get("data")
    if data is None:
        data = {}
    elif not isinstance(data, dict):
        raise DecodeError("wallet event \"data\" is not an object", frame.data)
    return WalletEvent(
        event=WalletEventType.from_label(raw["event"]),  # type: ignore[arg-type]
        created_at=raw.get("createdAt"),
        data=data,
    )
