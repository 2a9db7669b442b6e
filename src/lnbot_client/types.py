from __future__ import annotations

import re
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Literal, TypeVar

from .errors import DecodeError

T = TypeVar("T")

InvoiceStatus = Literal["pending", "settled", "expired"]
PaymentStatus = Literal["pending", "processing", "settled", "failed"]
TransactionType = Literal["credit", "debit"]


# ---------------------------------------------------------------------------
# Wallet
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WalletResponse:
    wallet_id: str
    name: str
    balance: int
    on_hold: int
    available: int


@dataclass(frozen=True)
class CreateWalletResponse:
    wallet_id: str
    primary_key: str
    secondary_key: str
    name: str
    address: str
    recovery_passphrase: str


# ---------------------------------------------------------------------------
# API Keys
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ApiKeyResponse:
    """Key metadata; the key itself is only ever returned on rotation."""

    id: str
    name: str
    hint: str
    created_at: str | None = None
    last_used_at: str | None = None


@dataclass(frozen=True)
class RotateApiKeyResponse:
    key: str
    name: str


# ---------------------------------------------------------------------------
# Invoices
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InvoiceResponse:
    number: int
    status: InvoiceStatus
    amount: int
    bolt11: str
    reference: str | None = None
    memo: str | None = None
    preimage: str | None = None
    tx_number: int | None = None
    created_at: str | None = None
    settled_at: str | None = None
    expires_at: str | None = None


@dataclass(frozen=True)
class AddressInvoiceResponse:
    bolt11: str
    amount: int
    expires_at: str | None = None


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PaymentResponse:
    number: int
    status: PaymentStatus
    amount: int
    max_fee: int
    address: str
    service_fee: int = 0
    actual_fee: int | None = None
    reference: str | None = None
    preimage: str | None = None
    tx_number: int | None = None
    failure_reason: str | None = None
    created_at: str | None = None
    settled_at: str | None = None


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AddressResponse:
    address: str
    generated: bool
    cost: int
    created_at: str | None = None


@dataclass(frozen=True)
class TransferAddressResponse:
    address: str
    transferred_to: str


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TransactionResponse:
    number: int
    type: TransactionType
    amount: int
    balance_after: int
    network_fee: int
    service_fee: int
    payment_hash: str | None = None
    preimage: str | None = None
    reference: str | None = None
    note: str | None = None
    created_at: str | None = None


# ---------------------------------------------------------------------------
# Webhooks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CreateWebhookResponse:
    id: str
    url: str
    secret: str
    created_at: str | None = None


@dataclass(frozen=True)
class WebhookResponse:
    id: str
    url: str
    active: bool
    created_at: str | None = None


# ---------------------------------------------------------------------------
# Backup / Restore
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RecoveryBackupResponse:
    passphrase: str


@dataclass(frozen=True)
class RecoveryRestoreResponse:
    wallet_id: str
    name: str
    primary_key: str
    secondary_key: str


@dataclass(frozen=True)
class BackupPasskeyBeginResponse:
    session_id: str
    options: dict[str, Any]


@dataclass(frozen=True)
class RestorePasskeyBeginResponse:
    session_id: str
    options: dict[str, Any]


@dataclass(frozen=True)
class RestorePasskeyCompleteResponse:
    wallet_id: str
    name: str
    primary_key: str
    secondary_key: str


# ---------------------------------------------------------------------------
# L402
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class L402ChallengeResponse:
    macaroon: str
    invoice: str
    payment_hash: str
    expires_at: str
    www_authenticate: str


@dataclass(frozen=True)
class VerifyL402Response:
    valid: bool
    payment_hash: str | None = None
    caveats: list[str] | None = None
    error: str | None = None


@dataclass(frozen=True)
class L402PayResponse:
    payment_hash: str
    amount: int
    payment_number: int
    status: PaymentStatus
    authorization: str | None = None
    preimage: str | None = None
    fee: int | None = None


# ---------------------------------------------------------------------------
# SSE event types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UnknownEventType:
    """An event label this version of the client does not know about.

    Newer servers may send labels that were added after this release; they
    surface here with the raw label in *value* instead of failing the stream.
    """

    value: str

    def __str__(self) -> str:
        return self.value


class _EventType(str, Enum):
    @classmethod
    def from_label(cls, label: str) -> _EventType | UnknownEventType:
        try:
            return cls(label)
        except ValueError:
            return UnknownEventType(label)

    def __str__(self) -> str:
        return self.value


class InvoiceEventType(_EventType):
    SETTLED = "settled"
    EXPIRED = "expired"


class PaymentEventType(_EventType):
    SETTLED = "settled"
    FAILED = "failed"


class WalletEventType(_EventType):
    INVOICE_CREATED = "invoice.created"
    INVOICE_SETTLED = "invoice.settled"
    PAYMENT_CREATED = "payment.created"
    PAYMENT_SETTLED = "payment.settled"
    PAYMENT_FAILED = "payment.failed"


@dataclass(frozen=True)
class InvoiceEvent:
    event: InvoiceEventType | UnknownEventType
    data: InvoiceResponse


@dataclass(frozen=True)
class PaymentEvent:
    event: PaymentEventType | UnknownEventType
    data: PaymentResponse


@dataclass(frozen=True)
class WalletEvent:
    event: WalletEventType | UnknownEventType
    created_at: str | None
    data: dict[str, Any]


# ---------------------------------------------------------------------------
# JSON key mapping (snake_case <-> camelCase)
# ---------------------------------------------------------------------------

def _to_camel(name: str) -> str:
    parts = name.split("_")
    return parts[0] + "".join(p.capitalize() for p in parts[1:])


def _to_snake(name: str) -> str:
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name).lower()


def to_camel(data: dict[str, Any]) -> dict[str, Any]:
    return {_to_camel(k): v for k, v in data.items() if v is not None}


def from_camel(data: dict[str, Any]) -> dict[str, Any]:
    return {_to_snake(k): v for k, v in data.items()}


def parse(cls: type[T], data: Any) -> T:
    """Build dataclass *cls* from a decoded camelCase JSON object.

    Unknown keys are dropped; a non-object or a missing required field
    raises :class:`DecodeError`.
    """
    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object for {cls.__name__}, got {type(data).__name__}", repr(data))
    mapped = from_camel(data)
    names = {f.name for f in fields(cls)}  # type: ignore[arg-type]
    try:
        return cls(**{k: v for k, v in mapped.items() if k in names})
    except TypeError as exc:
        raise DecodeError(f"invalid {cls.__name__}: {exc}", repr(data)) from exc


def parse_list(cls: type[T], data: Any) -> list[T]:
    if not isinstance(data, list):
        raise DecodeError(f"expected a JSON array of {cls.__name__}, got {type(data).__name__}", repr(data))
    return [parse(cls, item) for item in data]
