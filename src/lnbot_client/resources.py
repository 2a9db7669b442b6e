"""Blocking resource groups exposed on :class:`~lnbot_client.LnBot`."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from ._events import invoice_event, payment_event, wallet_event
from .pagination import ListParams, query_params
from .sse import iter_frames
from .types import (
    AddressInvoiceResponse,
    AddressResponse,
    ApiKeyResponse,
    BackupPasskeyBeginResponse,
    CreateWalletResponse,
    CreateWebhookResponse,
    InvoiceEvent,
    InvoiceResponse,
    L402ChallengeResponse,
    L402PayResponse,
    PaymentEvent,
    PaymentResponse,
    RecoveryBackupResponse,
    RecoveryRestoreResponse,
    RestorePasskeyBeginResponse,
    RestorePasskeyCompleteResponse,
    RotateApiKeyResponse,
    TransactionResponse,
    TransferAddressResponse,
    VerifyL402Response,
    WalletEvent,
    WalletResponse,
    WebhookResponse,
    parse,
    parse_list,
    to_camel,
)

if TYPE_CHECKING:
    from .client import LnBot


def _segment(value: str) -> str:
    return quote(value, safe="")


class _Resource:
    def __init__(self, client: LnBot) -> None:
        self._c = client


class WalletsResource(_Resource):
    """Wallet creation and management."""

    def create(self, *, name: str | None = None) -> CreateWalletResponse:
        """Create a new wallet. Works on an unauthenticated client."""
        body = to_camel({"name": name}) or None
        return parse(CreateWalletResponse, self._c._post("/v1/wallets", body))

    def current(self) -> WalletResponse:
        """Get the current wallet's info and balance."""
        return parse(WalletResponse, self._c._get("/v1/wallets/current"))

    def update(self, *, name: str) -> WalletResponse:
        return parse(WalletResponse, self._c._patch("/v1/wallets/current", {"name": name}))


class KeysResource(_Resource):
    """API key listing and rotation."""

    def list(self) -> list[ApiKeyResponse]:
        return parse_list(ApiKeyResponse, self._c._get("/v1/keys"))

    def rotate(self, slot: int) -> RotateApiKeyResponse:
        """Rotate the key in *slot* and return the new key."""
        return parse(RotateApiKeyResponse, self._c._post(f"/v1/keys/{slot}/rotate"))


class InvoicesResource(_Resource):
    """BOLT11 invoices: create, look up, and watch for settlement."""

    def create(self, *, amount: int, reference: str | None = None, memo: str | None = None) -> InvoiceResponse:
        """Create a new BOLT11 invoice for *amount* sats."""
        body = to_camel({"amount": amount, "reference": reference, "memo": memo})
        return parse(InvoiceResponse, self._c._post("/v1/invoices", body))

    def list(self, *, limit: int | None = None, after: int | None = None) -> list[InvoiceResponse]:
        return parse_list(InvoiceResponse, self._c._get_page("/v1/invoices", ListParams(limit, after)))

    def get(self, number_or_hash: int | str) -> InvoiceResponse:
        """Get a single invoice by its number or payment hash."""
        return parse(InvoiceResponse, self._c._get(f"/v1/invoices/{number_or_hash}"))

    def create_for_wallet(
        self, *, wallet_id: str, amount: int, reference: str | None = None, comment: str | None = None
    ) -> AddressInvoiceResponse:
        """Invoice another wallet by ID. No key needed; the server rate-limits by IP."""
        body = to_camel({"wallet_id": wallet_id, "amount": amount, "reference": reference, "comment": comment})
        return parse(AddressInvoiceResponse, self._c._post("/v1/invoices/for-wallet", body))

    def create_for_address(
        self, *, address: str, amount: int, tag: str | None = None, comment: str | None = None
    ) -> AddressInvoiceResponse:
        """Invoice the wallet behind a Lightning address. No key needed."""
        body = to_camel({"address": address, "amount": amount, "tag": tag, "comment": comment})
        return parse(AddressInvoiceResponse, self._c._post("/v1/invoices/for-address", body))

    def watch(self, number_or_hash: int | str, *, timeout: int | None = None) -> Iterator[InvoiceEvent]:
        """Stream events for one invoice until the server closes the stream.

        *timeout* (seconds) is passed to the server, which ends the stream
        when it expires. Closing the iterator early drops the connection.
        """
        path = f"/v1/invoices/{number_or_hash}/events"
        with self._c._stream(path, params=query_params(timeout=timeout)) as resp:
            for frame in iter_frames(resp.iter_bytes(), paired=True):
                yield invoice_event(frame)


class PaymentsResource(_Resource):
    """Send sats to Lightning addresses, LNURLs, or BOLT11 invoices."""

    def create(
        self,
        *,
        target: str,
        amount: int | None = None,
        idempotency_key: str | None = None,
        max_fee: int | None = None,
        reference: str | None = None,
    ) -> PaymentResponse:
        """Pay *target*. *amount* is required unless the target is an amount-bearing invoice."""
        body = to_camel({
            "target": target,
            "amount": amount,
            "idempotency_key": idempotency_key,
            "max_fee": max_fee,
            "reference": reference,
        })
        return parse(PaymentResponse, self._c._post("/v1/payments", body))

    def list(self, *, limit: int | None = None, after: int | None = None) -> list[PaymentResponse]:
        return parse_list(PaymentResponse, self._c._get_page("/v1/payments", ListParams(limit, after)))

    def get(self, number_or_hash: int | str) -> PaymentResponse:
        return parse(PaymentResponse, self._c._get(f"/v1/payments/{number_or_hash}"))

    def watch(self, number_or_hash: int | str, *, timeout: int | None = None) -> Iterator[PaymentEvent]:
        """Stream events for one payment until it settles, fails or *timeout* passes."""
        path = f"/v1/payments/{number_or_hash}/events"
        with self._c._stream(path, params=query_params(timeout=timeout)) as resp:
            for frame in iter_frames(resp.iter_bytes(), paired=True):
                yield payment_event(frame)


class AddressesResource(_Resource):
    """Lightning address management."""

    def create(self, *, address: str | None = None) -> AddressResponse:
        """Claim *address*, or get a random one when it is omitted."""
        body = to_camel({"address": address}) or None
        return parse(AddressResponse, self._c._post("/v1/addresses", body))

    def list(self) -> list[AddressResponse]:
        return parse_list(AddressResponse, self._c._get("/v1/addresses"))

    def delete(self, address: str) -> None:
        self._c._delete(f"/v1/addresses/{_segment(address)}")

    def transfer(self, address: str, *, target_wallet_key: str) -> TransferAddressResponse:
        """Move *address* to the wallet that owns *target_wallet_key*."""
        body = to_camel({"target_wallet_key": target_wallet_key})
        return parse(TransferAddressResponse, self._c._post(f"/v1/addresses/{_segment(address)}/transfer", body))


class TransactionsResource(_Resource):
    def list(self, *, limit: int | None = None, after: int | None = None) -> list[TransactionResponse]:
        """List credit and debit transactions, newest first."""
        return parse_list(TransactionResponse, self._c._get_page("/v1/transactions", ListParams(limit, after)))


class WebhooksResource(_Resource):
    """Webhook registration and management."""

    def create(self, *, url: str) -> CreateWebhookResponse:
        """Register a webhook endpoint. The signing secret is only returned here."""
        return parse(CreateWebhookResponse, self._c._post("/v1/webhooks", {"url": url}))

    def list(self) -> list[WebhookResponse]:
        return parse_list(WebhookResponse, self._c._get("/v1/webhooks"))

    def delete(self, webhook_id: str) -> None:
        self._c._delete(f"/v1/webhooks/{_segment(webhook_id)}")


class EventsResource(_Resource):
    """Real-time wallet event stream."""

    def stream(self) -> Iterator[WalletEvent]:
        """Yield every wallet event (invoices and payments) as it happens."""
        with self._c._stream("/v1/events") as resp:
            for frame in iter_frames(resp.iter_bytes(), paired=False):
                yield wallet_event(frame)


class BackupResource(_Resource):
    """Wallet backup via recovery passphrase or passkey."""

    def recovery(self) -> RecoveryBackupResponse:
        """Generate a 12-word BIP-39 recovery passphrase."""
        return parse(RecoveryBackupResponse, self._c._post("/v1/backup/recovery"))

    def passkey_begin(self) -> BackupPasskeyBeginResponse:
        return parse(BackupPasskeyBeginResponse, self._c._post("/v1/backup/passkey/begin"))

    def passkey_complete(self, *, session_id: str, attestation: dict[str, Any]) -> None:
        """Finish passkey backup with the authenticator's attestation."""
        body = to_camel({"session_id": session_id, "attestation": attestation})
        self._c._post_no_content("/v1/backup/passkey/complete", body)


class RestoreResource(_Resource):
    """Wallet restoration via recovery passphrase or passkey."""

    def recovery(self, *, passphrase: str) -> RecoveryRestoreResponse:
        return parse(RecoveryRestoreResponse, self._c._post("/v1/restore/recovery", {"passphrase": passphrase}))

    def passkey_begin(self) -> RestorePasskeyBeginResponse:
        return parse(RestorePasskeyBeginResponse, self._c._post("/v1/restore/passkey/begin"))

    def passkey_complete(self, *, session_id: str, assertion: dict[str, Any]) -> RestorePasskeyCompleteResponse:
        """Finish passkey restore; returns fresh credentials for the wallet."""
        body = to_camel({"session_id": session_id, "assertion": assertion})
        return parse(RestorePasskeyCompleteResponse, self._c._post("/v1/restore/passkey/complete", body))


class L402Resource(_Resource):
    """L402 paywall authentication."""

    def create_challenge(
        self,
        *,
        amount: int,
        description: str | None = None,
        expiry_seconds: int | None = None,
        caveats: list[str] | None = None,
    ) -> L402ChallengeResponse:
        """Create an invoice + macaroon pair to put behind a paywall."""
        body = to_camel({"amount": amount, "description": description, "expiry_seconds": expiry_seconds, "caveats": caveats})
        return parse(L402ChallengeResponse, self._c._post("/v1/l402/challenges", body))

    def verify(self, *, authorization: str) -> VerifyL402Response:
        return parse(VerifyL402Response, self._c._post("/v1/l402/verify", {"authorization": authorization}))

    def pay(
        self,
        *,
        www_authenticate: str,
        max_fee: int | None = None,
        reference: str | None = None,
        wait: bool | None = None,
        timeout: int | None = None,
    ) -> L402PayResponse:
        """Pay a ``WWW-Authenticate`` challenge and get back an ``Authorization`` value."""
        body = to_camel({
            "www_authenticate": www_authenticate,
            "max_fee": max_fee,
            "reference": reference,
            "wait": wait,
            "timeout": timeout,
        })
        return parse(L402PayResponse, self._c._post("/v1/l402/pay", body))
