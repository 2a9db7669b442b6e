"""Async counterparts of :mod:`lnbot_client.resources`, used by :class:`~lnbot_client.AsyncLnBot`."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from ._events import invoice_event, payment_event, wallet_event
from .pagination import ListParams, query_params
from .sse import aiter_frames
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
    from .client import AsyncLnBot


class _AsyncResource:
    def __init__(self, client: AsyncLnBot) -> None:
        self._c = client


class AsyncWalletsResource(_AsyncResource):
    async def create(self, *, name: str | None = None) -> CreateWalletResponse:
        """Create a new wallet. Works on an unauthenticated client."""
        body = to_camel({"name": name}) or None
        return parse(CreateWalletResponse, await self._c._post("/v1/wallets", body))

    async def current(self) -> WalletResponse:
        """Get the current wallet's info and balance."""
        return parse(WalletResponse, await self._c._get("/v1/wallets/current"))

    async def update(self, *, name: str) -> WalletResponse:
        """Rename the current wallet."""
        return parse(WalletResponse, await self._c._patch("/v1/wallets/current", {"name": name}))


class AsyncKeysResource(_AsyncResource):
    async def list(self) -> list[ApiKeyResponse]:
        """List the wallet's API keys. Key values are never returned here."""
        return parse_list(ApiKeyResponse, await self._c._get("/v1/keys"))

    async def rotate(self, slot: int) -> RotateApiKeyResponse:
        """Rotate the key in *slot* and return the new key."""
        return parse(RotateApiKeyResponse, await self._c._post(f"/v1/keys/{slot}/rotate"))


class AsyncInvoicesResource(_AsyncResource):
    async def create(self, *, amount: int, reference: str | None = None, memo: str | None = None) -> InvoiceResponse:
        """Create a new BOLT11 invoice for *amount* sats."""
        body = to_camel({"amount": amount, "reference": reference, "memo": memo})
        return parse(InvoiceResponse, await self._c._post("/v1/invoices", body))

    async def list(self, *, limit: int | None = None, after: int | None = None) -> list[InvoiceResponse]:
        """List invoices, newest first."""
        return parse_list(InvoiceResponse, await self._c._get_page("/v1/invoices", ListParams(limit, after)))

    async def get(self, number_or_hash: int | str) -> InvoiceResponse:
        """Get a single invoice by its number or payment hash."""
        return parse(InvoiceResponse, await self._c._get(f"/v1/invoices/{number_or_hash}"))

    async def create_for_wallet(
        self, *, wallet_id: str, amount: int, reference: str | None = None, comment: str | None = None
    ) -> AddressInvoiceResponse:
        """Invoice another wallet by ID. No key needed."""
        body = to_camel({"wallet_id": wallet_id, "amount": amount, "reference": reference, "comment": comment})
        return parse(AddressInvoiceResponse, await self._c._post("/v1/invoices/for-wallet", body))

    async def create_for_address(
        self, *, address: str, amount: int, tag: str | None = None, comment: str | None = None
    ) -> AddressInvoiceResponse:
        """Invoice the wallet behind a Lightning address. No key needed."""
        body = to_camel({"address": address, "amount": amount, "tag": tag, "comment": comment})
        return parse(AddressInvoiceResponse, await self._c._post("/v1/invoices/for-address", body))

    async def watch(self, number_or_hash: int | str, *, timeout: int | None = None) -> AsyncIterator[InvoiceEvent]:
        """Stream events for one invoice; see :meth:`InvoicesResource.watch`."""
        path = f"/v1/invoices/{number_or_hash}/events"
        async with self._c._stream(path, params=query_params(timeout=timeout)) as resp:
            async for frame in aiter_frames(resp.aiter_bytes(), paired=True):
                yield invoice_event(frame)


class AsyncPaymentsResource(_AsyncResource):
    async def create(
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
        return parse(PaymentResponse, await self._c._post("/v1/payments", body))

    async def list(self, *, limit: int | None = None, after: int | None = None) -> list[PaymentResponse]:
        """List payments, newest first."""
        return parse_list(PaymentResponse, await self._c._get_page("/v1/payments", ListParams(limit, after)))

    async def get(self, number_or_hash: int | str) -> PaymentResponse:
        """Get a single payment by its number or payment hash."""
        return parse(PaymentResponse, await self._c._get(f"/v1/payments/{number_or_hash}"))

    async def watch(self, number_or_hash: int | str, *, timeout: int | None = None) -> AsyncIterator[PaymentEvent]:
        """Stream events for one payment; see :meth:`PaymentsResource.watch`."""
        path = f"/v1/payments/{number_or_hash}/events"
        async with self._c._stream(path, params=query_params(timeout=timeout)) as resp:
            async for frame in aiter_frames(resp.aiter_bytes(), paired=True):
                yield payment_event(frame)


class AsyncAddressesResource(_AsyncResource):
    async def create(self, *, address: str | None = None) -> AddressResponse:
        """Claim *address*, or get a random one when it is omitted."""
        body = to_camel({"address": address}) or None
        return parse(AddressResponse, await self._c._post("/v1/addresses", body))

    async def list(self) -> list[AddressResponse]:
        """List the wallet's Lightning addresses."""
        return parse_list(AddressResponse, await self._c._get("/v1/addresses"))

    async def delete(self, address: str) -> None:
        """Release a Lightning address."""
        await self._c._delete(f"/v1/addresses/{quote(address, safe='')}")

    async def transfer(self, address: str, *, target_wallet_key: str) -> TransferAddressResponse:
        """Move *address* to the wallet that owns *target_wallet_key*."""
        body = to_camel({"target_wallet_key": target_wallet_key})
        path = f"/v1/addresses/{quote(address, safe='')}/transfer"
        return parse(TransferAddressResponse, await self._c._post(path, body))


class AsyncTransactionsResource(_AsyncResource):
    async def list(self, *, limit: int | None = None, after: int | None = None) -> list[TransactionResponse]:
        """List credit and debit transactions, newest first."""
        return parse_list(TransactionResponse, await self._c._get_page("/v1/transactions", ListParams(limit, after)))


class AsyncWebhooksResource(_AsyncResource):
    async def create(self, *, url: str) -> CreateWebhookResponse:
        """Register a webhook endpoint. The signing secret is only returned here."""
        return parse(CreateWebhookResponse, await self._c._post("/v1/webhooks", {"url": url}))

    async def list(self) -> list[WebhookResponse]:
        """List registered webhooks."""
        return parse_list(WebhookResponse, await self._c._get("/v1/webhooks"))

    async def delete(self, webhook_id: str) -> None:
        """Delete a webhook."""
        await self._c._delete(f"/v1/webhooks/{quote(webhook_id, safe='')}")


class AsyncEventsResource(_AsyncResource):
    async def stream(self) -> AsyncIterator[WalletEvent]:
        """Yield every wallet event as it happens."""
        async with self._c._stream("/v1/events") as resp:
            async for frame in aiter_frames(resp.aiter_bytes(), paired=False):
                yield wallet_event(frame)


class AsyncBackupResource(_AsyncResource):
    async def recovery(self) -> RecoveryBackupResponse:
        """Generate a 12-word BIP-39 recovery passphrase."""
        return parse(RecoveryBackupResponse, await self._c._post("/v1/backup/recovery"))

    async def passkey_begin(self) -> BackupPasskeyBeginResponse:
        """Start passkey backup; returns WebAuthn creation options."""
        return parse(BackupPasskeyBeginResponse, await self._c._post("/v1/backup/passkey/begin"))

    async def passkey_complete(self, *, session_id: str, attestation: dict[str, Any]) -> None:
        """Finish passkey backup with the authenticator's attestation."""
        body = to_camel({"session_id": session_id, "attestation": attestation})
        await self._c._post_no_content("/v1/backup/passkey/complete", body)


class AsyncRestoreResource(_AsyncResource):
    async def recovery(self, *, passphrase: str) -> RecoveryRestoreResponse:
        """Restore a wallet from its recovery passphrase."""
        return parse(RecoveryRestoreResponse, await self._c._post("/v1/restore/recovery", {"passphrase": passphrase}))

    async def passkey_begin(self) -> RestorePasskeyBeginResponse:
        """Start passkey restore; returns WebAuthn request options."""
        return parse(RestorePasskeyBeginResponse, await self._c._post("/v1/restore/passkey/begin"))

    async def passkey_complete(self, *, session_id: str, assertion: dict[str, Any]) -> RestorePasskeyCompleteResponse:
        """Finish passkey restore; returns fresh credentials for the wallet."""
        body = to_camel({"session_id": session_id, "assertion": assertion})
        return parse(RestorePasskeyCompleteResponse, await self._c._post("/v1/restore/passkey/complete", body))


class AsyncL402Resource(_AsyncResource):
    async def create_challenge(
        self,
        *,
        amount: int,
        description: str | None = None,
        expiry_seconds: int | None = None,
        caveats: list[str] | None = None,
    ) -> L402ChallengeResponse:
        """Create an invoice + macaroon pair to put behind a paywall."""
        body = to_camel({"amount": amount, "description": description, "expiry_seconds": expiry_seconds, "caveats": caveats})
        return parse(L402ChallengeResponse, await self._c._post("/v1/l402/challenges", body))

    async def verify(self, *, authorization: str) -> VerifyL402Response:
        """Check an L402 ``Authorization`` header."""
        return parse(VerifyL402Response, await self._c._post("/v1/l402/verify", {"authorization": authorization}))

    async def pay(
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
        return parse(L402PayResponse, await self._c._post("/v1/l402/pay", body))
