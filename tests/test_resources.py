"""Tests for the resource groups: paths, methods, request bodies and response parsing."""

from __future__ import annotations

from conftest import INVOICE, PAYMENT, create_client

CREDENTIALS = {"walletId": "wal_1", "name": "Restored", "primaryKey": "pk_1", "secondaryKey": "sk_1"}


# ---------------------------------------------------------------------------
# Wallets
# ---------------------------------------------------------------------------


class TestWallets:
    def test_create(self):
        ln, cap = create_client(json_body={
            "walletId": "wal_abc", "primaryKey": "pk_1", "secondaryKey": "sk_1",
            "name": "Test", "address": "test@ln.bot", "recoveryPassphrase": "word1 word2",
        })
        creds = ln.wallets.create(name="Test")
        assert (cap.method, cap.path) == ("POST", "/v1/wallets")
        assert cap.json_body == {"name": "Test"}
        assert creds.recovery_passphrase == "word1 word2"

    def test_create_without_name_sends_no_body(self):
        ln, cap = create_client(json_body={
            "walletId": "w", "primaryKey": "p", "secondaryKey": "s", "name": "n", "address": "a", "recoveryPassphrase": "r",
        })
        ln.wallets.create()
        assert cap.json_body is None

    def test_current(self):
        ln, cap = create_client(json_body={"walletId": "wal_1", "name": "My Wallet", "balance": 1000, "onHold": 50, "available": 950})
        w = ln.wallets.current()
        assert (cap.method, cap.path) == ("GET", "/v1/wallets/current")
        assert w.available == 950

    def test_update(self):
        ln, cap = create_client(json_body={"walletId": "wal_1", "name": "Renamed", "balance": 0, "onHold": 0, "available": 0})
        w = ln.wallets.update(name="Renamed")
        assert (cap.method, cap.path) == ("PATCH", "/v1/wallets/current")
        assert cap.json_body == {"name": "Renamed"}
        assert w.name == "Renamed"


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------


class TestKeys:
    def test_list(self):
        ln, cap = create_client(json_body=[
            {"id": "key_1", "name": "primary", "hint": "key_...abcd", "lastUsedAt": "2024-01-01T00:00:00Z"},
        ])
        keys = ln.keys.list()
        assert (cap.method, cap.path) == ("GET", "/v1/keys")
        assert keys[0].hint == "key_...abcd"
        assert keys[0].last_used_at == "2024-01-01T00:00:00Z"

    def test_rotate(self):
        ln, cap = create_client(json_body={"key": "pk_new", "name": "primary"})
        k = ln.keys.rotate(1)
        assert (cap.method, cap.path) == ("POST", "/v1/keys/1/rotate")
        assert k.key == "pk_new"


# ---------------------------------------------------------------------------
# Invoices
# ---------------------------------------------------------------------------


class TestInvoices:
    def test_create(self):
        ln, cap = create_client(json_body=INVOICE)
        inv = ln.invoices.create(amount=100, memo="test", reference="order-7")
        assert (cap.method, cap.path) == ("POST", "/v1/invoices")
        assert cap.json_body == {"amount": 100, "memo": "test", "reference": "order-7"}
        assert inv.bolt11 == "lnbc1..."

    def test_list(self):
        ln, cap = create_client(json_body=[INVOICE, {**INVOICE, "number": 2, "amount": 200}])
        invs = ln.invoices.list(limit=10, after=0)
        assert (cap.method, cap.path) == ("GET", "/v1/invoices")
        assert cap.query == "limit=10&after=0"
        assert [i.number for i in invs] == [1, 2]

    def test_list_after_only(self):
        ln, cap = create_client(json_body=[])
        ln.invoices.list(after=25)
        assert cap.query == "after=25"

    def test_list_no_params(self):
        ln, cap = create_client(json_body=[])
        assert ln.invoices.list() == []
        assert cap.query == ""

    def test_get_by_number(self):
        ln, cap = create_client(json_body={**INVOICE, "number": 42})
        assert ln.invoices.get(42).number == 42
        assert cap.path == "/v1/invoices/42"

    def test_get_by_hash(self):
        ln, cap = create_client(json_body=INVOICE)
        ln.invoices.get("abc123")
        assert cap.path == "/v1/invoices/abc123"

    def test_create_for_wallet(self):
        ln, cap = create_client(json_body={"bolt11": "lnbc1...", "amount": 100})
        inv = ln.invoices.create_for_wallet(wallet_id="wal_abc", amount=100)
        assert (cap.method, cap.path) == ("POST", "/v1/invoices/for-wallet")
        assert cap.json_body == {"walletId": "wal_abc", "amount": 100}
        assert inv.expires_at is None

    def test_create_for_address(self):
        ln, cap = create_client(json_body={"bolt11": "lnbc1...", "amount": 200, "expiresAt": "2024-01-01T00:10:00Z"})
        inv = ln.invoices.create_for_address(address="user@ln.bot", amount=200, comment="thanks")
        assert cap.path == "/v1/invoices/for-address"
        assert cap.json_body == {"address": "user@ln.bot", "amount": 200, "comment": "thanks"}
        assert inv.expires_at == "2024-01-01T00:10:00Z"


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


class TestPayments:
    def test_create(self):
        ln, cap = create_client(json_body=PAYMENT)
        p = ln.payments.create(target="user@ln.bot", amount=50, max_fee=10)
        assert (cap.method, cap.path) == ("POST", "/v1/payments")
        assert cap.json_body == {"target": "user@ln.bot", "amount": 50, "maxFee": 10}
        assert p.max_fee == 10

    def test_list(self):
        ln, cap = create_client(json_body=[PAYMENT])
        ps = ln.payments.list(limit=5)
        assert cap.path == "/v1/payments"
        assert cap.query == "limit=5"
        assert len(ps) == 1

    def test_get(self):
        ln, cap = create_client(json_body={**PAYMENT, "number": 7})
        assert ln.payments.get(7).number == 7
        assert cap.path == "/v1/payments/7"

    def test_get_by_hash(self):
        ln, cap = create_client(json_body=PAYMENT)
        ln.payments.get("hash456")
        assert cap.path == "/v1/payments/hash456"


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------


class TestAddresses:
    def test_create(self):
        ln, cap = create_client(json_body={"address": "user@ln.bot", "generated": False, "cost": 0})
        a = ln.addresses.create(address="user@ln.bot")
        assert (cap.method, cap.path) == ("POST", "/v1/addresses")
        assert a.address == "user@ln.bot"

    def test_create_random(self):
        ln, cap = create_client(json_body={"address": "x7k2@ln.bot", "generated": True, "cost": 0})
        assert ln.addresses.create().generated is True
        assert cap.json_body is None

    def test_list(self):
        ln, cap = create_client(json_body=[
            {"address": "a@ln.bot", "generated": True, "cost": 0},
            {"address": "b@ln.bot", "generated": False, "cost": 100},
        ])
        addrs = ln.addresses.list()
        assert cap.path == "/v1/addresses"
        assert [a.cost for a in addrs] == [0, 100]

    def test_delete_encodes_address(self):
        ln, cap = create_client(status=204)
        ln.addresses.delete("user@ln.bot")
        assert (cap.method, cap.path) == ("DELETE", "/v1/addresses/user%40ln.bot")

    def test_delete_encodes_slashes(self):
        ln, cap = create_client(status=204)
        ln.addresses.delete("a/b")
        assert cap.path == "/v1/addresses/a%2Fb"

    def test_transfer(self):
        ln, cap = create_client(json_body={"address": "user@ln.bot", "transferredTo": "wal_target"})
        tr = ln.addresses.transfer("user@ln.bot", target_wallet_key="pk_target")
        assert (cap.method, cap.path) == ("POST", "/v1/addresses/user%40ln.bot/transfer")
        assert cap.json_body == {"targetWalletKey": "pk_target"}
        assert tr.transferred_to == "wal_target"


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


class TestTransactions:
    def test_list(self):
        ln, cap = create_client(json_body=[
            {"number": 1, "type": "credit", "amount": 100, "balanceAfter": 100, "networkFee": 0, "serviceFee": 0},
        ])
        txs = ln.transactions.list(limit=20, after=0)
        assert cap.path == "/v1/transactions"
        assert cap.query == "limit=20&after=0"
        assert txs[0].type == "credit"
        assert txs[0].balance_after == 100

    def test_list_no_params(self):
        ln, cap = create_client(json_body=[])
        ln.transactions.list()
        assert cap.query == ""


# ---------------------------------------------------------------------------
# Webhooks
# ---------------------------------------------------------------------------


class TestWebhooks:
    def test_create(self):
        ln, cap = create_client(json_body={"id": "wh_1", "url": "https://example.com/hook", "secret": "sec_abc"})
        wh = ln.webhooks.create(url="https://example.com/hook")
        assert (cap.method, cap.path) == ("POST", "/v1/webhooks")
        assert cap.json_body == {"url": "https://example.com/hook"}
        assert wh.secret == "sec_abc"

    def test_list(self):
        ln, cap = create_client(json_body=[{"id": "wh_1", "url": "https://example.com/hook", "active": True}])
        whs = ln.webhooks.list()
        assert cap.path == "/v1/webhooks"
        assert whs[0].active is True

    def test_delete(self):
        ln, cap = create_client(status=204)
        ln.webhooks.delete("wh_1")
        assert (cap.method, cap.path) == ("DELETE", "/v1/webhooks/wh_1")


# ---------------------------------------------------------------------------
# Backup / Restore
# ---------------------------------------------------------------------------


class TestBackup:
    def test_recovery(self):
        ln, cap = create_client(json_body={"passphrase": "word1 word2 word3"})
        r = ln.backup.recovery()
        assert (cap.method, cap.path) == ("POST", "/v1/backup/recovery")
        assert r.passphrase == "word1 word2 word3"

    def test_passkey_begin(self):
        ln, cap = create_client(json_body={"sessionId": "sess_1", "options": {"challenge": "abc"}})
        ch = ln.backup.passkey_begin()
        assert cap.path == "/v1/backup/passkey/begin"
        assert ch.options == {"challenge": "abc"}

    def test_passkey_complete(self):
        ln, cap = create_client(status=204)
        ln.backup.passkey_complete(session_id="sess_1", attestation={"id": "cred_1"})
        assert (cap.method, cap.path) == ("POST", "/v1/backup/passkey/complete")
        assert cap.json_body == {"sessionId": "sess_1", "attestation": {"id": "cred_1"}}


class TestRestore:
    def test_recovery(self):
        ln, cap = create_client(json_body=CREDENTIALS)
        w = ln.restore.recovery(passphrase="word1 word2 word3")
        assert (cap.method, cap.path) == ("POST", "/v1/restore/recovery")
        assert cap.json_body == {"passphrase": "word1 word2 word3"}
        assert w.wallet_id == "wal_1"

    def test_passkey_begin(self):
        ln, cap = create_client(json_body={"sessionId": "sess_2", "options": {"challenge": "xyz"}})
        assert ln.restore.passkey_begin().session_id == "sess_2"
        assert cap.path == "/v1/restore/passkey/begin"

    def test_passkey_complete(self):
        ln, cap = create_client(json_body=CREDENTIALS)
        w = ln.restore.passkey_complete(session_id="sess_2", assertion={"id": "cred_1"})
        assert cap.path == "/v1/restore/passkey/complete"
        assert cap.json_body == {"sessionId": "sess_2", "assertion": {"id": "cred_1"}}
        assert w.secondary_key == "sk_1"


# ---------------------------------------------------------------------------
# L402
# ---------------------------------------------------------------------------


class TestL402:
    def test_create_challenge(self):
        ln, cap = create_client(json_body={
            "macaroon": "mac_abc", "invoice": "lnbc1...", "paymentHash": "hash_1",
            "expiresAt": "2024-01-01T00:00:00Z", "wwwAuthenticate": "L402 mac:inv",
        })
        ch = ln.l402.create_challenge(amount=100, expiry_seconds=600, caveats=["service=api"])
        assert (cap.method, cap.path) == ("POST", "/v1/l402/challenges")
        assert cap.json_body == {"amount": 100, "expirySeconds": 600, "caveats": ["service=api"]}
        assert ch.www_authenticate == "L402 mac:inv"

    def test_verify(self):
        ln, cap = create_client(json_body={"valid": False, "error": "expired"})
        resp = ln.l402.verify(authorization="L402 token:preimage")
        assert cap.path == "/v1/l402/verify"
        assert resp.valid is False
        assert resp.error == "expired"

    def test_pay(self):
        ln, cap = create_client(json_body={
            "authorization": "L402 token:preimage", "paymentHash": "hash_1",
            "preimage": "pre_1", "amount": 100, "fee": 1, "paymentNumber": 1, "status": "settled",
        })
        resp = ln.l402.pay(www_authenticate="L402 mac:inv", max_fee=10, wait=True)
        assert cap.path == "/v1/l402/pay"
        assert cap.json_body == {"wwwAuthenticate": "L402 mac:inv", "maxFee": 10, "wait": True}
        assert resp.payment_number == 1
