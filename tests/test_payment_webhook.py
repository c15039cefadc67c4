"""
Tests for payment webhook verification and the HTTP route.
"""
import json

import pytest
from aiohttp.test_utils import TestClient, TestServer

from src.core.checkout import PaymentWebhookHandler
from src.integrations.payments import compute_signature
from src.integrations.payments.paystack import SIGNATURE_HEADER
from src.web.server import WEBHOOK_PATH, create_webhook_app

from tests.conftest import ADMIN_ID, PAYSTACK_SECRET, FakeChannel


def charge_payload(event="charge.success", amount=450000, email="cust_42@unclefries.com", reference="ref1"):
    return json.dumps({
        "event": event,
        "data": {
            "amount": amount,
            "reference": reference,
            "customer": {"email": email},
            "metadata": {"recipient_id": "42"},
        },
    }).encode("utf-8")


def sign(payload: bytes) -> str:
    return compute_signature(PAYSTACK_SECRET, payload)


@pytest.fixture
def handler(channel, gateway):
    return PaymentWebhookHandler(channel, gateway, admin_recipient_id=ADMIN_ID)


class TestWebhookHandler:

    @pytest.mark.asyncio
    async def test_valid_charge_notifies_admin_once(self, handler, channel):
        payload = charge_payload()

        assert await handler.handle(payload, sign(payload))

        assert len(channel.sent) == 1
        recipient, text = channel.sent[0]
        assert recipient == ADMIN_ID
        assert "New Order Paid!" in text
        assert "Amount: ₦4,500" in text
        assert "Customer: cust_42@unclefries.com" in text
        assert "Reference: ref1" in text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("signature", [None, "", "deadbeef", "x" * 128])
    async def test_bad_signature_ignored(self, handler, channel, signature):
        assert not await handler.handle(charge_payload(), signature)
        assert channel.sent == []

    @pytest.mark.asyncio
    async def test_signature_over_different_body_ignored(self, handler, channel):
        signature = sign(charge_payload(amount=100))
        assert not await handler.handle(charge_payload(amount=450000), signature)
        assert channel.sent == []

    @pytest.mark.asyncio
    async def test_non_ascii_signature_ignored(self, handler, channel):
        assert not await handler.handle(charge_payload(), "sïgnature")
        assert channel.sent == []

    @pytest.mark.asyncio
    async def test_other_events_ignored(self, handler, channel):
        payload = charge_payload(event="transfer.success")
        assert not await handler.handle(payload, sign(payload))
        assert channel.sent == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [b"not json", b"[]", b'{"data": {}}'])
    async def test_malformed_body_ignored(self, handler, channel, payload):
        assert not await handler.handle(payload, sign(payload))
        assert channel.sent == []

    @pytest.mark.asyncio
    async def test_no_admin_configured(self, gateway, monkeypatch):
        from src.config import settings
        monkeypatch.setattr(settings, "admin_recipient_id", None)
        channel = FakeChannel()
        handler = PaymentWebhookHandler(channel, gateway)
        payload = charge_payload()

        assert not await handler.handle(payload, sign(payload))
        assert channel.sent == []

    @pytest.mark.asyncio
    async def test_send_failure_is_contained(self, handler, channel):
        async def broken(recipient_id, text):
            raise RuntimeError("boom")

        channel.send = broken
        payload = charge_payload()

        assert not await handler.handle(payload, sign(payload))

    @pytest.mark.asyncio
    async def test_empty_admin_id_disables_notification(self, gateway, monkeypatch):
        from src.config import settings
        monkeypatch.setattr(settings, "admin_recipient_id", "777")
        channel = FakeChannel()
        handler = PaymentWebhookHandler(channel, gateway, admin_recipient_id="")
        payload = charge_payload()

        assert not await handler.handle(payload, sign(payload))
        assert channel.sent == []


class TestWebhookRoute:

    @pytest.mark.asyncio
    async def test_valid_delivery(self, handler, channel):
        payload = charge_payload()
        async with TestClient(TestServer(create_webhook_app(handler))) as client:
            response = await client.post(
                WEBHOOK_PATH,
                data=payload,
                headers={SIGNATURE_HEADER: sign(payload), "Content-Type": "application/json"},
            )
            assert response.status == 200
            assert await response.text() == "OK"

        assert channel.texts_for(ADMIN_ID)

    @pytest.mark.asyncio
    async def test_unsigned_delivery_still_acknowledged(self, handler, channel):
        async with TestClient(TestServer(create_webhook_app(handler))) as client:
            response = await client.post(WEBHOOK_PATH, data=charge_payload())
            assert response.status == 200

        assert channel.sent == []
