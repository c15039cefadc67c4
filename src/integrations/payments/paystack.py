"""
Paystack payment gateway.

Amounts are sent in kobo (1 NGN = 100 kobo).
Webhooks are signed with HMAC-SHA512 of the raw body using the secret key,
hex-encoded in the x-paystack-signature header.

Documentation: https://paystack.com/docs/api/
"""

import asyncio
import hashlib
import hmac
import json
import logging
from typing import Optional

import aiohttp

from src.config import settings
from src.integrations.payments.base import (
    CheckoutSession,
    PaymentEvent,
    PaymentGateway,
    PaymentGatewayError,
)

logger = logging.getLogger(__name__)


SIGNATURE_HEADER = "x-paystack-signature"


def compute_signature(secret: str, payload: bytes) -> str:
    """Hex HMAC-SHA512 of payload."""
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha512).hexdigest()


class PaystackGateway(PaymentGateway):
    """Paystack transaction API client."""

    BASE_URL = "https://api.paystack.co"

    minor_unit_factor = 100

    def __init__(
        self,
        secret_key: str | None = None,
        timeout: float | None = None,
        base_url: str | None = None,
    ):
        self.secret_key = secret_key or settings.paystack_secret
        self.timeout = timeout or settings.payment_timeout_seconds
        self.base_url = base_url or self.BASE_URL

    def _get_headers(self) -> dict[str, str]:
        """Get API headers with authorization."""
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }

    async def create_checkout(
        self,
        amount_minor: int,
        customer_email: str,
        callback_url: str,
        metadata: Optional[dict] = None,
    ) -> CheckoutSession:
        """Initialize a Paystack transaction."""
        if not self.secret_key:
            raise PaymentGatewayError("Paystack secret key not configured")

        payload = {
            "email": customer_email,
            "amount": amount_minor,
            "callback_url": callback_url,
            "metadata": metadata or {},
        }

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    f"{self.base_url}/transaction/initialize",
                    json=payload,
                    headers=self._get_headers(),
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    response.raise_for_status()
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise PaymentGatewayError(f"Failed to initialize Paystack transaction: {e}") from e

        if not isinstance(data, dict) or not data.get("status"):
            message = data.get("message") if isinstance(data, dict) else None
            raise PaymentGatewayError(
                f"Paystack initialization failed: {message}",
                details=data if isinstance(data, dict) else None,
            )

        result = data.get("data") if isinstance(data.get("data"), dict) else {}
        url = result.get("authorization_url")
        reference = result.get("reference")
        if not url or not reference:
            raise PaymentGatewayError("Paystack response missing authorization_url or reference", details=data)

        logger.info(f"Paystack transaction initialized: reference={reference}, amount={amount_minor}")
        return CheckoutSession(checkout_url=url, reference=reference)

    def verify_signature(self, payload: bytes, signature: Optional[str]) -> bool:
        """Verify Paystack webhook signature."""
        if not self.secret_key or not signature:
            return False
        expected = compute_signature(self.secret_key, payload)
        return hmac.compare_digest(expected.encode("utf-8"), signature.strip().encode("utf-8"))

    def parse_event(self, payload: bytes) -> PaymentEvent:
        """Decode a Paystack webhook body."""
        try:
            body = json.loads(payload)
        except ValueError as e:
            raise PaymentGatewayError(f"Webhook body is not JSON: {e}") from e

        if not isinstance(body, dict) or not isinstance(body.get("event"), str):
            raise PaymentGatewayError("Webhook body has no event")

        data = body.get("data") if isinstance(body.get("data"), dict) else {}
        customer = data.get("customer") if isinstance(data.get("customer"), dict) else {}
        amount = data.get("amount")
        metadata = data.get("metadata") if isinstance(data.get("metadata"), dict) else {}

        return PaymentEvent(
            event=body["event"],
            customer_email=customer.get("email"),
            amount_minor=amount if isinstance(amount, int) and not isinstance(amount, bool) else None,
            reference=data.get("reference"),
            metadata=metadata,
        )

    @property
    def name(self) -> str:
        return "paystack"
