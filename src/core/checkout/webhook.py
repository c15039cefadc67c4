"""
Payment webhook handling.
Verifies gateway callbacks and forwards confirmed payments to the admin.
Independent of conversation state.
"""

import logging
from html import escape
from typing import Optional

from src.config import settings
from src.core.conversation.messages import format_price
from src.integrations.messaging.base import MessageChannel
from src.integrations.payments.base import PaymentGateway, PaymentGatewayError

logger = logging.getLogger(__name__)


CHARGE_SUCCESS = "charge.success"


class PaymentWebhookHandler:
    """Notification bridge from payment webhooks to the admin chat."""

    def __init__(
        self,
        channel: MessageChannel,
        gateway: PaymentGateway,
        admin_recipient_id: str | None = None,
    ):
        self.channel = channel
        self.gateway = gateway
        self.admin_recipient_id = (
            settings.admin_recipient_id if admin_recipient_id is None else admin_recipient_id
        )

    async def handle(self, payload: bytes, signature: Optional[str]) -> bool:
        """
        Process one webhook delivery.

        Unverified or irrelevant events are ignored; nothing is raised to
        the caller, which always acknowledges the delivery.

        Args:
            payload: Raw request body, exactly as received
            signature: Signature header value

        Returns:
            True if an admin notification was sent
        """
        if not self.gateway.verify_signature(payload, signature):
            logger.warning("Ignoring webhook with invalid or missing signature")
            return False

        try:
            event = self.gateway.parse_event(payload)
        except PaymentGatewayError as e:
            logger.warning(f"Ignoring malformed webhook: {e}")
            return False

        if event.event != CHARGE_SUCCESS:
            logger.debug(f"Ignoring webhook event {event.event}")
            return False

        amount = (
            event.amount_minor / self.gateway.minor_unit_factor
            if event.amount_minor is not None
            else None
        )
        logger.info(f"Payment confirmed: {amount} from {event.customer_email}")

        if not self.admin_recipient_id:
            logger.warning("ADMIN_RECIPIENT_ID not set, payment notification skipped")
            return False

        lines = [
            "🚨 New Order Paid!",
            f"Amount: {format_price(amount) if amount is not None else 'unknown'}",
            f"Customer: {escape(event.customer_email or 'unknown')}",
        ]
        if event.reference:
            lines.append(f"Reference: {escape(str(event.reference))}")

        try:
            return await self.channel.send(self.admin_recipient_id, "\n".join(lines))
        except Exception as e:
            logger.error(f"Failed to notify admin about payment: {e}", exc_info=True)
            return False
