"""
Checkout orchestration.
Turns a finished cart and address into a payment link and an admin order summary.
"""

import logging
from dataclasses import dataclass
from html import escape
from typing import Optional, Sequence

from src.config import settings
from src.core.conversation.messages import format_price, join_names
from src.core.conversation.models import MenuItem
from src.integrations.messaging.base import MessageChannel
from src.integrations.payments.base import CheckoutSession, PaymentGateway, PaymentGatewayError

logger = logging.getLogger(__name__)


CUSTOMER_EMAIL_DOMAIN = "unclefries.com"

PAYMENT_FAILED_MESSAGE = (
    "❌ Payment link failed, please try again later.\n"
    "Send your address again to retry, or type <b>cancel</b> to start over."
)


def customer_email_for(user_id: str) -> str:
    """Stable pseudo-email the gateway uses to identify the customer."""
    local = user_id.replace("@", "_").replace(".", "_")
    return f"cust_{local}@{CUSTOMER_EMAIL_DOMAIN}"


@dataclass(frozen=True)
class CheckoutResult:
    """Outcome of a checkout attempt."""
    success: bool
    total: int
    session: Optional[CheckoutSession] = None

    @property
    def reference(self) -> Optional[str]:
        return self.session.reference if self.session else None


class CheckoutOrchestrator:
    """Creates payment sessions and sends the resulting messages."""

    def __init__(
        self,
        channel: MessageChannel,
        gateway: PaymentGateway,
        admin_recipient_id: str | None = None,
        callback_url: str | None = None,
    ):
        self.channel = channel
        self.gateway = gateway
        self.admin_recipient_id = (
            settings.admin_recipient_id if admin_recipient_id is None else admin_recipient_id
        )
        self.callback_url = callback_url or settings.payment_callback_url

    async def checkout(
        self,
        user_id: str,
        items: Sequence[MenuItem],
        address: str,
    ) -> CheckoutResult:
        """
        Create a payment session for the cart.

        Never retries on its own: each call creates a new session, and
        retries are driven by the user re-sending the address.

        Args:
            user_id: Customer identifier on the messaging channel
            items: Read-only snapshot of the cart (non-empty)
            address: Delivery address (non-empty)

        Returns:
            CheckoutResult; on failure the customer has already been told to retry
        """
        total = sum(item.price for item in items)
        # Fixed by the gateway API (kobo for Paystack), not configurable
        amount_minor = total * self.gateway.minor_unit_factor

        try:
            session = await self.gateway.create_checkout(
                amount_minor=amount_minor,
                customer_email=customer_email_for(user_id),
                callback_url=self.callback_url,
                metadata={"recipient_id": user_id},
            )
        except PaymentGatewayError as e:
            logger.error(f"{self.gateway.name} checkout failed for {user_id}: {e}")
            await self.channel.send(user_id, PAYMENT_FAILED_MESSAGE)
            return CheckoutResult(success=False, total=total)

        await self.channel.send(
            user_id,
            f"💰 Total {format_price(total)}\nPay here: {escape(session.checkout_url)}",
        )
        await self.notify_admin(user_id, items, total, address, session)
        return CheckoutResult(success=True, total=total, session=session)

    async def notify_admin(
        self,
        user_id: str,
        items: Sequence[MenuItem],
        total: int,
        address: str,
        session: CheckoutSession,
    ) -> None:
        """Send the order summary to the admin, if one is configured."""
        if not self.admin_recipient_id:
            logger.debug("ADMIN_RECIPIENT_ID not set, skipping order notification")
            return

        text = (
            f"📦 New order from {escape(user_id)}\n"
            f"Items: {join_names(item.item_name for item in items)}\n"
            f"Total: {format_price(total)}\n"
            f"Address: {escape(address)}\n"
            f"Reference: {escape(session.reference)}"
        )
        await self.channel.send(self.admin_recipient_id, text)
