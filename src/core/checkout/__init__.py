"""
Checkout module for Uncle's Fries bot.
Payment session creation and payment webhook handling.
"""

from src.core.checkout.orchestrator import (
    CheckoutOrchestrator,
    CheckoutResult,
    customer_email_for,
)
from src.core.checkout.webhook import PaymentWebhookHandler

__all__ = [
    "CheckoutOrchestrator",
    "CheckoutResult",
    "customer_email_for",
    "PaymentWebhookHandler",
]
