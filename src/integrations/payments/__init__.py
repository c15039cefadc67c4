"""
Payment gateway factory and initialization.
"""

from functools import lru_cache

from src.integrations.payments.base import (
    CheckoutSession,
    PaymentEvent,
    PaymentGateway,
    PaymentGatewayError,
)
from src.integrations.payments.paystack import PaystackGateway, SIGNATURE_HEADER, compute_signature


@lru_cache(maxsize=1)
def get_default_gateway() -> PaymentGateway:
    """Get cached default payment gateway."""
    return PaystackGateway()


__all__ = [
    "CheckoutSession",
    "PaymentEvent",
    "PaymentGateway",
    "PaymentGatewayError",
    "PaystackGateway",
    "SIGNATURE_HEADER",
    "compute_signature",
    "get_default_gateway",
]
