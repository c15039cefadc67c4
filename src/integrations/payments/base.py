"""
Base interface for payment gateways.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


class PaymentGatewayError(Exception):
    """Raised when a payment gateway operation fails."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.details = details or {}


@dataclass(frozen=True)
class CheckoutSession:
    """Hosted checkout created by the gateway."""
    checkout_url: str
    reference: str


@dataclass(frozen=True)
class PaymentEvent:
    """Verified payment notification."""
    event: str
    customer_email: Optional[str]
    amount_minor: Optional[int]
    reference: Optional[str] = None
    metadata: dict = field(default_factory=dict)


class PaymentGateway(ABC):
    """Abstract base class for payment providers."""

    # Minor currency units per major unit expected by the gateway API
    minor_unit_factor: int = 1

    @abstractmethod
    async def create_checkout(
        self,
        amount_minor: int,
        customer_email: str,
        callback_url: str,
        metadata: Optional[dict] = None,
    ) -> CheckoutSession:
        """
        Create a hosted checkout session.

        Args:
            amount_minor: Amount in the gateway's minor units
            customer_email: Customer identifier sent to the gateway
            callback_url: URL the gateway calls back
            metadata: Extra data echoed back in webhooks

        Returns:
            CheckoutSession with payment URL and reference

        Raises:
            PaymentGatewayError: On network error or unsuccessful response
        """
        pass

    @abstractmethod
    def verify_signature(self, payload: bytes, signature: Optional[str]) -> bool:
        """Check a webhook signature over the raw body."""
        pass

    @abstractmethod
    def parse_event(self, payload: bytes) -> PaymentEvent:
        """
        Decode a webhook body.

        Raises:
            PaymentGatewayError: If the body is not a valid event
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Gateway name."""
        pass
