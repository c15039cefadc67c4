"""
Base interface for outbound messaging channels.
Keeps the conversation logic independent of Telegram specifics.
"""

from abc import ABC, abstractmethod


class MessageChannel(ABC):
    """Abstract base class for a text messaging transport."""

    @abstractmethod
    async def send(self, recipient_id: str, text: str) -> bool:
        """
        Send a text message.

        Implementations must not raise: a failed delivery is logged
        and reported as False.

        Args:
            recipient_id: Opaque recipient identifier
            text: Message body

        Returns:
            True if the message was handed to the transport
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Channel name."""
        pass
