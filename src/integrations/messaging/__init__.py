"""
Messaging channel abstraction.
"""

from src.integrations.messaging.base import MessageChannel

__all__ = [
    "MessageChannel",
]
