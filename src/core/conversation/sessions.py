"""
In-memory session registry.
One ConversationState and one lock per user identifier, for the process lifetime.
"""

import asyncio
import logging
from typing import Optional

from src.core.conversation.messages import WELCOME_MESSAGE
from src.core.conversation.models import ConversationState
from src.integrations.messaging.base import MessageChannel

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Maps user identifiers to their conversation state."""

    def __init__(self, channel: MessageChannel):
        self.channel = channel
        self._sessions: dict[str, ConversationState] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    async def get_or_create(self, user_id: str) -> tuple[ConversationState, bool]:
        """
        Get the user's state, creating it on first contact.

        A new state is greeted with the welcome message exactly once.

        Returns:
            Tuple of (state, created)
        """
        state = self._sessions.get(user_id)
        if state is not None:
            return state, False

        state = ConversationState(user_id=user_id)
        self._sessions[user_id] = state
        logger.info(f"New session for user {user_id}")
        await self.channel.send(user_id, WELCOME_MESSAGE)
        return state, True

    def get(self, user_id: str) -> Optional[ConversationState]:
        return self._sessions.get(user_id)

    def lock_for(self, user_id: str) -> asyncio.Lock:
        """Lock serializing all processing for one user."""
        lock = self._locks.get(user_id)
        if lock is None:
            lock = self._locks[user_id] = asyncio.Lock()
        return lock

    def reset(self, user_id: str) -> None:
        """Forget the user's state; the next message starts a new session."""
        self._sessions.pop(user_id, None)

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
