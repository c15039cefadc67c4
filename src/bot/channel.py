"""
Telegram implementation of the message channel.
"""

import logging

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError

from src.integrations.messaging.base import MessageChannel

logger = logging.getLogger(__name__)


class TelegramChannel(MessageChannel):
    """Sends texts through the Telegram Bot API. Recipient IDs are chat IDs."""

    def __init__(self, bot: Bot):
        self.bot = bot

    async def send(self, recipient_id: str, text: str) -> bool:
        """Send text, logging and swallowing delivery failures."""
        try:
            chat_id = int(recipient_id)
        except (TypeError, ValueError):
            logger.error(f"Cannot send to {recipient_id!r}: not a Telegram chat ID")
            return False

        try:
            await self.bot.send_message(chat_id=chat_id, text=text)
        except TelegramAPIError as e:
            logger.error(f"Failed to send message to {chat_id}: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error sending to {chat_id}: {e}", exc_info=True)
            return False
        return True

    @property
    def name(self) -> str:
        return "telegram"
