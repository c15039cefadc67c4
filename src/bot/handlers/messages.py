"""
Message handler - forwards every text message to the event dispatcher.
"""

import logging

from aiogram import F, Router
from aiogram.types import Message

from src.core.conversation import EventDispatcher, InboundEvent

router = Router(name="messages")
logger = logging.getLogger(__name__)


@router.message(F.text)
async def handle_message(message: Message, events: EventDispatcher) -> None:
    """
    Queue the message for the conversation engine.

    The sender is identified by chat ID so replies go back to the same chat.
    """
    sender_id = str(message.chat.id)
    logger.debug(f"Message from {sender_id}: {message.text!r}")
    await events.submit(InboundEvent(sender_id=sender_id, text=message.text))
