"""
Telegram transport setup.
The Bot and Dispatcher are built once in main() and passed to whatever needs them.
"""

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from src.bot.handlers import register_handlers
from src.config import settings
from src.core.conversation import EventDispatcher


def create_bot(token: str | None = None) -> Bot:
    """Create the Telegram bot. Replies are rendered as HTML."""
    return Bot(
        token=token or settings.telegram_bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )


def create_dispatcher(events: EventDispatcher) -> Dispatcher:
    """
    Create the update dispatcher with handlers registered.

    The event dispatcher is injected into handlers as workflow data;
    conversation state lives in SessionRegistry, not in aiogram FSM.
    """
    dp = Dispatcher(events=events)
    register_handlers(dp)
    return dp
