"""
Bot handlers registration.
"""

from aiogram import Dispatcher

from src.bot.handlers.messages import router as messages_router


def register_handlers(dp: Dispatcher) -> None:
    """Register all handlers to dispatcher."""
    dp.include_router(messages_router)
