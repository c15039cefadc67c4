"""
Uncle's Fries Telegram Bot - Main entry point.
"""

import asyncio
import logging

from src.bot.bot import create_bot, create_dispatcher
from src.bot.channel import TelegramChannel
from src.config import settings
from src.core.checkout import CheckoutOrchestrator, PaymentWebhookHandler
from src.core.conversation import ConversationEngine, EventDispatcher, SessionRegistry
from src.integrations.catalog import get_default_catalog
from src.integrations.payments import get_default_gateway
from src.web.server import create_webhook_app, start_webhook_server


# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def main() -> None:
    """Main function to run the bot."""
    logger.info("Starting Uncle's Fries Bot...")

    bot = create_bot()

    # One channel instance shared by every component that sends messages
    channel = TelegramChannel(bot)
    gateway = get_default_gateway()

    engine = ConversationEngine(
        channel=channel,
        catalog=get_default_catalog(),
        checkout=CheckoutOrchestrator(channel, gateway),
    )
    events = EventDispatcher(SessionRegistry(channel), engine)
    dp = create_dispatcher(events)

    if not settings.paystack_secret:
        logger.warning("PAYSTACK_SECRET not set: checkouts will fail and webhooks are ignored")
    if not settings.admin_recipient_id:
        logger.warning("ADMIN_RECIPIENT_ID not set: admin notifications are disabled")

    runner = await start_webhook_server(
        create_webhook_app(PaymentWebhookHandler(channel, gateway)),
        host=settings.webhook_host,
        port=settings.port,
    )
    dispatch_task = asyncio.create_task(events.run())

    # Start polling
    logger.info("Bot is starting...")
    try:
        await dp.start_polling(
            bot,
            allowed_updates=dp.resolve_used_update_types(),
        )
    finally:
        logger.info("Shutting down Uncle's Fries Bot...")
        dispatch_task.cancel()
        await asyncio.gather(dispatch_task, return_exceptions=True)
        await events.stop()
        await runner.cleanup()
        await bot.session.close()
        logger.info("Cleanup complete")


if __name__ == "__main__":
    asyncio.run(main())
