"""
HTTP server for payment gateway callbacks.
"""

import logging

from aiohttp import web

from src.core.checkout.webhook import PaymentWebhookHandler
from src.integrations.payments.paystack import SIGNATURE_HEADER

logger = logging.getLogger(__name__)


WEBHOOK_PATH = "/api/paystack/webhook"

webhook_handler_key = web.AppKey("webhook_handler", PaymentWebhookHandler)


async def paystack_webhook(request: web.Request) -> web.Response:
    """Verify and process a Paystack event. Always acknowledged with 200."""
    handler = request.app[webhook_handler_key]
    payload = await request.read()
    await handler.handle(payload, request.headers.get(SIGNATURE_HEADER))
    return web.Response(status=200, text="OK")


def create_webhook_app(handler: PaymentWebhookHandler) -> web.Application:
    """Create aiohttp application serving the webhook route."""
    app = web.Application()
    app[webhook_handler_key] = handler
    app.router.add_post(WEBHOOK_PATH, paystack_webhook)
    return app


async def start_webhook_server(app: web.Application, host: str, port: int) -> web.AppRunner:
    """Start serving app in the current event loop. Caller owns runner cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host=host, port=port)
    await site.start()
    logger.info(f"Webhook server listening on {host}:{port}{WEBHOOK_PATH}")
    return runner
