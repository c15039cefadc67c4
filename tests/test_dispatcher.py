"""
Tests for inbound event dispatch and per-user ordering.
"""
import asyncio

import pytest
import pytest_asyncio

from src.core.conversation import ConversationStep, EventDispatcher, InboundEvent, SessionRegistry
from src.core.conversation import messages

from tests.conftest import ADMIN_ID, USER_ID


class SlowCatalog:
    """Catalog wrapper that yields to the loop before answering."""

    def __init__(self, catalog, delay=0.01):
        self.catalog = catalog
        self.delay = delay

    async def list_categories(self):
        await asyncio.sleep(self.delay)
        return await self.catalog.list_categories()

    async def list_items(self, category_name):
        await asyncio.sleep(self.delay)
        return await self.catalog.list_items(category_name)


@pytest.fixture
def registry(channel):
    return SessionRegistry(channel)


@pytest_asyncio.fixture
async def running(registry, engine):
    dispatcher = EventDispatcher(registry, engine)
    loop_task = asyncio.create_task(dispatcher.run())
    yield dispatcher
    loop_task.cancel()
    await asyncio.gather(loop_task, return_exceptions=True)
    await dispatcher.stop()


async def send_all(dispatcher, *events):
    for sender, text in events:
        await dispatcher.submit(InboundEvent(sender_id=sender, text=text))
    await asyncio.wait_for(dispatcher.queue.join(), timeout=5)


class TestSessionRegistry:

    @pytest.mark.asyncio
    async def test_welcome_sent_once(self, registry, channel):
        first, created = await registry.get_or_create(USER_ID)
        again, created_again = await registry.get_or_create(USER_ID)

        assert created and not created_again
        assert first is again
        assert channel.texts_for(USER_ID) == [messages.WELCOME_MESSAGE]
        assert USER_ID in registry
        assert len(registry) == 1

    @pytest.mark.asyncio
    async def test_reset_starts_new_session(self, registry):
        await registry.get_or_create(USER_ID)
        registry.reset(USER_ID)

        assert registry.get(USER_ID) is None
        _, created = await registry.get_or_create(USER_ID)
        assert created

    def test_lock_per_user(self, registry):
        assert registry.lock_for("1") is registry.lock_for("1")
        assert registry.lock_for("1") is not registry.lock_for("2")


class TestEventDispatcher:

    @pytest.mark.asyncio
    async def test_first_message_only_welcomes(self, running, registry, channel):
        await send_all(running, (USER_ID, "menu"))

        assert channel.texts_for(USER_ID) == [messages.WELCOME_MESSAGE]
        assert registry.get(USER_ID).step == ConversationStep.INIT

    @pytest.mark.asyncio
    async def test_example_order_flow(self, running, registry, channel, gateway):
        await send_all(
            running,
            (USER_ID, "hi"),
            (USER_ID, "hi"),
            (USER_ID, "1"),
            (USER_ID, "1"),
            (USER_ID, "checkout"),
            (USER_ID, "123 Main St"),
        )

        state = registry.get(USER_ID)
        assert state.step == ConversationStep.PAID
        assert len(state.cart) == 0
        assert gateway.calls[0]["amount_minor"] == 200000
        assert "Pay here:" in channel.last(USER_ID)
        assert "Address: 123 Main St" in channel.last(ADMIN_ID)

    @pytest.mark.asyncio
    async def test_user_messages_applied_in_order(self, registry, engine, catalog, channel):
        engine.catalog = SlowCatalog(catalog)
        dispatcher = EventDispatcher(registry, engine)
        loop_task = asyncio.create_task(dispatcher.run())
        try:
            await send_all(
                dispatcher,
                (USER_ID, "hi"),
                (USER_ID, "menu"),
                (USER_ID, "1"),
                (USER_ID, "2"),
                (USER_ID, "cart"),
            )
        finally:
            loop_task.cancel()
            await asyncio.gather(loop_task, return_exceptions=True)

        state = registry.get(USER_ID)
        assert state.cart.item_names() == ["Red Hot Fries"]
        assert "Red Hot Fries" in channel.last(USER_ID)

    @pytest.mark.asyncio
    async def test_users_are_independent(self, running, registry):
        await send_all(
            running,
            ("1", "hi"),
            ("2", "hi"),
            ("1", "menu"),
            ("2", "menu"),
            ("1", "1"),
            ("2", "2"),
            ("1", "1"),
            ("2", "1"),
        )

        assert registry.get("1").cart.item_names() == ["Regular Fries"]
        assert registry.get("2").cart.item_names() == ["Chilli Wings"]

    @pytest.mark.asyncio
    async def test_error_does_not_stop_loop(self, running, registry, engine, channel):
        original = engine.handle

        async def flaky(state, text):
            if text == "boom":
                raise RuntimeError("boom")
            await original(state, text)

        engine.handle = flaky

        await send_all(running, (USER_ID, "hi"), (USER_ID, "boom"), (USER_ID, "menu"))

        assert registry.get(USER_ID).step == ConversationStep.CATEGORY_SELECTION
