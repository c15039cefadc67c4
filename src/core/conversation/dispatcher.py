"""
Inbound event dispatch.

All inbound messages go through one process-wide queue consumed by a single
loop. Each event is processed in its own task under the sender's lock, so
different users progress concurrently while one user's messages are applied
strictly in arrival order.
"""

import asyncio
import logging
from dataclasses import dataclass

from src.core.conversation.engine import ConversationEngine
from src.core.conversation.sessions import SessionRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InboundEvent:
    """Text message received from a user."""
    sender_id: str
    text: str


class EventDispatcher:
    """Single consumer of the inbound event queue."""

    def __init__(
        self,
        registry: SessionRegistry,
        engine: ConversationEngine,
        maxsize: int = 0,
    ):
        self.registry = registry
        self.engine = engine
        self.queue: asyncio.Queue[InboundEvent] = asyncio.Queue(maxsize=maxsize)
        self._tasks: set[asyncio.Task] = set()

    async def submit(self, event: InboundEvent) -> None:
        """Enqueue an inbound event."""
        await self.queue.put(event)

    async def run(self) -> None:
        """Consume events until cancelled."""
        logger.info("Event dispatcher started")
        while True:
            event = await self.queue.get()
            # Tasks start in creation order, so they queue on the user lock in arrival order
            task = asyncio.create_task(self.process(event))
            self._tasks.add(task)
            task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        self.queue.task_done()

    async def process(self, event: InboundEvent) -> None:
        """Apply one event to its sender's session."""
        async with self.registry.lock_for(event.sender_id):
            try:
                state, created = await self.registry.get_or_create(event.sender_id)
                if created:
                    return
                await self.engine.handle(state, event.text)
            except Exception as e:
                logger.error(f"Failed to process message from {event.sender_id}: {e}", exc_info=True)

    async def stop(self) -> None:
        """Cancel in-flight processing."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Event dispatcher stopped")
