"""
Conversation engine.
Drives one user's dialogue: menu browsing, cart building and checkout.
"""

import logging
import re
from typing import TYPE_CHECKING, Optional

from src.core.conversation import messages
from src.core.conversation.models import ConversationState
from src.core.conversation.states import ConversationStep
from src.integrations.catalog.base import CatalogMismatchError
from src.integrations.messaging.base import MessageChannel

if TYPE_CHECKING:
    from src.core.checkout.orchestrator import CheckoutOrchestrator
    from src.integrations.catalog.gateway import CatalogGateway

logger = logging.getLogger(__name__)


CANCEL_COMMANDS = {"cancel"}
CART_COMMANDS = {"cart"}
MENU_COMMANDS = {"menu", "hi"}
CHECKOUT_COMMANDS = {"checkout"}
BACK_COMMANDS = {"back"}

CHOICE_PATTERN = re.compile(r"^[0-9]+$")


def normalize(text: str) -> str:
    return text.strip().lower()


def parse_choice(text: str) -> Optional[int]:
    """'3' -> 3; anything that is not a plain base-10 integer -> None."""
    if not CHOICE_PATTERN.match(text):
        return None
    return int(text)


class ConversationEngine:
    """
    Per-user state machine.

    The engine is the only writer of ConversationState. Callers must
    serialize calls for the same user (see EventDispatcher).
    """

    def __init__(
        self,
        channel: MessageChannel,
        catalog: "CatalogGateway",
        checkout: "CheckoutOrchestrator",
    ):
        self.channel = channel
        self.catalog = catalog
        self.checkout = checkout

    async def reply(self, state: ConversationState, text: str) -> None:
        await self.channel.send(state.user_id, text)

    async def handle(self, state: ConversationState, text: str) -> None:
        """Apply one inbound message to the user's state."""
        command = normalize(text)

        # Commands take priority over step-specific input
        if command in CANCEL_COMMANDS:
            await self.cancel(state)
        elif command in CART_COMMANDS:
            await self.reply(state, messages.render_cart(state.cart))
        elif command in MENU_COMMANDS:
            await self.show_categories(state)
        elif command in CHECKOUT_COMMANDS:
            await self.start_checkout(state)
        elif state.step == ConversationStep.CATEGORY_SELECTION:
            await self.select_category(state, command)
        elif state.step == ConversationStep.ITEM_SELECTION:
            await self.select_item(state, command)
        elif state.step == ConversationStep.ADDRESS:
            await self.submit_address(state, text)
        else:
            await self.reply(state, messages.HELP_MESSAGE)

    async def cancel(self, state: ConversationState) -> None:
        state.reset()
        logger.debug(f"User {state.user_id} cancelled the order")
        await self.reply(state, messages.CANCELLED_MESSAGE)

    async def show_categories(self, state: ConversationState) -> None:
        categories = await self.catalog.list_categories()
        state.categories = categories
        state.current_items = []
        state.step = ConversationStep.CATEGORY_SELECTION
        await self.reply(state, messages.render_categories(categories))

    async def select_category(self, state: ConversationState, command: str) -> None:
        choice = parse_choice(command)
        if choice is None or not 1 <= choice <= len(state.categories):
            await self.reply(state, messages.render_invalid_category(len(state.categories)))
            return

        category = state.categories[choice - 1]
        try:
            items = await self.catalog.list_items(category.name)
        except CatalogMismatchError as e:
            # Items and categories must come from the same dataset
            logger.warning(f"Switching user {state.user_id} to built-in menu: {e}")
            categories = await self.catalog.fallback_categories()
            state.categories = categories
            state.current_items = []
            state.step = ConversationStep.CATEGORY_SELECTION
            await self.reply(
                state,
                f"{messages.MENU_CHANGED_MESSAGE}\n\n{messages.render_categories(categories)}",
            )
            return

        state.current_items = items
        state.step = ConversationStep.ITEM_SELECTION
        await self.reply(state, messages.render_items(category, items))

    async def select_item(self, state: ConversationState, command: str) -> None:
        if command in BACK_COMMANDS:
            # Cached list from the last menu fetch, no catalog call
            state.current_items = []
            state.step = ConversationStep.CATEGORY_SELECTION
            await self.reply(state, messages.render_categories(state.categories))
            return

        choice = parse_choice(command)
        if choice is None or not 1 <= choice <= len(state.current_items):
            await self.reply(state, messages.render_invalid_item(len(state.current_items)))
            return

        item = state.current_items[choice - 1]
        state.cart.add(item)
        await self.reply(state, messages.render_item_added(item))

    async def start_checkout(self, state: ConversationState) -> None:
        if not state.cart:
            await self.reply(state, messages.EMPTY_CART_CHECKOUT_MESSAGE)
            return
        state.step = ConversationStep.ADDRESS
        await self.reply(state, messages.ADDRESS_PROMPT)

    async def submit_address(self, state: ConversationState, text: str) -> None:
        address = text.strip()
        if not address:
            await self.reply(state, messages.EMPTY_ADDRESS_MESSAGE)
            return

        state.address = address
        result = await self.checkout.checkout(state.user_id, state.cart.snapshot(), address)
        if result.success:
            state.cart.clear()
            state.step = ConversationStep.PAID
            logger.info(f"User {state.user_id} checked out, reference {result.reference}")
        else:
            logger.info(f"Checkout for user {state.user_id} failed, waiting for retry")
