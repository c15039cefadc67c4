"""
Conversation module for Uncle's Fries bot.
Handles per-user dialogue state, menu browsing and cart building.
"""

from src.core.conversation.models import Cart, Category, ConversationState, MenuItem
from src.core.conversation.states import ConversationStep
from src.core.conversation.engine import ConversationEngine, parse_choice
from src.core.conversation.sessions import SessionRegistry
from src.core.conversation.dispatcher import EventDispatcher, InboundEvent

__all__ = [
    # Models
    "Cart",
    "Category",
    "ConversationState",
    "MenuItem",
    # States
    "ConversationStep",
    # Engine
    "ConversationEngine",
    "parse_choice",
    # Dispatch
    "SessionRegistry",
    "EventDispatcher",
    "InboundEvent",
]
