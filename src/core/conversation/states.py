"""
Conversation steps for the ordering dialogue.
"""

from enum import Enum


class ConversationStep(Enum):
    """Step of the per-user ordering flow."""

    INIT = "init"                              # Welcomed, nothing browsed yet
    CATEGORY_SELECTION = "category_selection"  # Category list shown
    ITEM_SELECTION = "item_selection"          # Item list of one category shown
    ADDRESS = "address"                        # Waiting for delivery address
    PAID = "paid"                              # Payment link sent
