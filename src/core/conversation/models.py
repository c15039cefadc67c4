"""
Catalog, cart and conversation models.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from src.core.conversation.states import ConversationStep


@dataclass(frozen=True)
class Category:
    """Menu category."""
    name: str
    description: str = ""
    kind: str = ""


@dataclass(frozen=True)
class MenuItem:
    """Single menu item. Frozen so a cart entry is a snapshot of the selection."""
    parent_category: str
    item_name: str
    price: int                  # Whole naira
    options: str = ""
    kind: str = ""


class Cart:
    """Ordered list of selected items."""

    def __init__(self, items: Optional[list[MenuItem]] = None):
        self._items: list[MenuItem] = list(items or [])

    def add(self, item: MenuItem) -> None:
        """Append item to cart."""
        self._items.append(item)

    def clear(self) -> None:
        """Remove all items."""
        self._items.clear()

    def total(self) -> int:
        """Sum of item prices."""
        return sum(item.price for item in self._items)

    def item_names(self) -> list[str]:
        return [item.item_name for item in self._items]

    def snapshot(self) -> tuple[MenuItem, ...]:
        """Read-only copy of the current entries."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


@dataclass
class ConversationState:
    """
    Mutable per-user dialogue state.

    Owned by the conversation engine; other components only ever see
    snapshots of the cart.
    """
    user_id: str
    step: ConversationStep = ConversationStep.INIT
    cart: Cart = field(default_factory=Cart)
    categories: list[Category] = field(default_factory=list)
    current_items: list[MenuItem] = field(default_factory=list)
    address: Optional[str] = None

    def reset(self) -> None:
        """Drop the order in progress and return to the start."""
        self.cart.clear()
        self.address = None
        self.categories = []
        self.current_items = []
        self.step = ConversationStep.INIT
