"""
Outbound texts and menu rendering.
All texts use the Telegram HTML subset; catalog values are escaped.
"""

from html import escape
from typing import Iterable

from src.core.conversation.models import Cart, Category, MenuItem


CURRENCY_SYMBOL = "₦"


WELCOME_MESSAGE = "👋 Welcome to UncleFries!\nType <b>menu</b> to see items."

HELP_MESSAGE = (
    "🤔 Sorry, I didn't get that.\n\n"
    "• <b>menu</b> - browse categories\n"
    "• <b>cart</b> - view your order\n"
    "• <b>checkout</b> - pay for your order\n"
    "• <b>cancel</b> - start over"
)

CANCELLED_MESSAGE = "❌ Order cancelled.\nType <b>menu</b> to start again."

EMPTY_CART_MESSAGE = "🛒 Your cart is empty.\nType <b>menu</b> to start ordering."

EMPTY_CART_CHECKOUT_MESSAGE = (
    "🛒 Your cart is empty, there is nothing to check out yet.\n"
    "Type <b>menu</b> and pick something first."
)

ADDRESS_PROMPT = "📍 Send me your delivery address:"

EMPTY_ADDRESS_MESSAGE = "📍 The address can't be empty. Please send your delivery address:"

MENU_CHANGED_MESSAGE = "⚠️ The menu is limited right now. Please pick a category again."


def format_price(amount: int | float) -> str:
    """2500 -> '₦2,500'; fractional amounts keep two decimals."""
    if isinstance(amount, float) and not amount.is_integer():
        return f"{CURRENCY_SYMBOL}{amount:,.2f}"
    return f"{CURRENCY_SYMBOL}{int(amount):,}"


def render_categories(categories: list[Category]) -> str:
    """Numbered category menu."""
    if not categories:
        return "😔 The menu is empty right now. Please try again later."

    lines = [
        "🍟 <b>WELCOME TO UNCLE'S FRIES!</b> 🍗",
        "",
        "<b>Please choose a category:</b>",
        "",
    ]
    for i, category in enumerate(categories, 1):
        lines.append(f"<b>{i}. {escape(category.name)}</b>")
        if category.description:
            lines.append(f"   {escape(category.description)}")
        lines.append("")

    lines += [
        "📍 <b>Reply with the number of your choice</b>",
        "🛒 <b>Type 'cart' to view your order</b>",
        "❌ <b>Type 'cancel' to start over</b>",
    ]
    return "\n".join(lines)


def render_items(category: Category, items: list[MenuItem]) -> str:
    """Numbered item menu of one category."""
    lines = [f"<b>{escape(category.name.upper())}</b> 🍽️", ""]

    if not items:
        lines += ["Nothing here yet.", ""]
    for i, item in enumerate(items, 1):
        lines.append(f"<b>{i}. {escape(item.item_name)}</b> - {format_price(item.price)}")
        if item.options:
            lines.append(f"   📝 {escape(item.options)}")
        lines.append("")

    if items:
        lines.append("📍 <b>Reply with item number to add to cart</b>")
    lines += [
        "🔙 <b>Type 'back' to return to main menu</b>",
        "💳 <b>Type 'checkout' when you're done</b>",
    ]
    return "\n".join(lines)


def render_cart(cart: Cart) -> str:
    """Cart summary in selection order."""
    if not cart:
        return EMPTY_CART_MESSAGE

    lines = ["🛒 <b>Your order</b>", ""]
    for i, item in enumerate(cart, 1):
        lines.append(f"{i}. {escape(item.item_name)} - {format_price(item.price)}")
    lines += ["", f"<b>Total:</b> {format_price(cart.total())}"]
    return "\n".join(lines)


def render_item_added(item: MenuItem) -> str:
    return f"✅ Added <b>{escape(item.item_name)}</b>.\nType <b>checkout</b> or pick another."


def render_invalid_category(count: int) -> str:
    if count == 0:
        return "❌ Invalid category. Type <b>menu</b> to reload the menu."
    return f"❌ Invalid category. Reply with a number from 1 to {count}."


def render_invalid_item(count: int) -> str:
    if count == 0:
        return "❌ Invalid choice. Type <b>back</b> to pick another category."
    return f"❌ Invalid choice. Reply with a number from 1 to {count}, or <b>back</b>."


def join_names(names: Iterable[str]) -> str:
    return ", ".join(escape(name) for name in names)
