"""Rendering helpers for dishes, cart lines and receipts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from rich.text import Text

from storefront.config import CURRENCY_SYMBOL
from storefront.data import spice_label
from storefront.models import ORDER_MODE_COLLECTION, ORDER_MODE_DELIVERY, CartLine, Dish
from storefront.pricing import CheckoutTotals, to_decimal

_CENT = Decimal("0.01")


def format_price(amount: Decimal | int | float | str) -> str:
    """Format an amount in minor-unit precision, rounding half up."""
    value = to_decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP)
    if value < 0:
        return f"-{CURRENCY_SYMBOL}{-value}"
    return f"{CURRENCY_SYMBOL}{value}"


def order_mode_label(order_mode: str) -> str:
    if order_mode == ORDER_MODE_DELIVERY:
        return "Delivery"
    if order_mode == ORDER_MODE_COLLECTION:
        return "Collection"
    return order_mode


def badge_style(flag: str) -> str:
    """Return a consistent badge style for dish flags."""
    if flag == "spicy":
        return "bold #ffffff on #b23a48"
    if flag == "popular":
        return "bold #1f1400 on #e0b84f"
    return "bold #0b1f0f on #5fbf72"


def spice_badge(level: int) -> Text:
    """Chilli marks for a spice level; empty for no spice."""
    text = Text()
    if level <= 0:
        return text
    text.append("🌶" * level, style="bold #e0533d")
    text.append(f" {spice_label(level)}", style="#e0533d")
    return text


def format_dish_label(dish: Dish) -> Text:
    """Render a dish name with price and colored flag tags."""
    text = Text()
    text.append(dish.name)
    text.append(f"  {format_price(dish.price)}", style="dim")
    for flag, enabled, tag in (
        ("vegetarian", dish.is_vegetarian, "V"),
        ("spicy", dish.is_spicy, "S"),
        ("popular", dish.is_popular, "★"),
    ):
        if enabled:
            text.append(" ")
            text.append(tag, style=badge_style(flag))
    return text


def format_cart_line(line: CartLine) -> Text:
    text = Text()
    text.append(f"{line.quantity} x {line.dish.name}")
    badge = spice_badge(line.spice_level)
    if badge.plain:
        text.append("  ")
        text.append_text(badge)
    text.append(f"  {format_price(line.subtotal)}", style="bold")
    return text


def format_receipt(totals: CheckoutTotals) -> Text:
    """Itemized totals: subtotal, fee or discount when present, total."""
    text = Text()
    text.append(f"Subtotal: {format_price(totals.subtotal)}\n")
    if totals.delivery_fee:
        text.append(f"Delivery fee: {format_price(totals.delivery_fee)}\n")
    if totals.collection_discount:
        text.append(f"Collection discount: -{format_price(totals.collection_discount)}\n", style="green")
    text.append(f"Total ({order_mode_label(totals.order_mode)}): {format_price(totals.total)}", style="bold")
    return text
