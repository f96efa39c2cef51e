"""Checkout totals: delivery fee and collection discount."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.config import (
    COLLECTION_DISCOUNT_RATE,
    COLLECTION_DISCOUNT_THRESHOLD,
    DELIVERY_FEE,
    DELIVERY_FEE_THRESHOLD,
)
from storefront.models import ORDER_MODE_COLLECTION, ORDER_MODE_DELIVERY, ORDER_MODES

_ZERO = Decimal("0")


@dataclass(frozen=True)
class CheckoutTotals:
    """Itemized amounts shown on the checkout receipt."""

    subtotal: Decimal
    order_mode: str
    delivery_fee: Decimal
    collection_discount: Decimal
    total: Decimal


def to_decimal(amount: Decimal | int | float | str) -> Decimal:
    """Convert an amount to Decimal without picking up binary float noise."""
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def compute_totals(subtotal: Decimal | int | float | str, order_mode: str) -> CheckoutTotals:
    """
    Price a checkout for ``order_mode``.

    Delivery orders strictly below the threshold pay the delivery fee.
    Collection orders strictly above the threshold get the percentage
    discount. An order exactly at 15.00 pays no fee and gets no discount.
    Amounts are not rounded here.
    """
    if order_mode not in ORDER_MODES:
        raise ValueError(f"Unknown order mode: {order_mode!r}")

    amount = to_decimal(subtotal)

    delivery_fee = _ZERO
    if order_mode == ORDER_MODE_DELIVERY and amount < DELIVERY_FEE_THRESHOLD:
        delivery_fee = DELIVERY_FEE

    collection_discount = _ZERO
    if order_mode == ORDER_MODE_COLLECTION and amount > COLLECTION_DISCOUNT_THRESHOLD:
        collection_discount = amount * COLLECTION_DISCOUNT_RATE

    return CheckoutTotals(
        subtotal=amount,
        order_mode=order_mode,
        delivery_fee=delivery_fee,
        collection_discount=collection_discount,
        total=amount + delivery_fee - collection_discount,
    )
