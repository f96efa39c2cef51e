"""Domain models for the storefront."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Hashable

ORDER_MODE_DELIVERY = "delivery"
ORDER_MODE_COLLECTION = "collection"
ORDER_MODES = (ORDER_MODE_DELIVERY, ORDER_MODE_COLLECTION)

LineKey = tuple[Hashable, int]
"""Composite cart line identity: ``(dish_id, spice_level)``."""


def line_key(dish_id: Hashable, spice_level: int | None = None) -> LineKey:
    """Build the identity key of a cart line; a missing spice level counts as 0."""
    return (dish_id, spice_level or 0)


@dataclass(frozen=True)
class Dish:
    """A menu offering."""

    dish_id: int
    name: str
    price: Decimal
    description: str = ""
    category: str = ""
    image: str = ""
    is_vegetarian: bool = False
    is_spicy: bool = False
    is_popular: bool = False


@dataclass(frozen=True)
class Restaurant:
    """The restaurant whose menu is being browsed."""

    restaurant_id: str
    name: str
    address: str = ""
    delivery_time: str = ""
    is_open: bool = True


@dataclass
class CartLine:
    """One (dish, spice level) pairing with its quantity."""

    dish: Dish
    restaurant_id: str
    quantity: int = 1
    spice_level: int = 0

    @property
    def key(self) -> LineKey:
        return line_key(self.dish.dish_id, self.spice_level)

    @property
    def subtotal(self) -> Decimal:
        return self.dish.price * self.quantity


@dataclass(frozen=True)
class OrderLine:
    """Immutable copy of a cart line taken at checkout."""

    dish_id: int
    name: str
    unit_price: Decimal
    quantity: int
    spice_level: int = 0

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    @classmethod
    def from_cart_line(cls, line: CartLine) -> OrderLine:
        return cls(
            dish_id=line.dish.dish_id,
            name=line.dish.name,
            unit_price=line.dish.price,
            quantity=line.quantity,
            spice_level=line.spice_level,
        )
