"""Cart state for one storefront session."""

from __future__ import annotations

import logging
from dataclasses import asdict, replace
from decimal import Decimal
from typing import Any, Hashable

from storefront.models import CartLine, Dish, LineKey, OrderLine, line_key

logger = logging.getLogger(__name__)


class CartStore:
    """
    Owns the cart lines and the active restaurant for a session.

    Lines are identified by ``(dish_id, spice_level)``: the same dish ordered
    at two spice levels is two lines with independent quantities. A cart only
    ever holds lines from one restaurant; adding a dish from another
    restaurant drops the existing lines first.

    All reads are recomputed from the current lines, so a read made right
    after a mutation always reflects it.
    """

    def __init__(self) -> None:
        self._lines: list[CartLine] = []
        self._current_restaurant_id: str | None = None
        self._revision = 0

    @property
    def current_restaurant_id(self) -> str | None:
        return self._current_restaurant_id

    @property
    def lines(self) -> tuple[CartLine, ...]:
        """Copies of the cart lines in insertion order."""
        return tuple(replace(line) for line in self._lines)

    @property
    def revision(self) -> int:
        """Counter bumped by every mutation."""
        return self._revision

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def add_to_cart(self, dish: Dish, restaurant_id: str, spice_level: int | None = None) -> None:
        """Add one unit of ``dish`` at ``spice_level`` from ``restaurant_id``."""
        if self._current_restaurant_id is not None and self._current_restaurant_id != restaurant_id:
            logger.info(
                "cart_switch_restaurant from=%s to=%s dropped_lines=%d",
                self._current_restaurant_id,
                restaurant_id,
                len(self._lines),
            )
            self._lines = []

        self._current_restaurant_id = restaurant_id

        key = line_key(dish.dish_id, spice_level)
        line = self._find(key)
        if line is not None:
            line.quantity += 1
            logger.debug("cart_increment dish=%s spice=%s qty=%d", dish.dish_id, key[1], line.quantity)
        else:
            self._lines.append(CartLine(dish=dish, restaurant_id=restaurant_id, quantity=1, spice_level=key[1]))
            logger.debug("cart_add dish=%s spice=%s", dish.dish_id, key[1])
        self._touch()

    def update_quantity(self, dish_id: Hashable, quantity: int, spice_level: int | None = None) -> None:
        """Set the quantity of one line; zero or less removes it."""
        key = line_key(dish_id, spice_level)
        line = self._find(key)
        if line is None:
            return

        if quantity <= 0:
            self._lines.remove(line)
            logger.debug("cart_remove_line dish=%s spice=%s", dish_id, key[1])
            self._reset_restaurant_if_empty()
        else:
            line.quantity = quantity
            logger.debug("cart_set_quantity dish=%s spice=%s qty=%d", dish_id, key[1], quantity)
        self._touch()

    def remove_from_cart(self, dish_id: Hashable) -> None:
        """Remove every line of ``dish_id`` whatever its spice level."""
        kept = [line for line in self._lines if line.dish.dish_id != dish_id]
        if len(kept) == len(self._lines):
            return

        logger.debug("cart_remove_dish dish=%s lines=%d", dish_id, len(self._lines) - len(kept))
        self._lines = kept
        self._reset_restaurant_if_empty()
        self._touch()

    def remove_line(self, dish_id: Hashable, spice_level: int | None = None) -> None:
        """Remove the single ``(dish_id, spice_level)`` line."""
        self.update_quantity(dish_id, 0, spice_level)

    def update_spice_level(self, dish_id: Hashable, spice_level: int) -> None:
        """
        Move every line of ``dish_id`` to ``spice_level``.

        Lines that collapse onto the same key are merged into the earliest one,
        with their quantities summed.
        """
        new_level = spice_level or 0
        if not any(line.dish.dish_id == dish_id for line in self._lines):
            return

        merged: list[CartLine] = []
        target: CartLine | None = None
        for line in self._lines:
            if line.dish.dish_id != dish_id:
                merged.append(line)
                continue
            if target is None:
                line.spice_level = new_level
                target = line
                merged.append(line)
            else:
                target.quantity += line.quantity
        self._lines = merged
        logger.debug("cart_update_spice dish=%s spice=%s", dish_id, new_level)
        self._touch()

    def clear_cart(self) -> None:
        """Empty the cart and forget the active restaurant."""
        self._lines = []
        self._current_restaurant_id = None
        logger.debug("cart_clear")
        self._touch()

    def get_cart_total(self) -> Decimal:
        """Sum of ``price * quantity`` over all lines."""
        return sum((line.subtotal for line in self._lines), Decimal("0"))

    def get_cart_item_count(self) -> int:
        """Total units across all lines."""
        return sum(line.quantity for line in self._lines)

    def get_item_quantity_in_cart(self, dish_id: Hashable, spice_level: int | None = None) -> int:
        line = self._find(line_key(dish_id, spice_level))
        return line.quantity if line is not None else 0

    def snapshot(self) -> list[OrderLine]:
        """Freeze the current lines for order submission."""
        return [OrderLine.from_cart_line(line) for line in self._lines]

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible dump of the cart."""
        return {
            "current_restaurant_id": self._current_restaurant_id,
            "lines": [
                {
                    "dish": {**asdict(line.dish), "price": str(line.dish.price)},
                    "restaurant_id": line.restaurant_id,
                    "quantity": line.quantity,
                    "spice_level": line.spice_level,
                }
                for line in self._lines
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CartStore:
        """
        Rebuild a cart from :meth:`to_dict` output.

        Lines sharing a ``(dish_id, spice_level)`` key are merged, and lines
        from any restaurant other than the cart's are dropped. The cart's
        restaurant is the dumped one when some line belongs to it, otherwise
        the first line's.
        """
        store = cls()
        raw_lines = [raw for raw in data.get("lines", []) if int(raw["quantity"]) > 0]
        line_restaurants = [str(raw["restaurant_id"]) for raw in raw_lines]
        restaurant_id = data.get("current_restaurant_id")
        if restaurant_id not in line_restaurants:
            restaurant_id = line_restaurants[0] if line_restaurants else None

        dropped = 0
        for raw, line_restaurant in zip(raw_lines, line_restaurants):
            if line_restaurant != restaurant_id:
                dropped += 1
                continue

            dish_fields = dict(raw["dish"])
            dish_fields["price"] = Decimal(str(dish_fields["price"]))
            line = CartLine(
                dish=Dish(**dish_fields),
                restaurant_id=line_restaurant,
                quantity=int(raw["quantity"]),
                spice_level=int(raw.get("spice_level") or 0),
            )
            existing = store._find(line.key)
            if existing is not None:
                existing.quantity += line.quantity
            else:
                store._lines.append(line)

        if dropped:
            logger.warning("cart_restore_dropped_lines restaurant=%s dropped_lines=%d", restaurant_id, dropped)
        if store._lines:
            store._current_restaurant_id = restaurant_id
        return store

    def _find(self, key: LineKey) -> CartLine | None:
        for line in self._lines:
            if line.key == key:
                return line
        return None

    def _reset_restaurant_if_empty(self) -> None:
        if not self._lines:
            self._current_restaurant_id = None

    def _touch(self) -> None:
        self._revision += 1
