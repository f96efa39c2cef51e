"""Per-dish spice choices made on the menu before adding to the cart."""

from __future__ import annotations

from typing import Hashable

from storefront.config import SPICE_LEVEL_MAX, SPICE_LEVEL_MIN


def clamp_spice_level(level: int) -> int:
    """Keep a spice level inside the supported range."""
    return max(SPICE_LEVEL_MIN, min(SPICE_LEVEL_MAX, level))


def next_spice_level(level: int) -> int:
    """Cycle 0 -> 1 -> 2 -> 3 -> 0."""
    if level >= SPICE_LEVEL_MAX:
        return SPICE_LEVEL_MIN
    return clamp_spice_level(level + 1)


class SpiceSelector:
    """Temporary spice level per dish; nothing is kept once the session ends."""

    def __init__(self) -> None:
        self._levels: dict[Hashable, int] = {}

    def level_for(self, dish_id: Hashable) -> int:
        return self._levels.get(dish_id, SPICE_LEVEL_MIN)

    def set_level(self, dish_id: Hashable, level: int) -> int:
        clamped = clamp_spice_level(level)
        self._levels[dish_id] = clamped
        return clamped

    def cycle(self, dish_id: Hashable) -> int:
        return self.set_level(dish_id, next_spice_level(self.level_for(dish_id)))

    def reset(self, dish_id: Hashable | None = None) -> None:
        """Forget one dish's choice, or all of them."""
        if dish_id is None:
            self._levels.clear()
            return
        self._levels.pop(dish_id, None)
