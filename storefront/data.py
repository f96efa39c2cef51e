"""Static menu data and lookups."""

from __future__ import annotations

from decimal import Decimal

from storefront.constant import DISH_META_BY_ID, RESTAURANT_META, SPICE_LEVEL_LABELS
from storefront.models import Dish, Restaurant

RESTAURANT = Restaurant(
    restaurant_id=str(RESTAURANT_META["restaurant_id"]),
    name=str(RESTAURANT_META["name"]),
    address=str(RESTAURANT_META.get("address", "")),
    delivery_time=str(RESTAURANT_META.get("delivery_time", "")),
    is_open=bool(RESTAURANT_META.get("is_open", True)),
)


def _build_dish(dish_id: int, meta: dict[str, str | bool]) -> Dish:
    return Dish(
        dish_id=dish_id,
        name=str(meta["name"]),
        price=Decimal(str(meta["price"])),
        description=str(meta.get("description", "")),
        category=str(meta.get("category", "")),
        image=str(meta.get("image", "")),
        is_vegetarian=bool(meta.get("is_vegetarian", False)),
        is_spicy=bool(meta.get("is_spicy", False)),
        is_popular=bool(meta.get("is_popular", False)),
    )


# Menu order: category, then name.
MENU: list[Dish] = sorted(
    (_build_dish(dish_id, meta) for dish_id, meta in DISH_META_BY_ID.items()),
    key=lambda dish: (dish.category, dish.name),
)

DISH_BY_ID: dict[int, Dish] = {dish.dish_id: dish for dish in MENU}


def dish_by_id(dish_id: int) -> Dish | None:
    return DISH_BY_ID.get(dish_id)


def menu_categories() -> list[str]:
    """Distinct non-empty categories in menu order."""
    categories: list[str] = []
    for dish in MENU:
        if dish.category and dish.category not in categories:
            categories.append(dish.category)
    return categories


def dishes_by_category(category: str) -> list[Dish]:
    return [dish for dish in MENU if dish.category == category]


def popular_dishes() -> list[Dish]:
    return [dish for dish in MENU if dish.is_popular]


def search_dishes(query: str, category: str | None = None) -> list[Dish]:
    """Case-insensitive name search, optionally within one category."""
    source = dishes_by_category(category) if category else MENU
    q = query.strip().lower()
    if not q:
        return list(source)
    return [dish for dish in source if q in dish.name.lower()]


def spice_label(level: int) -> str:
    return SPICE_LEVEL_LABELS.get(level, f"Level {level}")
