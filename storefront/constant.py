"""Editable static restaurant, menu and spice configuration."""

from __future__ import annotations

RESTAURANT_META: dict[str, str | bool] = {
    "restaurant_id": "spice-garden",
    "name": "Spice Garden",
    "address": "12 Brick Lane, London, E1 6RF",
    "delivery_time": "30-45 min",
    "is_open": True,
}

SPICE_LEVEL_LABELS: dict[int, str] = {
    0: "No spice",
    1: "Mild",
    2: "Medium",
    3: "Hot",
}

# Canonical dish values consumed by storefront.data (which wraps these into Dish dataclass instances).
DISH_META_BY_ID: dict[int, dict[str, str | bool]] = {
    1: {
        "name": "Onion Bhaji",
        "description": "Crispy onion fritters with tamarind chutney",
        "price": "4.50",
        "category": "Starters",
        "image": "onion-bhaji.jpg",
        "is_vegetarian": True,
        "is_spicy": False,
        "is_popular": True,
    },
    2: {
        "name": "Chicken Pakora",
        "description": "Spiced chicken pieces in gram flour batter",
        "price": "5.50",
        "category": "Starters",
        "image": "chicken-pakora.jpg",
        "is_vegetarian": False,
        "is_spicy": True,
    },
    3: {
        "name": "Vegetable Samosa",
        "description": "Two pastries filled with potato and peas",
        "price": "3.95",
        "category": "Starters",
        "image": "vegetable-samosa.jpg",
        "is_vegetarian": True,
        "is_spicy": False,
    },
    4: {
        "name": "Chicken Tikka Masala",
        "description": "Tandoori chicken in a creamy tomato sauce",
        "price": "12.99",
        "category": "Mains",
        "image": "chicken-tikka-masala.jpg",
        "is_vegetarian": False,
        "is_spicy": True,
        "is_popular": True,
    },
    5: {
        "name": "Lamb Rogan Josh",
        "description": "Slow-cooked lamb with Kashmiri chilli",
        "price": "13.95",
        "category": "Mains",
        "image": "lamb-rogan-josh.jpg",
        "is_vegetarian": False,
        "is_spicy": True,
    },
    6: {
        "name": "Chana Masala",
        "description": "Chickpeas simmered with onion, tomato and garam masala",
        "price": "9.50",
        "category": "Mains",
        "image": "chana-masala.jpg",
        "is_vegetarian": True,
        "is_spicy": True,
    },
    7: {
        "name": "Palak Paneer",
        "description": "Cottage cheese in a spinach sauce",
        "price": "10.50",
        "category": "Mains",
        "image": "palak-paneer.jpg",
        "is_vegetarian": True,
        "is_spicy": False,
        "is_popular": True,
    },
    8: {
        "name": "Pilau Rice",
        "description": "Basmati rice with whole spices",
        "price": "3.50",
        "category": "Sides",
        "image": "pilau-rice.jpg",
        "is_vegetarian": True,
        "is_spicy": False,
    },
    9: {
        "name": "Bombay Potatoes",
        "description": "Potatoes tossed with mustard seeds and chilli",
        "price": "4.95",
        "category": "Sides",
        "image": "bombay-potatoes.jpg",
        "is_vegetarian": True,
        "is_spicy": True,
    },
    10: {
        "name": "Garlic Naan",
        "description": "Tandoor-baked bread brushed with garlic butter",
        "price": "2.99",
        "category": "Breads",
        "image": "garlic-naan.jpg",
        "is_vegetarian": True,
        "is_spicy": False,
        "is_popular": True,
    },
    11: {
        "name": "Peshwari Naan",
        "description": "Sweet naan with coconut and sultanas",
        "price": "3.49",
        "category": "Breads",
        "image": "peshwari-naan.jpg",
        "is_vegetarian": True,
        "is_spicy": False,
    },
    12: {
        "name": "Gulab Jamun",
        "description": "Milk dumplings in rose syrup",
        "price": "4.25",
        "category": "Desserts",
        "image": "gulab-jamun.jpg",
        "is_vegetarian": True,
        "is_spicy": False,
    },
}
