import pytest
from decimal import Decimal

from storefront import persistence
from storefront.cart import CartStore
from storefront.checkout import CheckoutDetails
from storefront.models import ORDER_MODE_COLLECTION, ORDER_MODE_DELIVERY, Dish


@pytest.fixture(autouse=True)
def tmp_db(tmp_path, monkeypatch):
    """Point order persistence at a throwaway SQLite file."""
    db_path = tmp_path / "storefront.db"
    monkeypatch.setattr(persistence, "DB_PATH", str(db_path))
    return db_path


@pytest.fixture
def cart():
    """Fresh, empty cart store."""
    return CartStore()


@pytest.fixture
def samosa():
    """Dish with id 1 priced at 5.00."""
    return Dish(dish_id=1, name="Samosa", price=Decimal("5.00"), category="Starters")


@pytest.fixture
def vindaloo():
    """Spicy dish with id 2 priced at 8.00."""
    return Dish(dish_id=2, name="Vindaloo", price=Decimal("8.00"), category="Mains", is_spicy=True)


@pytest.fixture
def delivery_details():
    """Valid delivery checkout details."""
    return CheckoutDetails(
        order_mode=ORDER_MODE_DELIVERY,
        contact_phone="07700 900123",
        delivery_address="123 Main Street, London, SW1A 1AA",
    )


@pytest.fixture
def collection_details():
    """Valid collection checkout details."""
    return CheckoutDetails(
        order_mode=ORDER_MODE_COLLECTION,
        contact_phone="+44 7700 900456",
        collection_name="Sam",
    )
