"""
Unit tests for the cart store.
"""

from decimal import Decimal

from storefront.cart import CartStore
from storefront.models import Dish


class TestAddToCart:
    """Tests for adding dishes and line identity."""

    def test_same_dish_different_spice_levels_are_separate_lines(self, cart, vindaloo):
        """Test that spice levels 1 and 2 of one dish make two lines."""
        cart.add_to_cart(vindaloo, "R1", 1)
        cart.add_to_cart(vindaloo, "R1", 2)

        assert cart.line_count == 2
        assert cart.get_item_quantity_in_cart(2, 1) == 1
        assert cart.get_item_quantity_in_cart(2, 2) == 1
        assert [line.spice_level for line in cart.lines] == [1, 2]

    def test_repeated_add_increments_one_line(self, cart, samosa):
        """Test that adding the same line N times gives quantity N."""
        for _ in range(4):
            cart.add_to_cart(samosa, "R1", 0)

        assert cart.line_count == 1
        assert cart.lines[0].quantity == 4

    def test_missing_spice_level_matches_zero(self, cart, samosa):
        """Test that no spice level and level 0 address the same line."""
        cart.add_to_cart(samosa, "R1")
        cart.add_to_cart(samosa, "R1", 0)

        assert cart.line_count == 1
        assert cart.get_item_quantity_in_cart(1) == 2
        assert cart.get_item_quantity_in_cart(1, 0) == 2

    def test_insertion_order_is_kept(self, cart, samosa, vindaloo):
        """Test that lines keep the order they were first added in."""
        cart.add_to_cart(vindaloo, "R1", 3)
        cart.add_to_cart(samosa, "R1")
        cart.add_to_cart(vindaloo, "R1", 3)

        assert [line.dish.dish_id for line in cart.lines] == [2, 1]

    def test_first_add_sets_restaurant(self, cart, samosa):
        """Test the EMPTY to ACTIVE transition."""
        assert cart.current_restaurant_id is None
        cart.add_to_cart(samosa, "R1")
        assert cart.current_restaurant_id == "R1"

    def test_other_restaurant_replaces_cart(self, cart, samosa, vindaloo):
        """Test that a dish from another restaurant drops all existing lines."""
        cart.add_to_cart(samosa, "A")
        cart.add_to_cart(samosa, "A")
        cart.add_to_cart(vindaloo, "A", 2)

        cart.add_to_cart(vindaloo, "B", 1)

        assert cart.current_restaurant_id == "B"
        assert cart.line_count == 1
        line = cart.lines[0]
        assert (line.dish.dish_id, line.spice_level, line.quantity, line.restaurant_id) == (2, 1, 1, "B")

    def test_out_of_range_spice_level_is_tolerated(self, cart, vindaloo):
        """Test that the store accepts any integer spice level."""
        cart.add_to_cart(vindaloo, "R1", 7)
        cart.add_to_cart(vindaloo, "R1", -1)

        assert cart.get_item_quantity_in_cart(2, 7) == 1
        assert cart.get_item_quantity_in_cart(2, -1) == 1


class TestUpdateQuantity:
    """Tests for absolute quantity updates."""

    def test_sets_absolute_quantity(self, cart, samosa):
        cart.add_to_cart(samosa, "R1")
        cart.update_quantity(1, 5, 0)
        assert cart.get_item_quantity_in_cart(1, 0) == 5

    def test_only_targets_matching_spice_level(self, cart, vindaloo):
        """Test that other spice variants keep their quantities."""
        cart.add_to_cart(vindaloo, "R1", 1)
        cart.add_to_cart(vindaloo, "R1", 2)

        cart.update_quantity(2, 3, 2)

        assert cart.get_item_quantity_in_cart(2, 1) == 1
        assert cart.get_item_quantity_in_cart(2, 2) == 3

    def test_zero_removes_line_and_resets_restaurant(self, cart, samosa):
        """Test that removing the last line empties the cart."""
        cart.add_to_cart(samosa, "R1")
        cart.update_quantity(1, 0)

        assert cart.is_empty
        assert cart.current_restaurant_id is None

    def test_negative_removes_line(self, cart, samosa, vindaloo):
        cart.add_to_cart(samosa, "R1")
        cart.add_to_cart(vindaloo, "R1")
        cart.update_quantity(1, -3)

        assert cart.line_count == 1
        assert cart.current_restaurant_id == "R1"

    def test_missing_line_is_noop(self, cart, samosa):
        """Test that updating an absent line changes nothing."""
        cart.add_to_cart(samosa, "R1")
        revision = cart.revision

        cart.update_quantity(1, 9, 3)
        cart.update_quantity(42, 0)

        assert cart.get_item_quantity_in_cart(1) == 1
        assert cart.revision == revision


class TestRemoval:
    """Tests for line and dish removal."""

    def test_remove_from_cart_drops_every_spice_level(self, cart, samosa, vindaloo):
        cart.add_to_cart(vindaloo, "R1", 0)
        cart.add_to_cart(vindaloo, "R1", 1)
        cart.add_to_cart(vindaloo, "R1", 3)
        cart.add_to_cart(samosa, "R1")

        cart.remove_from_cart(2)

        assert [line.dish.dish_id for line in cart.lines] == [1]
        assert cart.current_restaurant_id == "R1"

    def test_remove_from_cart_last_dish_resets_restaurant(self, cart, vindaloo):
        cart.add_to_cart(vindaloo, "R1", 1)
        cart.add_to_cart(vindaloo, "R1", 2)

        cart.remove_from_cart(2)

        assert cart.is_empty
        assert cart.current_restaurant_id is None

    def test_remove_from_cart_missing_dish_is_noop(self, cart, samosa):
        cart.add_to_cart(samosa, "R1")
        cart.remove_from_cart(99)
        assert cart.line_count == 1

    def test_remove_line_only_removes_one_variant(self, cart, vindaloo):
        cart.add_to_cart(vindaloo, "R1", 1)
        cart.add_to_cart(vindaloo, "R1", 2)

        cart.remove_line(2, 1)

        assert cart.get_item_quantity_in_cart(2, 1) == 0
        assert cart.get_item_quantity_in_cart(2, 2) == 1

    def test_clear_cart(self, cart, samosa, vindaloo):
        cart.add_to_cart(samosa, "R1")
        cart.add_to_cart(vindaloo, "R1", 2)

        cart.clear_cart()

        assert cart.is_empty
        assert cart.current_restaurant_id is None
        assert cart.get_cart_total() == Decimal("0")


class TestUpdateSpiceLevel:
    """Tests for re-assigning a dish's spice level."""

    def test_moves_single_line(self, cart, vindaloo):
        cart.add_to_cart(vindaloo, "R1", 1)
        cart.update_spice_level(2, 3)

        assert cart.get_item_quantity_in_cart(2, 1) == 0
        assert cart.get_item_quantity_in_cart(2, 3) == 1

    def test_merges_colliding_lines(self, cart, samosa, vindaloo):
        """Test that variants collapsing onto one key are merged, keeping the invariant."""
        cart.add_to_cart(vindaloo, "R1", 1)
        cart.add_to_cart(samosa, "R1")
        cart.add_to_cart(vindaloo, "R1", 2)
        cart.add_to_cart(vindaloo, "R1", 2)

        cart.update_spice_level(2, 2)

        keys = [line.key for line in cart.lines]
        assert keys == [(2, 2), (1, 0)]
        assert cart.get_item_quantity_in_cart(2, 2) == 3
        assert cart.get_cart_item_count() == 4

    def test_missing_dish_is_noop(self, cart, samosa):
        cart.add_to_cart(samosa, "R1")
        revision = cart.revision
        cart.update_spice_level(2, 1)
        assert cart.revision == revision


class TestAggregates:
    """Tests for derived totals and counts."""

    def test_item_count_is_sum_of_quantities(self, cart, vindaloo):
        cart.add_to_cart(vindaloo, "R1", 0)
        cart.update_quantity(2, 2, 0)
        cart.add_to_cart(vindaloo, "R1", 1)
        cart.update_quantity(2, 3, 1)

        assert cart.get_cart_item_count() == 5
        assert cart.line_count == 2

    def test_total_reflects_latest_mutation(self, cart, samosa, vindaloo):
        cart.add_to_cart(samosa, "R1")
        assert cart.get_cart_total() == Decimal("5.00")
        cart.add_to_cart(vindaloo, "R1", 2)
        assert cart.get_cart_total() == Decimal("13.00")
        cart.update_quantity(1, 3)
        assert cart.get_cart_total() == Decimal("23.00")

    def test_negative_price_is_not_guarded(self, cart):
        """Test that a negative price flows straight into the subtotal."""
        refund = Dish(dish_id=9, name="Voucher", price=Decimal("-4.00"))
        cart.add_to_cart(refund, "R1")
        assert cart.get_cart_total() == Decimal("-4.00")

    def test_quantity_of_absent_line_is_zero(self, cart):
        assert cart.get_item_quantity_in_cart(1, 2) == 0

    def test_revision_bumps_on_mutation(self, cart, samosa):
        start = cart.revision
        cart.add_to_cart(samosa, "R1")
        cart.update_quantity(1, 2)
        cart.clear_cart()
        assert cart.revision == start + 3


class TestEncapsulation:
    """Tests that readers cannot change cart state."""

    def test_lines_are_copies(self, cart, samosa):
        cart.add_to_cart(samosa, "R1")

        line = cart.lines[0]
        line.quantity = 50

        assert cart.get_item_quantity_in_cart(1) == 1

    def test_snapshot_freezes_lines(self, cart, samosa, vindaloo):
        cart.add_to_cart(samosa, "R1")
        cart.add_to_cart(vindaloo, "R1", 2)
        cart.add_to_cart(vindaloo, "R1", 2)

        snapshot = cart.snapshot()
        cart.clear_cart()

        assert [(item.dish_id, item.quantity, item.spice_level) for item in snapshot] == [(1, 1, 0), (2, 2, 2)]
        assert snapshot[1].subtotal == Decimal("16.00")


class TestSerialization:
    """Tests for the dump/restore boundary."""

    def test_restore_preserves_lines_and_restaurant(self, cart, samosa, vindaloo):
        cart.add_to_cart(samosa, "R1")
        cart.add_to_cart(vindaloo, "R1", 2)
        cart.add_to_cart(vindaloo, "R1", 2)

        restored = CartStore.from_dict(cart.to_dict())

        assert restored.current_restaurant_id == "R1"
        assert [line.key for line in restored.lines] == [(1, 0), (2, 2)]
        assert restored.get_cart_total() == Decimal("21.00")
        assert restored.lines[1].dish == vindaloo

    def test_restore_empty(self):
        restored = CartStore.from_dict({"current_restaurant_id": None, "lines": []})
        assert restored.is_empty
        assert restored.current_restaurant_id is None

    def test_restore_merges_repeated_keys(self, cart, samosa, vindaloo):
        cart.add_to_cart(vindaloo, "R1", 2)
        cart.add_to_cart(samosa, "R1")
        dump = cart.to_dict()
        dump["lines"].append(dict(dump["lines"][0], quantity=3))

        restored = CartStore.from_dict(dump)

        assert restored.line_count == 2
        assert restored.get_item_quantity_in_cart(2, 2) == 4
        restored.update_quantity(2, 1, 2)
        assert restored.get_item_quantity_in_cart(2, 2) == 1
        assert restored.get_cart_item_count() == 2

    def test_restore_drops_lines_from_other_restaurant(self, cart, samosa, vindaloo):
        cart.add_to_cart(samosa, "A")
        dump = cart.to_dict()
        other = CartStore()
        other.add_to_cart(vindaloo, "B")
        dump["lines"].extend(other.to_dict()["lines"])

        restored = CartStore.from_dict(dump)

        assert restored.current_restaurant_id == "A"
        assert [line.key for line in restored.lines] == [(1, 0)]

    def test_restore_takes_restaurant_from_lines(self, cart, samosa):
        cart.add_to_cart(samosa, "A")
        dump = dict(cart.to_dict(), current_restaurant_id="B")

        restored = CartStore.from_dict(dump)

        assert restored.current_restaurant_id == "A"
        assert restored.get_item_quantity_in_cart(1) == 1

    def test_restore_without_restaurant_uses_first_line(self, cart, samosa):
        cart.add_to_cart(samosa, "A")
        dump = dict(cart.to_dict(), current_restaurant_id=None)

        restored = CartStore.from_dict(dump)

        assert restored.current_restaurant_id == "A"
        assert restored.get_item_quantity_in_cart(1) == 1
