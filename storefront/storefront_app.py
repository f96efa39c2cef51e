"""Main Textual app class."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from storefront.cart import CartStore
from storefront.checkout import CheckoutDetails, OrderRequest, place_order
from storefront.checkout_modal import CheckoutModal
from storefront.confirm_modal import ConfirmModal
from storefront.data import RESTAURANT, menu_categories, search_dishes
from storefront.exceptions import StorefrontError
from storefront.history_modal import OrderHistoryModal
from storefront.models import ORDER_MODE_COLLECTION, ORDER_MODE_DELIVERY, Dish, line_key
from storefront.persistence import SavedOrder, bootstrap_schema, list_orders, save_order
from storefront.pricing import compute_totals
from storefront.rendering import (
    format_cart_line,
    format_dish_label,
    format_price,
    format_receipt,
    order_mode_label,
    spice_badge,
)
from storefront.spice import SpiceSelector

logger = logging.getLogger(__name__)


class StorefrontApp(App):
    """A Textual storefront for browsing the menu, building a cart and checking out."""

    TITLE = "Spice Storefront"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #cart-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #menu-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #receipt {
        height: auto;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    search_text = reactive("")
    category_index = reactive(0)
    selected_index = reactive(0)
    cart_selected_index = reactive(None)
    order_mode = reactive(ORDER_MODE_DELIVERY)

    BINDINGS = [
        ("up", "cycle_results(-1)", "Previous dish"),
        ("down", "cycle_results(1)", "Next dish"),
        ("enter", "add_selected", "Add to cart"),
        ("backspace", "backspace_search", "Delete search char"),
        Binding("ctrl+s", "checkout", "Checkout", priority=True),
        ("ctrl+c", "cancel_search", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        cart: CartStore | None = None,
        submit: Callable[[OrderRequest], SavedOrder] | None = None,
    ) -> None:
        super().__init__()
        self.cart = cart if cart is not None else CartStore()
        self.submit = submit or save_order
        self.spice = SpiceSelector()
        self.categories: list[str | None] = [None, *menu_categories()]
        self.checkout_details = CheckoutDetails(order_mode=ORDER_MODE_DELIVERY, contact_phone="")
        self.system_status = ""
        logger.debug("app_init restaurant=%s", RESTAURANT.restaurant_id)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="menu-pane"):
                yield Static(id="search-bar")
                yield Static(id="menu-list")
            with Vertical(id="cart-pane"):
                yield Static("Your Cart", classes="pane-title")
                yield Static("(cart is empty)", id="cart-list")
                yield Static(id="receipt")

    def on_mount(self) -> None:
        bootstrap_schema()
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        # While a modal is active, let the modal own keyboard handling.
        if isinstance(self.screen, ModalScreen):
            return

        logger.debug("on_key key=%r char=%r state=%r", event.key, event.character, self.input_state)

        char = event.character
        if not event.is_printable or not char or len(char) != 1:
            return

        if self.input_state == "active":
            if not (char.isalnum() or char == " "):
                return
            self.search_text += char
            self.selected_index = 0
            self._refresh_menu()
            event.stop()
            return

        key = char.lower()
        if key == "/":
            self.input_state = "active"
            self.search_text = ""
            self.selected_index = 0
            self._refresh_menu()
        elif key == "a":
            self.action_add_selected()
        elif key == "s":
            self._cycle_spice_for_selected()
        elif key == "j":
            self._move_cart_selection(1)
        elif key == "k":
            self._move_cart_selection(-1)
        elif key in {"+", "="}:
            self._step_selected_line(1)
        elif key == "-":
            self._step_selected_line(-1)
        elif key == "d":
            self._remove_selected_line()
        elif key == "x":
            self._remove_selected_dish()
        elif key == "c":
            self._confirm_clear_cart()
        elif key == "m":
            self._toggle_order_mode()
        elif key == "f":
            self._cycle_category(1)
        elif key == "h":
            self.push_screen(OrderHistoryModal(list_orders()))
        else:
            return
        event.stop()

    def action_cancel_search(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state == "normal":
            return

        self.input_state = "normal"
        self.search_text = ""
        self.selected_index = 0
        self._refresh_menu()

    def action_cycle_results(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        results = self._filtered_results()
        if not results:
            self.selected_index = 0
            self._refresh_menu()
            return
        self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_menu()

    def action_backspace_search(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state != "active" or not self.search_text:
            return
        self.search_text = self.search_text[:-1]
        self.selected_index = 0
        self._refresh_menu()

    def action_add_selected(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        dish = self._selected_dish()
        if dish is None:
            return
        if not RESTAURANT.is_open:
            self._set_status(f"{RESTAURANT.name} is currently closed.")
            return

        spice_level = self.spice.level_for(dish.dish_id)
        self.cart.add_to_cart(dish, RESTAURANT.restaurant_id, spice_level)
        self.cart_selected_index = self._cart_index_of(dish.dish_id, spice_level)
        self.system_status = f"Added {dish.name}"
        self._refresh_all()

    def action_checkout(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state != "normal":
            self._set_status("Checkout only outside search (Ctrl+C to exit search)")
            return
        if self.cart.is_empty:
            self._set_status("Your cart is empty. Add items from the menu first.")
            return

        details = self.checkout_details
        if details.order_mode != self.order_mode:
            details = replace(details, order_mode=self.order_mode)
        self.push_screen(CheckoutModal(self.cart, details), callback=self._on_checkout_details)

    def _on_checkout_details(self, details: CheckoutDetails | None) -> None:
        if details is None:
            return

        self.checkout_details = details
        self.order_mode = details.order_mode
        try:
            saved = place_order(self.cart, details, submit=self.submit)
        except StorefrontError as exc:
            self.system_status = exc.message
            logger.warning("checkout_failed error=%s", exc.message)
        else:
            self.cart_selected_index = None
            self.spice.reset()
            self.system_status = f"Order {saved.order_id[:8]} placed: {format_price(saved.total)}"
        self._refresh_all()

    def _filtered_results(self) -> list[Dish]:
        return search_dishes(self.search_text, self.categories[self.category_index])

    def _selected_dish(self) -> Dish | None:
        results = self._filtered_results()
        if not results:
            return None
        if self.selected_index >= len(results):
            self.selected_index = 0
        return results[self.selected_index]

    def _cycle_spice_for_selected(self) -> None:
        dish = self._selected_dish()
        if dish is None:
            return
        if not dish.is_spicy:
            self._set_status(f"{dish.name} has no spice options")
            return
        self.spice.cycle(dish.dish_id)
        self._refresh_menu()

    def _cycle_category(self, delta: int) -> None:
        self.category_index = (self.category_index + delta) % len(self.categories)
        self.selected_index = 0
        self._refresh_menu()

    def _toggle_order_mode(self) -> None:
        self.order_mode = ORDER_MODE_COLLECTION if self.order_mode == ORDER_MODE_DELIVERY else ORDER_MODE_DELIVERY
        self._set_status(f"Order mode: {order_mode_label(self.order_mode)}")
        self._refresh_cart()

    def _cart_index_of(self, dish_id: int, spice_level: int) -> int | None:
        key = line_key(dish_id, spice_level)
        for idx, line in enumerate(self.cart.lines):
            if line.key == key:
                return idx
        return None

    def _move_cart_selection(self, delta: int) -> None:
        count = self.cart.line_count
        if not count:
            return

        if self.cart_selected_index is None:
            self.cart_selected_index = 0 if delta > 0 else count - 1
        else:
            self.cart_selected_index = (self.cart_selected_index + delta) % count
        self._refresh_cart()

    def _selected_line_key(self) -> tuple[int, int] | None:
        if self.cart_selected_index is None:
            return None
        lines = self.cart.lines
        if not (0 <= self.cart_selected_index < len(lines)):
            return None
        return lines[self.cart_selected_index].key

    def _step_selected_line(self, delta: int) -> None:
        key = self._selected_line_key()
        if key is None:
            return
        dish_id, spice_level = key
        quantity = self.cart.get_item_quantity_in_cart(dish_id, spice_level)
        self.cart.update_quantity(dish_id, quantity + delta, spice_level)
        self._refresh_all()

    def _remove_selected_line(self) -> None:
        key = self._selected_line_key()
        if key is None:
            return
        self.cart.remove_line(*key)
        self._refresh_all()

    def _remove_selected_dish(self) -> None:
        key = self._selected_line_key()
        if key is None:
            return
        self.cart.remove_from_cart(key[0])
        self._refresh_all()

    def _confirm_clear_cart(self) -> None:
        if self.cart.is_empty:
            return

        def clear_if_confirmed(confirmed: bool | None) -> None:
            if not confirmed:
                return
            self.cart.clear_cart()
            self.cart_selected_index = None
            self.system_status = "Cart cleared"
            self._refresh_all()

        self.push_screen(
            ConfirmModal("Clear Cart", "Are you sure you want to clear your cart?"),
            callback=clear_if_confirmed,
        )

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_search_bar()

    def _refresh_all(self) -> None:
        self._refresh_cart()
        self._refresh_menu()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_cart(self) -> None:
        count = self.cart.get_cart_item_count()
        self.sub_title = f"{RESTAURANT.name} · {count} item{'s' if count != 1 else ''}"
        try:
            cart_widget = self.query_one("#cart-list", Static)
            receipt_widget = self.query_one("#receipt", Static)
        except NoMatches:
            return

        receipt_widget.update(format_receipt(compute_totals(self.cart.get_cart_total(), self.order_mode)))

        lines = self.cart.lines
        if not lines:
            self.cart_selected_index = None
            cart_widget.update("(cart is empty)")
            return

        if self.cart_selected_index is not None and self.cart_selected_index >= len(lines):
            self.cart_selected_index = len(lines) - 1

        visible_rows = self._visible_rows(cart_widget)
        start, end = self._window_bounds(len(lines), visible_rows, self.cart_selected_index)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            pointer = "➤ " if idx == self.cart_selected_index else "  "
            text.append(pointer)
            text.append_text(format_cart_line(lines[idx]))

        if end < len(lines):
            text.append("\n⋮", style="dim")

        cart_widget.update(text)

    def _refresh_menu(self) -> None:
        self._refresh_search_bar()
        try:
            menu_widget = self.query_one("#menu-list", Static)
        except NoMatches:
            return

        results = self._filtered_results()
        if not results:
            menu_widget.update("No results")
            return

        if self.selected_index >= len(results):
            self.selected_index = 0

        visible_rows = self._visible_rows(menu_widget)
        start, end = self._window_bounds(len(results), visible_rows, self.selected_index)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            dish = results[idx]
            pointer = "➤ " if idx == self.selected_index else "  "
            text.append(pointer)
            text.append_text(format_dish_label(dish))

            spice_level = self.spice.level_for(dish.dish_id)
            badge = spice_badge(spice_level)
            if badge.plain:
                text.append("  ")
                text.append_text(badge)
            in_cart = self.cart.get_item_quantity_in_cart(dish.dish_id, spice_level)
            if in_cart:
                text.append(f"  [in cart: {in_cart}]", style="bold #5fbf72")

        if end < len(results):
            text.append("\n⋮", style="dim")

        menu_widget.update(text)

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return

        category = self.categories[self.category_index] or "All"
        if self.input_state == "normal":
            status = self.system_status or "Ready"
            bar.update(
                f"{category} · {order_mode_label(self.order_mode)}  "
                f"(/ search, F category, S spice, A add, M mode, Ctrl+S checkout)\n{status}"
            )
            return

        text = Text()
        text.append("Search", style="bold #ffffff on #2f6db5")
        text.append(f" {category}: {self.search_text}")
        bar.update(text)
