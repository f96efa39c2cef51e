"""Checkout modal screen."""

from __future__ import annotations

from dataclasses import replace

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from storefront.cart import CartStore
from storefront.checkout import CheckoutDetails, validate_details
from storefront.exceptions import CheckoutError
from storefront.models import ORDER_MODE_COLLECTION, ORDER_MODE_DELIVERY
from storefront.pricing import compute_totals
from storefront.rendering import format_cart_line, format_receipt, order_mode_label

_FIELD_LABELS: dict[str, str] = {
    "contact_phone": "Contact phone",
    "delivery_address": "Delivery address",
    "collection_name": "Person collecting",
    "special_instructions": "Special instructions",
}


class CheckoutModal(ModalScreen[CheckoutDetails | None]):
    """Centered modal to pick the order mode, fill contact details and confirm."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "activate_current", "Select"),
    ]

    CSS = """
    CheckoutModal {
        align: center middle;
        background: $background 60%;
    }

    #checkout-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #checkout-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #checkout-body {
        margin-bottom: 1;
        color: white;
    }

    #checkout-error {
        color: #ffb3b3;
    }

    #checkout-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)
    _MODE_KIND = "mode"
    _FIELD_KIND = "field"
    _SUBMIT_KIND = "submit"

    def __init__(self, cart: CartStore, details: CheckoutDetails) -> None:
        super().__init__()
        self.cart = cart
        self.details = details
        self.editing_field: str | None = None
        self.input_value = ""
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="checkout-dialog"):
            yield Static("Checkout", id="checkout-title")
            yield Static(id="checkout-body")
            yield Static(id="checkout-error")
            yield Static(id="checkout-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event) -> None:
        if self.editing_field is None:
            return

        if event.key == "escape":
            self.editing_field = None
            self.input_value = ""
            self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            self._confirm_field()
            event.stop()
            return

        if event.key == "backspace":
            if self.input_value:
                self.input_value = self.input_value[:-1]
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.input_value += event.character
            self._refresh_content()
            event.stop()
            return

        # Ignore all non-text keys while typing.
        event.stop()

    def action_close(self) -> None:
        if self.editing_field is not None:
            self.editing_field = None
            self.input_value = ""
            self._refresh_content()
            return
        self.dismiss(None)

    def action_move_cursor(self, delta: int) -> None:
        if self.editing_field is not None:
            return
        rows = self._rows()
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self._refresh_content()

    def action_activate_current(self) -> None:
        row_kind, row_value = self._rows()[self.cursor_index]

        if row_kind == self._MODE_KIND:
            next_mode = (
                ORDER_MODE_COLLECTION if self.details.order_mode == ORDER_MODE_DELIVERY else ORDER_MODE_DELIVERY
            )
            self.details = replace(self.details, order_mode=next_mode)
            self.error = ""
            self._refresh_content()
            return

        if row_kind == self._FIELD_KIND:
            self.editing_field = row_value
            self.input_value = getattr(self.details, row_value)
            self._refresh_content()
            return

        self._submit()

    def _rows(self) -> list[tuple[str, str]]:
        place_field = (
            "delivery_address" if self.details.order_mode == ORDER_MODE_DELIVERY else "collection_name"
        )
        return [
            (self._MODE_KIND, "order_mode"),
            (self._FIELD_KIND, "contact_phone"),
            (self._FIELD_KIND, place_field),
            (self._FIELD_KIND, "special_instructions"),
            (self._SUBMIT_KIND, "Place order"),
        ]

    def _confirm_field(self) -> None:
        field_name = self.editing_field
        self.editing_field = None
        if field_name is not None:
            self.details = replace(self.details, **{field_name: self.input_value.strip()})
        self.input_value = ""
        self.error = ""
        self._refresh_content()

    def _submit(self) -> None:
        try:
            validate_details(self.details)
        except CheckoutError as exc:
            self.error = exc.message
            self._refresh_content()
            return
        self.dismiss(self.details)

    def _refresh_content(self) -> None:
        body = self.query_one("#checkout-body", Static)
        error_widget = self.query_one("#checkout-error", Static)
        help_text = self.query_one("#checkout-help", Static)

        content = Text(style="white")
        for line in self.cart.lines:
            content.append_text(format_cart_line(line))
            content.append("\n")
        content.append("\n")
        content.append_text(format_receipt(compute_totals(self.cart.get_cart_total(), self.details.order_mode)))

        rows = self._rows()
        if self.cursor_index >= len(rows):
            self.cursor_index = len(rows) - 1

        content.append("\n\n")
        for idx, (row_kind, row_value) in enumerate(rows):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            if row_kind == self._MODE_KIND:
                content.append(f"{pointer}Order mode: {order_mode_label(self.details.order_mode)}", style="bold white")
            elif row_kind == self._FIELD_KIND:
                label = _FIELD_LABELS[row_value]
                if self.editing_field == row_value:
                    content.append(f"{pointer}{label}: {self.input_value}|", style="bold white")
                else:
                    value = getattr(self.details, row_value) or "-"
                    content.append(f"{pointer}{label}: {value}", style="white")
            else:
                content.append(f"{pointer}[ {row_value} ]", style="bold #5fbf72")

        if self.editing_field is not None:
            help_text.update("Type text, Enter confirm, Esc cancel typing")
        else:
            help_text.update("J/K/↑/↓ move, Enter toggle/edit/confirm, Esc/q/Ctrl+C close")
        error_widget.update(self.error)
        body.update(content)
