"""Order history modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from storefront.persistence import SavedOrder
from storefront.rendering import format_price, order_mode_label, spice_badge


def format_saved_order(order: SavedOrder) -> Text:
    text = Text()
    text.append(f"#{order.order_id[:8]}", style="bold")
    text.append(f"  {order.created_at[:16].replace('T', ' ')}  {order_mode_label(order.order_type)}")
    text.append(f"  {format_price(order.total)}", style="bold")
    text.append(f"  {order.status}", style="dim")
    for item in order.items:
        text.append(f"\n    {item.quantity} x {item.name}")
        badge = spice_badge(item.spice_level)
        if badge.plain:
            text.append("  ")
            text.append_text(badge)
    return text


class OrderHistoryModal(ModalScreen[None]):
    """Read-only list of the most recent orders."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
    ]

    CSS = """
    OrderHistoryModal {
        align: center middle;
        background: $background 60%;
    }

    #history-dialog {
        width: 72;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #history-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #history-help {
        margin-top: 1;
        color: $text-muted;
    }
    """

    def __init__(self, orders: list[SavedOrder]) -> None:
        super().__init__()
        self.orders = orders

    def compose(self) -> ComposeResult:
        with Container(id="history-dialog"):
            yield Static("Order History", id="history-title")
            yield Static(id="history-body")
            yield Static("Esc / q / Ctrl+C to close", id="history-help")

    def on_mount(self) -> None:
        body = self.query_one("#history-body", Static)
        if not self.orders:
            body.update("(no orders yet)")
            return
        content = Text()
        for idx, order in enumerate(self.orders):
            if idx > 0:
                content.append("\n\n")
            content.append_text(format_saved_order(order))
        body.update(content)

    def action_close(self) -> None:
        self.dismiss()
