"""SQLite persistence for submitted orders."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

from storefront.config import DB_PATH, ORDER_HISTORY_LIMIT
from storefront.models import OrderLine

if TYPE_CHECKING:
    from storefront.checkout import OrderRequest

logger = logging.getLogger(__name__)

STATUS_PENDING = "PENDING"


@dataclass(frozen=True)
class SavedOrder:
    """Saved order metadata and copied lines."""

    order_id: str
    created_at: str
    restaurant_id: str
    order_type: str
    status: str
    subtotal: Decimal
    delivery_fee: Decimal
    discount: Decimal
    total: Decimal
    contact_phone: str
    delivery_address: str
    collection_name: str
    special_instructions: str
    payment_type: str
    items: list[OrderLine]


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _connect() -> sqlite3.Connection:
    db_file = Path(DB_PATH)
    db_file.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_file)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def bootstrap_schema() -> None:
    """Create persistence schema if it does not already exist."""
    with _connect() as conn:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS orders (
                id TEXT PRIMARY KEY,
                created_at TEXT NOT NULL,
                restaurant_id TEXT NOT NULL,
                order_type TEXT NOT NULL,
                status TEXT NOT NULL,
                subtotal TEXT NOT NULL,
                delivery_fee TEXT NOT NULL,
                discount TEXT NOT NULL,
                total TEXT NOT NULL,
                contact_phone TEXT NOT NULL,
                delivery_address TEXT NOT NULL DEFAULT '',
                collection_name TEXT NOT NULL DEFAULT '',
                special_instructions TEXT NOT NULL DEFAULT '',
                payment_type TEXT NOT NULL DEFAULT 'card'
            );

            CREATE TABLE IF NOT EXISTS order_items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                order_id TEXT NOT NULL,
                line_index INTEGER NOT NULL,
                dish_id INTEGER NOT NULL,
                dish_name TEXT NOT NULL,
                unit_price TEXT NOT NULL,
                quantity INTEGER NOT NULL,
                spice_level INTEGER NOT NULL DEFAULT 0,
                subtotal TEXT NOT NULL,
                FOREIGN KEY(order_id) REFERENCES orders(id) ON DELETE CASCADE
            );

            CREATE INDEX IF NOT EXISTS idx_order_items_order_id_line
                ON order_items(order_id, line_index);

            CREATE INDEX IF NOT EXISTS idx_orders_created_at
                ON orders(created_at);
            """
        )


def save_order(request: OrderRequest) -> SavedOrder:
    """Persist a validated order request and return the saved record."""
    items = list(request.lines)
    if not items:
        raise ValueError("Cannot save an order without lines")

    order_id = uuid4().hex
    created_at = _utc_now_iso()
    totals = request.totals
    details = request.details

    bootstrap_schema()
    with _connect() as conn:
        with conn:
            conn.execute(
                """
                INSERT INTO orders (
                    id, created_at, restaurant_id, order_type, status,
                    subtotal, delivery_fee, discount, total,
                    contact_phone, delivery_address, collection_name,
                    special_instructions, payment_type
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    order_id,
                    created_at,
                    request.restaurant_id,
                    details.order_mode,
                    STATUS_PENDING,
                    str(totals.subtotal),
                    str(totals.delivery_fee),
                    str(totals.collection_discount),
                    str(totals.total),
                    details.contact_phone,
                    details.delivery_address,
                    details.collection_name,
                    details.special_instructions,
                    details.payment_type,
                ),
            )

            for idx, item in enumerate(items):
                conn.execute(
                    """
                    INSERT INTO order_items (
                        order_id, line_index, dish_id, dish_name,
                        unit_price, quantity, spice_level, subtotal
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        order_id,
                        idx,
                        item.dish_id,
                        item.name,
                        str(item.unit_price),
                        item.quantity,
                        item.spice_level,
                        str(item.subtotal),
                    ),
                )

    logger.info("order_saved order_id=%s lines=%d total=%s", order_id, len(items), totals.total)
    return SavedOrder(
        order_id=order_id,
        created_at=created_at,
        restaurant_id=request.restaurant_id,
        order_type=details.order_mode,
        status=STATUS_PENDING,
        subtotal=totals.subtotal,
        delivery_fee=totals.delivery_fee,
        discount=totals.collection_discount,
        total=totals.total,
        contact_phone=details.contact_phone,
        delivery_address=details.delivery_address,
        collection_name=details.collection_name,
        special_instructions=details.special_instructions,
        payment_type=details.payment_type,
        items=items,
    )


_ORDER_COLUMNS = (
    "id, created_at, restaurant_id, order_type, status, subtotal, delivery_fee, discount, total, "
    "contact_phone, delivery_address, collection_name, special_instructions, payment_type"
)


def _load_items(conn: sqlite3.Connection, order_id: str) -> list[OrderLine]:
    rows = conn.execute(
        """
        SELECT dish_id, dish_name, unit_price, quantity, spice_level
        FROM order_items WHERE order_id = ? ORDER BY line_index
        """,
        (order_id,),
    )
    return [
        OrderLine(
            dish_id=int(dish_id),
            name=dish_name,
            unit_price=Decimal(unit_price),
            quantity=int(quantity),
            spice_level=int(spice_level),
        )
        for dish_id, dish_name, unit_price, quantity, spice_level in rows
    ]


def _row_to_order(conn: sqlite3.Connection, row: tuple) -> SavedOrder:
    (
        order_id,
        created_at,
        restaurant_id,
        order_type,
        status,
        subtotal,
        delivery_fee,
        discount,
        total,
        contact_phone,
        delivery_address,
        collection_name,
        special_instructions,
        payment_type,
    ) = row
    return SavedOrder(
        order_id=order_id,
        created_at=created_at,
        restaurant_id=restaurant_id,
        order_type=order_type,
        status=status,
        subtotal=Decimal(subtotal),
        delivery_fee=Decimal(delivery_fee),
        discount=Decimal(discount),
        total=Decimal(total),
        contact_phone=contact_phone,
        delivery_address=delivery_address,
        collection_name=collection_name,
        special_instructions=special_instructions,
        payment_type=payment_type,
        items=_load_items(conn, order_id),
    )


def load_order(order_id: str) -> SavedOrder | None:
    """Load one order with its lines, or None if it does not exist."""
    bootstrap_schema()
    with _connect() as conn:
        row = conn.execute(f"SELECT {_ORDER_COLUMNS} FROM orders WHERE id = ?", (order_id,)).fetchone()
        if row is None:
            return None
        return _row_to_order(conn, row)


def list_orders(limit: int = ORDER_HISTORY_LIMIT) -> list[SavedOrder]:
    """Order history, newest first."""
    bootstrap_schema()
    with _connect() as conn:
        rows = conn.execute(
            f"SELECT {_ORDER_COLUMNS} FROM orders ORDER BY created_at DESC, rowid DESC LIMIT ?",
            (limit,),
        ).fetchall()
        return [_row_to_order(conn, row) for row in rows]
