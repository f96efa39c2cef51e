"""Checkout validation and hand-off of cart snapshots to order submission."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from storefront.cart import CartStore
from storefront.config import CONTACT_PHONE_MIN_DIGITS
from storefront.exceptions import CheckoutError, OrderSubmissionError
from storefront.models import ORDER_MODE_DELIVERY, ORDER_MODES, OrderLine
from storefront.persistence import SavedOrder, save_order
from storefront.pricing import CheckoutTotals, compute_totals

logger = logging.getLogger(__name__)

_PHONE_ALLOWED = re.compile(r"^[0-9+\-() ]+$")


@dataclass(frozen=True)
class CheckoutDetails:
    """Contact and fulfilment details collected at checkout."""

    order_mode: str
    contact_phone: str
    delivery_address: str = ""
    collection_name: str = ""
    special_instructions: str = ""
    payment_type: str = "card"


@dataclass(frozen=True)
class OrderRequest:
    """A validated checkout snapshot ready for submission."""

    restaurant_id: str
    lines: tuple[OrderLine, ...]
    totals: CheckoutTotals
    details: CheckoutDetails


def validate_details(details: CheckoutDetails) -> None:
    if details.order_mode not in ORDER_MODES:
        raise CheckoutError(f"Unknown order mode: {details.order_mode}")

    phone = details.contact_phone.strip()
    if not phone:
        raise CheckoutError("A contact phone number is required.")
    digits = sum(ch.isdigit() for ch in phone)
    if not _PHONE_ALLOWED.match(phone) or digits < CONTACT_PHONE_MIN_DIGITS:
        raise CheckoutError(f"Contact phone {phone!r} is not a valid phone number.")

    if details.order_mode == ORDER_MODE_DELIVERY and not details.delivery_address.strip():
        raise CheckoutError("A delivery address is required for delivery orders.")


def build_order_request(cart: CartStore, details: CheckoutDetails) -> OrderRequest:
    """Validate ``details`` and freeze the cart with its computed totals."""
    if cart.is_empty or cart.current_restaurant_id is None:
        raise CheckoutError("Your cart is empty. Add items from the menu first.")
    validate_details(details)

    return OrderRequest(
        restaurant_id=cart.current_restaurant_id,
        lines=tuple(cart.snapshot()),
        totals=compute_totals(cart.get_cart_total(), details.order_mode),
        details=details,
    )


def place_order(
    cart: CartStore,
    details: CheckoutDetails,
    submit: Callable[[OrderRequest], SavedOrder] | None = None,
) -> SavedOrder:
    """
    Submit the cart as an order.

    The cart is cleared only once ``submit`` returns. A failing ``submit`` is
    reported as OrderSubmissionError and the cart is left as it was so the
    user can retry.
    """
    submit = submit or save_order
    request = build_order_request(cart, details)
    try:
        result = submit(request)
    except Exception as exc:
        logger.exception("order_submit_failed restaurant=%s lines=%d", request.restaurant_id, len(request.lines))
        raise OrderSubmissionError(f"Failed to place order: {exc}") from exc

    cart.clear_cart()
    logger.info("order_placed restaurant=%s total=%s", request.restaurant_id, request.totals.total)
    return result
