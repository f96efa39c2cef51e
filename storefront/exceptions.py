"""Error types raised at the checkout boundary."""

from __future__ import annotations


class StorefrontError(Exception):
    """Base exception for storefront errors shown to the user."""

    def __init__(self, message: str = "Something went wrong") -> None:
        super().__init__(message)
        self.message = message


class CheckoutError(StorefrontError, ValueError):
    """Checkout details or cart contents are not valid for an order."""


class OrderSubmissionError(StorefrontError, RuntimeError):
    """The order could not be handed to the submission backend."""
