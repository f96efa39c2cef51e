"""Entry point for the storefront Textual app."""

from __future__ import annotations

import logging

from storefront.cart import CartStore
from storefront.log import configure_logging
from storefront.storefront_app import StorefrontApp

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the Textual application with one cart for the whole session."""
    configure_logging()
    cart = CartStore()
    logger.info("storefront_start")
    StorefrontApp(cart=cart).run()


if __name__ == "__main__":
    main()
