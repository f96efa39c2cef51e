"""Runtime configuration defaults for persistence, logging and pricing."""

from __future__ import annotations

import os
from decimal import Decimal

DB_PATH = os.environ.get("STOREFRONT_DB_PATH", "data/storefront.db")

# The TUI owns the terminal, so diagnostics go to a file.
LOG_PATH = os.environ.get("STOREFRONT_LOG_PATH", "/tmp/storefront-debug.log")
LOG_LEVEL = os.environ.get("STOREFRONT_LOG_LEVEL", "INFO")

CURRENCY_SYMBOL = "£"

# Checkout pricing policy, in the same unit as dish prices.
DELIVERY_FEE_THRESHOLD = Decimal("15.00")
DELIVERY_FEE = Decimal("2.99")
COLLECTION_DISCOUNT_THRESHOLD = Decimal("15.00")
COLLECTION_DISCOUNT_RATE = Decimal("0.10")

SPICE_LEVEL_MIN = 0
SPICE_LEVEL_MAX = 3

CONTACT_PHONE_MIN_DIGITS = 7
ORDER_HISTORY_LIMIT = 20
