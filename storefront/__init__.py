"""Spice Storefront: cart, pricing and checkout for a single-restaurant menu."""
