"""Ordering bounded context: shopping carts and orders."""
