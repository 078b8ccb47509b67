"""Catalogue bounded context: products and stock."""
