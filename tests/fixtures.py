"""Shared test helpers for building carts."""

from storefront_pricing.models import LineItem


def cart(*prices_and_quantities) -> list[LineItem]:
    """Build line items from (unit_price, quantity) pairs."""
    return [LineItem(unit_price=price, quantity=qty) for price, qty in prices_and_quantities]
