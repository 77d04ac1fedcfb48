"""Shared pytest fixtures for pricing tests."""

import pytest

from storefront_pricing.catalog import PromotionCatalog
from storefront_pricing.models import FIXED, PERCENTAGE, PromotionCode, ShippingOption


@pytest.fixture
def standard():
    return ShippingOption(id="standard", price="9.99", name="Standard Shipping")


@pytest.fixture
def express():
    return ShippingOption(id="express", price="19.99", name="Express Shipping")


@pytest.fixture
def pickup():
    return ShippingOption(id="pickup", price="0")


@pytest.fixture
def catalog():
    """Small catalog with one code of each shape."""
    return PromotionCatalog(
        [
            PromotionCode(code="TWENTY", kind=PERCENTAGE, amount="20"),
            PromotionCode(code="TWENTYOFF", kind=FIXED, amount="20"),
            PromotionCode(code="BIGSPENDER", kind=FIXED, amount="20", minimum_subtotal="100"),
        ]
    )
