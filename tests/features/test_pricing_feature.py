"""BDD tests for cart pricing using pytest-bdd."""

from decimal import Decimal
from types import SimpleNamespace

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from storefront_pricing.catalog import PromotionCatalog
from storefront_pricing.errors import ValidationError
from storefront_pricing.models import PromotionCode, ShippingOption
from storefront_pricing.pricing import price_cart

# Load scenarios from feature file
scenarios("pricing.feature")


class PricingTestContext:
    """Test context for pricing scenarios."""

    def __init__(self):
        self.catalog = PromotionCatalog()
        self.items = []
        self.shipping = None
        self.tax_rate = Decimal("0.08")
        self.result = None
        self.results = []
        self.error = None

    def price(self, code=None):
        return price_cart(self.items, code, self.shipping, tax_rate=self.tax_rate, catalog=self.catalog)


@pytest.fixture
def ctx():
    """Fixture providing fresh test context for each scenario."""
    return PricingTestContext()


# --- Given steps ---


@given("the promotion catalog")
def promotion_catalog(ctx, datatable):
    header, *rows = datatable
    codes = []
    for row in rows:
        entry = dict(zip(header, row))
        codes.append(
            PromotionCode(
                code=entry["code"],
                kind=entry["kind"],
                amount=entry["amount"],
                minimum_subtotal=entry["minimum"] or None,
            )
        )
    ctx.catalog = PromotionCatalog(codes)


@given("an empty cart")
def empty_cart(ctx):
    ctx.items = []


@given(parsers.parse("a cart item priced {price} with quantity {quantity:d}"))
def cart_item(ctx, price, quantity):
    # Raw items so malformed prices reach the engine's own validation.
    ctx.items.append(SimpleNamespace(unit_price=price, quantity=quantity, original_unit_price=None))


@given(parsers.parse('"{option_id}" shipping at {price}'))
def shipping(ctx, option_id, price):
    ctx.shipping = ShippingOption(id=option_id, price=price)


@given(parsers.parse("a tax rate of {rate}"))
def tax_rate(ctx, rate):
    ctx.tax_rate = Decimal(rate)


# --- When steps ---


@when("I price the cart")
def price_without_code(ctx):
    try:
        ctx.result = ctx.price()
    except ValidationError as e:
        ctx.error = e


@when(parsers.parse('I price the cart with code "{code}"'))
def price_with_code(ctx, code):
    ctx.result = ctx.price(code)


@when(parsers.parse('I price the cart twice with code "{code}"'))
def price_twice(ctx, code):
    ctx.results = [ctx.price(code), ctx.price(code)]


# --- Then steps ---


@then(parsers.re(r"the (?P<field>subtotal|discount|shipping|tax|total) is (?P<amount>[\d.]+)"))
def money_field(ctx, field, amount):
    assert ctx.error is None
    assert getattr(ctx.result, field) == Decimal(amount)
    assert getattr(ctx.result, field).as_tuple().exponent == -2


@then(parsers.parse('the code "{code}" is applied'))
def applied_code(ctx, code):
    assert ctx.result.applied_code == code


@then("no code is applied")
def no_code_applied(ctx):
    assert ctx.result.applied_code is None


@then("both breakdowns are identical")
def identical(ctx):
    first, second = ctx.results
    assert first == second


@then(parsers.parse('pricing fails with "{message}"'))
def pricing_fails(ctx, message):
    assert ctx.result is None
    assert ctx.error.message == message
