"""Tests for the promotion catalog and shipping table."""

from decimal import Decimal

import pytest

from storefront_pricing.catalog import (
    DEFAULT_PROMOTIONS,
    SHIPPING_OPTIONS,
    PromotionCatalog,
    shipping_option,
)
from storefront_pricing.errors import ValidationError
from storefront_pricing.models import FIXED, PERCENTAGE, PromotionCode


class TestPromotionCatalog:
    def test_find_is_case_insensitive(self) -> None:
        promo = DEFAULT_PROMOTIONS.find("welcome10")
        assert promo is not None
        assert promo.code == "WELCOME10"

    def test_find_ignores_surrounding_whitespace(self) -> None:
        assert DEFAULT_PROMOTIONS.find("  Flash25 ").code == "FLASH25"

    @pytest.mark.parametrize("code", [None, "", "   ", "NOPE"])
    def test_find_misses(self, code) -> None:
        assert DEFAULT_PROMOTIONS.find(code) is None

    def test_contains(self) -> None:
        assert "save20" in DEFAULT_PROMOTIONS
        assert "save30" not in DEFAULT_PROMOTIONS
        assert 20 not in DEFAULT_PROMOTIONS

    def test_duplicate_normalized_codes_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc:
            PromotionCatalog(
                [
                    PromotionCode(code="SAVE20", kind=FIXED, amount=20),
                    PromotionCode(code="save20", kind=FIXED, amount=25),
                ]
            )
        assert "SAVE20" in str(exc.value)

    def test_empty_catalog(self) -> None:
        catalog = PromotionCatalog()
        assert len(catalog) == 0
        assert catalog.find("WELCOME10") is None

    def test_iteration_keeps_insertion_order(self) -> None:
        assert [p.code for p in DEFAULT_PROMOTIONS] == ["WELCOME10", "SAVE20", "FLASH25"]

    def test_available_marks_eligibility(self) -> None:
        eligibility = {p.code: ok for p, ok in DEFAULT_PROMOTIONS.available(Decimal("60"))}
        assert eligibility == {"WELCOME10": True, "SAVE20": False, "FLASH25": True}


class TestDefaultPromotions:
    def test_fixtures(self) -> None:
        welcome = DEFAULT_PROMOTIONS.find("WELCOME10")
        assert (welcome.kind, welcome.amount, welcome.minimum_subtotal) == (PERCENTAGE, Decimal("10"), None)

        save = DEFAULT_PROMOTIONS.find("SAVE20")
        assert (save.kind, save.amount, save.minimum_subtotal) == (FIXED, Decimal("20"), Decimal("100"))

        flash = DEFAULT_PROMOTIONS.find("FLASH25")
        assert (flash.kind, flash.amount, flash.minimum_subtotal) == (PERCENTAGE, Decimal("25"), Decimal("50"))


class TestShippingOptions:
    def test_lookup(self) -> None:
        assert shipping_option("standard").price == Decimal("9.99")
        assert shipping_option("express").price == Decimal("19.99")
        assert shipping_option("overnight").price == Decimal("34.99")
        assert shipping_option("scheduled").price == Decimal("14.99")

    def test_table_ids(self) -> None:
        assert [o.id for o in SHIPPING_OPTIONS] == ["standard", "express", "overnight", "scheduled"]

    def test_unknown_option(self) -> None:
        with pytest.raises(ValidationError) as exc:
            shipping_option("teleport")
        assert exc.value.field == "shipping_option"
