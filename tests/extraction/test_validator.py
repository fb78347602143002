"""Tests for coral_compare/extraction/validator.py"""

import pytest

from coral_compare.extraction.validator import ListingValidator


@pytest.fixture
def validator():
    return ListingValidator()


class TestErrors:
    def test_valid(self, validator, make_listing):
        assert validator.errors(make_listing()) == []

    @pytest.mark.parametrize("field,value,message", [
        ("shop_id", "", "shop_id"),
        ("url", "  ", "url"),
        ("category", "", "category"),
        ("title_raw", "", "title"),
        ("price_cad", None, "price: missing"),
        ("price_cad", 0, "price: must be > 0"),
        ("price_cad", -5.0, "price: must be > 0"),
    ])
    def test_blocking_problems(self, validator, make_listing, field, value, message):
        errors = validator.errors(make_listing(**{field: value}))
        assert any(message in e for e in errors)


class TestClean:
    def test_invalid_discarded(self, validator, make_listing):
        assert validator.clean(make_listing(price_cad=None)) is None

    def test_sale_not_below_price_dropped(self, validator, make_listing):
        listing = validator.clean(make_listing(price_cad=50.0, sale_price_cad=50.0))
        assert listing.sale_price_cad is None

    def test_sale_above_price_dropped(self, validator, make_listing):
        assert validator.clean(make_listing(price_cad=50.0, sale_price_cad=60.0)).sale_price_cad is None

    def test_non_positive_sale_dropped(self, validator, make_listing):
        assert validator.clean(make_listing(sale_price_cad=0)).sale_price_cad is None

    def test_valid_sale_kept_and_rounded(self, validator, make_listing):
        listing = validator.clean(make_listing(price_cad=40.004, sale_price_cad=29.999))
        assert listing.price_cad == 40.0
        assert listing.sale_price_cad == 30.0

    def test_unknown_enums_reset(self, validator, make_listing):
        listing = validator.clean(make_listing(
            status="preorder", sale_mode="bulk", unit_type="colony", unit_count=0))
        assert listing.status == "available"
        assert listing.sale_mode is None
        assert listing.unit_type is None
        assert listing.unit_count is None

    def test_valid_enums_kept(self, validator, make_listing):
        listing = validator.clean(make_listing(
            status="sold_out", sale_mode="per_unit", unit_type="polyp", unit_count=3))
        assert (listing.status, listing.sale_mode, listing.unit_type, listing.unit_count) == \
            ("sold_out", "per_unit", "polyp", 3)

    def test_strips_whitespace(self, validator, make_listing):
        listing = validator.clean(make_listing(title_raw="  Torch  ", shop_id=" fragbox "))
        assert listing.title_raw == "Torch"
        assert listing.shop_id == "fragbox"
