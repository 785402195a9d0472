"""
Unit tests for price range and size filtering.
"""
from decimal import Decimal

import pytest

from app.models.catalog import Product
from app.services.catalog.filtering import filter_products, parse_csv


@pytest.fixture
def products():
    return [
        Product(title="Product 1", price=Decimal("10"), sizes=["S"]),
        Product(title="Product 2", price=Decimal("20"), sizes=["M", "L"]),
        Product(title="Product 3", price=Decimal("30"), sizes=["L"]),
    ]


def titles(items):
    return [p.title for p in items]


def test_filter_by_price_and_size(products):
    """minPrice=15, maxPrice=25, size=M,L keeps only the price-20 product."""
    filtered = filter_products(products, Decimal("15"), Decimal("25"), "M,L")

    assert titles(filtered) == ["Product 2"]


def test_no_filters_returns_everything_in_order(products):
    assert titles(filter_products(products)) == ["Product 1", "Product 2", "Product 3"]


def test_price_bounds_are_inclusive(products):
    filtered = filter_products(products, min_price=Decimal("10"), max_price=Decimal("20"))

    assert titles(filtered) == ["Product 1", "Product 2"]


def test_min_price_only(products):
    assert titles(filter_products(products, min_price=Decimal("25"))) == ["Product 3"]


def test_max_price_only(products):
    assert titles(filter_products(products, max_price=Decimal("9.99"))) == []


def test_size_is_case_insensitive(products):
    assert titles(filter_products(products, size="l")) == ["Product 2", "Product 3"]


def test_size_tokens_are_not_trimmed(products):
    # " L" is a different token from "L"
    assert titles(filter_products(products, size="S, L")) == ["Product 1"]


def test_empty_size_string_means_no_size_filter(products):
    assert len(filter_products(products, size="")) == 3


def test_product_without_sizes_never_matches_size_filter():
    catalog = [Product(title="No sizes", price=Decimal("5")), Product(title="Sized", price=Decimal("5"), sizes=["S"])]

    assert titles(filter_products(catalog, size="S")) == ["Sized"]
    assert titles(filter_products(catalog)) == ["No sizes", "Sized"]


@pytest.mark.parametrize("catalog", [None, []])
def test_absent_or_empty_catalog(catalog):
    assert filter_products(catalog, Decimal("1"), Decimal("2"), "S") == []


def test_filter_is_idempotent(products):
    once = filter_products(products, Decimal("15"), None, "l")
    twice = filter_products(once, Decimal("15"), None, "l")

    assert twice == once


def test_results_respect_all_bounds(products):
    min_price, max_price = Decimal("12"), Decimal("30")
    filtered = filter_products(products, min_price, max_price, "L,S")

    assert filtered
    for product in filtered:
        assert min_price <= product.price <= max_price
        assert {s.upper() for s in product.sizes} & {"L", "S"}


def test_does_not_mutate_input(products):
    snapshot = [p.model_copy(deep=True) for p in products]

    filter_products(products, Decimal("15"), Decimal("25"), "M")

    assert products == snapshot


def test_parse_csv():
    assert parse_csv(None) == []
    assert parse_csv("") == []
    assert parse_csv("a,b") == ["a", "b"]
    assert parse_csv("a, b,") == ["a", " b", ""]
