"""Unit tests for the query value types defined alongside the repository port."""

from decimal import Decimal

import pytest

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.value_objects import Price
from catalog.domain.repository.product_repository import (
    FindProductsOptions,
    PaginatedProducts,
)
from tests.fakes import make_product


class TestPaginatedProducts:

    @pytest.mark.parametrize(
        "total, page, limit, pages, has_next, has_prev",
        [
            (0, 1, 10, 0, False, False),
            (10, 1, 10, 1, False, False),
            (11, 1, 10, 2, True, False),
            (25, 2, 10, 3, True, True),
            (25, 3, 10, 3, False, True),
        ],
    )
    def test_paging_metadata(self, total, page, limit, pages, has_next, has_prev):
        result = PaginatedProducts.build([], total, page, limit)
        assert result.total_pages == pages
        assert result.has_next_page is has_next
        assert result.has_prev_page is has_prev


class TestFindProductsOptions:

    def test_defaults(self):
        options = FindProductsOptions()
        assert (options.page, options.limit, options.offset) == (1, 10, 0)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"page": 0},
            {"limit": 0},
            {"min_price": "cheap"},
            {"min_price": "nan"},
            {"max_price": Decimal("Infinity")},
            {"max_price": float("-inf")},
        ],
    )
    def test_invalid_options_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            FindProductsOptions(**kwargs)

    def test_prices_normalised_to_decimal(self):
        options = FindProductsOptions(min_price="10", max_price=20.5)
        assert options.min_price == Decimal("10")
        assert options.max_price == Decimal("20.5")

    def test_replace_returns_copy(self):
        options = FindProductsOptions(page=2)
        changed = options.replace(category="Books")
        assert changed.category == "Books"
        assert changed.page == 2
        assert options.category is None

    def test_filters_combine_with_and(self):
        product = make_product(
            name="Blue Pen", category="Office", stock=3, price=Price.create(2)
        )
        assert FindProductsOptions(category="Office", in_stock=True).matches(product)
        assert not FindProductsOptions(category="Office", in_stock=False).matches(product)
        assert not FindProductsOptions(category="Office", is_active=False).matches(product)
        assert FindProductsOptions(min_price=2, max_price=2).matches(product)
        assert not FindProductsOptions(min_price="2.01").matches(product)

    @pytest.mark.parametrize("term", ["blue", "PEN", "ink", "off-00"])
    def test_search_matches_name_description_or_sku(self, term):
        product = make_product(name="Blue Pen", description="Gel ink", sku="OFF-007")
        assert FindProductsOptions(search_term=term).matches(product)

    def test_search_miss(self):
        assert not FindProductsOptions(search_term="stapler").matches(make_product())
