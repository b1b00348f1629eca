"""Integration tests for the product query use cases."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from catalog.application.dto import ProductResponse
from catalog.application.get_all_products import GetAllProductsHandler
from catalog.application.get_product_by_id import GetProductByIdHandler
from catalog.domain.exceptions import EntityNotFoundError, ValidationError
from catalog.domain.repository.product_repository import (
    FindProductsOptions,
    PaginatedProducts,
    ProductRepository,
)
from tests.fakes import FakeProductRepository, make_product


@pytest.mark.asyncio
class TestGetProductById:

    async def test_returns_plain_projection(self):
        product = make_product()
        handler = GetProductByIdHandler(FakeProductRepository([product]))

        dto = await handler.handle(product.id)

        assert dto == ProductResponse(
            id=product.id,
            name="Laptop",
            price=Decimal("1299.99"),
            currency="USD",
            stock=10,
        )

    @pytest.mark.parametrize("blank", ["", "   "])
    async def test_blank_id_rejected_before_repository_call(self, blank):
        repo = AsyncMock(spec=ProductRepository)
        handler = GetProductByIdHandler(repo)

        with pytest.raises(ValidationError, match="Product ID is required"):
            await handler.handle(blank)

        repo.find_by_id.assert_not_called()

    async def test_missing_product_rejected(self):
        repo = AsyncMock(spec=ProductRepository)
        repo.find_by_id.return_value = None
        handler = GetProductByIdHandler(repo)

        with pytest.raises(EntityNotFoundError, match="missing-id") as excinfo:
            await handler.handle("missing-id")

        assert excinfo.value.entity_id == "missing-id"
        repo.find_by_id.assert_awaited_once_with("missing-id")


@pytest.mark.asyncio
class TestGetAllProducts:

    async def test_delegates_to_repository_unchanged(self):
        page = PaginatedProducts.build([], 0, 1, 10)
        repo = AsyncMock(spec=ProductRepository)
        repo.find_all.return_value = page
        options = FindProductsOptions(category="Books")

        result = await GetAllProductsHandler(repo).handle(options)

        assert result is page
        repo.find_all.assert_awaited_once_with(options)

    async def test_default_options(self):
        products = [make_product(sku=f"SKU-{i}") for i in range(12)]
        handler = GetAllProductsHandler(FakeProductRepository(products))

        result = await handler.handle()

        assert result.total == 12
        assert len(result.data) == 10
        assert result.total_pages == 2
        assert result.has_next_page
