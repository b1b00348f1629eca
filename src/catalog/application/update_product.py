"""Application service: Update Product use case."""

from __future__ import annotations

from loguru import logger

from catalog.application.dto import ProductResponse
from catalog.application.mapper import ProductMapper
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Price
from catalog.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle_price(
        self, product_id: str, amount: str, currency: str | None = None
    ) -> ProductResponse:
        """Change a product's price.

        The currency defaults to the product's current one.  Refused for
        inactive products (InactiveProductError).
        """
        product = await self._load(product_id)
        product.update_price(Price.create(amount, currency or product.price.currency))
        saved = await self._product_repo.save(product)
        logger.info("Price of {} set to {}", saved.id, saved.price)
        return ProductMapper.to_response(saved)

    async def handle_info(
        self, product_id: str, name: str, description: str, category: str
    ) -> ProductResponse:
        product = await self._load(product_id)
        product.update_info(name, description, category)
        saved = await self._product_repo.save(product)
        return ProductMapper.to_response(saved)

    async def _load(self, product_id: str) -> Product:
        product = await self._product_repo.find_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)
        return product
