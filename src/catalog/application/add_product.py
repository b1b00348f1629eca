"""Application service: Add Product use case."""

from __future__ import annotations

from loguru import logger

from catalog.application.dto import NewProductSpec, ProductResponse
from catalog.application.mapper import ProductMapper
from catalog.domain.exceptions import DuplicateEntityError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Price
from catalog.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, spec: NewProductSpec) -> ProductResponse:
        """Add a new product to the catalog.

        The SKU check here gives a clean error up front; the repository
        still enforces uniqueness on ``save``.
        """
        product = Product.create(
            name=spec.name.strip(),
            description=spec.description,
            price=Price.create(spec.price, spec.currency),
            stock=spec.stock,
            sku=spec.sku.strip(),
            category=spec.category.strip(),
            images=spec.images,
        )

        if await self._product_repo.sku_exists(product.sku):
            raise DuplicateEntityError("Product", "sku", product.sku)

        saved = await self._product_repo.save(product)
        logger.info("Added product {} ({})", saved.id, saved.sku)
        return ProductMapper.to_response(saved)
