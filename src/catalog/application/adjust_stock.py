"""Application service: Adjust Stock use case.

Stock changes go through the Product aggregate rather than the
repository's raw ``update_stock`` so the business rules (no selling
from inactive products, no overselling) are always applied.
"""

from __future__ import annotations

from loguru import logger

from catalog.application.dto import ProductResponse
from catalog.application.mapper import ProductMapper
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository


class AdjustStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def restock(self, product_id: str, quantity: int) -> ProductResponse:
        product = await self._load(product_id)
        product.increase_stock(quantity)
        saved = await self._product_repo.save(product)
        logger.info("Restocked {} by {} (now {})", saved.id, quantity, saved.stock)
        return ProductMapper.to_response(saved)

    async def sell(self, product_id: str, quantity: int) -> ProductResponse:
        product = await self._load(product_id)
        product.reduce_stock(quantity)
        saved = await self._product_repo.save(product)
        logger.info("Sold {} of {} (now {})", quantity, saved.id, saved.stock)
        return ProductMapper.to_response(saved)

    async def _load(self, product_id: str) -> Product:
        product = await self._product_repo.find_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)
        return product
