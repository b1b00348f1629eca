"""Application service: Activate / Deactivate Product use case."""

from __future__ import annotations

from loguru import logger

from catalog.application.dto import ProductResponse
from catalog.application.mapper import ProductMapper
from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.repository.product_repository import ProductRepository


class SetProductStatusHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: str, active: bool) -> ProductResponse:
        product = await self._product_repo.find_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)

        if active:
            product.activate()
        else:
            product.deactivate()

        saved = await self._product_repo.save(product)
        logger.info("Product {} is now {}", saved.id, "active" if active else "inactive")
        return ProductMapper.to_response(saved)
