"""Application service: Delete Product use case."""

from __future__ import annotations

from loguru import logger

from catalog.domain.repository.product_repository import ProductRepository


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: str) -> None:
        # the repository raises EntityNotFoundError for unknown ids
        await self._product_repo.delete(product_id)
        logger.info("Deleted product {}", product_id)
