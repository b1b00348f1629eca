"""Application service: Get Product By ID use case (query)."""

from __future__ import annotations

from loguru import logger

from catalog.application.dto import ProductResponse
from catalog.application.mapper import ProductMapper
from catalog.domain.exceptions import EntityNotFoundError, ValidationError
from catalog.domain.repository.product_repository import ProductRepository


class GetProductByIdHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: str) -> ProductResponse:
        """Look up a single product.

        The id is checked before the repository is touched, so a blank
        id never costs a round trip to the store.
        """
        if not product_id or not product_id.strip():
            raise ValidationError("Product ID is required", field="id")

        logger.debug("Looking up product {}", product_id)
        product = await self._product_repo.find_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)

        return ProductMapper.to_response(product)
