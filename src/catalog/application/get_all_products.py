"""Application service: Get All Products use case (query)."""

from __future__ import annotations

from catalog.domain.repository.product_repository import (
    FindProductsOptions,
    PaginatedProducts,
    ProductRepository,
)


class GetAllProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, options: FindProductsOptions | None = None) -> PaginatedProducts:
        return await self._product_repo.find_all(options)
