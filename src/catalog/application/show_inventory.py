"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from catalog.application.dto import InventoryReportDTO, LowStockLineDTO
from catalog.domain.model.product import DEFAULT_MINIMUM_STOCK
from catalog.domain.repository.product_repository import ProductRepository


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, minimum_stock: int = DEFAULT_MINIMUM_STOCK) -> InventoryReportDTO:
        low_stock = await self._product_repo.find_low_stock(minimum_stock)
        return InventoryReportDTO(
            total_products=await self._product_repo.count(),
            active_products=await self._product_repo.count_by_status(True),
            inactive_products=await self._product_repo.count_by_status(False),
            # unit count as reported by the repository, not a monetary value
            total_stock_units=await self._product_repo.get_total_inventory_value(),
            categories=await self._product_repo.get_categories(),
            low_stock=[
                LowStockLineDTO(id=p.id, name=p.name, sku=p.sku, stock=p.stock)
                for p in low_stock
            ],
        )
