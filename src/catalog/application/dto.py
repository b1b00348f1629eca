"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Nothing in here
references Product or Price.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class ProductResponse:
    """Output: the summary of a single product."""

    id: str
    name: str
    price: Decimal
    currency: str
    stock: int


@dataclass(frozen=True)
class NewProductSpec:
    """Input: everything needed to add a product to the catalog."""

    name: str
    price: str
    stock: int
    sku: str
    category: str
    description: str = ""
    currency: str = "USD"
    images: tuple[str, ...] = ()


@dataclass(frozen=True)
class LowStockLineDTO:
    """Output: one product that is running out."""

    id: str
    name: str
    sku: str
    stock: int


@dataclass(frozen=True)
class InventoryReportDTO:
    """Output: catalog-wide inventory figures."""

    total_products: int
    active_products: int
    inactive_products: int
    total_stock_units: int
    categories: list[str] = field(default_factory=list)
    low_stock: list[LowStockLineDTO] = field(default_factory=list)
