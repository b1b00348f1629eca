"""In-process query helpers shared by adapters that hold whole collections."""

from __future__ import annotations

from typing import Iterable

from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import (
    FindProductsOptions,
    PaginatedProducts,
)


def newest_first(products: Iterable[Product]) -> list[Product]:
    return sorted(products, key=lambda p: p.created_at, reverse=True)


def paginate(products: Iterable[Product], options: FindProductsOptions) -> PaginatedProducts:
    """Filter, order newest first and cut out the requested page."""
    matching = newest_first(p for p in products if options.matches(p))
    page = matching[options.offset : options.offset + options.limit]
    return PaginatedProducts.build(page, len(matching), options.page, options.limit)


def low_stock(products: Iterable[Product], minimum_stock: int) -> list[Product]:
    return sorted(
        (p for p in products if p.is_active and p.stock < minimum_stock),
        key=lambda p: p.stock,
    )


def recently_added(products: Iterable[Product], limit: int) -> list[Product]:
    return newest_first(p for p in products if p.is_active)[:limit]


def duplicate_sku(products: Iterable[Product]) -> str | None:
    """Return the first SKU shared by two different ids, if any."""
    owners: dict[str, str] = {}
    for p in products:
        owner = owners.setdefault(p.sku, p.id)
        if owner != p.id:
            return p.sku
    return None
