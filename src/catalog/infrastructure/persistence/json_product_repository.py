"""JSON-file-backed implementation of ProductRepository.

The whole catalog lives in one JSON array of ``Product.to_primitives()``
records.  Reads and writes go through a worker thread so the event loop
is never blocked on disk, and every read-modify-write cycle holds an
``asyncio.Lock``.  Writes go to a temporary file that is then renamed over
the store, so a reader always sees either the old or the new catalog.

Optimistic concurrency: every product this adapter hands out or saves is
marked with the ``updated_at`` of its stored row (``persisted_version``).
If the stored row has moved on by the time that product is saved again,
whoever wrote it in between, the save is refused with
ConcurrencyConflictError.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from catalog.domain.exceptions import (
    ConcurrencyConflictError,
    DuplicateEntityError,
    EntityNotFoundError,
    RepositoryError,
    ValidationError,
)
from catalog.domain.model.product import DEFAULT_MINIMUM_STOCK, Product
from catalog.domain.repository.product_repository import (
    FindProductsOptions,
    PaginatedProducts,
    ProductRepository,
)
from catalog.infrastructure.persistence import query

_ENTITY = "Product"


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = asyncio.Lock()
        self._ensure_file()

    # --- CRUD -----------------------------------------------------------------

    async def save(self, product: Product) -> Product:
        (saved,) = await self._upsert([product], require_existing=False)
        return saved

    async def find_by_id(self, product_id: str) -> Product | None:
        for product in await self._load():
            if product.id == product_id:
                return product
        return None

    async def find_by_sku(self, sku: str) -> Product | None:
        for product in await self._load():
            if product.sku == sku:
                return product
        return None

    async def delete(self, product_id: str) -> None:
        async with self._lock:
            records = await self._load_raw()
            remaining = [r for r in records if r["id"] != product_id]
            if len(remaining) == len(records):
                raise EntityNotFoundError(_ENTITY, product_id)
            await self._persist_raw(remaining)
        logger.debug("Deleted product {} from {}", product_id, self._file_path)

    # --- Queries --------------------------------------------------------------

    async def find_all(self, options: FindProductsOptions | None = None) -> PaginatedProducts:
        return query.paginate(await self._load(), options or FindProductsOptions())

    async def find_by_category(
        self, category: str, options: FindProductsOptions | None = None
    ) -> PaginatedProducts:
        return await self.find_all((options or FindProductsOptions()).replace(category=category))

    async def find_low_stock(self, minimum_stock: int = DEFAULT_MINIMUM_STOCK) -> list[Product]:
        return query.low_stock(await self._load(), minimum_stock)

    async def search(
        self, term: str, options: FindProductsOptions | None = None
    ) -> PaginatedProducts:
        return await self.find_all((options or FindProductsOptions()).replace(search_term=term))

    # --- Inventory ------------------------------------------------------------

    async def update_stock(self, product_id: str, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise ValidationError("Stock must be a non-negative integer", field="stock")

        async with self._lock:
            records = await self._load_raw()
            for i, raw in enumerate(records):
                if raw["id"] == product_id:
                    updated = dict(raw, stock=quantity, updated_at=_utcnow_iso())
                    Product.from_primitives(updated)
                    records[i] = updated
                    break
            else:
                raise EntityNotFoundError(_ENTITY, product_id)
            await self._persist_raw(records)

    async def check_stock_availability(self, product_id: str, quantity: int) -> bool:
        product = await self.find_by_id(product_id)
        return product is not None and product.stock >= quantity

    async def get_total_inventory_value(self) -> int:
        # active stock units; price plays no part in this figure
        return sum(p.stock for p in await self._load() if p.is_active)

    # --- Batch ----------------------------------------------------------------

    async def save_many(self, products: list[Product]) -> list[Product]:
        return await self._upsert(products, require_existing=False)

    async def update_many(self, products: list[Product]) -> list[Product]:
        return await self._upsert(products, require_existing=True)

    # --- Counts ---------------------------------------------------------------

    async def count(self) -> int:
        return len(await self._load_raw())

    async def count_by_category(self, category: str) -> int:
        return sum(1 for p in await self._load() if p.category == category)

    async def count_by_status(self, is_active: bool) -> int:
        return sum(1 for p in await self._load() if p.is_active == is_active)

    # --- Misc -----------------------------------------------------------------

    async def sku_exists(self, sku: str, exclude_id: str | None = None) -> bool:
        return any(
            p.sku == sku and p.id != exclude_id for p in await self._load()
        )

    async def get_categories(self) -> list[str]:
        return sorted({p.category for p in await self._load()})

    async def get_top_selling(self, limit: int = 10) -> list[Product]:
        # No sales are recorded, so recency stands in for popularity.
        return query.recently_added(await self._load(), limit)

    async def get_recently_added(self, limit: int = 10) -> list[Product]:
        return query.recently_added(await self._load(), limit)

    # --- Write path -----------------------------------------------------------

    async def _upsert(self, products: list[Product], require_existing: bool) -> list[Product]:
        """Validate the whole batch against the store, then write it in one go."""
        async with self._lock:
            records = await self._load_raw()
            stored = {raw["id"]: raw for raw in records}

            for product in products:
                current = stored.get(product.id)
                if current is None:
                    if require_existing:
                        raise EntityNotFoundError(_ENTITY, product.id)
                    continue
                seen = product.persisted_version
                if seen is not None and datetime.fromisoformat(current["updated_at"]) != seen:
                    raise ConcurrencyConflictError(_ENTITY, product.id)

            merged = {pid: Product.from_primitives(raw) for pid, raw in stored.items()}
            for product in products:
                merged[product.id] = product
            clash = query.duplicate_sku(merged.values())
            if clash is not None:
                raise DuplicateEntityError(_ENTITY, "sku", clash)

            for product in products:
                stored[product.id] = product.to_primitives()
            await self._persist_raw(list(stored.values()))

            saved = []
            for product in products:
                product.mark_persisted()
                copy = Product.from_primitives(stored[product.id])
                copy.mark_persisted()
                saved.append(copy)

        logger.debug("Saved {} product(s) to {}", len(saved), self._file_path)
        return saved

    # --- Serialization helpers ------------------------------------------------

    async def _load(self) -> list[Product]:
        products = [Product.from_primitives(raw) for raw in await self._load_raw()]
        for product in products:
            product.mark_persisted()
        return products

    async def _load_raw(self) -> list[dict]:
        text = await asyncio.to_thread(self._file_path.read_text, encoding="utf-8")
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise RepositoryError(
                f"Product store {self._file_path} is not valid JSON: {exc}"
            ) from exc

    async def _persist_raw(self, records: list[dict]) -> None:
        await asyncio.to_thread(self._write_atomically, json.dumps(records, indent=2) + "\n")

    def _write_atomically(self, text: str) -> None:
        # temp file in the same directory so the rename never crosses filesystems
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
