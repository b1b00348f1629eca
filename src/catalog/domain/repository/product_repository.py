"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.

Every method is a coroutine: an adapter may suspend while it talks to
its store.  Contract rules every adapter must honour:

- ``find_by_id`` / ``find_by_sku`` return None when nothing matches.
- ``save`` is an upsert keyed by id; a different id reusing a SKU raises
  DuplicateEntityError.
- ``delete`` of an unknown id raises EntityNotFoundError.
- Paginated queries are ordered newest ``created_at`` first and combine
  every filter with AND.
- Writes that would clobber a concurrent change raise
  ConcurrencyConflictError.
"""

from __future__ import annotations

import dataclasses
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.product import DEFAULT_MINIMUM_STOCK, Product

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class FindProductsOptions:
    """Pagination and filter options for product queries."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    in_stock: bool | None = None
    is_active: bool | None = None
    search_term: str | None = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be >= 1", field="page")
        if self.limit < 1:
            raise ValidationError("Limit must be >= 1", field="limit")
        for name in ("min_price", "max_price"):
            value = getattr(self, name)
            if value is None:
                continue
            try:
                bound = Decimal(str(value))
            except InvalidOperation as exc:
                raise ValidationError(f"Invalid {name}: {value!r}", field=name) from exc
            if not bound.is_finite():
                raise ValidationError(f"Invalid {name}: {value!r}", field=name)
            object.__setattr__(self, name, bound)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def replace(self, **changes) -> FindProductsOptions:
        return dataclasses.replace(self, **changes)

    def matches(self, product: Product) -> bool:
        """True if *product* passes every filter set on these options."""
        if self.category is not None and product.category != self.category:
            return False
        if self.is_active is not None and product.is_active != self.is_active:
            return False
        if self.in_stock is not None and product.has_stock() != self.in_stock:
            return False
        if self.min_price is not None and product.price.amount < self.min_price:
            return False
        if self.max_price is not None and product.price.amount > self.max_price:
            return False
        if self.search_term:
            term = self.search_term.lower()
            haystacks = (product.name, product.description, product.sku)
            if not any(term in text.lower() for text in haystacks):
                return False
        return True


@dataclass(frozen=True)
class PaginatedProducts:
    """One page of a product query plus the paging metadata."""

    data: list[Product]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, data: list[Product], total: int, page: int, limit: int) -> PaginatedProducts:
        total_pages = math.ceil(total / limit)
        return cls(
            data=list(data),
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


class ProductRepository(ABC):

    # --- CRUD -----------------------------------------------------------------

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """Insert or update a product and return the stored version."""

    @abstractmethod
    async def find_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    async def find_by_sku(self, sku: str) -> Product | None:
        """Return a product by its SKU, or None if not found."""

    @abstractmethod
    async def delete(self, product_id: str) -> None:
        """Remove a product; raises EntityNotFoundError if it does not exist."""

    # --- Queries --------------------------------------------------------------

    @abstractmethod
    async def find_all(self, options: FindProductsOptions | None = None) -> PaginatedProducts:
        """Return one page of products matching *options*."""

    @abstractmethod
    async def find_by_category(
        self, category: str, options: FindProductsOptions | None = None
    ) -> PaginatedProducts:
        """Like ``find_all`` with the category filter forced to *category*."""

    @abstractmethod
    async def find_low_stock(self, minimum_stock: int = DEFAULT_MINIMUM_STOCK) -> list[Product]:
        """Active products with fewer than *minimum_stock* units, lowest first."""

    @abstractmethod
    async def search(
        self, term: str, options: FindProductsOptions | None = None
    ) -> PaginatedProducts:
        """Case-insensitive match on name, description or SKU."""

    # --- Inventory ------------------------------------------------------------

    @abstractmethod
    async def update_stock(self, product_id: str, quantity: int) -> None:
        """Set the absolute stock level of a product."""

    @abstractmethod
    async def check_stock_availability(self, product_id: str, quantity: int) -> bool:
        """True if the product exists and has at least *quantity* units."""

    @abstractmethod
    async def get_total_inventory_value(self) -> int:
        """Sum of stock quantities across active products.

        Note: this is a unit count, not stock times price.
        """

    # --- Batch ----------------------------------------------------------------

    @abstractmethod
    async def save_many(self, products: list[Product]) -> list[Product]:
        """Upsert several products atomically."""

    @abstractmethod
    async def update_many(self, products: list[Product]) -> list[Product]:
        """Update several existing products atomically."""

    # --- Counts ---------------------------------------------------------------

    @abstractmethod
    async def count(self) -> int:
        """Total number of products."""

    @abstractmethod
    async def count_by_category(self, category: str) -> int:
        """Number of products in *category*."""

    @abstractmethod
    async def count_by_status(self, is_active: bool) -> int:
        """Number of active (or inactive) products."""

    # --- Misc -----------------------------------------------------------------

    @abstractmethod
    async def sku_exists(self, sku: str, exclude_id: str | None = None) -> bool:
        """True if another product (other than *exclude_id*) uses *sku*."""

    @abstractmethod
    async def get_categories(self) -> list[str]:
        """Distinct categories, sorted."""

    @abstractmethod
    async def get_top_selling(self, limit: int = 10) -> list[Product]:
        """Best sellers among active products."""

    @abstractmethod
    async def get_recently_added(self, limit: int = 10) -> list[Product]:
        """Newest active products first."""
