"""Product aggregate.

A product is the unit of the catalog: it owns its price, its stock level
and its image gallery, and it decides which changes to those are legal.
Prices change, stock goes up and down, products are switched on and off;
the id and the creation timestamp never change.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from catalog.domain.exceptions import (
    InactiveProductError,
    InsufficientStockError,
    ValidationError,
)
from catalog.domain.model.value_objects import Price

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MIN_SKU_LENGTH = 3
DEFAULT_MINIMUM_STOCK = 5
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _generate_id() -> str:
    return f"prod_{uuid.uuid4().hex}"


def is_valid_image_url(url: str) -> bool:
    if not isinstance(url, str) or not url.strip():
        return False
    return url.lower().endswith(IMAGE_EXTENSIONS)


class Product:
    """Aggregate root for a catalog product.

    Use ``Product.create()`` for new products and ``Product.reconstruct()``
    when rehydrating stored data.  Both go through ``__init__``, which runs
    the full validation, so an invalid product can never be observed.

    Invariants:
    - ``stock`` is never negative
    - ``reduce_stock`` and ``update_price`` are refused while inactive
    - ``images`` is only ever handed out as a copy
    """

    def __init__(
        self,
        *,
        id: str,
        name: str,
        description: str,
        price: Price,
        stock: int,
        sku: str,
        category: str,
        images: Iterable[str] | None = None,
        is_active: bool = True,
        created_at: datetime,
        updated_at: datetime,
    ) -> None:
        if not isinstance(id, str) or not id.strip():
            raise ValidationError("Product ID is required", field="id")
        self._validate_info(name, description, category)
        self._validate_price(price)
        self._validate_stock(stock)
        self._validate_sku(sku)
        if not isinstance(is_active, bool):
            raise ValidationError("is_active must be a boolean", field="is_active")
        for value, field in ((created_at, "created_at"), (updated_at, "updated_at")):
            if not isinstance(value, datetime):
                raise ValidationError(f"{field} must be a datetime", field=field)

        self._id = id
        self._name = name
        self._description = description
        self._price = price
        self._stock = stock
        self._sku = sku
        self._category = category
        self._images = [url for url in images or [] if is_valid_image_url(url)]
        self._is_active = is_active
        self._created_at = created_at
        self._updated_at = updated_at
        self._persisted_version: datetime | None = None

    # --- Factories ------------------------------------------------------------

    @classmethod
    def create(
        cls,
        *,
        name: str,
        description: str,
        price: Price,
        stock: int,
        sku: str,
        category: str,
        images: Iterable[str] | None = None,
        is_active: bool = True,
    ) -> Product:
        """Create a brand-new product with a fresh id and timestamps."""
        now = _utcnow()
        return cls(
            id=_generate_id(),
            name=name,
            description=description,
            price=price,
            stock=stock,
            sku=sku,
            category=category,
            images=images,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def reconstruct(
        cls,
        *,
        id: str,
        name: str,
        description: str,
        price: Price,
        stock: int,
        sku: str,
        category: str,
        images: Iterable[str] | None = None,
        is_active: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> Product:
        """Rehydrate a previously persisted product, keeping id and timestamps."""
        return cls(
            id=id,
            name=name,
            description=description,
            price=price,
            stock=stock,
            sku=sku,
            category=category,
            images=images,
            is_active=is_active,
            created_at=created_at,
            updated_at=updated_at,
        )

    @classmethod
    def from_primitives(cls, data: Mapping[str, Any]) -> Product:
        """Inverse of ``to_primitives()``.

        Raises ValidationError when a field is missing or malformed.
        """
        try:
            return cls.reconstruct(
                id=data["id"],
                name=data["name"],
                description=data["description"],
                price=Price.from_primitives(data["price_amount"], data["price_currency"]),
                stock=data["stock"],
                sku=data["sku"],
                category=data["category"],
                images=list(data.get("images") or []),
                is_active=data["is_active"],
                created_at=datetime.fromisoformat(data["created_at"]),
                updated_at=datetime.fromisoformat(data["updated_at"]),
            )
        except KeyError as exc:
            raise ValidationError(
                f"Stored product is missing field {exc.args[0]!r}", field=exc.args[0]
            ) from exc
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Stored product is malformed: {exc}") from exc

    # --- Read access ----------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def price(self) -> Price:
        return self._price

    @property
    def stock(self) -> int:
        return self._stock

    @property
    def sku(self) -> str:
        return self._sku

    @property
    def category(self) -> str:
        return self._category

    @property
    def images(self) -> list[str]:
        return list(self._images)

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def persisted_version(self) -> datetime | None:
        """``updated_at`` of the stored row this instance was read from or
        last written as; None for a product no store has handed out."""
        return self._persisted_version

    def mark_persisted(self) -> None:
        """Record the current ``updated_at`` as the stored version.

        Called by repositories after a load or a successful save, so a
        later save can tell whether the row moved on in between.
        """
        self._persisted_version = self._updated_at

    # --- Stock ----------------------------------------------------------------

    def reduce_stock(self, quantity: int) -> None:
        """Take *quantity* units out of stock (e.g. on a sale)."""
        self._assert_active("reduce stock")
        self._assert_positive_quantity(quantity)
        if self._stock < quantity:
            raise InsufficientStockError(self._id, quantity, self._stock)
        self._stock -= quantity
        self._touch()

    def increase_stock(self, quantity: int) -> None:
        """Restock.  Permitted even while the product is inactive."""
        self._assert_positive_quantity(quantity)
        self._stock += quantity
        self._touch()

    # --- Price / info ---------------------------------------------------------

    def update_price(self, new_price: Price) -> None:
        self._assert_active("update price")
        self._validate_price(new_price)
        self._price = new_price
        self._touch()

    def update_info(self, name: str, description: str, category: str) -> None:
        self._validate_info(name, description, category)
        self._name = name
        self._description = description
        self._category = category
        self._touch()

    # --- Images ---------------------------------------------------------------

    def add_images(self, image_urls: Iterable[str]) -> None:
        """Append image URLs, silently skipping anything that is not an image."""
        self._images.extend(url for url in image_urls if is_valid_image_url(url))
        self._touch()

    def remove_image(self, image_url: str) -> None:
        self._images = [url for url in self._images if url != image_url]
        self._touch()

    # --- Lifecycle ------------------------------------------------------------

    def activate(self) -> None:
        self._is_active = True
        self._touch()

    def deactivate(self) -> None:
        self._is_active = False
        self._touch()

    # --- Queries --------------------------------------------------------------

    def has_stock(self) -> bool:
        return self._stock > 0

    def has_minimum_stock(self, minimum: int = DEFAULT_MINIMUM_STOCK) -> bool:
        return self._stock >= minimum

    def is_low_stock(self, minimum: int = DEFAULT_MINIMUM_STOCK) -> bool:
        return 0 < self._stock < minimum

    def is_out_of_stock(self) -> bool:
        return self._stock == 0

    def get_inventory_value(self) -> Price:
        """Unit price times units in stock."""
        if self._stock == 0:
            return Price.zero(self._price.currency)
        return self._price.multiply(self._stock)

    # --- Projections ----------------------------------------------------------

    def to_snapshot(self) -> dict[str, Any]:
        """Plain-data view for presentation layers."""
        return {
            "id": self._id,
            "name": self._name,
            "description": self._description,
            "price": self._price.to_primitives(),
            "stock": self._stock,
            "sku": self._sku,
            "category": self._category,
            "images": list(self._images),
            "is_active": self._is_active,
            "has_stock": self.has_stock(),
            "is_low_stock": self.is_low_stock(),
            # price times stock, unbounded; may exceed the Price ceiling
            "inventory_value": {
                "amount": str(self._price.amount * self._stock),
                "currency": self._price.currency,
            },
            "created_at": self._created_at.isoformat(),
            "updated_at": self._updated_at.isoformat(),
        }

    def to_primitives(self) -> dict[str, Any]:
        """Plain-data record holding everything ``reconstruct`` needs."""
        return {
            "id": self._id,
            "name": self._name,
            "description": self._description,
            "price_amount": str(self._price.amount),
            "price_currency": self._price.currency,
            "stock": self._stock,
            "sku": self._sku,
            "category": self._category,
            "images": list(self._images),
            "is_active": self._is_active,
            "created_at": self._created_at.isoformat(),
            "updated_at": self._updated_at.isoformat(),
        }

    # --- Identity -------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Product(id={self._id!r}, sku={self._sku!r}, name={self._name!r})"

    def __str__(self) -> str:
        return (
            f'Product "{self._name}" ({self._sku}) - {self._price} - '
            f"Stock: {self._stock}"
        )

    # --- Internal helpers -----------------------------------------------------

    def _touch(self) -> None:
        self._updated_at = _utcnow()

    def _assert_active(self, action: str) -> None:
        if not self._is_active:
            raise InactiveProductError(self._id, action)

    @staticmethod
    def _assert_positive_quantity(quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError("Quantity must be an integer", field="quantity")
        if quantity <= 0:
            raise ValidationError("Quantity must be positive", field="quantity")

    @staticmethod
    def _validate_info(name: str, description: str, category: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Product name cannot be empty", field="name")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Product name cannot exceed {MAX_NAME_LENGTH} characters", field="name"
            )
        if not isinstance(description, str):
            raise ValidationError("Description must be a string", field="description")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters",
                field="description",
            )
        if not isinstance(category, str) or not category.strip():
            raise ValidationError("Category is required", field="category")

    @staticmethod
    def _validate_price(price: Price) -> None:
        if not isinstance(price, Price):
            raise ValidationError("Price must be a valid Price value object", field="price")

    @staticmethod
    def _validate_stock(stock: int) -> None:
        if isinstance(stock, bool) or not isinstance(stock, int):
            raise ValidationError("Stock must be an integer", field="stock")
        if stock < 0:
            raise ValidationError("Stock cannot be negative", field="stock")

    @staticmethod
    def _validate_sku(sku: str) -> None:
        if not isinstance(sku, str) or not sku.strip():
            raise ValidationError("SKU is required", field="sku")
        if len(sku) < MIN_SKU_LENGTH:
            raise ValidationError(
                f"SKU must be at least {MIN_SKU_LENGTH} characters", field="sku"
            )
