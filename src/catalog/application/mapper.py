"""Product -> ProductResponse assembler."""

from __future__ import annotations

from catalog.application.dto import ProductResponse
from catalog.domain.model.product import Product


class ProductMapper:

    @staticmethod
    def to_response(product: Product) -> ProductResponse:
        return ProductResponse(
            id=product.id,
            name=product.name,
            price=product.price.amount,
            currency=product.price.currency,
            stock=product.stock,
        )

    @classmethod
    def to_response_list(cls, products: list[Product]) -> list[ProductResponse]:
        return [cls.to_response(p) for p in products]
