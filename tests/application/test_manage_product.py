"""Integration tests for the product write use cases and the inventory report."""

from decimal import Decimal

import pytest

from catalog.application.add_product import AddProductHandler
from catalog.application.adjust_stock import AdjustStockHandler
from catalog.application.delete_product import DeleteProductHandler
from catalog.application.dto import NewProductSpec
from catalog.application.set_product_status import SetProductStatusHandler
from catalog.application.show_inventory import ShowInventoryHandler
from catalog.application.update_product import UpdateProductHandler
from catalog.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InactiveProductError,
    InsufficientStockError,
    ValidationError,
)
from catalog.domain.model.value_objects import Price
from tests.fakes import FakeProductRepository, make_product


def _spec(**overrides) -> NewProductSpec:
    fields = dict(
        name="  Desk Lamp ",
        price="39.999",
        stock=7,
        sku="LMP-01",
        category="Home",
        images=("lamp.jpg", "manual.pdf"),
    )
    fields.update(overrides)
    return NewProductSpec(**fields)


@pytest.mark.asyncio
class TestAddProduct:

    async def test_add_persists_and_returns_projection(self):
        repo = FakeProductRepository()

        dto = await AddProductHandler(repo).handle(_spec())

        assert dto.name == "Desk Lamp"
        assert dto.price == Decimal("40.00")
        assert dto.stock == 7
        stored = await repo.find_by_id(dto.id)
        assert stored.sku == "LMP-01"
        assert stored.images == ["lamp.jpg"]

    async def test_duplicate_sku_rejected(self):
        repo = FakeProductRepository([make_product(sku="LMP-01")])

        with pytest.raises(DuplicateEntityError, match="sku 'LMP-01'"):
            await AddProductHandler(repo).handle(_spec())

        assert await repo.count() == 1

    async def test_invalid_input_rejected(self):
        with pytest.raises(ValidationError):
            await AddProductHandler(FakeProductRepository()).handle(_spec(currency="GBP"))


@pytest.mark.asyncio
class TestUpdateProduct:

    async def test_update_price_keeps_currency(self):
        product = make_product(price=Price.create(10, "EUR"))
        repo = FakeProductRepository([product])

        dto = await UpdateProductHandler(repo).handle_price(product.id, "12.5")

        assert (dto.price, dto.currency) == (Decimal("12.50"), "EUR")

    async def test_update_price_of_inactive_product_rejected(self):
        product = make_product(is_active=False)
        repo = FakeProductRepository([product])

        with pytest.raises(InactiveProductError):
            await UpdateProductHandler(repo).handle_price(product.id, "1.00")

        assert (await repo.find_by_id(product.id)).price == product.price

    async def test_update_info(self):
        product = make_product()
        repo = FakeProductRepository([product])

        await UpdateProductHandler(repo).handle_info(product.id, "Notebook", "", "Office")

        stored = await repo.find_by_id(product.id)
        assert (stored.name, stored.category) == ("Notebook", "Office")

    async def test_unknown_product_rejected(self):
        with pytest.raises(EntityNotFoundError):
            await UpdateProductHandler(FakeProductRepository()).handle_price("nope", "1")


@pytest.mark.asyncio
class TestAdjustStock:

    async def test_sell_and_restock(self):
        product = make_product(stock=5)
        repo = FakeProductRepository([product])
        handler = AdjustStockHandler(repo)

        assert (await handler.sell(product.id, 5)).stock == 0
        with pytest.raises(InsufficientStockError):
            await handler.sell(product.id, 1)
        assert (await handler.restock(product.id, 3)).stock == 3

    async def test_sell_from_inactive_rejected(self):
        product = make_product(is_active=False)
        repo = FakeProductRepository([product])

        with pytest.raises(InactiveProductError):
            await AdjustStockHandler(repo).sell(product.id, 1)


@pytest.mark.asyncio
class TestStatusAndDelete:

    async def test_deactivate_then_activate(self):
        product = make_product()
        repo = FakeProductRepository([product])
        handler = SetProductStatusHandler(repo)

        await handler.handle(product.id, active=False)
        assert (await repo.find_by_id(product.id)).is_active is False
        await handler.handle(product.id, active=True)
        assert (await repo.find_by_id(product.id)).is_active is True

    async def test_delete(self):
        product = make_product()
        repo = FakeProductRepository([product])

        await DeleteProductHandler(repo).handle(product.id)

        assert await repo.find_by_id(product.id) is None
        with pytest.raises(EntityNotFoundError):
            await DeleteProductHandler(repo).handle(product.id)


@pytest.mark.asyncio
class TestShowInventory:

    async def test_report(self):
        repo = FakeProductRepository(
            [
                make_product(sku="AAA-1", stock=2, category="Books"),
                make_product(sku="AAA-2", stock=0, category="Books"),
                make_product(sku="AAA-3", stock=40, category="Toys"),
                make_product(sku="AAA-4", stock=1, category="Toys", is_active=False),
            ]
        )

        report = await ShowInventoryHandler(repo).handle(minimum_stock=5)

        assert report.total_products == 4
        assert (report.active_products, report.inactive_products) == (3, 1)
        assert report.total_stock_units == 42
        assert report.categories == ["Books", "Toys"]
        assert [line.sku for line in report.low_stock] == ["AAA-2", "AAA-1"]
