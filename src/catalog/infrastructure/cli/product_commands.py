"""CLI commands for the Product aggregate."""

from __future__ import annotations

import asyncio

import click

from catalog.application.add_product import AddProductHandler
from catalog.application.adjust_stock import AdjustStockHandler
from catalog.application.delete_product import DeleteProductHandler
from catalog.application.dto import NewProductSpec, ProductResponse
from catalog.application.get_all_products import GetAllProductsHandler
from catalog.application.get_product_by_id import GetProductByIdHandler
from catalog.application.mapper import ProductMapper
from catalog.application.set_product_status import SetProductStatusHandler
from catalog.application.update_product import UpdateProductHandler
from catalog.domain.exceptions import DomainException
from catalog.domain.repository.product_repository import (
    FindProductsOptions,
    PaginatedProducts,
)
from catalog.infrastructure.bootstrap import product_repository


def _display_page(page: PaginatedProducts) -> None:
    """Shared formatting for a page of products."""
    if not page.data:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Name':<24} {'Price':>12} {'Cur':<4} {'Stock':>6}")
    click.echo("-" * 88)
    for r in ProductMapper.to_response_list(page.data):
        click.echo(f"{r.id:<38} {r.name:<24} {r.price:>12} {r.currency:<4} {r.stock:>6}")
    click.echo("-" * 88)
    click.echo(f"Page {page.page}/{page.total_pages}  ({page.total} products)")


def _display_product(dto: ProductResponse) -> None:
    click.echo(f"Product {dto.id}")
    click.echo(f"  Name:  {dto.name}")
    click.echo(f"  Price: {dto.price} {dto.currency}")
    click.echo(f"  Stock: {dto.stock}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--currency", default="USD", show_default=True, help="USD, EUR or COP.")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--sku", required=True, help="Stock keeping unit (unique).")
@click.option("--category", required=True, help="Category name.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--image", "images", multiple=True, help="Image URL (repeatable).")
def product_add(
    name: str,
    price: str,
    currency: str,
    stock: int,
    sku: str,
    category: str,
    description: str,
    images: tuple[str, ...],
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())
    spec = NewProductSpec(
        name=name,
        price=price,
        currency=currency,
        stock=stock,
        sku=sku,
        category=category,
        description=description,
        images=images,
    )

    try:
        dto = asyncio.run(handler.handle(spec))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' added at {dto.price} {dto.currency}")


@click.command("list")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
@click.option("--category", default=None, help="Only this category.")
@click.option("--min-price", default=None, help="Lowest price (inclusive).")
@click.option("--max-price", default=None, help="Highest price (inclusive).")
@click.option("--in-stock/--out-of-stock", default=None, help="Filter on stock.")
@click.option("--active/--inactive", default=None, help="Filter on status.")
def product_list(
    page: int,
    limit: int,
    category: str | None,
    min_price: str | None,
    max_price: str | None,
    in_stock: bool | None,
    active: bool | None,
) -> None:
    """List products in the catalog."""
    handler = GetAllProductsHandler(product_repo=product_repository())

    try:
        options = FindProductsOptions(
            page=page,
            limit=limit,
            category=category,
            min_price=min_price,
            max_price=max_price,
            in_stock=in_stock,
            is_active=active,
        )
        result = asyncio.run(handler.handle(options))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_page(result)


@click.command("search")
@click.argument("term")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
def product_search(term: str, page: int, limit: int) -> None:
    """Search name, description and SKU."""
    repo = product_repository()

    try:
        result = asyncio.run(repo.search(term, FindProductsOptions(page=page, limit=limit)))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_page(result)


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a single product."""
    handler = GetProductByIdHandler(product_repo=product_repository())

    try:
        dto = asyncio.run(handler.handle(product_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("update-price")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.option("--currency", default=None, help="New currency (defaults to current).")
def product_update_price(product_id: str, price: str, currency: str | None) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        dto = asyncio.run(handler.handle_price(product_id, price, currency))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} price updated to {dto.price} {dto.currency}")


@click.command("update-info")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="New name.")
@click.option("--description", default="", help="New description.")
@click.option("--category", required=True, help="New category.")
def product_update_info(product_id: str, name: str, description: str, category: str) -> None:
    """Update a product's name, description and category."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        dto = asyncio.run(handler.handle_info(product_id, name, description, category))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} updated")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units received.")
def product_restock(product_id: str, quantity: int) -> None:
    """Add units to a product's stock."""
    handler = AdjustStockHandler(product_repo=product_repository())

    try:
        dto = asyncio.run(handler.restock(product_id, quantity))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} stock is now {dto.stock}")


@click.command("sell")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units sold.")
def product_sell(product_id: str, quantity: int) -> None:
    """Take units out of a product's stock."""
    handler = AdjustStockHandler(product_repo=product_repository())

    try:
        dto = asyncio.run(handler.sell(product_id, quantity))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} stock is now {dto.stock}")


@click.command("activate")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_activate(product_id: str) -> None:
    """Put a product back on sale."""
    handler = SetProductStatusHandler(product_repo=product_repository())

    try:
        dto = asyncio.run(handler.handle(product_id, active=True))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} activated")


@click.command("deactivate")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_deactivate(product_id: str) -> None:
    """Take a product off sale."""
    handler = SetProductStatusHandler(product_repo=product_repository())

    try:
        dto = asyncio.run(handler.handle(product_id, active=False))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} deactivated")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog."""
    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        asyncio.run(handler.handle(product_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted")
