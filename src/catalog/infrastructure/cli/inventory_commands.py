"""CLI commands for inventory reporting."""

from __future__ import annotations

import asyncio

import click

from catalog.application.show_inventory import ShowInventoryHandler
from catalog.domain.exceptions import DomainException
from catalog.infrastructure.bootstrap import product_repository
from catalog.infrastructure.config import get_settings


@click.command("report")
@click.option(
    "--minimum",
    type=int,
    default=None,
    help="Low-stock threshold (defaults to CATALOG_LOW_STOCK_THRESHOLD).",
)
def inventory_report(minimum: int | None) -> None:
    """Show catalog totals and products running low."""
    if minimum is None:
        minimum = get_settings().low_stock_threshold
    handler = ShowInventoryHandler(product_repo=product_repository())

    try:
        report = asyncio.run(handler.handle(minimum_stock=minimum))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Products:    {report.total_products}")
    click.echo(f"  active:    {report.active_products}")
    click.echo(f"  inactive:  {report.inactive_products}")
    click.echo(f"Units:       {report.total_stock_units}")
    click.echo(f"Categories:  {', '.join(report.categories) or '-'}")
    click.echo()

    if not report.low_stock:
        click.echo(f"No active products below {minimum} units.")
        return

    click.echo(f"Below {minimum} units:")
    click.echo(f"  {'SKU':<16} {'Name':<24} {'Stock':>6}")
    click.echo(f"  {'-'*48}")
    for line in report.low_stock:
        click.echo(f"  {line.sku:<16} {line.name:<24} {line.stock:>6}")


@click.command("categories")
def inventory_categories() -> None:
    """List every category in use."""
    counts = asyncio.run(_category_counts(product_repository()))

    if not counts:
        click.echo("No categories found.")
        return

    for category, count in counts:
        click.echo(f"{category:<24} {count:>6}")


async def _category_counts(repo) -> list[tuple[str, int]]:
    categories = await repo.get_categories()
    counts = await asyncio.gather(*(repo.count_by_category(c) for c in categories))
    return list(zip(categories, counts))
