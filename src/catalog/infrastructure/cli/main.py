import click

from catalog.infrastructure.cli.inventory_commands import (
    inventory_categories,
    inventory_report,
)
from catalog.infrastructure.cli.product_commands import (
    product_activate,
    product_add,
    product_deactivate,
    product_delete,
    product_list,
    product_restock,
    product_search,
    product_sell,
    product_show,
    product_update_info,
    product_update_price,
)
from catalog.infrastructure.config import get_settings
from catalog.infrastructure.log_config import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Catalog — Product Catalog Management"""
    configure_logging("DEBUG" if verbose else get_settings().log_level)


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def inventory() -> None:
    """Inspect inventory."""


# Register subcommands
product.add_command(product_activate)
product.add_command(product_add)
product.add_command(product_deactivate)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_search)
product.add_command(product_sell)
product.add_command(product_show)
product.add_command(product_update_info)
product.add_command(product_update_price)
inventory.add_command(inventory_categories)
inventory.add_command(inventory_report)
