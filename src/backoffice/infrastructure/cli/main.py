import click

from backoffice.infrastructure.cli.inventory_commands import (
    inventory_add_color,
    inventory_set_color,
    inventory_set_stock,
)
from backoffice.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from backoffice.infrastructure.config import Config, configure_logging


@click.group()
def cli() -> None:
    """Back-office — catalog and inventory administration"""
    configure_logging(Config.from_env().log_level)


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def inventory() -> None:
    """Manage product inventory."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
inventory.add_command(inventory_add_color)
inventory.add_command(inventory_set_color)
inventory.add_command(inventory_set_stock)
