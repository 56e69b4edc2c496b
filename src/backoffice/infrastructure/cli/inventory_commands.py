"""CLI commands for product inventory."""

from __future__ import annotations

import click

from backoffice.application.dto import (
    IncrementColorQuantityRequest,
    SetColorQuantityRequest,
    SetStockRequest,
)
from backoffice.application.increment_color_quantity import (
    IncrementColorQuantityHandler,
)
from backoffice.application.set_color_quantity import SetColorQuantityHandler
from backoffice.application.set_stock import SetStockHandler
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import product_repository


@click.command("set-color")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--color", required=True, help="Existing ledger color.")
@click.option("--quantity", required=True, help="New absolute quantity.")
def inventory_set_color(product_id: str, color: str, quantity: str) -> None:
    """Set the quantity of one color of a collection."""
    handler = SetColorQuantityHandler(product_repo=product_repository())

    try:
        request = SetColorQuantityRequest.from_payload(
            product_id, {"color": color, "quantity": quantity}
        )
        dto = handler.handle(request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    qty = next(c.qty for c in dto.colors if c.color == request.color)
    click.echo(f"Product #{product_id} {request.color} quantity set to {qty}")


@click.command("add-color")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--color", required=True, help="Existing ledger color.")
@click.option("--quantity", required=True, help="Units to add.")
def inventory_add_color(product_id: str, color: str, quantity: str) -> None:
    """Add units to one color of a collection."""
    handler = IncrementColorQuantityHandler(product_repo=product_repository())

    try:
        request = IncrementColorQuantityRequest.from_payload(
            product_id, {"color": color, "quantity": quantity}
        )
        dto = handler.handle(request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    qty = next(c.qty for c in dto.colors if c.color == request.color)
    click.echo(f"Product #{product_id} {request.color} quantity is now {qty}")


@click.command("set-stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--stock", required=True, help="New stock count.")
def inventory_set_stock(product_id: str, stock: str) -> None:
    """Set the stock count of a single product."""
    handler = SetStockHandler(product_repo=product_repository())

    try:
        dto = handler.handle(SetStockRequest.from_payload(product_id, {"stock": stock}))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} stock set to {dto.stock}")
