"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from backoffice.application.add_product import AddProductHandler
from backoffice.application.delete_product import DeleteProductHandler
from backoffice.application.dto import (
    CreateProductRequest,
    ProductDTO,
    UpdateProductRequest,
)
from backoffice.application.list_products import ListProductsHandler
from backoffice.application.show_product import ShowProductHandler
from backoffice.application.update_product import UpdateProductHandler
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import product_repository


def _parse_colors(raw: str) -> list[dict]:
    """Parse 'red:3,blue:5' into [{"color": "red", "qty": "3"}, ...]."""
    colors: list[dict] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid color format '{pair}'. Expected 'color:quantity'."
            )
        color, qty = pair.rsplit(":", 1)
        colors.append({"color": color.strip(), "qty": qty.strip()})
    return colors


def _display_product(dto: ProductDTO) -> None:
    """Shared formatting for displaying a product."""
    click.echo(f"Product #{dto.id}  '{dto.title}'  ({dto.type})")
    click.echo(f"Category: {dto.category}")
    price_line = f"Price:    {dto.price}"
    if dto.discount is not None:
        price_line += f"  (discount {dto.discount})"
    click.echo(price_line)
    if dto.new_arrival:
        click.echo("New arrival")
    click.echo()

    if dto.type == "single":
        stock = "unset" if dto.stock is None else str(dto.stock)
        click.echo(f"  Stock: {stock}")
    elif not dto.colors:
        click.echo("  No colors")
    else:
        click.echo(f"  {'Color':<12} {'Qty':>6}")
        click.echo(f"  {'-'*19}")
        for c in dto.colors:
            click.echo(f"  {c.color:<12} {c.qty:>6}")

    if dto.out_of_stock:
        click.echo()
        click.echo("  OUT OF STOCK")


@click.command("add")
@click.option("--title", required=True, help="Product title.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--category", required=True, help="Category name.")
@click.option(
    "--type", "kind", required=True,
    type=click.Choice(["single", "collection"]), help="Variant kind.",
)
@click.option("--stock", default=None, help="Stock count (single products).")
@click.option("--colors", default=None, help="Colors as 'color:qty,color:qty' (collections).")
@click.option("--discount", default=None, help="Discount amount.")
@click.option("--new-arrival", is_flag=True, default=False, help="Flag as new arrival.")
def product_add(
    title: str,
    price: str,
    category: str,
    kind: str,
    stock: str | None,
    colors: str | None,
    discount: str | None,
    new_arrival: bool,
) -> None:
    """Add a new product to the catalog."""
    payload: dict = {"title": title, "price": price, "category": category, "type": kind}
    if stock is not None:
        payload["stock"] = stock
    if colors is not None:
        payload["color"] = _parse_colors(colors)
    if discount is not None:
        payload["discount"] = discount
    if new_arrival:
        payload["new_arrival"] = True

    handler = AddProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(CreateProductRequest.from_payload(payload))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.title}' added at {dto.price}")


@click.command("list")
@click.option("--search", default=None, help="Filter by title substring.")
@click.option("--category", default=None, help="Filter by category name.")
@click.option("--out-of-stock", is_flag=True, default=False, help="Only out-of-stock products.")
def product_list(search: str | None, category: str | None, out_of_stock: bool) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(product_repo=product_repository())

    try:
        dtos = handler.handle(search=search, category=category, out_of_stock_only=out_of_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Title':<24} {'Category':<14} {'Price':>10} {'Inventory':<24}")
    click.echo("-" * 82)
    for dto in dtos:
        if dto.type == "single":
            inventory = "—" if dto.stock is None else str(dto.stock)
        else:
            inventory = ", ".join(f"{c.color}:{c.qty}" for c in dto.colors) or "No colors"
        marker = "  (out of stock)" if dto.out_of_stock else ""
        click.echo(
            f"{dto.id:<6} {dto.title:<24} {dto.category:<14} {dto.price:>10} {inventory:<24}{marker}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID to display.")
def product_show(product_id: str) -> None:
    """Show details of a product."""
    handler = ShowProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--title", default=None, help="New title.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--discount", default=None, help="New discount amount.")
@click.option("--category", default=None, help="New category name.")
@click.option("--new-arrival/--not-new-arrival", default=None, help="New-arrival flag.")
def product_update(
    product_id: str,
    title: str | None,
    price: str | None,
    discount: str | None,
    category: str | None,
    new_arrival: bool | None,
) -> None:
    """Edit a product's catalog fields (not its inventory)."""
    fields = {
        "title": title,
        "price": price,
        "discount": discount,
        "category": category,
        "new_arrival": new_arrival,
    }
    payload = {k: v for k, v in fields.items() if v is not None}
    if not payload:
        raise click.ClickException("Nothing to update")

    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        handler.handle(UpdateProductRequest.from_payload(product_id, payload))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} updated ({', '.join(sorted(payload))})")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Delete a product."""
    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")
