"""Data Transfer Objects — plain containers that cross layer boundaries.

Request DTOs are built from untyped payloads (HTTP bodies, CLI options)
with ``from_payload``.  Each request type accepts a fixed set of fields
and rejects anything else, so nothing unexpected is ever passed on to
storage.  Response DTOs carry data out without exposing domain internals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from backoffice.domain.exceptions import DataIntegrityError, ValidationError
from backoffice.domain.model.product import Product, VariantKind, is_out_of_stock
from backoffice.domain.model.value_objects import Money, Quantity

LOGGER = logging.getLogger(__name__)


def _check_fields(
    payload: object,
    required: frozenset[str],
    optional: frozenset[str] = frozenset(),
) -> dict:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    unknown = set(payload) - required - optional
    if unknown:
        raise ValidationError(f"Unknown field(s): {', '.join(sorted(map(str, unknown)))}")
    missing = required - set(payload)
    if missing:
        raise ValidationError(f"Missing field(s): {', '.join(sorted(missing))}")
    return payload


def _require_str(payload: dict, key: str) -> str:
    value = payload[key]
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Field '{key}' must be a non-empty string")
    return value.strip()


def _optional_bool(payload: dict, key: str) -> bool | None:
    value = payload.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise ValidationError(f"Field '{key}' must be true or false")


def _optional_money(payload: dict, key: str) -> Money | None:
    value = payload.get(key)
    if value is None or value == "":
        return None
    return Money.of(value)


# --- Inventory requests -------------------------------------------------------


@dataclass(frozen=True)
class SetColorQuantityRequest:
    """Input: set one color of a collection to an absolute quantity."""

    product_id: str
    color: str
    quantity: Quantity

    @classmethod
    def from_payload(cls, product_id: str, payload: object) -> SetColorQuantityRequest:
        body = _check_fields(payload, frozenset({"color", "quantity"}))
        return cls(
            product_id=product_id,
            color=_require_str(body, "color"),
            quantity=Quantity.parse(body["quantity"], "quantity"),
        )


@dataclass(frozen=True)
class IncrementColorQuantityRequest:
    """Input: add units to one color of a collection."""

    product_id: str
    color: str
    delta: Quantity

    @classmethod
    def from_payload(
        cls, product_id: str, payload: object
    ) -> IncrementColorQuantityRequest:
        body = _check_fields(payload, frozenset({"color", "quantity"}))
        return cls(
            product_id=product_id,
            color=_require_str(body, "color"),
            delta=Quantity.parse(body["quantity"], "quantity"),
        )


@dataclass(frozen=True)
class SetStockRequest:
    """Input: set the scalar stock of a single-item product."""

    product_id: str
    stock: Quantity

    @classmethod
    def from_payload(cls, product_id: str, payload: object) -> SetStockRequest:
        body = _check_fields(payload, frozenset({"stock"}))
        return cls(product_id=product_id, stock=Quantity.parse(body["stock"], "stock"))


# --- Catalog requests ---------------------------------------------------------


@dataclass(frozen=True)
class CreateProductRequest:
    """Input: a new product, either single (stock) or collection (colors).

    ``colors`` is a list of ``{"color": ..., "qty": ...}`` objects.
    """

    title: str
    price: Money
    category: str
    kind: VariantKind
    stock: Quantity | None = None
    colors: tuple[tuple[str, int], ...] = ()
    discount: Money | None = None
    new_arrival: bool = False

    @classmethod
    def from_payload(cls, payload: object) -> CreateProductRequest:
        body = _check_fields(
            payload,
            frozenset({"title", "price", "category", "type"}),
            frozenset({"stock", "color", "discount", "new_arrival"}),
        )
        try:
            kind = VariantKind(body["type"])
        except ValueError as exc:
            raise ValidationError(
                f"Field 'type' must be one of: "
                f"{', '.join(k.value for k in VariantKind)}"
            ) from exc

        stock: Quantity | None = None
        colors: tuple[tuple[str, int], ...] = ()
        if kind == VariantKind.SINGLE:
            if "color" in body:
                raise ValidationError("A single product cannot have colors")
            if body.get("stock") not in (None, ""):
                stock = Quantity.parse(body["stock"], "stock")
        else:
            if "stock" in body:
                raise ValidationError("A collection product cannot have a stock count")
            colors = _parse_colors(body.get("color"))

        return cls(
            title=_require_str(body, "title"),
            price=Money.of(body["price"]),
            category=_require_str(body, "category"),
            kind=kind,
            stock=stock,
            colors=colors,
            discount=_optional_money(body, "discount"),
            new_arrival=bool(_optional_bool(body, "new_arrival")),
        )


def _parse_colors(raw: object) -> tuple[tuple[str, int], ...]:
    if not isinstance(raw, list) or not raw:
        raise ValidationError("Field 'color' must be a non-empty list")
    colors: list[tuple[str, int]] = []
    for item in raw:
        entry = _check_fields(item, frozenset({"color", "qty"}))
        colors.append(
            (_require_str(entry, "color"), Quantity.parse(entry["qty"], "qty").value)
        )
    return tuple(colors)


@dataclass(frozen=True)
class UpdateProductRequest:
    """Input: general field edits.  Inventory fields are not accepted."""

    product_id: str
    title: str | None = None
    price: Money | None = None
    discount: Money | None = None
    category: str | None = None
    new_arrival: bool | None = None

    @classmethod
    def from_payload(cls, product_id: str, payload: object) -> UpdateProductRequest:
        body = _check_fields(
            payload,
            frozenset(),
            frozenset({"title", "price", "discount", "category", "new_arrival"}),
        )
        return cls(
            product_id=product_id,
            title=_require_str(body, "title") if "title" in body else None,
            price=_optional_money(body, "price"),
            discount=_optional_money(body, "discount"),
            category=_require_str(body, "category") if "category" in body else None,
            new_arrival=_optional_bool(body, "new_arrival"),
        )


# --- Responses ----------------------------------------------------------------


@dataclass(frozen=True)
class ColorQuantityDTO:
    color: str
    qty: int


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the admin."""

    id: str
    title: str
    price: str  # formatted, e.g. "$15.00"
    discount: str | None
    category: str
    type: str
    stock: int | None
    colors: list[ColorQuantityDTO]
    new_arrival: bool
    out_of_stock: bool

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        colors: list[ColorQuantityDTO] = []
        if product.kind == VariantKind.COLLECTION:
            try:
                colors = [
                    ColorQuantityDTO(color=e.color, qty=e.qty)
                    for e in product.checked_ledger()
                ]
            except DataIntegrityError as exc:
                LOGGER.warning("Hiding malformed ledger of product %s: %s", product.id, exc)

        return ProductDTO(
            id=product.id,
            title=product.title,
            price=str(product.price),
            discount=str(product.discount) if product.discount is not None else None,
            category=product.category,
            type=product.kind.value,
            stock=product.stock if product.kind == VariantKind.SINGLE else None,
            colors=colors,
            new_arrival=product.new_arrival,
            out_of_stock=is_out_of_stock(product),
        )
