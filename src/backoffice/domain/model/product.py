"""Product aggregate.

A product is sold either as a *single* item with a scalar stock count, or
as a *collection* whose inventory is a per-color quantity ledger.  The
``kind`` tag decides which of ``stock`` / ``color_ledger`` is meaningful;
the other one is ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from backoffice.domain.exceptions import (
    ColorNotFoundError,
    DataIntegrityError,
    ValidationError,
    VariantKindMismatchError,
)
from backoffice.domain.model.value_objects import Money, Quantity

LOGGER = logging.getLogger(__name__)

COLOR_PALETTE = (
    "black",
    "white",
    "red",
    "yellow",
    "blue",
    "green",
    "orange",
    "purple",
    "brown",
    "gray",
)


class VariantKind(Enum):
    SINGLE = "single"
    COLLECTION = "collection"


@dataclass(frozen=True)
class LedgerEntry:
    """One ``{color, qty}`` pair of a collection's color ledger."""

    color: str
    qty: int

    def __post_init__(self) -> None:
        if not isinstance(self.color, str) or not self.color.strip():
            raise ValidationError("Ledger color must be a non-empty string")
        # Reuses Quantity's integer / non-negative checks
        Quantity(self.qty)

    def with_qty(self, qty: int) -> LedgerEntry:
        return LedgerEntry(color=self.color, qty=qty)


@dataclass
class Product:
    """Aggregate root for a catalog product and its inventory.

    Use ``create_single()`` / ``create_collection()`` for new products;
    they enforce the creation rules.  The ``__init__`` is intentionally
    simple so the repository can reconstitute persisted products as they
    are, including a ledger that no longer satisfies its invariants.
    Such a ledger is detected by ``checked_ledger()`` and never repaired.

    A new product has ``id=None`` until the repository saves it.
    """

    id: str | None
    title: str
    price: Money
    category: str
    kind: VariantKind
    stock: int | None = None
    color_ledger: list[LedgerEntry] = field(default_factory=list)
    discount: Money | None = None
    new_arrival: bool = False

    # --- Factories (used for NEW products only) -------------------------------

    @staticmethod
    def create_single(
        id: str | None,
        title: str,
        price: Money,
        category: str,
        stock: int | None = None,
        discount: Money | None = None,
        new_arrival: bool = False,
    ) -> Product:
        """Create a single-item product tracked by a scalar stock count.

        ``stock=None`` means the count is unset (shown as out of stock).
        """
        if stock is not None:
            stock = Quantity(stock).value
        product = Product(
            id=id,
            title=_clean_title(title),
            price=price,
            category=category,
            kind=VariantKind.SINGLE,
            stock=stock,
            discount=discount,
            new_arrival=new_arrival,
        )
        _check_price(product.price)
        return product

    @staticmethod
    def create_collection(
        id: str | None,
        title: str,
        price: Money,
        category: str,
        colors: list[tuple[str, int]],
        discount: Money | None = None,
        new_arrival: bool = False,
    ) -> Product:
        """Create a collection product from chosen palette colors.

        Every chosen color must come from ``COLOR_PALETTE``, appear once,
        and start with a quantity greater than zero.
        """
        if not colors:
            raise ValidationError("Select at least one color with a quantity")

        ledger: list[LedgerEntry] = []
        seen: set[str] = set()
        for color, qty in colors:
            if color not in COLOR_PALETTE:
                raise ValidationError(
                    f"Color '{color}' is not in the palette "
                    f"({', '.join(COLOR_PALETTE)})"
                )
            if color in seen:
                raise ValidationError(f"Color '{color}' selected more than once")
            entry = LedgerEntry(color=color, qty=qty)
            if entry.qty == 0:
                raise ValidationError(
                    f"Quantity for '{color}' must be greater than 0"
                )
            seen.add(color)
            ledger.append(entry)

        product = Product(
            id=id,
            title=_clean_title(title),
            price=price,
            category=category,
            kind=VariantKind.COLLECTION,
            color_ledger=ledger,
            discount=discount,
            new_arrival=new_arrival,
        )
        _check_price(product.price)
        return product

    # --- General edits --------------------------------------------------------

    def update_details(
        self,
        title: str | None = None,
        price: Money | None = None,
        discount: Money | None = None,
        category: str | None = None,
        new_arrival: bool | None = None,
    ) -> None:
        """Edit catalog fields.  ``None`` leaves a field unchanged.

        Inventory (``kind``, ``stock``, ``color_ledger``) is never touched
        here; it changes only through the inventory operations below.
        """
        new_title = _clean_title(title) if title is not None else self.title
        if price is not None:
            _check_price(price)

        self.title = new_title
        if price is not None:
            self.price = price
        if discount is not None:
            self.discount = discount
        if category is not None:
            self.category = category
        if new_arrival is not None:
            self.new_arrival = new_arrival

    # --- Inventory mutations --------------------------------------------------

    def set_color_quantity(self, color: str, qty: int) -> None:
        """Replace the quantity of an existing ledger color."""
        qty = Quantity(qty).value
        self._require_kind(VariantKind.COLLECTION)
        ledger = self.checked_ledger()
        index = _index_of(ledger, color)
        ledger[index] = ledger[index].with_qty(qty)
        self.color_ledger = ledger

    def increment_color_quantity(self, color: str, delta: int) -> None:
        """Add ``delta`` (>= 0) units to an existing ledger color."""
        delta = Quantity(delta).value
        self._require_kind(VariantKind.COLLECTION)
        ledger = self.checked_ledger()
        index = _index_of(ledger, color)
        ledger[index] = ledger[index].with_qty(ledger[index].qty + delta)
        self.color_ledger = ledger

    def set_stock(self, stock: int) -> None:
        stock = Quantity(stock).value
        self._require_kind(VariantKind.SINGLE)
        self.stock = stock

    # --- Queries --------------------------------------------------------------

    def checked_ledger(self) -> list[LedgerEntry]:
        """Return a copy of the color ledger after verifying its shape.

        Raises DataIntegrityError if the persisted ledger is not a list of
        ledger entries with unique colors and non-negative integer
        quantities.
        """
        ledger = self.color_ledger
        if not isinstance(ledger, list):
            raise DataIntegrityError(
                f"Product '{self.id}' color ledger is not a list "
                f"(got {type(ledger).__name__})"
            )
        seen: set[str] = set()
        for entry in ledger:
            if not isinstance(entry, LedgerEntry):
                raise DataIntegrityError(
                    f"Product '{self.id}' color ledger holds a malformed entry: {entry!r}"
                )
            if isinstance(entry.qty, bool) or not isinstance(entry.qty, int) or entry.qty < 0:
                raise DataIntegrityError(
                    f"Product '{self.id}' has invalid quantity for '{entry.color}': {entry.qty!r}"
                )
            if entry.color in seen:
                raise DataIntegrityError(
                    f"Product '{self.id}' color ledger repeats color '{entry.color}'"
                )
            seen.add(entry.color)
        return list(ledger)

    @property
    def is_out_of_stock(self) -> bool:
        return is_out_of_stock(self)

    # --- Internal helpers -----------------------------------------------------

    def _require_kind(self, kind: VariantKind) -> None:
        if self.kind != kind:
            raise VariantKindMismatchError(
                f"Product '{self.id}' is a {self.kind.value} product; "
                f"operation requires a {kind.value} product"
            )


def is_out_of_stock(product: Product) -> bool:
    """Derive the display availability of a product.

    A single product is out of stock when its stock is unset or zero.  A
    collection is out of stock when its ledger is empty or every color is
    at zero.  A malformed ledger counts as out of stock.
    """
    if product.kind == VariantKind.SINGLE:
        return product.stock is None or product.stock == 0

    try:
        ledger = product.checked_ledger()
    except DataIntegrityError as exc:
        LOGGER.warning("Treating product %s as out of stock: %s", product.id, exc)
        return True
    return all(entry.qty == 0 for entry in ledger)


def _index_of(ledger: list[LedgerEntry], color: str) -> int:
    for i, entry in enumerate(ledger):
        if entry.color == color:
            return i
    raise ColorNotFoundError(color)


def _clean_title(title: str) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Product title is required")
    return title.strip()


def _check_price(price: Money) -> None:
    if price.is_zero:
        raise ValidationError("Product price must be greater than zero")
