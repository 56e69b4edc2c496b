"""JSON-file-backed implementation of ProductRepository.

The file holds a list of product records.  Every save rewrites the file
through a temporary file and ``os.replace``, so readers see either the
old or the new record, never a half-written one.  A process-wide lock
per file serializes read-modify-write cycles on the file itself.

Color ledgers are stored as ``[{"color": ..., "qty": ...}]``.  A stored
ledger that cannot be decoded is kept as-is on the Product (and written
back unchanged) so the domain can report it instead of silently
repairing it.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
import threading
from decimal import Decimal, InvalidOperation
from pathlib import Path

from backoffice.domain.exceptions import (
    DataIntegrityError,
    StoreUnavailableError,
    ValidationError,
)
from backoffice.domain.model.product import LedgerEntry, Product, VariantKind
from backoffice.domain.model.value_objects import Money
from backoffice.domain.repository.product_repository import ProductRepository

LOGGER = logging.getLogger(__name__)

_LOCKS: dict[Path, threading.Lock] = {}
_LOCKS_GUARD = threading.Lock()

_DIGITS_RE = re.compile(r"^\s*\d+\s*$", re.ASCII)


def _lock_for(path: Path) -> threading.Lock:
    with _LOCKS_GUARD:
        return _LOCKS.setdefault(path.resolve(), threading.Lock())


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path)
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        return _next_id_from(self._load_raw())

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._load_raw():
            if raw.get("id") == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        """Return every decodable product.

        A record that cannot be decoded is logged and left out, so one
        broken record does not hide the rest of the catalog.  ``get_by_id``
        still raises DataIntegrityError for it.
        """
        products = []
        for raw in self._load_raw():
            try:
                products.append(self._to_domain(raw))
            except DataIntegrityError as exc:
                LOGGER.warning("Skipping undecodable product record: %s", exc)
        return products

    def save(self, product: Product) -> None:
        with self._lock:
            records = self._load_raw()
            # New products get their ID from the records read under the lock
            if product.id is None:
                product.id = _next_id_from(records)

            # Upsert: replace if exists, otherwise append
            replaced = False
            for i, raw in enumerate(records):
                if raw.get("id") == product.id:
                    records[i] = self._to_raw(product)
                    replaced = True
                    break
            if not replaced:
                records.append(self._to_raw(product))
            self._persist_raw(records)

    def delete(self, product_id: str) -> bool:
        with self._lock:
            records = self._load_raw()
            remaining = [r for r in records if r.get("id") != product_id]
            if len(remaining) == len(records):
                return False
            self._persist_raw(remaining)
            return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        raw = {
            "id": product.id,
            "title": product.title,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "discount": (
                str(product.discount.amount) if product.discount is not None else None
            ),
            "category": product.category,
            "type": product.kind.value,
            "arrival": "yes" if product.new_arrival else "no",
        }
        if product.kind == VariantKind.SINGLE:
            raw["stock"] = product.stock
        else:
            raw["color"] = _encode_ledger(product.color_ledger)
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        product_id = raw.get("id")
        currency = raw.get("currency", "USD")
        discount = raw.get("discount")
        # Records without a type tag are classified by which inventory field exists
        kind_tag = raw.get("type") or ("collection" if "color" in raw else "single")
        try:
            kind = VariantKind(kind_tag)
        except ValueError as exc:
            raise DataIntegrityError(
                f"Product '{product_id}' has unknown type {kind_tag!r}"
            ) from exc
        try:
            return Product(
                id=product_id,
                title=raw["title"],
                price=Money(Decimal(raw["price"]), currency),
                category=raw.get("category", ""),
                kind=kind,
                stock=(
                    _decode_stock(product_id, raw.get("stock"))
                    if kind == VariantKind.SINGLE
                    else None
                ),
                color_ledger=(
                    _decode_ledger(product_id, raw.get("color", []))
                    if kind == VariantKind.COLLECTION
                    else []
                ),
                discount=(
                    Money(Decimal(discount), currency) if discount not in (None, "") else None
                ),
                new_arrival=raw.get("arrival") == "yes",
            )
        except (KeyError, TypeError, InvalidOperation, ValidationError) as exc:
            raise DataIntegrityError(
                f"Product '{product_id}' record cannot be decoded: {exc!r}"
            ) from exc

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            LOGGER.error("Cannot read product store %s", self._file_path, exc_info=True)
            raise StoreUnavailableError(
                f"Cannot read product store {self._file_path}"
            ) from exc

    def _persist_raw(self, records: list[dict]) -> None:
        directory = self._file_path.parent
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=".products-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(json.dumps(records, indent=2) + "\n")
                os.replace(tmp_name, self._file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            LOGGER.error("Cannot write product store %s", self._file_path, exc_info=True)
            raise StoreUnavailableError(
                f"Cannot write product store {self._file_path}"
            ) from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


def _next_id_from(records: list[dict]) -> str:
    numeric = [int(r["id"]) for r in records if _DIGITS_RE.match(str(r.get("id")))]
    return str(max(numeric) + 1) if numeric else "1"


def _decode_stock(product_id: str, value: object) -> int | None:
    """Decode a stored stock count; ``None`` means unset."""
    if value is None or value == "":
        return None
    # Older records store stock as a string, e.g. "0"
    if isinstance(value, str) and _DIGITS_RE.match(value):
        return int(value)
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    raise DataIntegrityError(f"Product '{product_id}' has invalid stock {value!r}")


def _decode_ledger(product_id: str, value: object):
    """Return a list of LedgerEntry, or the raw value when it is malformed."""
    if not isinstance(value, list):
        LOGGER.warning("Product %s has a non-list color ledger", product_id)
        return value
    try:
        return [LedgerEntry(color=item["color"], qty=item["qty"]) for item in value]
    except (KeyError, TypeError, ValidationError):
        LOGGER.warning("Product %s has malformed color ledger entries", product_id)
        return value


def _encode_ledger(ledger: object) -> object:
    if isinstance(ledger, list) and all(isinstance(e, LedgerEntry) for e in ledger):
        return [{"color": e.color, "qty": e.qty} for e in ledger]
    return ledger
