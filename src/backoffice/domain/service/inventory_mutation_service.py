"""Domain service: Inventory Mutation.

Applies quantity changes to a product's inventory as one
read-modify-write of the whole product record:

  1. load the product (fail if it does not exist)
  2. let the Product aggregate validate and compute the new inventory
  3. save the whole record and return it

The aggregate only assigns the new ledger after every precondition
passed, and the repository write is atomic per record, so a rejected
mutation leaves the persisted product exactly as it was.  Concurrent
mutations of the same product are last-write-wins; callers that need
serialization must provide it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from backoffice.domain.exceptions import (
    ColorNotFoundError,
    DataIntegrityError,
    ProductNotFoundError,
)
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Quantity
from backoffice.domain.repository.product_repository import ProductRepository

LOGGER = logging.getLogger(__name__)


class InventoryMutationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def set_color_quantity(
        self, product_id: str, color: str, quantity: Quantity
    ) -> Product:
        """Set the absolute quantity of an existing color."""
        product = self._load(product_id)
        self._apply(product, color, lambda: product.set_color_quantity(color, quantity.value))
        self._product_repo.save(product)
        LOGGER.info(
            "Set %s quantity of product %s to %d", color, product_id, quantity.value
        )
        return product

    def increment_color_quantity(
        self, product_id: str, color: str, delta: Quantity
    ) -> Product:
        """Add ``delta`` units to an existing color."""
        product = self._load(product_id)
        self._apply(
            product, color, lambda: product.increment_color_quantity(color, delta.value)
        )
        self._product_repo.save(product)
        LOGGER.info(
            "Incremented %s quantity of product %s by %d", color, product_id, delta.value
        )
        return product

    def set_stock(self, product_id: str, stock: Quantity) -> Product:
        """Set the scalar stock of a single-item product."""
        product = self._load(product_id)
        product.set_stock(stock.value)
        self._product_repo.save(product)
        LOGGER.info("Set stock of product %s to %d", product_id, stock.value)
        return product

    # --- Internal helpers -----------------------------------------------------

    def _load(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    @staticmethod
    def _apply(product: Product, color: str, mutation: Callable[[], None]) -> None:
        try:
            mutation()
        except ColorNotFoundError:
            LOGGER.warning("Color %r not found on product %s", color, product.id)
            raise
        except DataIntegrityError as exc:
            LOGGER.warning("Refusing to mutate product %s: %s", product.id, exc)
            raise
