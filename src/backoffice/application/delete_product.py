"""Application service: Delete Product use case.

Deletion is unconditional: no dependent records (orders, carts) are
checked here.
"""

from __future__ import annotations

import logging

from backoffice.domain.exceptions import ProductNotFoundError
from backoffice.domain.repository.product_repository import ProductRepository

LOGGER = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        if not self._product_repo.delete(product_id):
            raise ProductNotFoundError(product_id)
        LOGGER.info("Deleted product %s", product_id)
