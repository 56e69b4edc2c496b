"""Application service: Show Product use case (query)."""

from __future__ import annotations

from backoffice.application.dto import ProductDTO
from backoffice.domain.exceptions import ProductNotFoundError
from backoffice.domain.repository.product_repository import ProductRepository


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return ProductDTO.from_product(product)
