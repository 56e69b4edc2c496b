"""Application service: List Products use case (query).

Supports the admin dashboard filters: a case-insensitive title search
and an exact category match.  Both are optional and combine with AND.
"""

from __future__ import annotations

from backoffice.application.dto import ProductDTO
from backoffice.domain.model.product import Product
from backoffice.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        search: str | None = None,
        category: str | None = None,
        out_of_stock_only: bool = False,
    ) -> list[ProductDTO]:
        dtos = [
            ProductDTO.from_product(p)
            for p in self._product_repo.list_all()
            if _matches(p, search, category)
        ]
        if out_of_stock_only:
            dtos = [dto for dto in dtos if dto.out_of_stock]
        return dtos


def _matches(product: Product, search: str | None, category: str | None) -> bool:
    if search and search.lower() not in product.title.lower():
        return False
    if category and product.category != category:
        return False
    return True
