"""Application service: Update Product use case."""

from __future__ import annotations

from backoffice.application.dto import ProductDTO, UpdateProductRequest
from backoffice.domain.exceptions import ProductNotFoundError
from backoffice.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, request: UpdateProductRequest) -> ProductDTO:
        """Apply general field edits to a product.

        Quantities are left alone; they change only through the
        inventory use cases.
        """
        product = self._product_repo.get_by_id(request.product_id)
        if product is None:
            raise ProductNotFoundError(request.product_id)

        product.update_details(
            title=request.title,
            price=request.price,
            discount=request.discount,
            category=request.category,
            new_arrival=request.new_arrival,
        )
        self._product_repo.save(product)
        return ProductDTO.from_product(product)
