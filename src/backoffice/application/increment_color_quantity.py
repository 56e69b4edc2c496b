"""Application service: Increment Color Quantity use case.

Only additive changes are supported, so the result can never go
negative.  Use SetColorQuantity to lower a quantity.
"""

from __future__ import annotations

from backoffice.application.dto import IncrementColorQuantityRequest, ProductDTO
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.service.inventory_mutation_service import (
    InventoryMutationService,
)


class IncrementColorQuantityHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, request: IncrementColorQuantityRequest) -> ProductDTO:
        svc = InventoryMutationService(self._product_repo)
        product = svc.increment_color_quantity(
            request.product_id, request.color, request.delta
        )
        return ProductDTO.from_product(product)
