"""Application service: Set Color Quantity use case."""

from __future__ import annotations

from backoffice.application.dto import ProductDTO, SetColorQuantityRequest
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.service.inventory_mutation_service import (
    InventoryMutationService,
)


class SetColorQuantityHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, request: SetColorQuantityRequest) -> ProductDTO:
        """Set one ledger color to an absolute quantity.

        Never adds or removes colors; an unknown color is an error.
        """
        svc = InventoryMutationService(self._product_repo)
        product = svc.set_color_quantity(
            request.product_id, request.color, request.quantity
        )
        return ProductDTO.from_product(product)
