"""Application service: Set Stock use case (single-item products)."""

from __future__ import annotations

from backoffice.application.dto import ProductDTO, SetStockRequest
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.service.inventory_mutation_service import (
    InventoryMutationService,
)


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, request: SetStockRequest) -> ProductDTO:
        svc = InventoryMutationService(self._product_repo)
        product = svc.set_stock(request.product_id, request.stock)
        return ProductDTO.from_product(product)
