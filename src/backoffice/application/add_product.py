"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from backoffice.application.dto import CreateProductRequest, ProductDTO
from backoffice.domain.model.product import Product, VariantKind
from backoffice.domain.repository.product_repository import ProductRepository

LOGGER = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, request: CreateProductRequest) -> ProductDTO:
        """Add a new product to the catalog.

        Category names are assumed to be checked by the caller.
        """
        if request.kind == VariantKind.SINGLE:
            product = Product.create_single(
                id=None,
                title=request.title,
                price=request.price,
                category=request.category,
                stock=request.stock.value if request.stock is not None else None,
                discount=request.discount,
                new_arrival=request.new_arrival,
            )
        else:
            product = Product.create_collection(
                id=None,
                title=request.title,
                price=request.price,
                category=request.category,
                colors=list(request.colors),
                discount=request.discount,
                new_arrival=request.new_arrival,
            )

        # The repository assigns the ID
        self._product_repo.save(product)
        LOGGER.info("Added %s product %s '%s'", product.kind.value, product.id, product.title)
        return ProductDTO.from_product(product)
