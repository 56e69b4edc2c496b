"""Integration tests for the inventory use cases."""

import pytest

from backoffice.application.dto import (
    ColorQuantityDTO,
    IncrementColorQuantityRequest,
    SetColorQuantityRequest,
    SetStockRequest,
)
from backoffice.application.increment_color_quantity import (
    IncrementColorQuantityHandler,
)
from backoffice.application.set_color_quantity import SetColorQuantityHandler
from backoffice.application.set_stock import SetStockHandler
from backoffice.domain.exceptions import ColorNotFoundError, VariantKindMismatchError
from backoffice.domain.model.product import LedgerEntry, Product, VariantKind
from backoffice.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository


def _setup():
    products = [
        Product(
            id="p1", title="Tee", price=Money.of("20.00"), category="Shirts",
            kind=VariantKind.COLLECTION,
            color_ledger=[LedgerEntry("red", 0), LedgerEntry("blue", 0)],
        ),
        Product(
            id="s1", title="Mug", price=Money.of("8.00"), category="Kitchen",
            kind=VariantKind.SINGLE, stock=None,
        ),
    ]
    return FakeProductRepository(products)


class TestSetColorQuantityHandler:

    def test_restocking_clears_out_of_stock(self):
        repo = _setup()
        handler = SetColorQuantityHandler(repo)

        dto = handler.handle(
            SetColorQuantityRequest.from_payload("p1", {"color": "blue", "quantity": 6})
        )

        assert dto.colors == [ColorQuantityDTO("red", 0), ColorQuantityDTO("blue", 6)]
        assert dto.out_of_stock is False

    def test_unknown_color(self):
        repo = _setup()
        with pytest.raises(ColorNotFoundError):
            SetColorQuantityHandler(repo).handle(
                SetColorQuantityRequest.from_payload("p1", {"color": "pink", "quantity": 1})
            )


class TestIncrementColorQuantityHandler:

    def test_increment_twice_accumulates(self):
        repo = _setup()
        handler = IncrementColorQuantityHandler(repo)
        request = IncrementColorQuantityRequest.from_payload(
            "p1", {"color": "red", "quantity": 2}
        )

        handler.handle(request)
        dto = handler.handle(request)

        assert dto.colors[0] == ColorQuantityDTO("red", 4)


class TestSetStockHandler:

    def test_sets_stock(self):
        repo = _setup()
        dto = SetStockHandler(repo).handle(SetStockRequest.from_payload("s1", {"stock": 12}))
        assert dto.stock == 12
        assert dto.out_of_stock is False
        assert repo.get_by_id("s1").stock == 12

    def test_collection_rejected(self):
        repo = _setup()
        with pytest.raises(VariantKindMismatchError):
            SetStockHandler(repo).handle(SetStockRequest.from_payload("p1", {"stock": 1}))
