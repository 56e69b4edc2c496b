"""Tests for the JSON-file-backed product repository."""

import json
import threading

import pytest

from backoffice.application.add_product import AddProductHandler
from backoffice.application.dto import CreateProductRequest
from backoffice.domain.exceptions import (
    DataIntegrityError,
    StoreUnavailableError,
)
from backoffice.domain.model.product import LedgerEntry, Product, VariantKind
from backoffice.domain.model.value_objects import Money
from backoffice.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def _write(path, records):
    path.write_text(json.dumps(records), encoding="utf-8")


@pytest.fixture
def store(tmp_path):
    return tmp_path / "products.json"


class TestRoundTrip:

    def test_creates_empty_store(self, store):
        JsonProductRepository(store)
        assert json.loads(store.read_text()) == []

    def test_collection_saved_in_ledger_shape(self, store):
        repo = JsonProductRepository(store)
        repo.save(Product(
            id="1", title="Tee", price=Money.of("20.00"), category="Shirts",
            kind=VariantKind.COLLECTION,
            color_ledger=[LedgerEntry("red", 2), LedgerEntry("blue", 0)],
            new_arrival=True,
        ))

        (raw,) = json.loads(store.read_text())
        assert raw["type"] == "collection"
        assert raw["color"] == [{"color": "red", "qty": 2}, {"color": "blue", "qty": 0}]
        assert raw["arrival"] == "yes"
        assert "stock" not in raw

        loaded = repo.get_by_id("1")
        assert loaded.color_ledger == [LedgerEntry("red", 2), LedgerEntry("blue", 0)]
        assert loaded.new_arrival is True

    def test_save_replaces_whole_record(self, store):
        repo = JsonProductRepository(store)
        product = Product(
            id="1", title="Mug", price=Money.of("8"), category="Kitchen",
            kind=VariantKind.SINGLE, stock=3,
        )
        repo.save(product)
        product.set_stock(0)
        repo.save(product)

        assert len(repo.list_all()) == 1
        assert repo.get_by_id("1").stock == 0

    def test_next_id_and_delete(self, store):
        repo = JsonProductRepository(store)
        assert repo.next_id() == "1"
        repo.save(Product.create_single("1", "Mug", Money.of("8"), "Kitchen", stock=1))
        assert repo.next_id() == "2"
        assert repo.delete("1") is True
        assert repo.delete("1") is False
        assert repo.get_by_id("1") is None


class TestLegacyAndMalformedRecords:

    def test_string_stock_decoded(self, store):
        _write(store, [{"id": "a", "title": "Mug", "price": "8", "type": "single", "stock": "0"}])
        assert JsonProductRepository(store).get_by_id("a").stock == 0

    def test_untyped_record_with_colors_is_a_collection(self, store):
        _write(store, [{
            "id": "a", "title": "Tee", "price": "20",
            "color": [{"color": "red", "qty": 1}],
        }])
        assert JsonProductRepository(store).get_by_id("a").kind == VariantKind.COLLECTION

    def test_malformed_ledger_is_kept_verbatim(self, store):
        _write(store, [{
            "id": "a", "title": "Tee", "price": "20", "type": "collection",
            "color": {"red": 2},
        }])
        repo = JsonProductRepository(store)
        product = repo.get_by_id("a")
        with pytest.raises(DataIntegrityError):
            product.checked_ledger()

        product.update_details(title="Tee v2")
        repo.save(product)
        assert json.loads(store.read_text())[0]["color"] == {"red": 2}

    def test_negative_qty_is_not_decoded(self, store):
        _write(store, [{
            "id": "a", "title": "Tee", "price": "20", "type": "collection",
            "color": [{"color": "red", "qty": -4}],
        }])
        product = JsonProductRepository(store).get_by_id("a")
        with pytest.raises(DataIntegrityError):
            product.checked_ledger()

    def test_unknown_type_is_data_integrity_error(self, store):
        _write(store, [{"id": "a", "title": "Tee", "price": "20", "type": "bundle"}])
        with pytest.raises(DataIntegrityError, match="unknown type"):
            JsonProductRepository(store).get_by_id("a")

    @pytest.mark.parametrize("stock", ["²", "-3", "abc", -3, True, 1.5])
    def test_invalid_stock_is_data_integrity_error(self, store, stock):
        _write(store, [{"id": "a", "title": "Mug", "price": "8", "type": "single", "stock": stock}])
        with pytest.raises(DataIntegrityError, match="invalid stock"):
            JsonProductRepository(store).get_by_id("a")

    def test_missing_stock_is_unset(self, store):
        _write(store, [{"id": "a", "title": "Mug", "price": "8", "type": "single"}])
        assert JsonProductRepository(store).get_by_id("a").stock is None

    def test_unparseable_price_is_data_integrity_error(self, store):
        _write(store, [{"id": "a", "title": "Mug", "price": "cheap", "type": "single"}])
        with pytest.raises(DataIntegrityError, match="cannot be decoded"):
            JsonProductRepository(store).get_by_id("a")

    def test_listing_skips_undecodable_records(self, store):
        _write(store, [
            {"id": "1", "title": "Mug", "price": "8", "type": "single", "stock": 2},
            {"id": "2", "title": "Box", "price": "5", "type": "bundle"},
            {"id": "3", "title": "Cup", "price": "4", "type": "single", "stock": "²"},
        ])
        repo = JsonProductRepository(store)

        assert [p.id for p in repo.list_all()] == ["1"]
        with pytest.raises(DataIntegrityError):
            repo.get_by_id("2")

    def test_saving_next_to_undecodable_record_keeps_it(self, store):
        bundle = {"id": "2", "title": "Box", "price": "5", "type": "bundle"}
        _write(store, [bundle])
        repo = JsonProductRepository(store)
        repo.save(Product.create_single(None, "Mug", Money.of("8"), "Kitchen", stock=1))

        records = json.loads(store.read_text())
        assert records[0] == bundle
        assert records[1]["id"] == "3"


class TestStoreFailures:

    def test_unreadable_store(self, store):
        store.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreUnavailableError):
            JsonProductRepository(store).list_all()

    def test_failed_write_keeps_previous_file(self, store, monkeypatch):
        repo = JsonProductRepository(store)
        repo.save(Product.create_single("1", "Mug", Money.of("8"), "Kitchen", stock=1))
        before = store.read_text()

        def _boom(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(
            "backoffice.infrastructure.persistence.json_product_repository.os.replace", _boom
        )
        with pytest.raises(StoreUnavailableError):
            repo.save(Product.create_single("1", "Mug", Money.of("8"), "Kitchen", stock=9))

        assert store.read_text() == before
        assert [p.name for p in store.parent.iterdir()] == ["products.json"]


class TestConcurrentWrites:

    def test_parallel_saves_of_different_products_all_land(self, store):
        repo = JsonProductRepository(store)

        def _save(i):
            repo.save(Product.create_single(str(i), f"Item {i}", Money.of("1"), "Misc", stock=i))

        threads = [threading.Thread(target=_save, args=(i,)) for i in range(1, 21)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(int(p.id) for p in repo.list_all()) == list(range(1, 21))

    def test_parallel_creates_get_distinct_ids(self, store):
        repo = JsonProductRepository(store)
        n = 10
        barrier = threading.Barrier(n)
        errors = []

        def _create(i):
            request = CreateProductRequest.from_payload({
                "title": f"P{i}", "price": "1", "category": "Misc",
                "type": "single", "stock": i,
            })
            barrier.wait()
            try:
                AddProductHandler(repo).handle(request)
            except Exception as exc:  # collected and asserted below
                errors.append(exc)

        threads = [threading.Thread(target=_create, args=(i,)) for i in range(n)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        products = repo.list_all()
        assert sorted(p.title for p in products) == sorted(f"P{i}" for i in range(n))
        assert sorted(int(p.id) for p in products) == list(range(1, n + 1))

    def test_save_assigns_id_to_new_product(self, store):
        repo = JsonProductRepository(store)
        repo.save(Product.create_single("7", "Mug", Money.of("8"), "Kitchen", stock=1))
        product = Product.create_single(None, "Cup", Money.of("4"), "Kitchen", stock=1)

        repo.save(product)

        assert product.id == "8"
        assert repo.get_by_id("8").title == "Cup"
