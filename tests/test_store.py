from __future__ import annotations

import pytest

from roofcms.db.models import Certificate, Product, ProductCertificate
from roofcms.db.store import PartialBatchFailure, RowNotFound, StoreUnavailable


@pytest.fixture
def certified_products(add_rows):
    add_rows(Product, [{"id": f"p{index}", "name": f"P{index}", "order": index} for index in range(4)])
    add_rows(Certificate, [{"id": "iso", "name": "ISO"}, {"id": "sni", "name": "SNI"}])
    add_rows(
        ProductCertificate,
        [
            {"product_id": "p0", "certificate_id": "iso"},
            {"product_id": "p0", "certificate_id": "sni"},
            {"product_id": "p1", "certificate_id": "iso"},
        ],
    )


@pytest.mark.usefixtures("certified_products")
class TestRelationalStore:
    def test_update_returns_fresh_row(self, store) -> None:
        row = store.update(Product, "p2", {"order": 9, "name": "Renamed"})

        assert row["id"] == "p2"
        assert row["order"] == 9
        assert row["name"] == "Renamed"

    def test_update_missing_row(self, store) -> None:
        with pytest.raises(RowNotFound) as excinfo:
            store.update(Product, "missing", {"order": 1})

        assert excinfo.value.row_id == "missing"

    def test_batch_update_applies_every_row(self, store, orders_of) -> None:
        store.batch_update(
            Product,
            [("p0", {"order": 3}), ("p1", {"order": 2}), ("p2", {"order": 1}), ("p3", {"order": 0})],
        )

        assert orders_of(Product) == [("p3", 0), ("p2", 1), ("p1", 2), ("p0", 3)]

    def test_batch_update_reports_failed_ids_and_keeps_the_rest(self, store, orders_of) -> None:
        with pytest.raises(PartialBatchFailure) as excinfo:
            store.batch_update(Product, [("p0", {"order": 5}), ("gone", {"order": 6}), ("p3", {"order": 7})])

        assert excinfo.value.failed_ids == ["gone"]
        assert excinfo.value.total == 3
        assert dict(orders_of(Product))["p0"] == 5
        assert dict(orders_of(Product))["p3"] == 7

    def test_empty_batch_is_a_no_op(self, store, orders_of) -> None:
        before = orders_of(Product)

        store.batch_update(Product, [])

        assert orders_of(Product) == before

    def test_delete_where_counts_rows(self, store) -> None:
        assert store.delete_where(ProductCertificate, "product_id", "p0") == 2
        assert store.fetch_column(ProductCertificate, "certificate_id", {"product_id": "p1"}) == ["iso"]

    def test_bulk_insert_violating_uniqueness_is_unavailable(self, store) -> None:
        with pytest.raises(StoreUnavailable):
            store.bulk_insert(ProductCertificate, [{"product_id": "p1", "certificate_id": "iso"}])

    def test_failed_bulk_insert_writes_nothing(self, store) -> None:
        with pytest.raises(StoreUnavailable):
            store.bulk_insert(
                ProductCertificate,
                [{"product_id": "p2", "certificate_id": "iso"}, {"product_id": "p2", "certificate_id": "iso"}],
            )

        assert store.fetch_column(ProductCertificate, "certificate_id", {"product_id": "p2"}) == []

    def test_next_order_appends(self, store) -> None:
        assert store.next_order(Product) == 4
        assert store.next_order(Product, {"id": "nope"}) == 0

    def test_exists(self, store) -> None:
        assert store.exists(Product, "p0") is True
        assert store.exists(Product, "p9") is False
