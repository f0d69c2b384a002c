"""Unit tests for the order search document mapping."""

from datetime import UTC, datetime, timedelta, timezone
from decimal import Decimal

from orderindex.domain.order.model.document import (
    ORDER_INDEX_MAPPINGS,
    document_id,
    document_to_order,
    order_to_document,
)
from orderindex.domain.order.model.value import OrderStatus
from tests.fakes import make_order


class TestOrderToDocument:
    def test_uses_camel_case_keys(self):
        order = make_order(customer_id="c-42")

        doc = order_to_document(order)

        assert set(doc) == {
            "uuid",
            "customerId",
            "status",
            "total",
            "totalExact",
            "createdAt",
            "updatedAt",
            "items",
        }
        assert set(doc["items"][0]) == {
            "uuid",
            "productId",
            "productName",
            "price",
            "quantity",
            "subtotal",
            "priceExact",
            "subtotalExact",
        }
        assert doc["customerId"] == "c-42"
        assert doc["status"] == "pending"

    def test_numbers_are_json_floats_and_quantity_int(self):
        doc = order_to_document(make_order())

        assert doc["total"] == 3000.0
        assert isinstance(doc["total"], float)
        assert doc["totalExact"] == "3000"
        assert isinstance(doc["items"][0]["quantity"], int)

    def test_timestamps_are_iso_with_offset(self):
        created = datetime(2024, 3, 10, 8, 30, tzinfo=UTC)
        doc = order_to_document(make_order(created_at=created))

        assert doc["createdAt"] == "2024-03-10T08:30:00+00:00"

    def test_document_id_is_uuid_string(self):
        order = make_order()

        assert document_id(order.uuid) == str(order.uuid)


class TestDocumentToOrder:
    def test_round_trip_is_lossless(self):
        order = make_order(
            items=[("sku-9", "Tea Pot", "19.99", 3), ("sku-3", "Spoon", "0.10", 7)],
            status=OrderStatus.SHIPPED,
            created_at=datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=UTC),
        )

        restored = document_to_order(order_to_document(order))

        assert restored == order
        assert restored.total == Decimal("60.67")
        assert restored.items[0].price == Decimal("19.99")

    def test_round_trip_keeps_non_utc_offset_instant(self):
        plus_two = timezone(timedelta(hours=2))
        order = make_order(created_at=datetime(2024, 6, 1, 12, 0, tzinfo=plus_two))

        restored = document_to_order(order_to_document(order))

        assert restored.created_at == order.created_at

    def test_amounts_beyond_float_precision_survive(self):
        order = make_order(items=[("sku-1", "Ledger", "12345678901234567.89", 3)])

        doc = order_to_document(order)
        restored = document_to_order(doc)

        assert Decimal(str(doc["total"])) != order.total
        assert restored.total == Decimal("37037036703703703.67")
        assert restored.items[0].price == Decimal("12345678901234567.89")
        assert restored == order

    def test_document_without_exact_amounts_reads_floats(self):
        doc = order_to_document(
            make_order(items=[("sku-9", "Tea Pot", "19.99", 3), ("sku-3", "Spoon", "0.10", 7)])
        )
        doc.pop("totalExact")
        for item in doc["items"]:
            item.pop("priceExact")
            item.pop("subtotalExact")

        restored = document_to_order(doc)

        assert restored.total == Decimal("60.67")
        assert restored.items[1].subtotal == Decimal("0.7")

    def test_missing_items_means_empty(self):
        doc = order_to_document(make_order())
        doc.pop("items")

        assert document_to_order(doc).items == []


def test_mapping_types():
    props = ORDER_INDEX_MAPPINGS["properties"]

    assert props["uuid"]["type"] == "keyword"
    assert props["customerId"]["type"] == "keyword"
    assert props["createdAt"]["type"] == "date"
    assert props["items"]["type"] == "nested"
    assert props["totalExact"] == {"type": "keyword", "index": False, "doc_values": False}
    assert props["items"]["properties"]["priceExact"]["index"] is False
    assert props["items"]["properties"]["productName"]["fields"]["keyword"]["type"] == "keyword"
