from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from prometheus_client import REGISTRY

from shop_orders.context import get_context
from shop_orders.core.config import Settings
from shop_orders.db import create_db_engine, create_session_factory
from shop_orders.exceptions import StorageError, ValidationError
from shop_orders.models import Order, OrderItem
from shop_orders.reporting import order_total
from shop_orders.service import OrderService


def _row_counts(session_factory):
    with get_context(session_factory) as ctx:
        return ctx.products.count(), ctx.orders.count(), ctx.order_items.count()


def _metric(operation, status):
    return REGISTRY.get_sample_value(
        "shop_orders_service_operations_total",
        {"service": "shop_orders_test", "operation": operation, "status": status},
    ) or 0.0


def test_add_order_assigns_unique_positive_ids(order_service, seeded):
    first = order_service.add_order(Order())
    second = order_service.add_order(
        Order(items=[OrderItem(product_id=seeded["Milk"].id, quantity=2)])
    )

    assert first.id > 0 and second.id > 0
    assert first.id != second.id
    assert second.items[0].id > 0
    assert second.items[0].order_id == second.id

    listed = {o.id for o in order_service.get_all_orders()}
    assert {first.id, second.id} <= listed


def test_add_order_with_unknown_product_raises_storage_error(order_service, session_factory, seeded):
    before = _row_counts(session_factory)

    with pytest.raises(StorageError):
        order_service.add_order(Order(items=[OrderItem(product_id=424242)]))

    assert _row_counts(session_factory) == before


def test_get_all_orders_is_empty_initially(order_service):
    assert order_service.get_all_orders() == []


def test_get_all_orders_loads_items_and_products(order_service, seeded):
    order = order_service.add_order(Order())
    order_service.add_product_to_order(order.id, seeded["Apples"].id, 4)

    [loaded] = order_service.get_all_orders()

    assert loaded.id == order.id
    assert len(loaded.items) == 1
    assert loaded.items[0].product.name == "Apples"
    assert loaded.items[0].product.price == Decimal("3.00")
    assert loaded.items[0].quantity == 4


def test_get_all_orders_oldest_first(order_service):
    now = datetime.now()
    newer = order_service.add_order(Order(created_date=now))
    older = order_service.add_order(Order(created_date=now - timedelta(days=1)))

    assert [o.id for o in order_service.get_all_orders()] == [older.id, newer.id]


def test_get_order(order_service, seeded):
    order = order_service.add_order(Order())
    order_service.add_product_to_order(order.id, seeded["Bread"].id)

    loaded = order_service.get_order(order.id)
    assert loaded.items[0].product.name == "Bread"
    assert order_service.get_order(order.id + 1) is None


def test_remove_missing_order_is_a_noop(order_service, session_factory, seeded):
    order = order_service.add_order(Order())
    order_service.add_product_to_order(order.id, seeded["Milk"].id)
    before = _row_counts(session_factory)
    not_found_before = _metric("remove_order", "not_found")

    assert order_service.remove_order(order.id + 1000) is False

    assert _row_counts(session_factory) == before
    assert _metric("remove_order", "not_found") == not_found_before + 1


def test_remove_order_cascades_to_items(order_service, session_factory, seeded):
    doomed = order_service.add_order(Order())
    kept = order_service.add_order(Order())
    order_service.add_product_to_order(doomed.id, seeded["Milk"].id, 2)
    order_service.add_product_to_order(doomed.id, seeded["Bread"].id)
    order_service.add_product_to_order(kept.id, seeded["Apples"].id)

    assert order_service.remove_order(doomed.id) is True

    with get_context(session_factory) as ctx:
        assert ctx.orders.find(doomed.id) is None
        assert ctx.order_items.for_order(doomed.id) == []
        assert ctx.order_items.count() == 1
        assert ctx.products.count() == 3


@pytest.mark.parametrize("missing", ["order", "product"])
def test_add_product_to_missing_entity_is_a_noop(order_service, session_factory, seeded, missing):
    order = order_service.add_order(Order())
    order_id = order.id + 1000 if missing == "order" else order.id
    product_id = 9999 if missing == "product" else seeded["Milk"].id
    before = _row_counts(session_factory)

    assert order_service.add_product_to_order(order_id, product_id, 2) is None
    assert _row_counts(session_factory) == before


@pytest.mark.parametrize("quantity", [0, -3])
def test_add_product_to_order_rejects_non_positive_quantity(order_service, session_factory, seeded, quantity):
    order = order_service.add_order(Order())
    before = _row_counts(session_factory)

    with pytest.raises(ValidationError):
        order_service.add_product_to_order(order.id, seeded["Milk"].id, quantity)

    assert _row_counts(session_factory) == before


def test_add_product_to_order_defaults_quantity_to_one(order_service, seeded):
    order = order_service.add_order(Order())

    item = order_service.add_product_to_order(order.id, seeded["Bread"].id)

    assert item.quantity == 1
    assert item.order_id == order.id
    assert item.product_id == seeded["Bread"].id
    assert item.product.name == "Bread"


def test_end_to_end_order_total(order_service, seeded):
    order = order_service.add_order(Order())
    order_service.add_product_to_order(order.id, seeded["Milk"].id, 2)
    order_service.add_product_to_order(order.id, seeded["Bread"].id, 1)

    [loaded] = order_service.get_all_orders()

    assert loaded.id == order.id
    assert len(loaded.items) == 2
    assert order_total(loaded) == Decimal("6.30")


def test_add_order_without_items_returns_persisted_order(order_service, session_factory):
    success_before = _metric("add_order", "success")

    order = order_service.add_order(Order())

    assert order.id > 0
    assert order.items == []
    assert _row_counts(session_factory)[1] == 1
    assert _metric("add_order", "success") == success_before + 1
    assert order_service.get_order(order.id).items == []


def test_read_failures_are_counted_as_errors(tmp_path):
    missing = tmp_path / "no" / "such" / "dir" / "shop.db"
    engine = create_db_engine(Settings(DATABASE_URL=f"sqlite:///{missing}"))
    service = OrderService(create_session_factory(engine), service_name="shop_orders_test")
    get_all_before = _metric("get_all_orders", "error")
    get_one_before = _metric("get_order", "error")
    try:
        with pytest.raises(StorageError):
            service.get_all_orders()
        with pytest.raises(StorageError):
            service.get_order(1)
    finally:
        engine.dispose()

    assert _metric("get_all_orders", "error") == get_all_before + 1
    assert _metric("get_order", "error") == get_one_before + 1
