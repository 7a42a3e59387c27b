from __future__ import annotations

from typing import List

from loguru import logger
from sqlalchemy.orm import sessionmaker

from shop_orders.context import get_context
from shop_orders.core.metrics import ORDERS_SERVICE_OPERATIONS_TOTAL
from shop_orders.exceptions import ShopError, ValidationError
from shop_orders.models import Order, OrderItem
from shop_orders.schemas import OrderItemOut, OrderOut


class OrderService:
    """Order operations; every call runs in its own session and commits at most once."""

    def __init__(self, session_factory: sessionmaker, service_name: str = "shop_orders"):
        self._session_factory = session_factory
        self.service_name = service_name

    def _count(self, operation: str, status: str) -> None:
        ORDERS_SERVICE_OPERATIONS_TOTAL.labels(
            service=self.service_name,
            operation=operation,
            status=status,
        ).inc()

    def add_order(self, order: Order) -> Order:
        self._count("add_order", "attempt")
        logger.info(
            "Service add_order called with {items_count} items",
            items_count=len(order.items),
        )
        try:
            with get_context(self._session_factory) as ctx:
                ctx.orders.add(order)
                ctx.save()
                item_ids = [item.id for item in order.items]
        except ShopError:
            self._count("add_order", "error")
            raise
        logger.info(
            "Service add_order persisted order. order_id='{order_id}', item_ids={item_ids}",
            order_id=order.id,
            item_ids=item_ids,
        )
        self._count("add_order", "success")
        return order

    def remove_order(self, order_id: int) -> bool:
        """Delete an order and its items. Returns False if there is no such order."""
        self._count("remove_order", "attempt")
        logger.info("Service remove_order called. order_id='{order_id}'", order_id=order_id)
        try:
            with get_context(self._session_factory) as ctx:
                order = ctx.orders.find_with_items(order_id)
                if order is None:
                    logger.warning(
                        "Service remove_order: order not found. order_id='{order_id}'",
                        order_id=order_id,
                    )
                    self._count("remove_order", "not_found")
                    return False
                items_count = len(order.items)
                ctx.orders.remove(order)
                ctx.save()
        except ShopError:
            self._count("remove_order", "error")
            raise
        logger.info(
            "Service remove_order completed. order_id='{order_id}', items_removed={items_count}",
            order_id=order_id,
            items_count=items_count,
        )
        self._count("remove_order", "success")
        return True

    def get_order(self, order_id: int) -> OrderOut | None:
        self._count("get_order", "attempt")
        try:
            with get_context(self._session_factory) as ctx:
                order = ctx.orders.find_aggregate(order_id)
                result = OrderOut.model_validate(order) if order is not None else None
        except ShopError:
            self._count("get_order", "error")
            raise
        logger.info(
            "Service get_order completed. order_id='{order_id}', found={found}",
            order_id=order_id,
            found=result is not None,
        )
        self._count("get_order", "success" if result is not None else "not_found")
        return result

    def get_all_orders(self) -> List[OrderOut]:
        """Every order with its items and products, oldest first (ties by id)."""
        self._count("get_all_orders", "attempt")
        try:
            with get_context(self._session_factory) as ctx:
                orders = [OrderOut.model_validate(o) for o in ctx.orders.all_with_items()]
        except ShopError:
            self._count("get_all_orders", "error")
            raise
        logger.info("Service get_all_orders completed. count={count}", count=len(orders))
        self._count("get_all_orders", "success")
        return orders

    def add_product_to_order(
        self,
        order_id: int,
        product_id: int,
        quantity: int = 1,
    ) -> OrderItemOut | None:
        """Attach ``quantity`` of a product to an order.

        Raises ValidationError for quantity < 1. Returns None, leaving the
        store untouched, when either the order or the product does not exist.
        """
        self._count("add_product_to_order", "attempt")
        logger.info(
            "Service add_product_to_order called. order_id='{order_id}', product_id='{product_id}', quantity={quantity}",
            order_id=order_id,
            product_id=product_id,
            quantity=quantity,
        )
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            logger.warning(
                "Service add_product_to_order rejected quantity={quantity}",
                quantity=quantity,
            )
            self._count("add_product_to_order", "invalid")
            raise ValidationError(f"Quantity must be an integer of at least 1, got {quantity!r}")

        try:
            with get_context(self._session_factory) as ctx:
                order = ctx.orders.find(order_id)
                product = ctx.products.find(product_id)
                if order is None or product is None:
                    logger.warning(
                        "Service add_product_to_order: nothing to link. order_found={order_found}, product_found={product_found}",
                        order_found=order is not None,
                        product_found=product is not None,
                    )
                    self._count("add_product_to_order", "not_found")
                    return None

                item = OrderItem(quantity=quantity, product=product, order=order)
                ctx.order_items.add(item)
                ctx.save()
                result = OrderItemOut.model_validate(item)
        except ShopError:
            self._count("add_product_to_order", "error")
            raise

        logger.info(
            "Service add_product_to_order created item. item_id='{item_id}', order_id='{order_id}'",
            item_id=result.id,
            order_id=order_id,
        )
        self._count("add_product_to_order", "success")
        return result
