from typing import List

from sqlalchemy import func, select

from shop_orders.crud.base import Collection
from shop_orders.db import storage_errors
from shop_orders.models import OrderItem


class OrderItemCollection(Collection[OrderItem]):
    model = OrderItem

    def count_for_product(self, product_id: int) -> int:
        q = select(func.count()).select_from(OrderItem).where(OrderItem.product_id == product_id)
        with storage_errors("OrderItems.count_for_product"):
            return self.session.scalar(q)

    def for_order(self, order_id: int) -> List[OrderItem]:
        q = select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
        with storage_errors("OrderItems.for_order"):
            return list(self.session.scalars(q))
