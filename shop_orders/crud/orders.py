from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import joinedload, selectinload

from shop_orders.crud.base import Collection
from shop_orders.db import storage_errors
from shop_orders.models import Order, OrderItem


class OrderCollection(Collection[Order]):
    model = Order

    def find_with_items(self, order_id: int) -> Optional[Order]:
        q = select(Order).options(selectinload(Order.items)).where(Order.id == order_id)
        with storage_errors("Orders.find_with_items"):
            return self.session.execute(q).scalar_one_or_none()

    def all_with_items(self) -> List[Order]:
        """All orders, each with items and each item's product, in one joined query.

        Ordered by creation date, then id.
        """
        q = (
            select(Order)
            .options(joinedload(Order.items).joinedload(OrderItem.product))
            .order_by(Order.created_date, Order.id)
        )
        with storage_errors("Orders.all_with_items"):
            return list(self.session.execute(q).unique().scalars())

    def find_aggregate(self, order_id: int) -> Optional[Order]:
        q = (
            select(Order)
            .options(joinedload(Order.items).joinedload(OrderItem.product))
            .where(Order.id == order_id)
        )
        with storage_errors("Orders.find_aggregate"):
            return self.session.execute(q).unique().scalar_one_or_none()
