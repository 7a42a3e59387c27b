from shop_orders.crud.base import Collection
from shop_orders.crud.order_items import OrderItemCollection
from shop_orders.crud.orders import OrderCollection
from shop_orders.crud.products import ProductCollection

__all__ = ["Collection", "ProductCollection", "OrderCollection", "OrderItemCollection"]
