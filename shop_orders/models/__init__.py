from shop_orders.models.base import Base
from shop_orders.models.order import Order
from shop_orders.models.order_item import OrderItem
from shop_orders.models.product import Product

__all__ = ["Base", "Product", "Order", "OrderItem"]
