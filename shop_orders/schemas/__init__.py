from shop_orders.schemas.order import OrderItemOut, OrderOut
from shop_orders.schemas.product import ProductOut

__all__ = ["ProductOut", "OrderItemOut", "OrderOut"]
