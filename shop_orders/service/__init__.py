from shop_orders.service.orders import OrderService
from shop_orders.service.products import ProductService

__all__ = ["OrderService", "ProductService"]
