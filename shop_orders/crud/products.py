from shop_orders.crud.base import Collection
from shop_orders.models import Product


class ProductCollection(Collection[Product]):
    model = Product
