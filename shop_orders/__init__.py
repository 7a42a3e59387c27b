from shop_orders.exceptions import (
    ProductInUseError,
    ShopError,
    StorageError,
    ValidationError,
)

__all__ = ["ShopError", "StorageError", "ValidationError", "ProductInUseError"]
