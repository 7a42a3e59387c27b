"""
Exceptions raised by the shop data layer.
"""


class ShopError(Exception):
    """Base class for all errors raised by shop_orders."""
    pass


class StorageError(ShopError):
    """The store is unreachable, timed out, or rejected a change."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation


class ValidationError(ShopError, ValueError):
    """An entity value breaks a domain rule (negative price, quantity < 1)."""
    pass


class ProductInUseError(ShopError):
    """A product cannot be removed while order items still reference it."""

    def __init__(self, product_id: int, references: int):
        super().__init__(
            f"Product {product_id} is referenced by {references} order item(s)"
        )
        self.product_id = product_id
        self.references = references
