from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from shop_orders.exceptions import ValidationError
from shop_orders.models.base import Base

if TYPE_CHECKING:
    from shop_orders.models.order import Order
    from shop_orders.models.product import Product


class OrderItem(Base):
    __tablename__ = "OrderItems"

    id: Mapped[int] = mapped_column("Id", primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        "ProductId",
        ForeignKey("Products.Id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    order_id: Mapped[int] = mapped_column(
        "OrderId",
        ForeignKey("Orders.Id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quantity: Mapped[int] = mapped_column("Quantity", Integer, nullable=False)

    product: Mapped["Product"] = relationship(back_populates="order_items")
    order: Mapped["Order"] = relationship(back_populates="items")

    def __init__(
        self,
        quantity: int = 1,
        product: Optional["Product"] = None,
        product_id: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.quantity = quantity
        if product is not None:
            self.product = product
        if product_id is not None:
            self.product_id = product_id

    @validates("quantity")
    def _validate_quantity(self, key, value):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"Quantity must be an integer, got {value!r}")
        if value < 1:
            raise ValidationError(f"Quantity must be at least 1, got {value}")
        return value

    def __repr__(self) -> str:
        return (
            f"OrderItem(id={self.id!r}, order_id={self.order_id!r}, "
            f"product_id={self.product_id!r}, quantity={self.quantity!r})"
        )
