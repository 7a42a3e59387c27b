from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, List

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from shop_orders.exceptions import ValidationError
from shop_orders.models.base import Base
from shop_orders.utils import to_money

MAX_PRICE_INTEGER_DIGITS = 16

if TYPE_CHECKING:
    from shop_orders.models.order_item import OrderItem


class Product(Base):
    __tablename__ = "Products"

    id: Mapped[int] = mapped_column("Id", primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column("Name", String(200), nullable=False)
    price: Mapped[Decimal] = mapped_column("Price", Numeric(18, 2), nullable=False)

    # Не владеет позициями: удаление товара с позициями запрещено на уровне БД
    order_items: Mapped[List["OrderItem"]] = relationship(
        back_populates="product",
        passive_deletes="all",
    )

    @validates("price")
    def _validate_price(self, key, value):
        try:
            price = to_money(value)
        except (InvalidOperation, TypeError, ValueError) as e:
            raise ValidationError(f"Price must be a number, got {value!r}") from e
        if not price.is_finite():
            raise ValidationError(f"Price must be a finite number, got {value!r}")
        if price < 0:
            raise ValidationError(f"Price must be non-negative, got {price}")
        # Numeric(18, 2): at most 16 digits before the point
        if price.adjusted() >= MAX_PRICE_INTEGER_DIGITS:
            raise ValidationError(
                f"Price must have at most {MAX_PRICE_INTEGER_DIGITS} integer digits, got {price}"
            )
        return price

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, name={self.name!r}, price={self.price!r})"
