from datetime import datetime
from typing import TYPE_CHECKING, Iterable, List, Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shop_orders.models.base import Base

if TYPE_CHECKING:
    from shop_orders.models.order_item import OrderItem


class Order(Base):
    __tablename__ = "Orders"

    id: Mapped[int] = mapped_column("Id", primary_key=True, autoincrement=True)
    created_date: Mapped[datetime] = mapped_column("CreatedDate", DateTime, nullable=False)

    items: Mapped[List["OrderItem"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    def __init__(
        self,
        created_date: Optional[datetime] = None,
        items: Optional[Iterable["OrderItem"]] = None,
        **kwargs,
    ):
        """created_date defaults to the local time of construction."""
        super().__init__(**kwargs)
        self.created_date = created_date if created_date is not None else datetime.now()
        self.items = list(items or [])

    def __repr__(self) -> str:
        return f"Order(id={self.id!r}, created_date={self.created_date!r})"
