from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from shop_orders.schemas.product import ProductOut


class OrderItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    order_id: int
    product_id: int
    quantity: int = Field(ge=1)
    product: ProductOut


class OrderOut(BaseModel):
    """An order with every item and each item's product already loaded."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    created_date: datetime
    items: List[OrderItemOut]
