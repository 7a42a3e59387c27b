import sys
from decimal import Decimal
from typing import Iterable, TextIO

from shop_orders.schemas import OrderItemOut, OrderOut
from shop_orders.service import OrderService
from shop_orders.utils import to_money

NO_ORDERS_FOUND = "No orders found"
ORDERS_EXIST = "Orders exist in system"
NO_ORDERS_IN_SYSTEM = "No orders in system"


def line_total(item: OrderItemOut) -> Decimal:
    return to_money(item.product.price * item.quantity)


def order_total(order: OrderOut) -> Decimal:
    return to_money(sum((line_total(i) for i in order.items), Decimal("0.00")))


def format_order(order: OrderOut) -> str:
    lines = [
        f"Order #{order.id} ({order.created_date:%Y-%m-%d %H:%M:%S})",
        "Items:",
    ]
    for item in order.items:
        lines.append(f"  {item.product.name} x {item.quantity} = {line_total(item)}$")
    lines.append(f"Total: {order_total(order)}$")
    return "\n".join(lines)


def print_orders(orders: Iterable[OrderOut], out: TextIO | None = None) -> None:
    out = out or sys.stdout
    orders = list(orders)
    if not orders:
        print(NO_ORDERS_FOUND, file=out)
        return
    for order in orders:
        print(format_order(order), file=out)


def display_orders(service: OrderService, out: TextIO | None = None) -> None:
    print_orders(service.get_all_orders(), out=out)


def get_order_status(service: OrderService) -> str:
    return ORDERS_EXIST if service.get_all_orders() else NO_ORDERS_IN_SYSTEM
