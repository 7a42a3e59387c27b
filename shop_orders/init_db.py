"""
Schema creation and the default product catalogue.
"""

from decimal import Decimal

from loguru import logger
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from shop_orders.context import get_context
from shop_orders.core.metrics import SEEDED_PRODUCTS_TOTAL
from shop_orders.db import ensure_schema
from shop_orders.models import Product

DEFAULT_PRODUCTS = (
    ("Milk", Decimal("2.50")),
    ("Bread", Decimal("1.30")),
    ("Apples", Decimal("3.00")),
)


def seed_products(session_factory: sessionmaker, service_name: str = "shop_orders") -> int:
    """Insert DEFAULT_PRODUCTS when the Products table is empty.

    Returns the number of rows inserted: len(DEFAULT_PRODUCTS) or 0.
    """
    with get_context(session_factory) as ctx:
        if ctx.products.any():
            logger.info("Products already present, skipping seed")
            return 0
        ctx.products.add_all(Product(name=name, price=price) for name, price in DEFAULT_PRODUCTS)
        ctx.save()

    logger.info("Seeded initial products. count={count}", count=len(DEFAULT_PRODUCTS))
    SEEDED_PRODUCTS_TOTAL.labels(service=service_name).inc(len(DEFAULT_PRODUCTS))
    return len(DEFAULT_PRODUCTS)


def init_db(engine: Engine, session_factory: sessionmaker, service_name: str = "shop_orders") -> int:
    ensure_schema(engine)
    return seed_products(session_factory, service_name=service_name)
