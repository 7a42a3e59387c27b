from __future__ import annotations

from decimal import Decimal
from typing import List

from loguru import logger
from sqlalchemy.orm import sessionmaker

from shop_orders.context import get_context
from shop_orders.core.metrics import PRODUCTS_SERVICE_OPERATIONS_TOTAL
from shop_orders.exceptions import ProductInUseError, StorageError, ValidationError
from shop_orders.models import Product
from shop_orders.schemas import ProductOut


class ProductService:
    def __init__(self, session_factory: sessionmaker, service_name: str = "shop_orders"):
        self._session_factory = session_factory
        self.service_name = service_name

    def _count(self, operation: str, status: str) -> None:
        PRODUCTS_SERVICE_OPERATIONS_TOTAL.labels(
            service=self.service_name,
            operation=operation,
            status=status,
        ).inc()

    def add_product(self, name: str, price: Decimal | float | str) -> ProductOut:
        self._count("add_product", "attempt")
        try:
            product = Product(name=name, price=price)
        except ValidationError:
            logger.warning(
                "Rejected product '{name}' with price={price}",
                name=name,
                price=price,
            )
            self._count("add_product", "invalid")
            raise
        try:
            with get_context(self._session_factory) as ctx:
                ctx.products.add(product)
                ctx.save()
        except StorageError:
            self._count("add_product", "error")
            raise
        logger.info(
            "Product created. id={id}, name='{name}', price={price}",
            id=product.id,
            name=product.name,
            price=product.price,
        )
        self._count("add_product", "success")
        return ProductOut.model_validate(product)

    def get_product(self, product_id: int) -> ProductOut | None:
        self._count("get_product", "attempt")
        try:
            with get_context(self._session_factory) as ctx:
                product = ctx.products.find(product_id)
                result = ProductOut.model_validate(product) if product is not None else None
        except StorageError:
            self._count("get_product", "error")
            raise
        self._count("get_product", "success" if result is not None else "not_found")
        return result

    def get_all_products(self) -> List[ProductOut]:
        self._count("get_all_products", "attempt")
        try:
            with get_context(self._session_factory) as ctx:
                products = [ProductOut.model_validate(p) for p in ctx.products.all()]
        except StorageError:
            self._count("get_all_products", "error")
            raise
        logger.info("Products list retrieved, count={count}", count=len(products))
        self._count("get_all_products", "success")
        return products

    def remove_product(self, product_id: int) -> bool:
        """Delete an unreferenced product.

        Returns False if the product does not exist; raises ProductInUseError
        while any order item still points at it.
        """
        self._count("remove_product", "attempt")
        try:
            with get_context(self._session_factory) as ctx:
                product = ctx.products.find(product_id)
                if product is None:
                    logger.warning(
                        "Attempt to delete non-existent product with id={id}",
                        id=product_id,
                    )
                    self._count("remove_product", "not_found")
                    return False

                references = ctx.order_items.count_for_product(product_id)
                if references:
                    logger.warning(
                        "Product id={id} is still used by {references} order items",
                        id=product_id,
                        references=references,
                    )
                    self._count("remove_product", "in_use")
                    raise ProductInUseError(product_id, references)

                ctx.products.remove(product)
                ctx.save()
        except StorageError:
            self._count("remove_product", "error")
            raise

        logger.info("Product with id={id} successfully deleted", id=product_id)
        self._count("remove_product", "success")
        return True
