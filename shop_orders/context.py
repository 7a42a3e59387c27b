from contextlib import contextmanager
from typing import Iterator

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from shop_orders.crud import OrderCollection, OrderItemCollection, ProductCollection
from shop_orders.db import storage_errors


class ShopContext:
    """One unit of work against the store: a session plus typed collections."""

    def __init__(self, session: Session):
        self.session = session
        self.products = ProductCollection(session)
        self.orders = OrderCollection(session)
        self.order_items = OrderItemCollection(session)

    def save(self) -> None:
        """Commit every staged addition and removal as one atomic unit."""
        try:
            with storage_errors("save"):
                self.session.commit()
        except Exception:
            try:
                self.session.rollback()
            except SQLAlchemyError as rollback_error:
                # исходная ошибка save важнее
                logger.error(
                    "Rollback after failed save also failed: {error}",
                    error=str(rollback_error),
                )
            raise
        logger.debug("Unit of work committed")

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ShopContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


@contextmanager
def get_context(session_factory: sessionmaker) -> Iterator[ShopContext]:
    """
    Scoped context for a single operation.
    usage:
        with get_context(session_factory) as ctx:
            ...
            ctx.save()
    Uncommitted work is rolled back when the block exits.
    """
    with storage_errors("open_session"):
        session = session_factory()
    try:
        yield ShopContext(session)
    finally:
        session.close()
