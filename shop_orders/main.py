from loguru import logger

from shop_orders.core.config import get_settings
from shop_orders.core.logging import setup_logging
from shop_orders.db import create_db_engine, create_session_factory
from shop_orders.init_db import init_db
from shop_orders.reporting import display_orders, get_order_status
from shop_orders.service import OrderService


def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    logger.info("Startup: initializing database")

    engine = create_db_engine(settings)
    try:
        session_factory = create_session_factory(engine)
        if init_db(engine, session_factory, service_name=settings.SERVICE_NAME):
            print("Seeded initial products")

        service = OrderService(session_factory, service_name=settings.SERVICE_NAME)
        display_orders(service)
        print(get_order_status(service))
    finally:
        engine.dispose()
        logger.info("Shutdown completed")


if __name__ == "__main__":
    main()
