import sys

from loguru import logger

from shop_orders.core.config import Settings


def setup_logging(settings: Settings) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL.upper(),
        serialize=settings.LOG_JSON,
        backtrace=False,
        diagnose=False,
    )
    logger.configure(extra={"service": settings.SERVICE_NAME})
