from contextlib import contextmanager

from loguru import logger
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from shop_orders.core.config import Settings
from shop_orders.core.metrics import STORAGE_ERRORS_TOTAL
from shop_orders.exceptions import StorageError
from shop_orders.models import Base


def _connect_args(url: str, timeout: float) -> dict:
    backend = make_url(url).get_backend_name()
    if backend == "sqlite":
        # сколько ждать снятия блокировки файла БД
        return {"timeout": timeout}
    if backend == "postgresql":
        return {
            "connect_timeout": max(1, int(timeout)),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        }
    return {}


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(settings: Settings) -> Engine:
    url = settings.DATABASE_URL
    engine = create_engine(
        url,
        echo=settings.DB_ECHO,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        connect_args=_connect_args(url, settings.DB_OPERATION_TIMEOUT),
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    logger.info(
        "Database engine created. dialect='{dialect}', timeout={timeout}s",
        dialect=engine.dialect.name,
        timeout=settings.DB_OPERATION_TIMEOUT,
    )
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        expire_on_commit=False,  # объекты остаются читаемыми после commit
        autoflush=False,
    )


@contextmanager
def storage_errors(operation: str, service: str = "shop_orders"):
    """Translate SQLAlchemy/driver failures inside the block into StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(
            "Storage operation '{operation}' failed: {error}",
            operation=operation,
            error=str(e),
        )
        STORAGE_ERRORS_TOTAL.labels(service=service, operation=operation).inc()
        raise StorageError(f"{operation} failed: {e}", operation=operation) from e


def ensure_schema(engine: Engine) -> None:
    """Create Products, Orders and OrderItems if they are absent. Idempotent."""
    logger.info("Ensuring database schema exists")
    with storage_errors("ensure_schema"):
        Base.metadata.create_all(engine, checkfirst=True)
    logger.info(
        "Database schema ready. tables={tables}",
        tables=sorted(Base.metadata.tables),
    )
