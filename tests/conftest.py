import pytest

from shop_orders.core.config import Settings
from shop_orders.db import create_db_engine, create_session_factory, ensure_schema
from shop_orders.init_db import seed_products
from shop_orders.service import OrderService, ProductService


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'shop.db'}",
        DB_OPERATION_TIMEOUT=5,
        SERVICE_NAME="shop_orders_test",
    )


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings)
    ensure_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def order_service(session_factory):
    return OrderService(session_factory, service_name="shop_orders_test")


@pytest.fixture
def product_service(session_factory):
    return ProductService(session_factory, service_name="shop_orders_test")


@pytest.fixture
def seeded(session_factory, product_service):
    """Seed the default catalogue and return the products keyed by name."""
    seed_products(session_factory)
    return {p.name: p for p in product_service.get_all_products()}
