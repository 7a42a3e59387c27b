from prometheus_client import Counter


ORDERS_SERVICE_OPERATIONS_TOTAL = Counter(
    "shop_orders_service_operations_total",
    "Order service operations",
    ["service", "operation", "status"],
)

PRODUCTS_SERVICE_OPERATIONS_TOTAL = Counter(
    "shop_products_service_operations_total",
    "Product service operations",
    ["service", "operation", "status"],
)

STORAGE_ERRORS_TOTAL = Counter(
    "shop_storage_errors_total",
    "Store operations that failed with a storage error",
    ["service", "operation"],
)

SEEDED_PRODUCTS_TOTAL = Counter(
    "shop_seeded_products_total",
    "Products inserted by the startup seed",
    ["service"],
)
