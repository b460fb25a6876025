# Re-exporta las operaciones del catalogo:
from .read import (
    get_product,
    get_product_by_name,
    list_products_with_total,
    search_products,
    list_all_products,
    list_categories,
)

from .crud import (
    create_product,
    update_product,
    delete_product,
)

from .inventory import (
    record_stock_change,
    list_history,
)

from .query import (
    ProductQuery,
)

__all__ = [
    # read
    "get_product", "get_product_by_name", "list_products_with_total", "search_products",
    "list_all_products", "list_categories",
    # crud
    "create_product", "update_product", "delete_product",
    # inventory history
    "record_stock_change", "list_history",
    # query
    "ProductQuery",
]
