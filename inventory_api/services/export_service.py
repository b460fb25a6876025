from __future__ import annotations

from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.models.product import Product
from inventory_api.services import product_service

EXPORT_COLUMNS = ("id", "name", "unit", "category", "brand", "stock", "status", "image")
EXPORT_FILENAME = "products.csv"
EXPORT_MEDIA_TYPE = "text/csv"


def quote(value: str | None) -> str:
    """Always-quoted CSV field; None becomes an empty quoted string."""
    return '"' + (value or "").replace('"', '""') + '"'


def product_row(product: Product) -> str:
    return ",".join(
        [
            str(product.id),
            quote(product.name),
            quote(product.unit),
            quote(product.category),
            quote(product.brand),
            str(product.stock),
            quote(product.status),
            quote(product.image),
        ]
    )


def render_csv(products: Iterable[Product]) -> str:
    lines = [",".join(EXPORT_COLUMNS)]
    lines.extend(product_row(product) for product in products)
    return "\n".join(lines) + "\n"


async def export_products_csv(db: AsyncSession) -> bytes:
    products = await product_service.list_all_products(db)
    return render_csv(products).encode("utf-8")
