from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.models.product import Product
from inventory_api.services.exceptions import ProductNotFoundError
from .query import ProductQuery, build_count, build_page


async def get_product(db: AsyncSession, product_id: int) -> Product:
    product = await db.get(Product, product_id)
    if product is None:
        raise ProductNotFoundError()
    return product


async def get_product_by_name(db: AsyncSession, name: str) -> Product | None:
    result = await db.execute(select(Product).where(Product.name == name).limit(1))
    return result.scalars().first()


async def list_products_with_total(
    db: AsyncSession,
    query: ProductQuery,
) -> tuple[Sequence[Product], int]:
    total = (await db.execute(build_count(query))).scalar_one()
    items = (await db.execute(build_page(query))).scalars().all()
    return items, total


async def search_products(db: AsyncSession, name: str) -> Sequence[Product]:
    stmt = select(Product).where(Product.name.like(f"%{name}%")).order_by(Product.id)
    result = await db.execute(stmt)
    return result.scalars().all()


async def list_all_products(db: AsyncSession) -> Sequence[Product]:
    result = await db.execute(select(Product).order_by(Product.id))
    return result.scalars().all()


async def list_categories(db: AsyncSession) -> list[str]:
    stmt = (
        select(Product.category)
        .where(Product.category.is_not(None), Product.category != "")
        .distinct()
        .order_by(Product.category)
    )
    result = await db.execute(stmt)
    return [category for category in result.scalars().all() if category]
