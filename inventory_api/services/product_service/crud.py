from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.core.logging import get_logger
from inventory_api.db.operations import flush_async, refresh_async, rollback_async
from inventory_api.models.product import Product
from inventory_api.schemas.product import ProductCreate, ProductUpdate
from inventory_api.services.exceptions import DuplicateNameError, NoFieldsSuppliedError
from .inventory import record_stock_change
from .read import get_product, get_product_by_name

logger = get_logger(__name__)


async def create_product(db: AsyncSession, payload: ProductCreate) -> Product:
    if await get_product_by_name(db, payload.name):
        raise DuplicateNameError()

    prod = Product(**payload.model_dump())
    db.add(prod)
    try:
        await flush_async(db)
    except IntegrityError as exc:
        await rollback_async(db)
        raise DuplicateNameError() from exc

    await refresh_async(db, prod)
    logger.info("Product created", extra={"product_id": prod.id, "product_name": prod.name})
    return prod


async def update_product(
    db: AsyncSession,
    product_id: int,
    patch: ProductUpdate,
    user_info: str | None = None,
) -> Product:
    prod = await get_product(db, product_id)

    data = patch.changes()
    if not data:
        raise NoFieldsSuppliedError()

    new_name = data.get("name")
    if new_name is not None and new_name != prod.name:
        existing = await get_product_by_name(db, new_name)
        if existing is not None and existing.id != prod.id:
            raise DuplicateNameError()

    old_stock = prod.stock
    for field, value in data.items():
        setattr(prod, field, value)

    db.add(prod)
    try:
        await flush_async(db)
    except IntegrityError as exc:
        await rollback_async(db)
        raise DuplicateNameError() from exc

    if "stock" in data and data["stock"] != old_stock:
        await record_stock_change(db, prod.id, old_stock, data["stock"], user_info)

    await refresh_async(db, prod)
    logger.info("Product updated", extra={"product_id": prod.id, "fields": sorted(data)})
    return prod


async def delete_product(db: AsyncSession, product_id: int) -> None:
    prod = await get_product(db, product_id)
    await db.delete(prod)
    await flush_async(db)
    logger.info("Product deleted", extra={"product_id": product_id})
