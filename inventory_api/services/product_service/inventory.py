# inventory_api/services/product_service/inventory.py
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.core.logging import get_logger
from inventory_api.db.operations import flush_async
from inventory_api.models.inventory import InventoryHistory

logger = get_logger(__name__)

UNKNOWN_CLIENT = "Unknown"
_USER_INFO_MAX = 512


async def record_stock_change(
    db: AsyncSession,
    product_id: int,
    old_quantity: int,
    new_quantity: int,
    user_info: str | None,
) -> InventoryHistory:
    """Append a history row to the current transaction, without commit."""
    entry = InventoryHistory(
        product_id=product_id,
        old_quantity=old_quantity,
        new_quantity=new_quantity,
        user_info=(user_info or UNKNOWN_CLIENT)[:_USER_INFO_MAX],
    )
    db.add(entry)
    await flush_async(db)
    logger.info(
        "Stock change recorded",
        extra={"product_id": product_id, "old_quantity": old_quantity, "new_quantity": new_quantity},
    )
    return entry


async def list_history(db: AsyncSession, product_id: int) -> Sequence[InventoryHistory]:
    stmt = (
        select(InventoryHistory)
        .where(InventoryHistory.product_id == product_id)
        .order_by(InventoryHistory.change_date.desc(), InventoryHistory.id.desc())
    )
    result = await db.execute(stmt)
    return result.scalars().all()
