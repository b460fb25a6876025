from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InventoryHistory(Base):
    """Stock change audit row.

    ``product_id`` is a plain column, not a foreign key: rows outlive the
    product they describe.
    """

    __tablename__ = "inventory_history"
    __table_args__ = (
        Index("ix_inventory_history_product_date", "product_id", "change_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(Integer, nullable=False)
    old_quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)
    new_quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)
    change_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    user_info: Mapped[str | None] = mapped_column(String(512), nullable=True)
