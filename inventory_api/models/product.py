from sqlalchemy import BigInteger, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_api.db.base import Base


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    unit:     Mapped[str | None] = mapped_column(String(64), nullable=True)
    category: Mapped[str | None] = mapped_column(String(120), nullable=True, index=True)
    brand:    Mapped[str | None] = mapped_column(String(120), nullable=True)
    status:   Mapped[str | None] = mapped_column(String(64), nullable=True)
    image:    Mapped[str | None] = mapped_column(String(512), nullable=True)

    stock: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
