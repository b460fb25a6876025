from typing import Literal

from pydantic import BaseModel, Field
from sqlalchemy import Select, func, select

from inventory_api.models.product import Product

SortField = Literal["name", "stock", "category", "brand", "id"]
SortOrder = Literal["asc", "desc"]

SORT_COLUMNS = {
    "name": Product.name,
    "stock": Product.stock,
    "category": Product.category,
    "brand": Product.brand,
    "id": Product.id,
}


class ProductQuery(BaseModel):
    """Validated list parameters: filters, ordering and page window."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=100, ge=1, le=100)
    sort: SortField = "id"
    order: SortOrder = "asc"
    category: str | None = None
    name: str | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def build_filtered(query: ProductQuery) -> Select:
    stmt = select(Product)
    if query.category:
        stmt = stmt.where(Product.category == query.category)
    if query.name:
        stmt = stmt.where(Product.name.like(f"%{query.name}%"))
    return stmt


def build_page(query: ProductQuery) -> Select:
    column = SORT_COLUMNS[query.sort]
    ordering = column.desc() if query.order == "desc" else column.asc()
    stmt = build_filtered(query).order_by(ordering)
    if query.sort != "id":
        stmt = stmt.order_by(Product.id.asc())
    return stmt.offset(query.offset).limit(query.limit)


def build_count(query: ProductQuery) -> Select:
    base_subq = build_filtered(query).subquery()
    return select(func.count()).select_from(base_subq)
