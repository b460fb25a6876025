from pydantic import BaseModel, ConfigDict, Field

from inventory_api.schemas.product import ProductRead


class PaginationMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")


class PaginatedProducts(BaseModel):
    products: list[ProductRead]
    pagination: PaginationMeta
