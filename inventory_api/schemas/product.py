from pydantic import BaseModel, ConfigDict, Field, model_validator

# mismo rango que un INTEGER de 64 bits con signo
MAX_STOCK = 2**63 - 1


# --- Product ---
class ProductBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    unit: str | None = Field(default=None, max_length=64)
    category: str | None = Field(default=None, max_length=120)
    brand: str | None = Field(default=None, max_length=120)
    stock: int = Field(default=0, ge=0, le=MAX_STOCK)
    status: str | None = Field(default=None, max_length=64)
    image: str | None = Field(default=None, max_length=512)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    """Partial update: only the fields present in the request are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    unit: str | None = Field(default=None, max_length=64)
    category: str | None = Field(default=None, max_length=120)
    brand: str | None = Field(default=None, max_length=120)
    stock: int | None = Field(default=None, ge=0, le=MAX_STOCK)
    status: str | None = Field(default=None, max_length=64)
    image: str | None = Field(default=None, max_length=512)

    @model_validator(mode="after")
    def reject_null_required(self) -> "ProductUpdate":
        for field in ("name", "stock"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ProductRead(ProductBase):
    id: int
    model_config = ConfigDict(from_attributes=True)


class ProductList(BaseModel):
    products: list[ProductRead]


class CategoryList(BaseModel):
    categories: list[str]


class MessageResponse(BaseModel):
    message: str
