# inventory_api/schemas/inventory.py
from datetime import datetime

from pydantic import BaseModel
from pydantic.config import ConfigDict


class HistoryRead(BaseModel):
    id: int
    product_id: int
    old_quantity: int
    new_quantity: int
    change_date: datetime
    user_info: str | None

    model_config = ConfigDict(from_attributes=True)


class HistoryList(BaseModel):
    history: list[HistoryRead]
