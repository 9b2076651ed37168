from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from db.model.order_item import OrderItemDB


class OrderItemBase(BaseModel):
    item_type: OrderItemDB.ItemType
    source_id: str
    title: str
    price: int = Field(ge = 0)
    creator_id: str | None = None
    file_key: str | None = None
    max_downloads: int


class OrderItemSave(OrderItemBase):
    pass


class OrderItem(OrderItemBase):
    id: int
    order_id: int
    downloads_used: int
    created_at: datetime
    model_config = ConfigDict(from_attributes = True)
