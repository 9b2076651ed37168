from datetime import datetime

from pydantic import BaseModel, ConfigDict

from db.model.order import OrderDB


class OrderBase(BaseModel):
    external_order_id: str
    external_checkout_id: str | None = None
    customer_email: str
    total_amount: int
    currency: str
    status: OrderDB.Status = OrderDB.Status.completed
    fulfilled: bool = False


class OrderSave(OrderBase):
    pass


class Order(OrderBase):
    id: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes = True)
