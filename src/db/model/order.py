from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String
from sqlalchemy import Enum as EnumSQL
from sqlalchemy.sql import func

from db.model.base import BaseModel


class OrderDB(BaseModel):
    __tablename__ = "orders"

    class Status(Enum):
        completed = "completed"
        failed = "failed"
        refunded = "refunded"

        @classmethod
        def lookup(cls, value) -> "OrderDB.Status | None":
            try:
                return cls(value)
            except ValueError:
                return None

    id = Column(Integer, primary_key = True, autoincrement = True)
    external_order_id = Column(String, nullable = False, unique = True)
    external_checkout_id = Column(String, nullable = True)
    customer_email = Column(String, nullable = False)
    total_amount = Column(Integer, nullable = False)
    currency = Column(String, nullable = False)
    status = Column(EnumSQL(Status), nullable = False, default = Status.completed)
    fulfilled = Column(Boolean, nullable = False, default = False)
    created_at = Column(DateTime, default = func.now(), nullable = False)
    updated_at = Column(DateTime, default = func.now(), onupdate = func.now(), nullable = False)

    __table_args__ = (
        Index("idx_orders_customer_email", customer_email),
        Index("idx_orders_status", status),
    )
