from enum import Enum

from sqlalchemy import Column, DateTime, Index, Integer, String
from sqlalchemy import Enum as EnumSQL
from sqlalchemy.sql import func

from db.model.base import BaseModel
from db.model.order_item import OrderItemDB


class AnalyticsEventDB(BaseModel):
    __tablename__ = "analytics_events"

    class EventType(Enum):
        view = "view"
        add_to_cart = "add_to_cart"
        purchase = "purchase"

        @classmethod
        def lookup(cls, value) -> "AnalyticsEventDB.EventType | None":
            try:
                return cls(value)
            except ValueError:
                return None

    id = Column(Integer, primary_key = True, autoincrement = True)
    event_type = Column(EnumSQL(EventType), nullable = False)
    source_id = Column(String, nullable = False)
    item_type = Column(EnumSQL(OrderItemDB.ItemType), nullable = False)
    session_id = Column(String, nullable = True)
    created_at = Column(DateTime, default = func.now(), nullable = False)

    __table_args__ = (
        Index("idx_analytics_events_source_type", source_id, event_type),
    )
