from datetime import datetime

from pydantic import BaseModel, ConfigDict

from db.model.analytics_event import AnalyticsEventDB
from db.model.order_item import OrderItemDB


class AnalyticsEventBase(BaseModel):
    event_type: AnalyticsEventDB.EventType
    source_id: str
    item_type: OrderItemDB.ItemType
    session_id: str | None = None


class AnalyticsEventSave(AnalyticsEventBase):
    pass


class AnalyticsEvent(AnalyticsEventBase):
    id: int
    created_at: datetime
    model_config = ConfigDict(from_attributes = True)
