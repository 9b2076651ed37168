from sqlalchemy.exc import SQLAlchemyError

from db.model.analytics_event import AnalyticsEventDB
from db.model.order_item import OrderItemDB
from db.schema.analytics_event import AnalyticsEvent, AnalyticsEventSave
from di.di import DI
from util import log
from util.error_codes import INVALID_EVENT_TYPE, INVALID_ITEM_TYPE, MISSING_EVENT_FIELDS
from util.errors import ValidationError


class AnalyticsTracker:

    __di: DI

    def __init__(self, di: DI):
        self.__di = di

    def track_view(self, source_id: str, item_type: str, session_id: str | None = None) -> AnalyticsEvent:
        return self.track_event(AnalyticsEventDB.EventType.view.value, source_id, item_type, session_id)

    def track_add_to_cart(self, source_id: str, item_type: str, session_id: str | None = None) -> AnalyticsEvent:
        return self.track_event(AnalyticsEventDB.EventType.add_to_cart.value, source_id, item_type, session_id)

    def track_purchase(self, source_id: str, item_type: str, session_id: str | None = None) -> AnalyticsEvent:
        return self.track_event(AnalyticsEventDB.EventType.purchase.value, source_id, item_type, session_id)

    def track_event(
        self,
        event_type: str,
        source_id: str,
        item_type: str,
        session_id: str | None = None,
    ) -> AnalyticsEvent:
        if not event_type or not source_id or not item_type:
            raise ValidationError("Event type, source ID and item type are all required", MISSING_EVENT_FIELDS)

        resolved_event_type = AnalyticsEventDB.EventType.lookup(event_type)
        if not resolved_event_type:
            valid_types = ", ".join(it.value for it in AnalyticsEventDB.EventType)
            raise ValidationError(f"Invalid event type: {event_type}. Must be one of: {valid_types}", INVALID_EVENT_TYPE)

        resolved_item_type = OrderItemDB.ItemType.lookup(item_type)
        if not resolved_item_type:
            valid_types = ", ".join(it.value for it in OrderItemDB.ItemType)
            raise ValidationError(f"Invalid item type: {item_type}. Must be one of: {valid_types}", INVALID_ITEM_TYPE)

        try:
            event_db = self.__di.analytics_event_crud.create(
                AnalyticsEventSave(
                    event_type = resolved_event_type,
                    source_id = source_id,
                    item_type = resolved_item_type,
                    session_id = session_id,
                ),
            )
        except SQLAlchemyError:
            # leave the shared session usable for whoever runs next
            self.__di.db.rollback()
            raise
        log.t(f"Tracked '{resolved_event_type.value}' for {resolved_item_type.value} '{source_id}'")
        return AnalyticsEvent.model_validate(event_db)
