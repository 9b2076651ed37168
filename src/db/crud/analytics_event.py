from sqlalchemy import func
from sqlalchemy.orm import Session

from db.model.analytics_event import AnalyticsEventDB
from db.schema.analytics_event import AnalyticsEventSave


class AnalyticsEventCRUD:

    _db: Session

    def __init__(self, db: Session):
        self._db = db

    def create(self, create_data: AnalyticsEventSave) -> AnalyticsEventDB:
        event = AnalyticsEventDB(**create_data.model_dump())
        self._db.add(event)
        self._db.commit()
        self._db.refresh(event)
        return event

    def count_by_type(self, source_id: str) -> dict[AnalyticsEventDB.EventType, int]:
        rows = self._db.query(
            AnalyticsEventDB.event_type,
            func.count(AnalyticsEventDB.id),
        ).filter(
            AnalyticsEventDB.source_id == source_id,
        ).group_by(AnalyticsEventDB.event_type).all()
        return {event_type: int(count) for event_type, count in rows}
