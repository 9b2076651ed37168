from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

if TYPE_CHECKING:
    from api.payment_webhook_controller import PaymentWebhookController
    from db.crud.analytics_event import AnalyticsEventCRUD
    from db.crud.order import OrderCRUD
    from db.crud.order_item import OrderItemCRUD
    from features.analytics.analytics_tracker import AnalyticsTracker
    from features.content.content_store import ContentStore
    from features.fulfillment.fulfillment_dispatcher import FulfillmentDispatcher
    from features.notifications.email_sender import EmailSender
    from features.orders.order_processor import OrderProcessor


class ConstructorDependencyNotMetError(Exception):
    pass


class DI:

    # Dynamic dependencies
    _db: Session | None
    # SDKs
    _content_store: "ContentStore | None"
    _email_sender: "EmailSender | None"
    # Repositories
    _order_crud: "OrderCRUD | None"
    _order_item_crud: "OrderItemCRUD | None"
    _analytics_event_crud: "AnalyticsEventCRUD | None"
    # Services
    _analytics_tracker: "AnalyticsTracker | None"
    _order_processor: "OrderProcessor | None"
    _fulfillment_dispatcher: "FulfillmentDispatcher | None"
    # Controllers
    _payment_webhook_controller: "PaymentWebhookController | None"

    def __init__(self, db: Session | None = None):
        # Dynamic dependencies
        self._db = db
        # SDKs
        self._content_store = None
        self._email_sender = None
        # Repositories
        self._order_crud = None
        self._order_item_crud = None
        self._analytics_event_crud = None
        # Services
        self._analytics_tracker = None
        self._order_processor = None
        self._fulfillment_dispatcher = None
        # Controllers
        self._payment_webhook_controller = None

    # === Cloning ===

    def clone(self, db: Session | None = None) -> "DI":
        return DI(db or self._db)

    # === Dynamic dependencies ===

    @property
    def db(self) -> Session:
        if self._db is None:
            raise ConstructorDependencyNotMetError("Database session not provided")
        return self._db

    # === SDKs ===

    @property
    def content_store(self) -> "ContentStore":
        if self._content_store is None:
            from features.content.content_store import ContentStore
            self._content_store = ContentStore()
        return self._content_store

    @property
    def email_sender(self) -> "EmailSender":
        if self._email_sender is None:
            from features.notifications.email_sender import EmailSender
            self._email_sender = EmailSender()
        return self._email_sender

    # === Repositories ===

    @property
    def order_crud(self) -> "OrderCRUD":
        if self._order_crud is None:
            from db.crud.order import OrderCRUD
            self._order_crud = OrderCRUD(self.db)
        return self._order_crud

    @property
    def order_item_crud(self) -> "OrderItemCRUD":
        if self._order_item_crud is None:
            from db.crud.order_item import OrderItemCRUD
            self._order_item_crud = OrderItemCRUD(self.db)
        return self._order_item_crud

    @property
    def analytics_event_crud(self) -> "AnalyticsEventCRUD":
        if self._analytics_event_crud is None:
            from db.crud.analytics_event import AnalyticsEventCRUD
            self._analytics_event_crud = AnalyticsEventCRUD(self.db)
        return self._analytics_event_crud

    # === Services ===

    @property
    def analytics_tracker(self) -> "AnalyticsTracker":
        if self._analytics_tracker is None:
            from features.analytics.analytics_tracker import AnalyticsTracker
            self._analytics_tracker = AnalyticsTracker(self)
        return self._analytics_tracker

    @property
    def order_processor(self) -> "OrderProcessor":
        if self._order_processor is None:
            from features.orders.order_processor import OrderProcessor
            self._order_processor = OrderProcessor(self)
        return self._order_processor

    @property
    def fulfillment_dispatcher(self) -> "FulfillmentDispatcher":
        if self._fulfillment_dispatcher is None:
            from features.fulfillment.fulfillment_dispatcher import FulfillmentDispatcher
            self._fulfillment_dispatcher = FulfillmentDispatcher(self)
        return self._fulfillment_dispatcher

    # === Controllers ===

    @property
    def payment_webhook_controller(self) -> "PaymentWebhookController":
        if self._payment_webhook_controller is None:
            from api.payment_webhook_controller import PaymentWebhookController
            self._payment_webhook_controller = PaymentWebhookController(self)
        return self._payment_webhook_controller
