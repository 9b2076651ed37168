from dataclasses import dataclass
from urllib.parse import quote

from db.model.order import OrderDB
from db.schema.order import Order
from db.schema.order_item import OrderItem
from db.sql import get_detached_session
from di.di import DI
from features.notifications.email_templates import download_ready, purchase_receipt
from features.pricing.price_resolver import format_price
from util import log
from util.config import config
from util.error_codes import ORDER_NOT_FOUND
from util.errors import NotFoundError


@dataclass(kw_only = True)
class FulfillmentResult:
    order_id: int
    sent_count: int
    failed_count: int
    skipped: bool = False


class FulfillmentDispatcher:
    """
    Delivers a persisted order to its customer: one download email per item, then a receipt.

    Email delivery is best-effort. A failed email is logged and counted, and never reverts the order's
    fulfilled flag or stops the remaining emails from going out.
    """

    __di: DI

    def __init__(self, di: DI):
        self.__di = di

    def dispatch(self, order_id: int) -> FulfillmentResult:
        order_db = self.__di.order_crud.get(order_id)
        if not order_db:
            raise NotFoundError(f"Order '{order_id}' not found", ORDER_NOT_FOUND, context = {"order_id": order_id})
        order = Order.model_validate(order_db)
        items = [OrderItem.model_validate(item) for item in self.__di.order_item_crud.get_all_by_order(order.id)]

        if order.status != OrderDB.Status.completed:
            log.w("Order is not completed, skipping fulfillment", order_id = order.id, status = order.status.value)
            return FulfillmentResult(order_id = order.id, sent_count = 0, failed_count = 0, skipped = True)

        if not order.fulfilled:
            self.__di.order_crud.mark_fulfilled(order.id)

        sent_count = 0
        failed_count = 0
        expires_in = f"{config.download_link_expiry_days} days"
        for index, item in enumerate(items):
            template = download_ready(item.title, self.__download_url(order, index), expires_in)
            if self.__send(order, template.subject, template.html, item_id = item.id):
                sent_count += 1
            else:
                failed_count += 1

        receipt = purchase_receipt(
            str(order.id),
            [item.title for item in items],
            format_price(order.total_amount, order.currency),
        )
        if self.__send(order, receipt.subject, receipt.html):
            sent_count += 1
        else:
            failed_count += 1

        log.i("Fulfillment dispatched", order_id = order.id, sent = sent_count, failed = failed_count)
        return FulfillmentResult(order_id = order.id, sent_count = sent_count, failed_count = failed_count)

    def __send(self, order: Order, subject: str, html: str, item_id: int | None = None) -> bool:
        try:
            self.__di.email_sender.send_email(order.customer_email, subject, html)
            return True
        except Exception as e:
            log.e(f"Failed to send email '{subject}'", e, order_id = order.id, item_id = item_id)
            return False

    @staticmethod
    def __download_url(order: Order, index: int) -> str:
        return f"{config.app_url}/api/download/{order.id}/{index}?email={quote(order.customer_email, safe = '')}"


def dispatch_fulfillment(order_id: int):
    """Runs fulfillment in its own database session, suitable for background tasks."""
    try:
        with get_detached_session() as db:
            DI(db).fulfillment_dispatcher.dispatch(order_id)
    except Exception as e:
        log.e("Background fulfillment failed", e, order_id = order_id)
