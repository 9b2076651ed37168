from api.model.payment_webhook_payload import PaymentEventData, PaymentWebhookPayload
from db.model.order import OrderDB
from di.di import DI
from features.notifications.email_templates import EmailTemplate, failed_payment, refund_processed
from features.orders.order_models import OrderData
from util import log
from util.config import config
from util.error_codes import ORDER_PROCESSING_FAILED
from util.errors import InternalError


class PaymentWebhookController:
    """Routes verified payment processor events. Returns the ID of an order that still needs fulfillment."""

    __di: DI

    def __init__(self, di: DI):
        self.__di = di

    def handle_event(self, payload: PaymentWebhookPayload) -> int | None:
        log.i("Payment event received", event_type = payload.type, event_id = payload.data.id)
        match payload.type:
            case "order.paid":
                return self.__handle_order_paid(payload.data)
            case "order.refunded":
                self.__handle_order_refunded(payload.data)
            case "order.failed":
                self.__handle_payment_failed(payload.data, retry_url = f"{config.app_url}/cart")
            case "checkout.failed":
                self.__handle_payment_failed(payload.data, retry_url = payload.data.url or f"{config.app_url}/cart")
            case "order.created":
                log.i("Order created, pending payment", order_id = payload.data.id, email = payload.data.customer_email)
            case "checkout.updated":
                log.i("Checkout updated", checkout_id = payload.data.id, status = payload.data.status)
            case _:
                log.i("Unhandled payment event type", event_type = payload.type)
        return None

    def __handle_order_paid(self, data: PaymentEventData) -> int | None:
        metadata = data.metadata or {}
        order_data = OrderData(
            external_order_id = data.id,
            checkout_id = metadata.get("checkoutId") or data.checkout_id,
            customer_email = data.customer_email or "",
            amount = data.amount,
            currency = data.currency,
            metadata = metadata,
        )
        result = self.__di.order_processor.process_order(order_data)

        if not result.success:
            message = log.e("Failed to process paid order", external_order_id = data.id, error = result.error)
            raise InternalError(message, ORDER_PROCESSING_FAILED, context = {"external_order_id": data.id})
        if result.already_exists:
            log.i("Order already processed, skipping fulfillment", external_order_id = data.id)
            return None
        return result.order_id

    def __handle_order_refunded(self, data: PaymentEventData):
        order_db = self.__di.order_crud.get_by_external_id(data.id)
        if not order_db:
            log.w("Refunded order not found, ignoring", external_order_id = data.id)
            return
        self.__di.order_crud.update_status(order_db.id, OrderDB.Status.refunded)
        log.i("Order marked as refunded", order_id = order_db.id, external_order_id = data.id)

        email = data.customer_email or order_db.customer_email
        self.__notify(email, refund_processed(str(order_db.id)), order_id = order_db.id)

    def __handle_payment_failed(self, data: PaymentEventData, retry_url: str):
        email = data.customer_email
        if not email:
            log.w("No customer email for the failed payment", external_id = data.id)
            return
        self.__notify(email, failed_payment(data.id, retry_url), external_id = data.id)

    def __notify(self, email: str, template: EmailTemplate, **context):
        try:
            self.__di.email_sender.send_email(email, template.subject, template.html)
            log.i(f"Email '{template.subject}' sent", **context)
        except Exception as e:
            log.e(f"Failed to send email '{template.subject}'", e, **context)
