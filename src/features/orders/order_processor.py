from dataclasses import replace

from db.crud.order import DuplicateOrderError
from db.model.order import OrderDB
from db.model.order_item import OrderItemDB
from db.schema.order import Order, OrderSave
from db.schema.order_item import OrderItemSave
from di.di import DI
from features.content.content_models import ContentBundle, ContentProduct
from features.orders.order_models import OrderData, ProcessOrderResult, PurchasedItem, parse_purchased_items
from features.pricing.price_resolver import resolve_price, split_proportionally
from features.revenue.creator_revenue_calculator import (
    BundleProduct,
    OrderRevenueResult,
    RevenueItem,
    calculate_order_creator_revenue,
    validate_creator_payouts,
)
from util import log
from util.config import config


class OrderProcessor:
    """
    Turns a paid checkout into a persisted order.

    Webhooks are delivered at least once, so the same external order may arrive several times, even in parallel.
    The existence pre-check handles the common case; the unique constraint on the external order ID handles
    the race, and both outcomes are reported the same way (`already_exists`).
    """

    __di: DI

    def __init__(self, di: DI):
        self.__di = di

    def process_order(self, order_data: OrderData) -> ProcessOrderResult:
        external_order_id = order_data.external_order_id
        log.i(
            "Processing order",
            external_order_id = external_order_id,
            email = order_data.customer_email,
            amount = order_data.amount,
        )

        if self.__di.order_crud.exists(external_order_id):
            log.i("Order already exists, skipping creation", external_order_id = external_order_id)
            return ProcessOrderResult(success = True, already_exists = True)

        metadata = order_data.metadata or {}
        try:
            purchased_items = parse_purchased_items(metadata.get("items"))
        except ValueError as e:
            log.e("Failed to parse items metadata", e, external_order_id = external_order_id)
            return ProcessOrderResult(success = False, error = "Failed to parse items metadata")

        if not purchased_items:
            log.e("No items found in order metadata", external_order_id = external_order_id)
            return ProcessOrderResult(success = False, error = "No items found in order metadata")

        order_items, revenue_items = self.__expand_items(purchased_items)
        if not order_items:
            log.e("No valid items found for order", external_order_id = external_order_id)
            return ProcessOrderResult(success = False, error = "No valid items found for order")

        order_items, revenue_items = self.__fit_to_charged_amount(order_data, order_items, revenue_items)
        revenue = self.__attribute_revenue(external_order_id, revenue_items)

        try:
            order_db = self.__di.order_crud.create_with_items(
                OrderSave(
                    external_order_id = external_order_id,
                    external_checkout_id = order_data.checkout_id or metadata.get("checkoutId"),
                    customer_email = order_data.customer_email,
                    total_amount = order_data.amount,
                    currency = order_data.currency,
                    status = OrderDB.Status.completed,
                    fulfilled = False,
                ),
                order_items,
            )
        except DuplicateOrderError:
            log.i("Order was created by a concurrent delivery, skipping", external_order_id = external_order_id)
            return ProcessOrderResult(success = True, already_exists = True)
        except Exception as e:
            log.e("Failed to create order records", e, external_order_id = external_order_id, item_count = len(order_items))
            return ProcessOrderResult(success = False, error = f"Failed to process order: {e}")

        order = Order.model_validate(order_db)
        log.i("Order records created", order_id = order.id, item_count = len(order_items))

        self.__track_purchases(order.id, order_items)

        try:
            self.__di.order_crud.mark_fulfilled(order.id)
        except Exception as e:
            log.e("Failed to mark order as fulfilled", e, order_id = order.id, external_order_id = external_order_id)
            return ProcessOrderResult(success = False, error = f"Failed to process order: {e}")
        log.i("Order marked as fulfilled", order_id = order.id)

        return ProcessOrderResult(success = True, order_id = order.id, revenue = revenue)

    def __expand_items(self, purchased_items: list[PurchasedItem]) -> tuple[list[OrderItemSave], list[RevenueItem]]:
        order_items: list[OrderItemSave] = []
        revenue_items: list[RevenueItem] = []

        for purchased_item in purchased_items:
            item_type = OrderItemDB.ItemType.lookup(purchased_item.type)
            if not item_type:
                log.w(f"Skipping unknown item type '{purchased_item.type}'", source_id = purchased_item.source_id)
                continue
            try:
                if item_type == OrderItemDB.ItemType.product:
                    product = self.__di.content_store.fetch_product(purchased_item.source_id)
                    if not product:
                        log.w("Product not found in the content store", source_id = purchased_item.source_id)
                        continue
                    order_item, revenue_item = self.__expand_product(product)
                    order_items.append(order_item)
                    revenue_items.append(revenue_item)
                else:
                    bundle = self.__di.content_store.fetch_bundle(purchased_item.source_id)
                    if not bundle or not bundle.products:
                        log.w("Bundle not found or empty in the content store", source_id = purchased_item.source_id)
                        continue
                    bundle_order_items, revenue_item = self.__expand_bundle(bundle)
                    order_items.extend(bundle_order_items)
                    revenue_items.append(revenue_item)
            except Exception as e:
                log.e("Failed to fetch item details for the order", e, source_id = purchased_item.source_id)

        return order_items, revenue_items

    @staticmethod
    def __expand_product(product: ContentProduct) -> tuple[OrderItemSave, RevenueItem]:
        price = resolve_price(product.custom_price, product.subcategory_default_price)
        order_item = OrderItemSave(
            item_type = OrderItemDB.ItemType.product,
            source_id = product.id,
            title = product.title,
            price = price,
            creator_id = product.creator_id,
            file_key = product.file_key,
            max_downloads = config.max_downloads_per_item,
        )
        revenue_item = RevenueItem(type = "product", price = price, creator_id = product.creator_id)
        return order_item, revenue_item

    @staticmethod
    def __expand_bundle(bundle: ContentBundle) -> tuple[list[OrderItemSave], RevenueItem]:
        resolved_prices = [
            resolve_price(product.custom_price, product.subcategory_default_price)
            for product in bundle.products
        ]
        proportional_prices = split_proportionally(bundle.price, resolved_prices)

        order_items = [
            OrderItemSave(
                item_type = OrderItemDB.ItemType.bundle,
                source_id = product.id,
                title = f"{product.title} (from {bundle.title})",
                price = proportional_price,
                creator_id = product.creator_id,
                file_key = product.file_key,
                max_downloads = config.max_downloads_per_item,
            )
            for product, proportional_price in zip(bundle.products, proportional_prices)
        ]
        revenue_item = RevenueItem(
            type = "bundle",
            price = bundle.price,
            bundle_products = [
                BundleProduct(source_id = product.id, creator_id = product.creator_id, price = resolved_price)
                for product, resolved_price in zip(bundle.products, resolved_prices)
            ],
        )
        return order_items, revenue_item

    @staticmethod
    def __fit_to_charged_amount(
        order_data: OrderData,
        order_items: list[OrderItemSave],
        revenue_items: list[RevenueItem],
    ) -> tuple[list[OrderItemSave], list[RevenueItem]]:
        # item prices come from the catalog and may be higher than what the customer actually paid
        charged = order_data.amount
        items_total = sum(item.price for item in order_items)
        if items_total > charged:
            log.w(
                "Item prices exceed the charged amount, scaling them down",
                external_order_id = order_data.external_order_id,
                items_total = items_total,
                charged = charged,
            )
            scaled_prices = split_proportionally(charged, [item.price for item in order_items])
            order_items = [
                item.model_copy(update = {"price": price})
                for item, price in zip(order_items, scaled_prices)
            ]
        if sum(item.price for item in revenue_items) > charged:
            scaled_prices = split_proportionally(charged, [item.price for item in revenue_items])
            revenue_items = [replace(item, price = price) for item, price in zip(revenue_items, scaled_prices)]
        return order_items, revenue_items

    @staticmethod
    def __attribute_revenue(external_order_id: str, revenue_items: list[RevenueItem]) -> OrderRevenueResult:
        revenue = calculate_order_creator_revenue(revenue_items)
        if not validate_creator_payouts(revenue):
            log.e(
                "Creator payouts exceed the allowed share of the order",
                external_order_id = external_order_id,
                order_total = revenue.order_total,
                total_creator_payout = revenue.total_creator_payout,
            )
        log.d(
            "Order revenue attributed",
            external_order_id = external_order_id,
            creator_payout = revenue.total_creator_payout,
            platform_revenue = revenue.platform_revenue,
            creators = len(revenue.creator_revenues),
        )
        return revenue

    def __track_purchases(self, order_id: int, order_items: list[OrderItemSave]):
        for order_item in order_items:
            try:
                self.__di.analytics_tracker.track_purchase(order_item.source_id, order_item.item_type.value)
            except Exception as e:
                log.w("Failed to track purchase analytics", e, order_id = order_id, source_id = order_item.source_id)
