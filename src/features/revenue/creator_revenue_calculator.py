"""
Creator revenue attribution.

Creators receive half of what the customer paid for their products. A standalone product pays its creator
directly; a bundle's sale price is split across its constituents proportionally to their own (undiscounted)
prices, and each creator receives half of their proportional slice. The platform keeps the remainder,
including every rounding remainder.
"""

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Literal

CREATOR_REVENUE_SHARE = Fraction(1, 2)


@dataclass(kw_only = True)
class BundleProduct:
    source_id: str
    creator_id: str | None = None
    price: int


@dataclass(kw_only = True)
class RevenueItem:
    type: Literal["product", "bundle"]
    price: int
    creator_id: str | None = None
    bundle_products: list[BundleProduct] = field(default_factory = list)


@dataclass(kw_only = True)
class CreatorRevenue:
    creator_id: str
    amount: int


@dataclass(kw_only = True)
class OrderRevenueResult:
    order_total: int
    total_creator_payout: int
    creator_revenues: list[CreatorRevenue]
    platform_revenue: int


def calculate_product_creator_revenue(price: int, creator_id: str | None) -> int:
    if not creator_id:
        return 0
    return __floor_share(price)


def calculate_bundle_creator_revenue(bundle_price: int, products: list[BundleProduct] | None) -> list[CreatorRevenue]:
    if not products:
        return []

    # products without a creator still weigh in, their slice stays with the platform
    total_product_value = sum(product.price for product in products)
    if total_product_value == 0:
        return []

    revenue_by_creator: dict[str, int] = {}
    for product in products:
        if not product.creator_id:
            continue
        proportion = Fraction(product.price, total_product_value)
        share = __floor_share(bundle_price * proportion)  # floored per product, never on the aggregate
        revenue_by_creator[product.creator_id] = revenue_by_creator.get(product.creator_id, 0) + share

    return __to_creator_revenues(revenue_by_creator)


def calculate_order_creator_revenue(items: list[RevenueItem]) -> OrderRevenueResult:
    order_total = sum(item.price for item in items)
    revenue_by_creator: dict[str, int] = {}

    for item in items:
        if item.type == "product":
            if item.creator_id:
                revenue = calculate_product_creator_revenue(item.price, item.creator_id)
                revenue_by_creator[item.creator_id] = revenue_by_creator.get(item.creator_id, 0) + revenue
        elif item.type == "bundle":
            for bundle_revenue in calculate_bundle_creator_revenue(item.price, item.bundle_products):
                creator_id = bundle_revenue.creator_id
                revenue_by_creator[creator_id] = revenue_by_creator.get(creator_id, 0) + bundle_revenue.amount

    creator_revenues = __to_creator_revenues(revenue_by_creator)
    total_creator_payout = sum(revenue.amount for revenue in creator_revenues)
    return OrderRevenueResult(
        order_total = order_total,
        total_creator_payout = total_creator_payout,
        creator_revenues = creator_revenues,
        platform_revenue = order_total - total_creator_payout,
    )


def validate_creator_payouts(result: OrderRevenueResult) -> bool:
    """Creators collectively may never receive more than half of the order total."""
    max_payout = __floor_share(result.order_total)
    return result.total_creator_payout <= max_payout


def __floor_share(amount: int | Fraction) -> int:
    return int((amount * CREATOR_REVENUE_SHARE) // 1)


def __to_creator_revenues(revenue_by_creator: dict[str, int]) -> list[CreatorRevenue]:
    return [
        CreatorRevenue(creator_id = creator_id, amount = amount)
        for creator_id, amount in revenue_by_creator.items()
    ]
