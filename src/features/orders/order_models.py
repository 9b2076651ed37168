from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter

from features.revenue.creator_revenue_calculator import OrderRevenueResult


class PurchasedItem(BaseModel):
    """One entry of the checkout's item list, as embedded in the payment metadata."""
    model_config = ConfigDict(populate_by_name = True)

    source_id: str = Field(validation_alias = AliasChoices("sourceId", "sanityId", "source_id"))
    type: str
    external_product_ref: str | None = Field(
        default = None,
        validation_alias = AliasChoices("externalProductRef", "polarProductId", "external_product_ref"),
    )


__PURCHASED_ITEMS_ADAPTER = TypeAdapter(list[PurchasedItem])


def parse_purchased_items(raw_items: Any) -> list[PurchasedItem]:
    """Raises ValueError when the payload can't be read as a list of purchased items."""
    if not raw_items:
        return []
    if isinstance(raw_items, (str, bytes)):
        return __PURCHASED_ITEMS_ADAPTER.validate_json(raw_items)
    return __PURCHASED_ITEMS_ADAPTER.validate_python(raw_items)


@dataclass(kw_only = True)
class OrderData:
    external_order_id: str
    checkout_id: str | None = None
    customer_email: str
    amount: int
    currency: str
    metadata: dict[str, Any] | None = None


@dataclass(kw_only = True)
class ProcessOrderResult:
    success: bool
    order_id: int | None = None
    already_exists: bool = False
    error: str | None = None
    revenue: OrderRevenueResult | None = None
