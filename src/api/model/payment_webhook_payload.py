from typing import Any

from pydantic import BaseModel, field_validator


class PaymentCustomer(BaseModel):
    email: str | None = None


class PaymentEventData(BaseModel):
    id: str
    checkout_id: str | None = None
    status: str | None = None
    customer: PaymentCustomer | None = None
    amount: int = 0
    currency: str = "usd"
    metadata: dict[str, Any] | None = None
    url: str | None = None

    @field_validator("amount", mode = "before")
    @classmethod
    def coerce_amount(cls, v: Any) -> int:
        if v is None:
            return 0
        if isinstance(v, str):
            return int(v)
        return v

    @field_validator("currency", mode = "before")
    @classmethod
    def coerce_currency(cls, v: Any) -> str:
        return v or "usd"

    @property
    def customer_email(self) -> str | None:
        return self.customer.email if self.customer else None


class PaymentWebhookPayload(BaseModel):
    type: str
    data: PaymentEventData
