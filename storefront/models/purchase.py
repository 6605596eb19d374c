"""Purchase and payment schemas."""

from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PaymentGateway(str, Enum):
    PAYPAL = "PAYPAL"
    PAGSEGURO = "PAGSEGURO"


class PurchaseStatus(str, Enum):
    """Lifecycle of a purchase: PENDING settles exactly once to PAID or FAILED."""

    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self is not PurchaseStatus.PENDING


class NewPurchaseRequest(BaseModel):
    """Checkout request sent by the buyer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: uuid.UUID | None = None
    quantity: int | None = None
    payment_gateway: PaymentGateway | None = None


class PaymentUrlResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    payment_url: str = Field(..., description="Where the buyer is redirected to pay")


class PaymentReturnRequest(BaseModel):
    """Callback body posted back by a payment gateway."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    purchase_id: int | None = None
    payment_id: str | None = None
    status: str | None = Field(
        None,
        description="Gateway specific status token, e.g. '1' for PayPal or 'SUCESSO' for PagSeguro",
    )


class PaymentConfirmationResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    purchase_id: int
    status: PurchaseStatus
