"""Checkout and payment gateway callback routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from storefront.api.security import Principal, require_scope, scoped_user
from storefront.config import settings
from storefront.db.entities import User
from storefront.db.session import SessionDependency
from storefront.models.purchase import (
    NewPurchaseRequest,
    PaymentConfirmationResponse,
    PaymentReturnRequest,
    PaymentUrlResponse,
)
from storefront.services.purchases import confirm_payment, start_purchase

router = APIRouter(prefix="/api", tags=["purchases"])

CONFIRMATION_ROUTE = "confirm_payment"


def _confirmation_url(request: Request) -> str:
    """Absolute URL the gateway sends the buyer back to."""

    if settings.PUBLIC_BASE_URL:
        path = request.app.url_path_for(CONFIRMATION_ROUTE)
        return f"{settings.PUBLIC_BASE_URL.rstrip('/')}{path}"
    return str(request.url_for(CONFIRMATION_ROUTE))


@router.post(
    "/purchase",
    response_model=PaymentUrlResponse,
    status_code=status.HTTP_200_OK,
    summary="Start a purchase and get the gateway payment URL",
)
async def purchase(
    payload: NewPurchaseRequest,
    request: Request,
    session: SessionDependency,
    buyer: Annotated[User, Depends(scoped_user("purchase:write"))],
) -> PaymentUrlResponse:
    _, payment_url = await start_purchase(
        session, payload, buyer, _confirmation_url(request)
    )
    return PaymentUrlResponse(payment_url=payment_url)


@router.post(
    "/purchases/confirm-payment",
    name=CONFIRMATION_ROUTE,
    response_model=PaymentConfirmationResponse,
    status_code=status.HTTP_200_OK,
    summary="Payment gateway callback",
)
async def confirm(
    payload: PaymentReturnRequest,
    session: SessionDependency,
    _: Annotated[Principal, Depends(require_scope("purchase:write"))],
) -> PaymentConfirmationResponse:
    settled = await confirm_payment(session, payload)
    return PaymentConfirmationResponse(purchase_id=settled.id, status=settled.status)
