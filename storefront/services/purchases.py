"""Checkout and payment confirmation.

A purchase is created PENDING without touching stock. The gateway callback
settles it exactly once: PAID (stock decremented) or FAILED (stock left as
is). Callbacks for an already settled purchase change nothing.
"""

from __future__ import annotations

import logging

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from storefront.db.entities import NAME_LENGTH, Product, Purchase, User
from storefront.db.repository import exists_where
from storefront.models.purchase import (
    NewPurchaseRequest,
    PaymentReturnRequest,
    PurchaseStatus,
)
from storefront.services.catalog import get_product
from storefront.services.payment_gateways import policy_for
from storefront.services.validation import Validator

logger = logging.getLogger(__name__)


async def validate_new_purchase(
    session: AsyncSession, request: NewPurchaseRequest
) -> Validator:
    validator = Validator()
    product_ok = validator.not_null("productId", request.product_id) and (
        await validator.registered(
            "productId", request.product_id, exists_where(session, Product.id)
        )
    )
    quantity_ok = validator.not_null("quantity", request.quantity) and (
        validator.min_value("quantity", request.quantity, 1)
    )
    validator.not_null("paymentGateway", request.payment_gateway)

    if product_ok and quantity_ok:
        product = await get_product(session, request.product_id)
        if request.quantity > product.stock_quantity:
            validator.reject(f"insufficient stock for product {product.name}")
    return validator


async def start_purchase(
    session: AsyncSession,
    request: NewPurchaseRequest,
    buyer: User,
    confirmation_url: str,
) -> tuple[Purchase, str]:
    """Create a pending purchase and return it with the gateway payment URL."""

    validator = await validate_new_purchase(session, request)
    validator.raise_if_invalid()

    purchase = Purchase(
        buyer_id=buyer.id,
        product_id=request.product_id,
        quantity=request.quantity,
        payment_gateway=request.payment_gateway,
        status=PurchaseStatus.PENDING,
    )
    session.add(purchase)
    await session.commit()

    payment_url = policy_for(purchase.payment_gateway).payment_url(
        purchase.id, confirmation_url
    )
    logger.info(
        "Started purchase %s",
        purchase.id,
        extra={
            "product_id": str(purchase.product_id),
            "quantity": purchase.quantity,
            "gateway": purchase.payment_gateway.value,
        },
    )
    return purchase, payment_url


async def validate_payment_return(
    session: AsyncSession, request: PaymentReturnRequest
) -> Validator:
    validator = Validator()
    if validator.not_null("purchaseId", request.purchase_id):
        await validator.registered(
            "purchaseId", request.purchase_id, exists_where(session, Purchase.id)
        )
    if validator.not_blank("paymentId", request.payment_id):
        validator.max_length("paymentId", request.payment_id.strip(), NAME_LENGTH)
    if validator.not_blank("status", request.status):
        validator.max_length("status", request.status.strip(), NAME_LENGTH)
    return validator


async def _decrement_stock(session: AsyncSession, purchase: Purchase) -> bool:
    """Take the purchased units out of stock; False when not enough is left."""

    stmt = (
        update(Product)
        .where(
            Product.id == purchase.product_id,
            Product.stock_quantity >= purchase.quantity,
        )
        .values(stock_quantity=Product.stock_quantity - purchase.quantity)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    return result.rowcount == 1


async def _settle(
    session: AsyncSession, purchase: Purchase, request: PaymentReturnRequest
) -> None:
    policy = policy_for(purchase.payment_gateway)
    purchase.payment_id = request.payment_id.strip()
    purchase.gateway_status = request.status.strip()

    if not policy.is_successful(request.status):
        purchase.status = PurchaseStatus.FAILED
        return

    if await _decrement_stock(session, purchase):
        purchase.status = PurchaseStatus.PAID
    else:
        logger.warning(
            "Payment approved for purchase %s but stock ran out",
            purchase.id,
            extra={"product_id": str(purchase.product_id)},
        )
        purchase.status = PurchaseStatus.FAILED


async def confirm_payment(
    session: AsyncSession, request: PaymentReturnRequest
) -> Purchase:
    """Apply a gateway callback to a purchase."""

    validator = await validate_payment_return(session, request)
    validator.raise_if_invalid()

    purchase = await session.get(Purchase, request.purchase_id)
    if purchase.status.is_terminal:
        logger.info(
            "Ignoring callback for settled purchase %s",
            purchase.id,
            extra={"status": purchase.status.value, "payment_id": request.payment_id},
        )
        return purchase

    try:
        await _settle(session, purchase, request)
        await session.commit()
    except StaleDataError:
        # another callback settled this purchase first
        await session.rollback()
        logger.warning("Concurrent callback lost the race for purchase %s", request.purchase_id)
        purchase = await session.get(
            Purchase, request.purchase_id, populate_existing=True
        )
        return purchase

    logger.info(
        "Purchase %s settled as %s",
        purchase.id,
        purchase.status.value,
        extra={
            "gateway": purchase.payment_gateway.value,
            "payment_id": purchase.payment_id,
        },
    )
    return purchase
