"""Routes for the product catalog, its opinions and its questions."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from storefront.api.security import Principal, require_scope, scoped_user
from storefront.db.entities import User
from storefront.db.session import SessionDependency
from storefront.models.product import (
    NewOpinionRequest,
    NewProductRequest,
    NewQuestionRequest,
    ProductDetailsResponse,
)
from storefront.services.catalog import create_product, get_product_details
from storefront.services.feedback import create_opinion, create_question
from storefront.services.photo_uploader import PhotoUploaderDependency
from storefront.services.queue.notification_queue import (
    NotificationQueue,
    get_notification_queue,
)

router = APIRouter(prefix="/api", tags=["products"])

ProductWriter = Annotated[User, Depends(scoped_user("products:write"))]
QueueDependency = Annotated[NotificationQueue, Depends(get_notification_queue)]


@router.post(
    "/products",
    status_code=status.HTTP_201_CREATED,
    summary="Create a product owned by the authenticated user",
)
async def create(
    payload: NewProductRequest,
    session: SessionDependency,
    owner: ProductWriter,
    uploader: PhotoUploaderDependency,
) -> Response:
    product = await create_product(session, payload, owner, uploader)
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/api/products/{product.id}"},
    )


@router.get(
    "/products/{product_id}",
    response_model=ProductDetailsResponse,
    summary="Product detail page data",
)
async def details(
    product_id: uuid.UUID,
    session: SessionDependency,
    _: Annotated[Principal, Depends(require_scope("products:read"))],
) -> ProductDetailsResponse:
    return await get_product_details(session, product_id)


@router.post(
    "/opinions",
    status_code=status.HTTP_201_CREATED,
    summary="Rate and review a product",
)
async def new_opinion(
    payload: NewOpinionRequest,
    session: SessionDependency,
    author: ProductWriter,
) -> Response:
    opinion = await create_opinion(session, payload, author)
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/api/opinions/{opinion.id}"},
    )


@router.post(
    "/products/{product_id}/questions",
    status_code=status.HTTP_201_CREATED,
    summary="Ask the product owner a question",
)
async def new_question(
    product_id: uuid.UUID,
    payload: NewQuestionRequest,
    session: SessionDependency,
    asker: ProductWriter,
    notifications: QueueDependency,
) -> Response:
    question = await create_question(
        session, product_id, payload, asker, notifications
    )
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/api/products/{product_id}/questions/{question.id}"},
    )
