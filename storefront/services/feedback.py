"""Product opinions and questions."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.entities import NAME_LENGTH, Opinion, Product, Question, User
from storefront.db.repository import exists_where
from storefront.models.product import NewOpinionRequest, NewQuestionRequest
from storefront.services.catalog import get_product
from storefront.services.queue.notification_queue import NotificationQueue
from storefront.services.validation import Validator

logger = logging.getLogger(__name__)

MAX_OPINION_DESCRIPTION_LENGTH = 500


async def validate_new_opinion(
    session: AsyncSession, request: NewOpinionRequest
) -> Validator:
    validator = Validator()
    if validator.not_null("rating", request.rating):
        validator.between("rating", request.rating, 1, 5)
    if validator.not_blank("title", request.title):
        validator.max_length("title", request.title.strip(), NAME_LENGTH)
    validator.max_length(
        "description", request.description, MAX_OPINION_DESCRIPTION_LENGTH
    )
    if validator.not_null("productId", request.product_id):
        await validator.registered(
            "productId", request.product_id, exists_where(session, Product.id)
        )
    return validator


async def create_opinion(
    session: AsyncSession, request: NewOpinionRequest, author: User
) -> Opinion:
    validator = await validate_new_opinion(session, request)
    validator.raise_if_invalid()

    opinion = Opinion(
        rating=request.rating,
        title=request.title.strip(),
        description=request.description or "",
        product_id=request.product_id,
        user_id=author.id,
    )
    session.add(opinion)
    await session.commit()

    logger.info(
        "Created opinion %s",
        opinion.id,
        extra={"product_id": str(opinion.product_id), "rating": opinion.rating},
    )
    return opinion


async def create_question(
    session: AsyncSession,
    product_id: uuid.UUID,
    request: NewQuestionRequest,
    asker: User,
    notifications: NotificationQueue,
) -> Question:
    """Store a question and notify the product owner.

    Raises ``NotFound`` when the product does not exist. The notification is
    best effort: a queue outage does not fail the question.
    """

    product = await get_product(session, product_id)

    validator = Validator()
    if validator.not_blank("title", request.title):
        validator.max_length("title", request.title.strip(), NAME_LENGTH)
    validator.raise_if_invalid()

    question = Question(title=request.title.strip(), product_id=product.id, user_id=asker.id)
    session.add(question)
    await session.commit()

    logger.info(
        "Created question %s",
        question.id,
        extra={"product_id": str(product.id), "asker_id": asker.id},
    )

    try:
        await notifications.notify_question(question, product, asker)
    except Exception as exc:
        logger.warning(
            "Failed to enqueue question notification for product %s, "
            "but the question was stored: %s",
            product.id,
            exc,
        )
    return question
