"""Redis stream of e-mails for the outbound mailer.

Each entry carries one JSON ``payload`` field holding an
:class:`~storefront.models.notification.EmailNotification`.
"""

from __future__ import annotations

import logging
from typing import Annotated

import redis.asyncio as redis
from fastapi import Depends

from storefront.config import settings
from storefront.db.entities import Product, Question, User
from storefront.models.notification import EmailNotification

logger = logging.getLogger(__name__)

_redis_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """Process-wide client, created on first use."""

    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis_client


async def close_redis_client() -> None:
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
    _redis_client = None


def question_email(question: Question, product: Product, asker: User) -> EmailNotification:
    """E-mail telling the product owner somebody asked about their product."""

    return EmailNotification(
        to=product.user.login,
        sender=asker.login,
        subject=f"New question about {product.name}",
        body=(
            f"{asker.login} asked about {product.name}:\n\n"
            f"{question.title}\n\n"
            f"/api/products/{product.id}"
        ),
    )


class NotificationQueue:
    def __init__(self, client: redis.Redis, stream_key: str) -> None:
        self._client = client
        self._stream_key = stream_key

    async def _publish(self, email: EmailNotification) -> str:
        return await self._client.xadd(
            name=self._stream_key,
            fields={"payload": email.model_dump_json()},
        )

    async def notify_question(
        self, question: Question, product: Product, asker: User
    ) -> str:
        """Queue the owner notification for ``question``; returns the entry id."""

        email = question_email(question, product, asker)
        entry_id = await self._publish(email)
        logger.info(
            "Queued question e-mail %s",
            entry_id,
            extra={"question_id": question.id, "recipient": email.to},
        )
        return entry_id


def get_notification_queue(
    client: Annotated[redis.Redis, Depends(get_redis_client)],
) -> NotificationQueue:
    return NotificationQueue(client, settings.NOTIFICATIONS_STREAM_KEY)
