"""Messages pushed to the outbound mailer."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class EmailNotification(BaseModel):
    """E-mail queued for delivery by the mailer service."""

    to: str = Field(..., min_length=1)
    sender: str = Field(..., min_length=1)
    subject: str
    body: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
