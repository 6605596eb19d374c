"""Error body returned on rejected requests."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorMessages(BaseModel):
    mensagens: list[str] = Field(
        default_factory=list,
        description="One message per violated field or rule",
    )
