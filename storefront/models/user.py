"""User registration schemas."""

from __future__ import annotations

from pydantic import BaseModel


class NewUserRequest(BaseModel):
    """Registration payload; ``login`` is the user's e-mail address."""

    login: str | None = None
    password: str | None = None
