"""Small query helpers shared by the services."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from storefront.db.entities import User


def exists_where(
    session: AsyncSession, column: InstrumentedAttribute
) -> Callable[[Any], Awaitable[bool]]:
    """Build a lookup answering whether any row has ``column == value``."""

    async def _exists(value: Any) -> bool:
        stmt = select(column).where(column == value).limit(1)
        result = await session.execute(stmt)
        return result.first() is not None

    return _exists


async def find_user_by_login(session: AsyncSession, login: str) -> User | None:
    result = await session.execute(select(User).where(User.login == login))
    return result.scalar_one_or_none()
