"""User registration."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.entities import NAME_LENGTH, User
from storefront.db.repository import exists_where
from storefront.models.user import NewUserRequest
from storefront.services.errors import ValidationFailed, Violation
from storefront.services.passwords import hash_password
from storefront.services.validation import Validator

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


async def validate_new_user(
    session: AsyncSession, request: NewUserRequest
) -> Validator:
    validator = Validator()
    if validator.not_blank("login", request.login):
        well_formed = validator.max_length(
            "login", request.login, NAME_LENGTH
        ) and validator.email("login", request.login)
        if well_formed:
            await validator.unique("login", request.login, exists_where(session, User.login))
    if validator.not_blank("password", request.password):
        validator.min_length("password", request.password, MIN_PASSWORD_LENGTH)
    return validator


async def register_user(session: AsyncSession, request: NewUserRequest) -> User:
    """Store a new user with a hashed password; logins are unique."""

    validator = await validate_new_user(session, request)
    validator.raise_if_invalid()

    user = User(login=request.login, password=hash_password(request.password))
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ValidationFailed([Violation("login", "is already registered")]) from exc

    logger.info("Registered user %s", user.id, extra={"login": user.login})
    return user
