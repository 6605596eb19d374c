"""Bearer token verification and scope checks."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Annotated, Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import settings
from storefront.db.entities import User
from storefront.db.repository import find_user_by_login
from storefront.db.session import SessionDependency
from storefront.services.errors import Unauthenticated

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Identity extracted from a verified access token."""

    email: str | None
    scopes: frozenset[str] = field(default_factory=frozenset)

    def has_scope(self, scope: str) -> bool:
        return scope in self.scopes


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _extract_scopes(claims: dict[str, Any]) -> frozenset[str]:
    raw = claims.get("scope")
    if raw is None:
        raw = claims.get("scp", [])
    if isinstance(raw, str):
        return frozenset(raw.split())
    return frozenset(str(s) for s in raw)


def decode_token(token: str) -> Principal:
    """Verify the token signature and claims and build a principal.

    Raises ``JWTError`` when the token cannot be trusted.
    """

    if not settings.auth_configured:
        raise JWTError("JWT verification is not configured")

    claims = jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=settings.JWT_ALGORITHMS,
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
        options={"verify_aud": settings.JWT_AUDIENCE is not None},
    )
    return Principal(
        email=claims.get("email") or claims.get("sub"),
        scopes=_extract_scopes(claims),
    )


async def get_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> Principal:
    """FastAPI dependency: 401 unless a valid bearer token is present."""

    if credentials is None:
        raise _unauthorized()
    try:
        return decode_token(credentials.credentials)
    except JWTError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise _unauthorized() from exc


PrincipalDependency = Annotated[Principal, Depends(get_principal)]


def require_scope(scope: str) -> Callable[..., Awaitable[Principal]]:
    """Build a dependency that answers 403 when ``scope`` was not granted."""

    async def _check(principal: PrincipalDependency) -> Principal:
        if not principal.has_scope(scope):
            logger.info(
                "Missing scope",
                extra={"required_scope": scope, "principal": principal.email},
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
        return principal

    return _check


async def resolve_user(session: AsyncSession, principal: Principal) -> User:
    """Return the registered user the principal speaks for."""

    user = None
    if principal.email:
        user = await find_user_by_login(session, principal.email)
    if user is None:
        raise Unauthenticated("authenticated principal is not a registered user")
    return user


def scoped_user(scope: str) -> Callable[..., Awaitable[User]]:
    """Dependency combining the scope check with the user lookup."""

    checker = require_scope(scope)

    async def _current_user(
        principal: Annotated[Principal, Depends(checker)],
        session: SessionDependency,
    ) -> User:
        return await resolve_user(session, principal)

    return _current_user
