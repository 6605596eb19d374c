"""User registration routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from storefront.api.security import Principal, require_scope
from storefront.db.session import SessionDependency
from storefront.models.user import NewUserRequest
from storefront.services.users import register_user

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def create_user(
    payload: NewUserRequest,
    session: SessionDependency,
    _: Annotated[Principal, Depends(require_scope("users:write"))],
) -> Response:
    user = await register_user(session, payload)
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/api/users/{user.id}"},
    )
