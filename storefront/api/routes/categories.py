"""Category catalog routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from storefront.api.security import Principal, require_scope
from storefront.db.session import SessionDependency
from storefront.models.category import NewCategoryRequest
from storefront.services.catalog import create_category

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a category, optionally below a super category",
)
async def create(
    payload: NewCategoryRequest,
    session: SessionDependency,
    _: Annotated[Principal, Depends(require_scope("categories:write"))],
) -> Response:
    category = await create_category(session, payload)
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/api/categories/{category.id}"},
    )
