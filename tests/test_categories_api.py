"""Tests for the category endpoint."""

import pytest
from sqlalchemy import func, select

from storefront.db.entities import Category
from storefront.models.category import NewCategoryRequest
from storefront.services import catalog as catalog_service
from storefront.services.errors import ValidationFailed
from storefront.services.validation import Validator


async def _categories(session_factory) -> list[Category]:
    async with session_factory() as session:
        return list((await session.execute(select(Category))).scalars())


@pytest.mark.asyncio
async def test_create_category_without_super_category(client, session_factory, auth):
    response = await client.post(
        "/api/categories",
        json={"name": "Celulares", "superCategoryId": None},
        headers=auth(None, "categories:write"),
    )

    assert response.status_code == 201
    assert response.headers["location"].startswith("/api/categories/")
    assert len(await _categories(session_factory)) == 1


@pytest.mark.asyncio
async def test_create_category_with_super_category(client, session_factory, auth):
    headers = auth(None, "categories:write")
    parent = await client.post("/api/categories", json={"name": "Banho"}, headers=headers)
    parent_id = int(parent.headers["location"].rsplit("/", 1)[1])

    response = await client.post(
        "/api/categories",
        json={"name": "Toalhas", "superCategoryId": parent_id},
        headers=headers,
    )

    assert response.status_code == 201
    categories = {c.name: c for c in await _categories(session_factory)}
    assert len(categories) == 2
    assert categories["Toalhas"].super_category_id == parent_id


@pytest.mark.asyncio
async def test_create_category_requires_token(client):
    response = await client.post("/api/categories", json={"name": "Banho"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_category_requires_scope(client, auth):
    response = await client.post(
        "/api/categories",
        json={"name": "Banho"},
        headers=auth(None, "products:write"),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_create_category_rejects_blank_name(client, auth):
    response = await client.post(
        "/api/categories",
        json={"name": None, "superCategoryId": None},
        headers=auth(None, "categories:write"),
    )

    assert response.status_code == 400
    assert response.json() == {"mensagens": ["name must not be blank"]}


@pytest.mark.asyncio
async def test_create_category_rejects_duplicate_name(client, session_factory, auth):
    headers = auth(None, "categories:write")
    await client.post("/api/categories", json={"name": "Banho"}, headers=headers)

    response = await client.post(
        "/api/categories", json={"name": "Banho"}, headers=headers
    )

    assert response.status_code == 400
    assert response.json() == {"mensagens": ["name is already registered"]}
    async with session_factory() as session:
        total = await session.scalar(select(func.count()).select_from(Category))
    assert total == 1


@pytest.mark.asyncio
async def test_create_category_rejects_unknown_super_category(client, auth):
    response = await client.post(
        "/api/categories",
        json={"name": "Toalhas", "superCategoryId": 9999},
        headers=auth(None, "categories:write"),
    )

    assert response.status_code == 400
    assert response.json() == {"mensagens": ["superCategoryId is not registered"]}


@pytest.mark.asyncio
async def test_create_category_rejects_duplicate_name_with_padding(
    client, session_factory, auth
):
    headers = auth(None, "categories:write")
    await client.post("/api/categories", json={"name": "Banho"}, headers=headers)

    response = await client.post(
        "/api/categories", json={"name": "Banho "}, headers=headers
    )

    assert response.status_code == 400
    assert response.json() == {"mensagens": ["name is already registered"]}
    assert [c.name for c in await _categories(session_factory)] == ["Banho"]


@pytest.mark.asyncio
async def test_create_category_rejects_long_name(client, auth):
    response = await client.post(
        "/api/categories",
        json={"name": "B" * 256},
        headers=auth(None, "categories:write"),
    )

    assert response.status_code == 400
    assert response.json() == {"mensagens": ["name length must be between 0 and 255"]}


@pytest.mark.asyncio
async def test_create_category_name_taken_between_check_and_insert(
    session_factory, monkeypatch
):
    async with session_factory() as session:
        session.add(Category(name="Banho"))
        await session.commit()

    async def _passes(session, request):
        return Validator()

    monkeypatch.setattr(catalog_service, "validate_new_category", _passes)

    async with session_factory() as session:
        with pytest.raises(ValidationFailed) as excinfo:
            await catalog_service.create_category(
                session, NewCategoryRequest(name="Banho")
            )

    assert excinfo.value.messages == ["name is already registered"]
    assert len(await _categories(session_factory)) == 1
