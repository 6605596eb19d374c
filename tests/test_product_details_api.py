"""Tests for the product detail endpoint."""

import uuid

import pytest

from storefront.db.entities import Opinion, Question


@pytest.mark.asyncio
async def test_product_details(client, session_factory, catalog, auth):
    async with session_factory() as session:
        session.add_all(
            [
                Opinion(
                    rating=4,
                    title="Boa",
                    description="macia",
                    product_id=catalog.product.id,
                    user_id=catalog.user.id,
                ),
                Opinion(
                    rating=5,
                    title="Otima",
                    description="",
                    product_id=catalog.product.id,
                    user_id=catalog.user.id,
                ),
                Question(
                    title="Qual a validade?",
                    product_id=catalog.product.id,
                    user_id=catalog.user.id,
                ),
            ]
        )
        await session.commit()

    response = await client.get(
        f"/api/products/{catalog.product.id}",
        headers=auth(catalog.user.login, "products:read"),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(catalog.product.id)
    assert data["stockQuantity"] == 5
    assert data["description"] == "Toalha grande"
    assert data["category"]["name"] == "Banho"
    assert data["photos"] == ["foto numero 1", "foto numero 2"]
    assert len(data["characteristics"]) == 3
    assert data["opinions"]["total"] == 2
    assert data["opinions"]["averageRating"] == 4.5
    assert [q["title"] for q in data["questions"]] == ["Qual a validade?"]


@pytest.mark.asyncio
async def test_product_details_without_opinions(client, catalog, auth):
    response = await client.get(
        f"/api/products/{catalog.product.id}",
        headers=auth(catalog.user.login, "products:read"),
    )

    assert response.status_code == 200
    assert response.json()["opinions"] == {
        "averageRating": None,
        "total": 0,
        "items": [],
    }


@pytest.mark.asyncio
async def test_product_details_requires_token(client, catalog):
    response = await client.get(f"/api/products/{catalog.product.id}")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_product_details_unknown_product(client, catalog, auth):
    response = await client.get(
        f"/api/products/{uuid.uuid4()}",
        headers=auth(catalog.user.login, "products:read"),
    )

    assert response.status_code == 404
    assert response.content == b""
