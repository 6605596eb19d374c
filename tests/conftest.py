"""Pytest configuration and fixtures for the storefront service."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest
import pytest_asyncio
from fakeredis import aioredis as fakeredis
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from storefront.config import settings
from storefront.db.entities import Category, Characteristic, Photo, Product, User
from storefront.db.session import create_schema, create_session_factory, get_session
from storefront.services.passwords import hash_password
from storefront.services.queue.notification_queue import get_redis_client

TEST_SECRET = "storefront-test-secret"

settings.JWT_SECRET = TEST_SECRET
settings.JWT_ALGORITHMS = ["HS256"]
settings.JWT_AUDIENCE = None
settings.JWT_ISSUER = None
settings.PUBLIC_BASE_URL = None


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


def make_token(email: str | None = None, scopes: tuple[str, ...] = ()) -> str:
    claims = {
        "sub": email or "client-app",
        "scope": " ".join(scopes),
        "exp": datetime.now(UTC) + timedelta(hours=1),
    }
    if email:
        claims["email"] = email
    return jwt.encode(claims, TEST_SECRET, algorithm="HS256")


def bearer(email: str | None = None, *scopes: str) -> dict[str, str]:
    """Authorization header for a token carrying the given scopes."""
    return {"Authorization": f"Bearer {make_token(email, scopes)}"}


@pytest_asyncio.fixture()
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture()
async def redis_client():
    """Provide a fake Redis client for each test."""
    from storefront.main import app

    client = fakeredis.FakeRedis(decode_responses=True)
    app.dependency_overrides[get_redis_client] = lambda: client
    try:
        yield client
    finally:
        await client.flushdb()
        await client.aclose()
        app.dependency_overrides.pop(get_redis_client, None)


@pytest_asyncio.fixture()
async def client(session_factory, redis_client):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from storefront.main import app

    async def _session_override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://localhost",
        ) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_session, None)


@pytest_asyncio.fixture()
async def catalog(session_factory):
    """A registered user owning one product in the "Banho" category.

    Call ``await catalog.add_product(stock=...)`` for extra products.
    """

    async with session_factory() as session:
        user = User(login="daniel@email.com", password=hash_password("123456"))
        category = Category(name="Banho")
        session.add_all([user, category])
        await session.commit()

    async def add_product(stock: int = 5, name: str = "Toalha") -> Product:
        async with session_factory() as session:
            product = Product(
                user_id=user.id,
                category_id=category.id,
                name=name,
                price=Decimal("10.00"),
                stock_quantity=stock,
                description="Toalha grande",
                photos=[
                    Photo(url="foto numero 1", position=0),
                    Photo(url="foto numero 2", position=1),
                ],
                characteristics=[
                    Characteristic(name="cor", value="branca"),
                    Characteristic(name="tamanho", value="grande"),
                    Characteristic(name="peso", value="500g"),
                ],
            )
            session.add(product)
            await session.commit()
            return product

    product = await add_product()
    return SimpleNamespace(
        user=user,
        category=category,
        product=product,
        add_product=add_product,
    )


@pytest.fixture()
def auth():
    """Build Authorization headers: ``auth(email, *scopes)``."""
    return bearer
