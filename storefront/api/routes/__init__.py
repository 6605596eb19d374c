"""API route registration."""

from fastapi import FastAPI

from storefront.api.routes import categories, products, purchases, system, users


def include_api_routes(app: FastAPI) -> None:
    """Attach all API routers to the application."""

    app.include_router(system.router)
    app.include_router(users.router)
    app.include_router(categories.router)
    app.include_router(products.router)
    app.include_router(purchases.router)
