"""Category and product catalog."""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.entities import (
    NAME_LENGTH,
    Category,
    Characteristic,
    Photo,
    Product,
    User,
)
from storefront.db.repository import exists_where
from storefront.models.category import CategoryResponse, NewCategoryRequest
from storefront.models.product import (
    CharacteristicResponse,
    NewProductRequest,
    OpinionResponse,
    OpinionSummary,
    PreProduct,
    ProductDetailsResponse,
    QuestionResponse,
)
from storefront.services.errors import NotFound, ValidationFailed, Violation
from storefront.services.photo_uploader import PhotoUploader
from storefront.services.validation import Validator

logger = logging.getLogger(__name__)

MIN_PRICE = Decimal("0.01")
MIN_CHARACTERISTICS = 3
MAX_DESCRIPTION_LENGTH = 1000


def _stripped(value: str | None) -> str | None:
    return value.strip() if value is not None else None


async def validate_new_category(
    session: AsyncSession, request: NewCategoryRequest
) -> Validator:
    validator = Validator()
    if validator.not_blank("name", request.name):
        name = request.name.strip()
        if validator.max_length("name", name, NAME_LENGTH):
            await validator.unique("name", name, exists_where(session, Category.name))
    await validator.registered(
        "superCategoryId",
        request.super_category_id,
        exists_where(session, Category.id),
    )
    return validator


async def create_category(
    session: AsyncSession, request: NewCategoryRequest
) -> Category:
    """Persist a category; names are unique across the catalog."""

    validator = await validate_new_category(session, request)
    validator.raise_if_invalid()

    category = Category(
        name=request.name.strip(),
        super_category_id=request.super_category_id,
    )
    session.add(category)
    try:
        await session.commit()
    except IntegrityError as exc:
        # a concurrent request stored the same name after our check
        await session.rollback()
        raise ValidationFailed([Violation("name", "is already registered")]) from exc

    logger.info(
        "Created category %s",
        category.id,
        extra={"category_name": category.name},
    )
    return category


async def validate_new_product(
    session: AsyncSession, request: NewProductRequest
) -> Validator:
    validator = Validator()
    if validator.not_blank("name", request.name):
        validator.max_length("name", request.name.strip(), NAME_LENGTH)
    if validator.not_null("price", request.price):
        validator.min_value("price", request.price, MIN_PRICE)
    if validator.not_null("stockQuantity", request.stock_quantity):
        validator.min_value("stockQuantity", request.stock_quantity, 0)
    if validator.not_null("photos", request.photos):
        if validator.min_size("photos", request.photos, 1):
            for photo in request.photos:
                if not validator.not_blank("photos", photo):
                    break
    if validator.not_null("characteristics", request.characteristics):
        if validator.min_size(
            "characteristics", request.characteristics, MIN_CHARACTERISTICS
        ):
            complete = True
            for item in request.characteristics:
                complete &= validator.not_blank("characteristics.name", item.name)
                complete &= validator.not_blank("characteristics.value", item.value)
                complete &= validator.max_length(
                    "characteristics.name", _stripped(item.name), NAME_LENGTH
                )
                complete &= validator.max_length(
                    "characteristics.value", _stripped(item.value), NAME_LENGTH
                )
            if complete:
                validator.distinct(
                    "characteristics",
                    [item.name.strip().lower() for item in request.characteristics],
                )
    validator.max_length("description", request.description, MAX_DESCRIPTION_LENGTH)
    if validator.not_null("categoryId", request.category_id):
        await validator.registered(
            "categoryId", request.category_id, exists_where(session, Category.id)
        )
    return validator


def to_pre_product(request: NewProductRequest, owner: User) -> PreProduct:
    return PreProduct(
        user_id=owner.id,
        category_id=request.category_id,
        name=request.name.strip(),
        price=request.price,
        stock_quantity=request.stock_quantity,
        description=request.description or "",
    )


async def create_product(
    session: AsyncSession,
    request: NewProductRequest,
    owner: User,
    uploader: PhotoUploader,
) -> Product:
    """Persist a product together with its photos and characteristics."""

    validator = await validate_new_product(session, request)
    validator.raise_if_invalid()

    pre_product = to_pre_product(request, owner)
    urls = uploader.upload(request.photos)

    product = Product(
        user_id=pre_product.user_id,
        category_id=pre_product.category_id,
        name=pre_product.name,
        price=pre_product.price,
        stock_quantity=pre_product.stock_quantity,
        description=pre_product.description,
        photos=[Photo(url=url, position=index) for index, url in enumerate(urls)],
        characteristics=[
            Characteristic(name=item.name.strip(), value=item.value.strip())
            for item in request.characteristics
        ],
    )
    session.add(product)
    await session.commit()

    logger.info(
        "Created product %s",
        product.id,
        extra={"owner_id": owner.id, "category_id": pre_product.category_id},
    )
    return product


async def get_product(session: AsyncSession, product_id: uuid.UUID) -> Product:
    product = await session.get(Product, product_id)
    if product is None:
        raise NotFound("product", product_id)
    return product


async def get_product_details(
    session: AsyncSession, product_id: uuid.UUID
) -> ProductDetailsResponse:
    product = await get_product(session, product_id)

    ratings = [opinion.rating for opinion in product.opinions]
    opinions = OpinionSummary(
        average_rating=round(sum(ratings) / len(ratings), 2) if ratings else None,
        total=len(ratings),
        items=[OpinionResponse.model_validate(o) for o in product.opinions],
    )
    return ProductDetailsResponse(
        id=product.id,
        name=product.name,
        price=product.price,
        stock_quantity=product.stock_quantity,
        description=product.description,
        category=CategoryResponse.model_validate(product.category),
        photos=[photo.url for photo in product.photos],
        characteristics=[
            CharacteristicResponse.model_validate(c) for c in product.characteristics
        ],
        opinions=opinions,
        questions=[QuestionResponse.model_validate(q) for q in product.questions],
    )
