"""Product, opinion and question schemas."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.models.category import CategoryResponse


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class NewCharacteristicRequest(_CamelModel):
    name: str | None = None
    value: str | None = None


class NewProductRequest(_CamelModel):
    """Product submission, photos are references handed to the uploader."""

    name: str | None = None
    price: Decimal | None = None
    stock_quantity: int | None = None
    photos: list[str] | None = None
    characteristics: list[NewCharacteristicRequest] | None = None
    description: str | None = None
    category_id: int | None = None


@dataclass(frozen=True)
class PreProduct:
    """Validated product core fields, before photos and characteristics."""

    user_id: int
    category_id: int
    name: str
    price: Decimal
    stock_quantity: int
    description: str


class NewOpinionRequest(_CamelModel):
    rating: int | None = None
    title: str | None = None
    description: str | None = None
    product_id: uuid.UUID | None = None


class NewQuestionRequest(_CamelModel):
    title: str | None = None


class CharacteristicResponse(_CamelModel):
    name: str
    value: str


class OpinionResponse(_CamelModel):
    id: int
    rating: int
    title: str
    description: str


class QuestionResponse(_CamelModel):
    id: int
    title: str


class OpinionSummary(_CamelModel):
    average_rating: float | None = Field(
        None, description="Mean rating, absent when nobody reviewed the product"
    )
    total: int = 0
    items: list[OpinionResponse] = Field(default_factory=list)


class ProductDetailsResponse(_CamelModel):
    id: uuid.UUID
    name: str
    price: Decimal
    stock_quantity: int
    description: str
    category: CategoryResponse
    photos: list[str] = Field(default_factory=list)
    characteristics: list[CharacteristicResponse] = Field(default_factory=list)
    opinions: OpinionSummary = Field(default_factory=OpinionSummary)
    questions: list[QuestionResponse] = Field(default_factory=list)
