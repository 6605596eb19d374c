"""Unit tests for the violation collector."""

from decimal import Decimal

import pytest

from storefront.services.errors import ValidationFailed, Violation
from storefront.services.validation import Validator


async def _always(value) -> bool:
    return True


async def _never(value) -> bool:
    return False


@pytest.mark.unit
def test_checks_skip_missing_values():
    validator = Validator()

    assert validator.min_value("price", None, Decimal("0.01"))
    assert validator.between("rating", None, 1, 5)
    assert validator.max_length("description", None, 10)
    assert validator.min_size("photos", None, 1)
    assert validator.email("login", None)
    assert validator.is_valid


@pytest.mark.unit
def test_violations_keep_order():
    validator = Validator()

    validator.not_blank("name", "  ")
    validator.min_value("price", Decimal("0.00"), Decimal("0.01"))
    validator.reject("insufficient stock for product Toalha")

    assert [v.render() for v in validator.violations] == [
        "name must not be blank",
        "price must be greater than or equal to 0.01",
        "insufficient stock for product Toalha",
    ]


@pytest.mark.unit
def test_email_shape():
    validator = Validator()

    assert validator.email("login", "user@email.com")
    assert not validator.email("login", "user")
    assert not validator.email("login", "user@.com")
    assert not validator.email("login", "user@email")
    assert validator.violations == [
        Violation("login", "must be a well-formed email address")
    ] * 3


@pytest.mark.unit
def test_distinct():
    validator = Validator()

    assert validator.distinct("characteristics", ["cor", "peso"])
    assert not validator.distinct("characteristics", ["cor", "cor"])


@pytest.mark.asyncio
async def test_lookups():
    validator = Validator()

    assert await validator.registered("categoryId", 1, _always)
    assert not await validator.registered("categoryId", 2, _never)
    assert await validator.unique("name", "Banho", _never)
    assert not await validator.unique("name", "Banho", _always)
    assert await validator.registered("categoryId", None, _never)

    assert [v.render() for v in validator.violations] == [
        "categoryId is not registered",
        "name is already registered",
    ]


@pytest.mark.unit
def test_raise_if_invalid():
    validator = Validator()
    validator.raise_if_invalid()

    validator.not_null("paymentGateway", None)
    with pytest.raises(ValidationFailed) as excinfo:
        validator.raise_if_invalid()

    assert excinfo.value.messages == ["paymentGateway must not be null"]
