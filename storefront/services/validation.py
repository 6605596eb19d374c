"""Reusable request checks that collect violations in order.

Every check except :meth:`Validator.not_blank` and :meth:`Validator.not_null`
passes on ``None`` so a missing value is reported once, by the presence
check, instead of once per rule.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sized
from decimal import Decimal
from typing import Any

from email_validator import EmailNotValidError, validate_email

from storefront.services.errors import ValidationFailed, Violation

Lookup = Callable[[Any], Awaitable[bool]]


class Validator:
    """Accumulates violations for one request."""

    def __init__(self) -> None:
        self._violations: list[Violation] = []

    @property
    def violations(self) -> list[Violation]:
        return list(self._violations)

    @property
    def is_valid(self) -> bool:
        return not self._violations

    def fail(self, field: str | None, message: str) -> bool:
        self._violations.append(Violation(field, message))
        return False

    def reject(self, message: str) -> bool:
        """Record an object-level violation."""
        return self.fail(None, message)

    def not_null(self, field: str, value: Any) -> bool:
        if value is None:
            return self.fail(field, "must not be null")
        return True

    def not_blank(self, field: str, value: str | None) -> bool:
        if value is None or not value.strip():
            return self.fail(field, "must not be blank")
        return True

    def min_value(self, field: str, value: int | Decimal | None, minimum) -> bool:
        if value is not None and value < minimum:
            return self.fail(field, f"must be greater than or equal to {minimum}")
        return True

    def between(self, field: str, value: int | None, low: int, high: int) -> bool:
        if value is not None and not low <= value <= high:
            return self.fail(field, f"must be between {low} and {high}")
        return True

    def max_length(self, field: str, value: str | None, maximum: int) -> bool:
        if value is not None and len(value) > maximum:
            return self.fail(field, f"length must be between 0 and {maximum}")
        return True

    def min_length(self, field: str, value: str | None, minimum: int) -> bool:
        if value is not None and len(value) < minimum:
            return self.fail(field, f"length must be at least {minimum}")
        return True

    def min_size(self, field: str, values: Sized | None, minimum: int) -> bool:
        if values is not None and len(values) < minimum:
            return self.fail(field, f"size must be at least {minimum}")
        return True

    def email(self, field: str, value: str | None) -> bool:
        if not value:
            return True
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return self.fail(field, "must be a well-formed email address")
        return True

    def distinct(self, field: str, values: list[str] | None) -> bool:
        if values is not None and len(set(values)) != len(values):
            return self.fail(field, "must not contain duplicates")
        return True

    async def registered(self, field: str, value: Any, exists: Lookup) -> bool:
        """Referenced entity must already be stored."""
        if value is not None and not await exists(value):
            return self.fail(field, "is not registered")
        return True

    async def unique(self, field: str, value: Any, exists: Lookup) -> bool:
        if value is not None and await exists(value):
            return self.fail(field, "is already registered")
        return True

    def raise_if_invalid(self) -> None:
        if self._violations:
            raise ValidationFailed(self._violations)
