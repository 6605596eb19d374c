"""Domain errors raised by services and translated at the HTTP boundary."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Violation:
    """A single broken rule.

    ``field`` is ``None`` for object-level rules that are not tied to one
    request attribute (for example insufficient stock).
    """

    field: str | None
    message: str

    def render(self) -> str:
        if self.field is None:
            return self.message
        return f"{self.field} {self.message}"


class StorefrontError(Exception):
    """Base class for errors the API layer knows how to answer."""


class ValidationFailed(StorefrontError):
    def __init__(self, violations: Sequence[Violation]) -> None:
        self.violations = list(violations)
        super().__init__("; ".join(v.render() for v in self.violations))

    @property
    def messages(self) -> list[str]:
        return [v.render() for v in self.violations]


class NotFound(StorefrontError):
    def __init__(self, resource: str, identifier: object) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} not found")


class Unauthenticated(StorefrontError):
    """The bearer token is valid but does not map to a registered user."""
