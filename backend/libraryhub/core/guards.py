"""Argument guards shared by entity constructors and domain services."""

from uuid import UUID

from libraryhub.core.domain_types import is_empty_id
from libraryhub.core.errors import InvalidArgumentError


def require_text(value: str | None, argument: str, message: str) -> str:
    """Return value stripped, or raise if it is None/blank."""
    if value is None or not value.strip():
        raise InvalidArgumentError(message, argument)
    return value.strip()


def require_id(value: UUID | None, argument: str, message: str) -> UUID:
    if is_empty_id(value):
        raise InvalidArgumentError(message, argument)
    return value


def require_present(value: object, argument: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{argument} is required.", argument)
