"""Validation Layer — pure identifier, identity and username checks.

Invariants:
    - No IO: existence is never checked here
    - Every check runs before any store read or write that takes its inputs
    - parse_identifier is the only way a raw string becomes a UserId

Design Decisions:
    - UUID parsing via stdlib uuid: canonical, hex and braced forms all accepted,
      same identifier space the ORM stores
"""

from uuid import UUID

from followgraph.core.domain_types import UserId
from followgraph.core.errors import (
    ErrorContext,
    IdentityConflictError,
    InvalidIdentifierError,
    InvalidUsernameError,
)

MIN_USERNAME_LENGTH = 3


def is_valid_identifier(value: object) -> bool:
    """Return whether value is a well-formed user identifier."""
    if isinstance(value, UUID):
        return True
    if not isinstance(value, str):
        return False
    try:
        UUID(value)
    except ValueError:
        return False
    return True


def parse_identifier(value: object, field: str) -> UserId:
    """Parse value into a UserId or raise InvalidIdentifierError naming field."""
    if not is_valid_identifier(value):
        raise InvalidIdentifierError(
            field, ErrorContext(debug_info={"value": repr(value)[:64]}),
        )
    return UserId(value if isinstance(value, UUID) else UUID(value))


def check_distinct(a: UserId, b: UserId) -> None:
    """Raise IdentityConflictError when both ids refer to the same user."""
    if a == b:
        raise IdentityConflictError(
            ErrorContext(user_id=str(a), target_id=str(b)),
        )


def parse_distinct_pair(
    first: object, second: object, first_field: str, second_field: str,
) -> tuple[UserId, UserId]:
    """Parse two identifiers and require them to differ."""
    a = parse_identifier(first, first_field)
    b = parse_identifier(second, second_field)
    check_distinct(a, b)
    return a, b


def check_username(username: str) -> None:
    if len(username) < MIN_USERNAME_LENGTH:
        raise InvalidUsernameError(MIN_USERNAME_LENGTH)
