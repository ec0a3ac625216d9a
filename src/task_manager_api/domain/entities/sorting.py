"""
Sort options for task listings.

Sort tokens arrive as free text from clients and are matched
case-insensitively against closed enumerations. A failed match carries the
ordered list of valid names so transports can show them.
"""

from enum import Enum
from typing import List, Optional, Type, TypeVar


class TaskSortField(Enum):
    """Fields a task listing can be ordered by."""

    ID = "Id"
    TITLE = "Title"
    DUE_DATE = "DueDate"
    IS_COMPLETED = "IsCompleted"


class SortOrder(Enum):
    """Sort direction."""

    ASCENDING = "Ascending"
    DESCENDING = "Descending"


E = TypeVar("E", bound=Enum)


class InvalidTokenError(ValueError):
    """Raised when a sort token matches no member of its enumeration."""

    def __init__(self, token: str, valid_options: List[str]):
        self.token = token
        self.valid_options = valid_options
        super().__init__(f"Invalid value {token!r}. Valid options are: {', '.join(valid_options)}.")


def valid_names(enum_cls: Type[Enum]) -> List[str]:
    """Wire names of an enumeration, in declaration order."""
    return [member.value for member in enum_cls]


def parse_enum_token(enum_cls: Type[E], token: Optional[str], default: E) -> E:
    """
    Match a client-supplied token against an enumeration.

    Args:
        enum_cls: Enumeration whose values are the accepted wire names.
        token: Raw token; None or blank selects the default.
        default: Member returned for a missing token.

    Returns:
        The matching member.

    Raises:
        InvalidTokenError: The token matches no member.
    """
    if token is None or not token.strip():
        return default

    wanted = token.strip().casefold()
    for member in enum_cls:
        if member.value.casefold() == wanted:
            return member
    raise InvalidTokenError(token, valid_names(enum_cls))
