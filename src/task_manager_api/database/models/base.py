"""
Database Models Base Classes and Utilities.

Shared base class and column types for all database models.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


class Base(DeclarativeBase):
    """Declarative base for all SQLAlchemy models."""

    pass


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware timestamp to naive UTC; naive values are assumed UTC already."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class UTCDateTime(TypeDecorator):
    """
    DateTime column stored as naive UTC.

    SQLite keeps no offset, so aware values are normalized on the way in
    and every value read back compares equal to what was stored.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> Any:
        return to_naive_utc(value)

    def process_result_value(self, value: Any, dialect: Any) -> Any:
        return value
