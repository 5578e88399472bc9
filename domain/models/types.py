"""
Shared column helpers for the ORM models.
"""

from datetime import datetime, timezone
from sqlalchemy import Enum as SQLEnum


def enum_column_type(enum_cls, name: str) -> SQLEnum:
    """Enum column storing the member values rather than their names."""
    return SQLEnum(
        enum_cls,
        name=name,
        native_enum=False,
        validate_strings=True,
        values_callable=lambda members: [m.value for m in members],
    )


def utcnow() -> datetime:
    """Python-side timestamp default; keeps ordering stable on SQLite."""
    return datetime.now(timezone.utc)
