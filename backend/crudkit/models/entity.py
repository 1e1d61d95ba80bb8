"""Entity Mixin: identifier, audit timestamps and soft-delete flag.

Invariants:
    - id is a numeric autoincrement primary key
    - created_at set on insert; updated_at set on insert and refreshed on every UPDATE
    - is_deleted = True hides the row from CrudService lookups; the row is kept

Design Decisions:
    - BigInteger with an INTEGER variant on SQLite (SQLite only autoincrements INTEGER PRIMARY KEY)
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, Boolean, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Entity:
    """Mixin for soft-deletable, audited records."""

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True,
    )
