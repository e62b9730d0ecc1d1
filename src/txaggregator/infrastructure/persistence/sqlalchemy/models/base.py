"""Declarative base and shared columns."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from txaggregator.domain.shared.time import utc_now


class Base(DeclarativeBase):
    pass


class CreatedAtMixin:
    """Insert time in UTC. Rows are append-only apart from batch progress."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
