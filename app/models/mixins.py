"""Column mixins shared by models."""

from __future__ import annotations

from sqlalchemy import Column, DateTime

from app.utils.timeutils import utc_now


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )
