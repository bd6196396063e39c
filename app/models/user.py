"""User model: one row per registered account. Never deleted."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from app.core.presence import Presence, presence_from_columns, presence_to_columns
from app.db import Base
from app.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Registered account; presence lives in (is_online, last_seen)."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(30), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(Text, nullable=False)
    full_name = Column(String(255), nullable=True)
    avatar_url = Column(Text, nullable=True)
    last_seen = Column(DateTime(timezone=True), nullable=True)
    is_online = Column(Boolean, nullable=False, default=False)

    @property
    def presence(self) -> Presence:
        return presence_from_columns(bool(self.is_online), self.last_seen)

    @presence.setter
    def presence(self, value: Presence) -> None:
        self.is_online, self.last_seen = presence_to_columns(value)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r})>"
