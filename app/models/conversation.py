"""
Conversation model: the single canonical row for a pair of users.

Participants are stored ordered (participant_a < participant_b) so the
unique constraint on the pair holds regardless of who started the chat.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import TimestampMixin


class Conversation(Base, TimestampMixin):
    __tablename__ = "conversations"

    __table_args__ = (
        CheckConstraint(
            "participant_a < participant_b", name="ck_conversations_ordered_pair"
        ),
        UniqueConstraint(
            "participant_a", "participant_b", name="uq_conversations_pair"
        ),
        Index("ix_conversations_participant_b", "participant_b"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    participant_a = Column(Integer, ForeignKey("users.id"), nullable=False)
    participant_b = Column(Integer, ForeignKey("users.id"), nullable=False)

    messages = relationship(
        "Message",
        back_populates="conversation",
        order_by="Message.id",
    )

    def __repr__(self) -> str:
        return (
            f"<Conversation(id={self.id}, "
            f"pair=({self.participant_a}, {self.participant_b}))>"
        )
