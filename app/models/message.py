"""Message model: append-only; only is_read ever changes (false -> true)."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import relationship

from app.db import Base
from app.utils.timeutils import utc_now


class Message(Base):
    __tablename__ = "messages"

    __table_args__ = (
        Index("ix_messages_conversation_sent_at", "conversation_id", "sent_at"),
        Index(
            "ix_messages_conversation_unread", "conversation_id", "is_read", "sender_id"
        ),
    )

    # autoincrement id doubles as insertion order for sent_at ties
    id = Column(Integer, primary_key=True, autoincrement=True)
    conversation_id = Column(
        Integer, ForeignKey("conversations.id"), nullable=False
    )
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    sent_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    conversation = relationship("Conversation", back_populates="messages")

    def __repr__(self) -> str:
        return (
            f"<Message(id={self.id}, conversation={self.conversation_id}, "
            f"sender={self.sender_id}, read={self.is_read})>"
        )
