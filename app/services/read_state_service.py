"""
Read receipts for a conversation.

Opening a conversation marks everything the other participant sent as
read, not only the page being displayed. The flag only moves from false to
true, so repeating the call (or racing a duplicate) flips nothing new.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.infra.logging_config import get_logger
from app.models.message import Message

logger = get_logger("read_state")


class ReadStateService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def acknowledge_conversation(self, conversation_id: int, reader_id: int) -> int:
        """Mark every unread incoming message in the conversation as read.

        Messages sent by ``reader_id`` are never touched. Returns the number
        of messages flipped.
        """
        try:
            flipped = (
                self.db.query(Message)
                .filter(
                    Message.conversation_id == conversation_id,
                    Message.sender_id != reader_id,
                    Message.is_read.is_(False),
                )
                .update({Message.is_read: True}, synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        if flipped:
            logger.debug(
                "User %s read %d message(s) in conversation %s",
                reader_id,
                flipped,
                conversation_id,
            )
        return flipped

    def unread_count(self, conversation_id: int, reader_id: int) -> int:
        """Incoming messages the reader has not seen yet."""
        return (
            self.db.query(Message)
            .filter(
                Message.conversation_id == conversation_id,
                Message.sender_id != reader_id,
                Message.is_read.is_(False),
            )
            .count()
        )
