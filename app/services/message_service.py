"""Append-only message ledger with newest-first pagination."""

from __future__ import annotations

from datetime import timedelta
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.config import get_settings
from app.exceptions import InvalidContent, NotAParticipant, ValidationError
from app.infra.logging_config import get_logger
from app.models.conversation import Conversation
from app.models.message import Message
from app.schemas.message import MAX_CONTENT_LENGTH, MIN_CONTENT_LENGTH
from app.services.conversation_service import ConversationService
from app.services.read_state_service import ReadStateService
from app.utils.timeutils import as_utc, utc_now

logger = get_logger("messages")

_CLOCK_STEP = timedelta(microseconds=1)


def normalize_content(content: str) -> str:
    """Trim surrounding whitespace and enforce the 1-1000 character bound."""
    if not isinstance(content, str):
        raise InvalidContent()
    text = content.strip()
    if not MIN_CONTENT_LENGTH <= len(text) <= MAX_CONTENT_LENGTH:
        raise InvalidContent()
    return text


class MessageService:
    def __init__(
        self,
        db: Session,
        conversation_service: Optional[ConversationService] = None,
        read_state_service: Optional[ReadStateService] = None,
    ) -> None:
        self.db = db
        self._conversations = conversation_service or ConversationService(db)
        self._read_state = read_state_service or ReadStateService(db)
        self._settings = get_settings()

    def send_message(
        self, sender_id: int, conversation_id: int, content: str
    ) -> Message:
        """
        Append a message and bump the conversation's updated_at in one commit.

        The conversation row is locked for the duration, so concurrent
        appends serialize. sent_at is nudged past the previous updated_at
        when the clock has not moved, keeping updated_at strictly increasing.
        """
        text = normalize_content(content)
        conversation = self._lock_for_participant(conversation_id, sender_id)
        if conversation is None:
            raise NotAParticipant()

        sent_at = utc_now()
        last_activity = as_utc(conversation.updated_at)
        if sent_at <= last_activity:
            sent_at = last_activity + _CLOCK_STEP

        message = Message(
            conversation_id=conversation.id,
            sender_id=sender_id,
            content=text,
            is_read=False,
            sent_at=sent_at,
        )
        self.db.add(message)
        conversation.updated_at = sent_at
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(message)
        logger.debug(
            "User %s sent message %s in conversation %s",
            sender_id,
            message.id,
            conversation_id,
        )
        return message

    def read_messages(
        self,
        requester_id: int,
        conversation_id: int,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Message]:
        """
        Read a page of history and acknowledge the conversation.

        Acknowledging marks every unread message from the other participant
        as read (the whole backlog, not just this page) before the page is
        fetched, so returned incoming messages show is_read=True while the
        requester's own messages keep their stored value.
        """
        if limit is None:
            limit = self._settings.default_message_page_size
        self._validate_page(limit, offset)
        conversation = self._conversations.get_for_participant(
            conversation_id, requester_id
        )
        if conversation is None:
            raise NotAParticipant()
        self._read_state.acknowledge_conversation(conversation.id, requester_id)
        return self.get_page(conversation.id, limit=limit, offset=offset)

    def get_page(
        self, conversation_id: int, limit: int, offset: int = 0
    ) -> List[Message]:
        """Newest first; insertion order breaks sent_at ties. No side effects."""
        return (
            self.db.query(Message)
            .filter(Message.conversation_id == conversation_id)
            .order_by(Message.sent_at.desc(), Message.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def _validate_page(self, limit: int, offset: int) -> None:
        if limit <= 0:
            raise ValidationError("limit must be positive")
        if offset < 0:
            raise ValidationError("offset must not be negative")

    def _lock_for_participant(
        self, conversation_id: int, user_id: int
    ) -> Optional[Conversation]:
        return (
            self.db.query(Conversation)
            .filter(
                Conversation.id == conversation_id,
                or_(
                    Conversation.participant_a == user_id,
                    Conversation.participant_b == user_id,
                ),
            )
            .with_for_update()
            .populate_existing()
            .first()
        )
