"""Resolves the single canonical conversation between two users."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.pair_key import canonical_pair
from app.exceptions import NotFound, SelfConversation, ValidationError
from app.infra.logging_config import get_logger
from app.models.conversation import Conversation
from app.models.user import User
from app.utils.timeutils import utc_now

logger = get_logger("conversations")


class ConversationService:
    """get_or_create and listing for one-to-one conversations."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_for_participant(
        self, conversation_id: int, user_id: int
    ) -> Optional[Conversation]:
        """
        Return the conversation only if ``user_id`` is in it. Absent and
        not-a-participant both give None so callers cannot probe ids.
        """
        return (
            self.db.query(Conversation)
            .filter(
                Conversation.id == conversation_id,
                or_(
                    Conversation.participant_a == user_id,
                    Conversation.participant_b == user_id,
                ),
            )
            .first()
        )

    def get_or_create(self, requester_id: int, target_id: int) -> Conversation:
        """
        Get the conversation for the pair or create it.

        An existing row is returned untouched. Two callers racing from
        opposite directions both end up with the row that won the unique
        constraint on (participant_a, participant_b).
        """
        if requester_id == target_id:
            raise SelfConversation()
        if self.db.get(User, target_id) is None:
            raise NotFound("Target participant does not exist")
        if self.db.get(User, requester_id) is None:
            raise NotFound(f"User with id {requester_id} not found")

        participant_a, participant_b = canonical_pair(requester_id, target_id)
        existing = self._find_by_pair(participant_a, participant_b)
        if existing is not None:
            return existing

        now = utc_now()
        conversation = Conversation(
            participant_a=participant_a,
            participant_b=participant_b,
            created_at=now,
            updated_at=now,
        )
        self.db.add(conversation)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            winner = self._find_by_pair(participant_a, participant_b)
            if winner is None:
                raise
            logger.info(
                "Conversation for pair (%s, %s) created concurrently; using %s",
                participant_a,
                participant_b,
                winner.id,
            )
            return winner
        self.db.refresh(conversation)
        logger.info(
            "Created conversation %s for pair (%s, %s)",
            conversation.id,
            participant_a,
            participant_b,
        )
        return conversation

    def list_for_user(
        self,
        user_id: int,
        limit: Optional[int] = None,
        before: Optional[datetime] = None,
    ) -> List[Conversation]:
        """Conversations the user is in, most recently active first.

        ``limit`` and ``before`` (exclusive updated_at cursor) are optional.
        """
        if limit is not None and limit <= 0:
            raise ValidationError("limit must be positive")
        query = self.db.query(Conversation).filter(
            or_(
                Conversation.participant_a == user_id,
                Conversation.participant_b == user_id,
            )
        )
        if before is not None:
            query = query.filter(Conversation.updated_at < before)
        query = query.order_by(Conversation.updated_at.desc(), Conversation.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def _find_by_pair(
        self, participant_a: int, participant_b: int
    ) -> Optional[Conversation]:
        return (
            self.db.query(Conversation)
            .filter(
                Conversation.participant_a == participant_a,
                Conversation.participant_b == participant_b,
            )
            .first()
        )
