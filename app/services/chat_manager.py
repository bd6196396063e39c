"""ChatManager: facade over users, presence, conversations and messages."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session as DBSession

from app.exceptions import ValidationError
from app.models.conversation import Conversation
from app.models.message import Message
from app.models.user import User
from app.schemas.user import PublicUser, UserRegister
from app.services.conversation_service import ConversationService
from app.services.message_service import MessageService
from app.services.presence_service import PresenceService
from app.services.read_state_service import ReadStateService
from app.services.user_service import UserService


class ChatManager:
    def __init__(self, db: DBSession) -> None:
        self._db = db
        self._presence_svc = PresenceService(db)
        self._user_svc = UserService(db, presence_service=self._presence_svc)
        self._conversation_svc = ConversationService(db)
        self._message_svc = MessageService(
            db,
            conversation_service=self._conversation_svc,
            read_state_service=ReadStateService(db),
        )

    def register(
        self,
        username: str,
        email: str,
        password: str,
        full_name: Optional[str] = None,
    ) -> User:
        try:
            data = UserRegister(
                username=username,
                email=email,
                password=password,
                full_name=full_name,
            )
        except SchemaValidationError as e:
            raise ValidationError(str(e)) from e
        return self._user_svc.register(data)

    def authenticate(self, email: str, password: str) -> User:
        return self._user_svc.authenticate(email, password)

    def set_presence(self, user_id: int, is_online: bool) -> User:
        return self._presence_svc.set_presence(user_id, is_online)

    def logout(self, user_id: int) -> User:
        return self._presence_svc.set_presence(user_id, False)

    def list_users(self) -> List[PublicUser]:
        return self._user_svc.list_public()

    def list_conversations(
        self,
        user_id: int,
        limit: Optional[int] = None,
        before: Optional[datetime] = None,
    ) -> List[Conversation]:
        return self._conversation_svc.list_for_user(
            user_id, limit=limit, before=before
        )

    def get_or_create_conversation(
        self, user_id: int, other_user_id: int
    ) -> Conversation:
        return self._conversation_svc.get_or_create(user_id, other_user_id)

    def send_message(
        self, user_id: int, conversation_id: int, content: str
    ) -> Message:
        return self._message_svc.send_message(user_id, conversation_id, content)

    def list_messages(
        self,
        user_id: int,
        conversation_id: int,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Message]:
        """Read a page of history; marks the other participant's messages read."""
        return self._message_svc.read_messages(
            user_id, conversation_id, limit=limit, offset=offset
        )
