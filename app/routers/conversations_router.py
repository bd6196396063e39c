"""Conversations API, scoped to the acting user."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db import get_db
from app.schemas.conversation import ConversationCreate, ConversationRead
from app.schemas.message import MessageCreate, MessageRead
from app.services.chat_manager import ChatManager

router = APIRouter(prefix="/users/{user_id}/conversations", tags=["conversations"])


@router.get("", response_model=List[ConversationRead])
def list_conversations(
    user_id: int,
    limit: Optional[int] = Query(None, ge=1),
    before: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
) -> List[ConversationRead]:
    """Conversations the user is in, most recently active first."""
    conversations = ChatManager(db).list_conversations(
        user_id, limit=limit, before=before
    )
    return [ConversationRead.model_validate(c) for c in conversations]


@router.post("", response_model=ConversationRead)
def get_or_create_conversation(
    user_id: int,
    data: ConversationCreate,
    db: Session = Depends(get_db),
) -> ConversationRead:
    """Return the conversation with ``participant_id``, creating it on first contact."""
    conversation = ChatManager(db).get_or_create_conversation(
        user_id, data.participant_id
    )
    return ConversationRead.model_validate(conversation)


@router.post(
    "/{conversation_id}/messages", response_model=MessageRead, status_code=201
)
def send_message(
    user_id: int,
    conversation_id: int,
    data: MessageCreate,
    db: Session = Depends(get_db),
) -> MessageRead:
    message = ChatManager(db).send_message(user_id, conversation_id, data.content)
    return MessageRead.model_validate(message)


@router.get("/{conversation_id}/messages", response_model=List[MessageRead])
def list_messages(
    user_id: int,
    conversation_id: int,
    limit: Optional[int] = Query(None),
    offset: int = Query(0),
    db: Session = Depends(get_db),
) -> List[MessageRead]:
    """Newest-first page of history. Marks the other participant's messages read."""
    messages = ChatManager(db).list_messages(
        user_id, conversation_id, limit=limit, offset=offset
    )
    return [MessageRead.model_validate(m) for m in messages]
