"""Pydantic schemas for messages."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

MIN_CONTENT_LENGTH = 1
MAX_CONTENT_LENGTH = 1000


class MessageCreate(BaseModel):
    """Request schema for sending a message.

    Length is enforced by the service after trimming, so surrounding
    whitespace is not counted here.
    """

    content: str = Field(..., description="Message body (1-1000 characters)")


class MessageRead(BaseModel):
    id: int
    conversation_id: int
    sender_id: int
    content: str
    is_read: bool
    sent_at: datetime

    model_config = {"from_attributes": True}
