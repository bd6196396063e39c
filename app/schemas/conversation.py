"""Pydantic schemas for conversations."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ConversationCreate(BaseModel):
    """Request schema for opening (or resolving) a chat with another user."""

    participant_id: int


class ConversationRead(BaseModel):
    id: int
    participant_a: int
    participant_b: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
