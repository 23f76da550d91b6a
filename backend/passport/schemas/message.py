"""
Schémas Pydantic pour la messagerie.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

MAX_MESSAGE_LENGTH = 5000


class MessageCreate(BaseModel):
    receiver_id: uuid.UUID
    content: str

    @field_validator("content")
    @classmethod
    def content_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le message ne peut pas être vide.")
        if len(v) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"Le message ne peut pas dépasser {MAX_MESSAGE_LENGTH} caractères.")
        return v.strip()


class MessageResponse(BaseModel):
    id: uuid.UUID
    sender_id: uuid.UUID
    receiver_id: uuid.UUID
    content: str
    is_read: bool
    sent_at: datetime

    model_config = {"from_attributes": True}


class ConversationSummary(BaseModel):
    """Dernier message échangé avec un interlocuteur + nombre de non-lus."""
    other_user_id: uuid.UUID
    other_user_name: str
    other_user_email: str
    other_user_role: str
    last_message: MessageResponse
    unread_count: int


class SenderUnread(BaseModel):
    sender_id: uuid.UUID
    sender_name: str
    sender_email: str
    sender_role: str
    unread_count: int
    latest_message_at: Optional[datetime] = None


class UnreadSummary(BaseModel):
    total_unread: int
    senders: List[SenderUnread]
