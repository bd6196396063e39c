"""
Domain errors raised by the services.

The HTTP layer maps them to status codes (see ``app.main``). Storage errors
from SQLAlchemy are not wrapped and propagate as-is.
"""

from __future__ import annotations


class ChatError(Exception):
    """Base class for messaging domain errors."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ChatError):
    """Malformed input; raised before any storage access."""

    default_message = "Invalid input"


class InvalidContent(ValidationError):
    default_message = "Message content must be between 1 and 1000 characters"


class ConflictError(ChatError):
    default_message = "Conflict"


class DuplicateUsername(ConflictError):
    default_message = "Username already exists"


class DuplicateEmail(ConflictError):
    default_message = "Email already exists"


class SelfConversation(ConflictError):
    default_message = "Cannot create conversation with yourself"


class NotFound(ChatError):
    default_message = "Not found"


class NotAParticipant(ChatError):
    """Conversation is absent or the user is not in it; callers cannot tell which."""

    default_message = "Conversation not found or user is not a participant"


class InvalidCredentials(ChatError):
    default_message = "Invalid email or password"
