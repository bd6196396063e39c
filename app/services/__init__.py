from app.services.chat_manager import ChatManager
from app.services.conversation_service import ConversationService
from app.services.message_service import MessageService
from app.services.presence_service import PresenceService
from app.services.read_state_service import ReadStateService
from app.services.user_service import UserService

__all__ = [
    "ChatManager",
    "ConversationService",
    "MessageService",
    "PresenceService",
    "ReadStateService",
    "UserService",
]
