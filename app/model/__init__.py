from app.model.user import User
from app.model.contact import Contact
from app.model.chat_message import ChatMessage
from app.model.conversation import Conversation

__all__ = ["User", "Contact", "ChatMessage", "Conversation"]
