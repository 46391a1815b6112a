from app.crud.user_crud import user_crud
from app.crud.contact_crud import contact_crud
from app.crud.chat_message_crud import chat_message_crud
from app.crud.conversation_crud import conversation_crud

__all__ = [
    "user_crud",
    "contact_crud",
    "chat_message_crud",
    "conversation_crud",
]
