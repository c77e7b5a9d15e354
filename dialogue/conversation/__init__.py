"""
dialogue.conversation
=====================

Conversation state: the message model and the chat session that keeps the
rolling history.
"""

from dialogue.conversation.models import Message, Role, ROLES, is_chat_content
from dialogue.conversation.session import ChatDialogue

__all__ = [
    'Message',
    'Role',
    'ROLES',
    'is_chat_content',
    'ChatDialogue',
]
