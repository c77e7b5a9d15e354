"""
Dialogue package initialization.

Re-exports the chat session and the pieces most callers need.
"""
import logging

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

from dialogue.config.settings import settings, load_settings
from dialogue.conversation import ChatDialogue, Message, is_chat_content
from dialogue.llm import get_transport
from dialogue.utils.models import PostResult
from dialogue.utils.exceptions import DialogueError, ConfigurationError, LLMError

__all__ = [
    "ChatDialogue",
    "Message",
    "is_chat_content",
    "PostResult",
    "get_transport",
    "settings",
    "load_settings",
    "DialogueError",
    "ConfigurationError",
    "LLMError",
]
