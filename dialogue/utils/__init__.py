"""
Utility functions and classes.

Common helpers shared across the dialogue client: the component registry,
the error hierarchy, result models and logging setup.
"""

from dialogue.utils.component_registry import register, get, available
from dialogue.utils.exceptions import (
    DialogueError, ConfigurationError, LLMError, TransportError,
    ResponseStatusError, MalformedBodyError, MalformedMessageError
)
from dialogue.utils.models import PostResult, POST_FAILED_REASON

__all__ = [
    'register',
    'get',
    'available',
    'DialogueError',
    'ConfigurationError',
    'LLMError',
    'TransportError',
    'ResponseStatusError',
    'MalformedBodyError',
    'MalformedMessageError',
    'PostResult',
    'POST_FAILED_REASON',
]
