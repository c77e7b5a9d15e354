"""
dialogue.utils.exceptions
=========================

Custom exceptions for the dialogue client and its components.
"""


class DialogueError(Exception):
    """Base exception for all dialogue module errors."""
    pass


class ConfigurationError(DialogueError):
    """Error in configuration settings."""
    pass


class LLMError(DialogueError):
    """Error during LLM interaction."""
    pass


class TransportError(LLMError):
    """The request never produced a response (connection failure, timeout)."""
    pass


class ResponseStatusError(LLMError):
    """The endpoint answered with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class MalformedBodyError(LLMError):
    """The response body is not JSON or has no ``choices[0].message``."""
    pass


class MalformedMessageError(LLMError):
    """The extracted message is not a well-formed chat message."""
    pass
