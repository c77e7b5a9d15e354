"""
dialogue.conversation.models
============================

Data model for the messages exchanged with the completions endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping

Role = Literal["system", "user", "assistant"]

ROLES = frozenset({"system", "user", "assistant"})


@dataclass(frozen=True)
class Message:
    """
    A role-tagged unit of conversation content.

    Serialises to the ``{"role": ..., "content": ...}`` mapping used on the
    wire by the chat completions API.
    """
    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary representation compatible with the OpenAI API."""
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Message:
        """
        Create a Message from a mapping.

        Raises
        ------
        ValueError
            If *data* is not a well-formed chat message.
        """
        if not is_chat_content(data):
            raise ValueError(f"Not a chat message: {data!r}")
        return cls(role=data["role"], content=data["content"])

    @classmethod
    def coerce(cls, value: Message | Mapping[str, Any]) -> Message:
        """Accept either a Message or its wire mapping."""
        if isinstance(value, Message):
            return value
        return cls.from_dict(value)


def is_chat_content(candidate: Any) -> bool:
    """
    Return True if *candidate* is a well-formed chat message.

    A valid message is non-null, has a ``role`` that is one of ``system``,
    ``user`` or ``assistant``, and a ``content`` of type ``str``. Both the
    wire mapping and :class:`Message` instances are accepted.
    """
    if candidate is None:
        return False
    if isinstance(candidate, Message):
        role, content = candidate.role, candidate.content
    elif isinstance(candidate, Mapping):
        if "role" not in candidate:
            return False
        role, content = candidate.get("role"), candidate.get("content")
    else:
        return False
    return isinstance(role, str) and role in ROLES and isinstance(content, str)
