# dialogue/utils/models.py
"""Result models shared across the dialogue client."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from dialogue.utils.exceptions import DialogueError

POST_FAILED_REASON = "posting message failed"


@dataclass(frozen=True)
class PostResult:
    """Outcome of posting one message: the reply text or a failure reason."""
    success: bool
    value: Optional[str] = None
    reason: Optional[str] = None
    error: Optional[DialogueError] = None

    @classmethod
    def ok(cls, value: str) -> PostResult:
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: Optional[DialogueError] = None, reason: str = POST_FAILED_REASON) -> PostResult:
        return cls(success=False, reason=reason, error=error)

    def __bool__(self) -> bool:
        return self.success
