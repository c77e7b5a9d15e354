"""
dialogue.conversation.session
=============================

Chat session with a fixed persona context and a rolling history.

Every request replays ``context + history + [new user message]``; a reply is
committed to the history only once it has been validated, so a failed post
leaves the session exactly as it was.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from dialogue.config.settings import settings
from dialogue.conversation.models import Message, is_chat_content
from dialogue.llm import get_transport
from dialogue.llm.base import BaseChatTransport
from dialogue.utils.exceptions import (
    ConfigurationError,
    LLMError,
    MalformedMessageError,
    TransportError,
)
from dialogue.utils.logging import get_logger
from dialogue.utils.models import PostResult

logger = get_logger(__name__)

MessageLike = Union[Message, Mapping[str, Any]]


class ChatDialogue:
    """
    Conversation session against a chat completions endpoint.

    Parameters
    ----------
    api_key : str
        Secret sent as ``Authorization: Bearer <api_key>``
    context : Iterable[Message | dict], optional
        Priming messages prepended to every request. Defaults to the
        configured persona (``settings.default_context()``).
    model : str, optional
        Model name, defaults to ``settings.model``
    api_url : str, optional
        Completions endpoint, defaults to ``settings.api_url``
    timeout : float, optional
        Default deadline in seconds for each post, defaults to
        ``settings.request_timeout``
    transport : BaseChatTransport, optional
        Transport to use instead of the configured provider

    Example
    -------
    async with ChatDialogue(api_key="sk-...") as dialogue:
        result = await dialogue.post("Hello")
        if result.success:
            print(result.value)
    """

    def __init__(
        self,
        api_key: str,
        context: Optional[Iterable[MessageLike]] = None,
        *,
        model: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[BaseChatTransport] = None,
    ):
        if not api_key:
            raise ConfigurationError("An API key is required to create a chat session")

        source = settings.default_context() if context is None else context
        self._context: List[Message] = [Message.coerce(m) for m in source]
        self._history: List[Message] = []
        self._model = model or settings.model
        self._timeout = settings.request_timeout if timeout is None else timeout
        self._headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        self._transport = transport or get_transport(api_url=api_url)

    # ------------------------------------------------------------------ #
    # State accessors                                                    #
    # ------------------------------------------------------------------ #
    @property
    def history(self) -> List[Dict[str, str]]:
        """Independent copy of the exchanged messages, oldest first."""
        return [m.to_dict() for m in self._history]

    @property
    def context(self) -> List[Dict[str, str]]:
        """Independent copy of the priming messages."""
        return [m.to_dict() for m in self._context]

    @property
    def model(self) -> str:
        return self._model

    def clear(self) -> None:
        """Forget the conversation so far; the context is kept."""
        self._history.clear()
        logger.debug("Chat history cleared")

    def build_messages(self, message: MessageLike) -> List[Dict[str, str]]:
        """Outbound message list: context, then history, then *message*."""
        return [m.to_dict() for m in (*self._context, *self._history, Message.coerce(message))]

    # ------------------------------------------------------------------ #
    # Posting                                                            #
    # ------------------------------------------------------------------ #
    async def post(self, message: str, *, timeout: Optional[float] = None) -> PostResult:
        """
        Send *message* as the user and wait for the reply.

        On success the user message and the reply are appended to the history
        (in that order) and the reply text is returned. Any failure, whether
        transport, HTTP status, body or message shape, returns a failed result
        with the reason ``"posting message failed"`` and leaves the history
        untouched.

        Parameters
        ----------
        message : str
            User text
        timeout : float, optional
            Deadline in seconds for this call, overrides the session default

        Returns
        -------
        PostResult
            ``value`` holds the reply on success; ``error`` holds the cause on failure
        """
        user_message = Message(role="user", content=message)
        try:
            reply = await self._send_message(user_message, self._timeout if timeout is None else timeout)
        except LLMError as exc:
            logger.warning("Posting message failed (%s): %s", type(exc).__name__, exc)
            return PostResult.fail(exc)

        self._history.append(user_message)
        self._history.append(reply)
        return PostResult.ok(reply.content)

    async def _send_message(self, message: Message, timeout: float) -> Message:
        messages = self.build_messages(message)
        try:
            candidate = await asyncio.wait_for(
                self._transport.send(messages, model=self._model, headers=self._headers),
                timeout,
            )
        except asyncio.TimeoutError as exc:
            raise TransportError(f"No response within {timeout:.1f}s") from exc

        if not is_chat_content(candidate):
            raise MalformedMessageError(f"Response message is not a chat message: {candidate!r}")
        return Message.coerce(candidate)

    # ------------------------------------------------------------------ #
    # Resource handling                                                  #
    # ------------------------------------------------------------------ #
    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> ChatDialogue:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
