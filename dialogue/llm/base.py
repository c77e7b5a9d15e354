# dialogue/llm/base.py
"""Base chat transport interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping


class BaseChatTransport(ABC):
    """
    Abstract base class for all chat completion transports.

    A transport performs exactly one request per ``send`` call and returns the
    candidate message found in the response; it never touches conversation
    state. Providers inherit from this and register via the component registry.

    Example
    -------
    from dialogue.llm import get_transport
    transport = get_transport()
    candidate = await transport.send(messages, model="gpt-3.5-turbo", headers=headers)
    """

    CATEGORY = "llm"

    @abstractmethod
    async def send(
        self,
        messages: List[Dict[str, str]],
        *,
        model: str,
        headers: Mapping[str, str],
    ) -> Any:
        """
        Post *messages* to the completions endpoint.

        Args:
            messages: Full outbound message list (context, history, new message)
            model: Model name placed in the request body
            headers: Request headers, including authorization

        Returns:
            The unvalidated ``choices[0].message`` value of the response

        Raises:
            LLMError: On transport failure, error status or malformed body
        """
        ...

    async def aclose(self) -> None:
        """Release any network resources held by the transport."""
        return None
