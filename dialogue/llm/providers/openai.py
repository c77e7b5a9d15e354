"""
dialogue.llm.providers.openai
=============================

Chat transport for the OpenAI ``/v1/chat/completions`` endpoint, built on
``httpx.AsyncClient``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Final, List, Mapping, Optional

import httpx

from dialogue.config.settings import settings
from dialogue.llm.base import BaseChatTransport
from dialogue.utils.component_registry import register
from dialogue.utils.exceptions import MalformedBodyError, ResponseStatusError, TransportError
from dialogue.utils.logging import get_trace_logger

logger: Final = logging.getLogger(__name__)
trace: Final = get_trace_logger()


# --------------------------------------------------------------------------- #
# Internal helpers                                                            #
# --------------------------------------------------------------------------- #
def _trace_response(response: httpx.Response) -> None:
    """Write the status line and response headers to the trace logger."""
    if not trace.isEnabledFor(logging.DEBUG):
        return
    trace.debug("%s %s %s", response.url, response.status_code, response.reason_phrase)
    for key, value in response.headers.items():
        trace.debug("%s: %s", key, value)


def _extract_message(body: Any) -> Any:
    """Return ``body["choices"][0]["message"]`` or raise MalformedBodyError."""
    if not isinstance(body, dict):
        raise MalformedBodyError(f"Expected a JSON object, got {type(body).__name__}")
    choices = body.get("choices")
    if not isinstance(choices, list) or not choices:
        raise MalformedBodyError("Response has no choices")
    first = choices[0]
    if not isinstance(first, dict) or "message" not in first:
        raise MalformedBodyError("First choice has no message")
    return first["message"]


# --------------------------------------------------------------------------- #
# OpenAI transport implementation                                            #
# --------------------------------------------------------------------------- #
@register("llm", "openai")
class OpenAIChatTransport(BaseChatTransport):
    """
    Posts chat completion requests to the OpenAI API.

    Parameters
    ----------
    api_url : str, optional
        Completions endpoint, defaults to ``settings.api_url``
    client : httpx.AsyncClient, optional
        Pre-built client (tests pass one wired to ``httpx.MockTransport``).
        A client created here is owned and closed by the transport.
    timeout : float, optional
        Per-request timeout in seconds. Defaults to ``None`` (no client-side
        limit); the session enforces its own deadline around ``send``.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.api_url = api_url or settings.api_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def send(
        self,
        messages: List[Dict[str, str]],
        *,
        model: str,
        headers: Mapping[str, str],
    ) -> Any:
        """
        Post one chat completion request and return ``choices[0].message``.

        Raises
        ------
        TransportError
            If the request could not be completed
        ResponseStatusError
            If the endpoint answered with a non-2xx status
        MalformedBodyError
            If the body is not JSON or carries no first choice message
        """
        body = {"model": model, "messages": messages}
        logger.debug("Posting %d messages to %s with %s", len(messages), self.api_url, model)
        start = time.time()
        try:
            response = await self._client.post(self.api_url, json=body, headers=dict(headers))
        except httpx.HTTPError as exc:
            raise TransportError(f"POST {self.api_url} failed: {exc!r}") from exc

        _trace_response(response)
        logger.debug("Chat completion answered %s in %.2fs", response.status_code, time.time() - start)

        if not response.is_success:
            raise ResponseStatusError(
                f"Chat completion returned {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedBodyError(f"Response body is not JSON: {exc}") from exc
        return _extract_message(payload)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
