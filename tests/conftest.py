# tests/conftest.py
import json
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from dialogue.llm.base import BaseChatTransport
from dialogue.llm.providers.openai import OpenAIChatTransport

API_URL = "https://api.openai.com/v1/chat/completions"


def completion(content: str = "Hi!", role: str = "assistant") -> Dict[str, Any]:
    """A minimal chat completion response body."""
    return {"choices": [{"index": 0, "message": {"role": role, "content": content}}]}


class FakeTransport(BaseChatTransport):
    """Transport returning queued candidates and recording every request."""

    def __init__(self, *replies: Any):
        self.replies = list(replies)
        self.requests: List[Dict[str, Any]] = []
        self.closed = False

    async def send(self, messages, *, model, headers):
        self.requests.append({"messages": messages, "model": model, "headers": dict(headers)})
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply

    async def aclose(self):
        self.closed = True


@pytest.fixture(autouse=True)
def isolate_fs(tmp_path: Path, monkeypatch):
    """Prevent tests from accidentally touching real project files."""
    monkeypatch.chdir(tmp_path)
    yield
    shutil.rmtree(tmp_path, ignore_errors=True)


@pytest.fixture
def fake_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def mock_http():
    """
    Build an OpenAIChatTransport wired to ``httpx.MockTransport``.

    Returns ``(transport, requests)``; *requests* collects every
    ``httpx.Request`` the handler saw.
    """
    def _build(handler: Callable[[httpx.Request], httpx.Response], api_url: Optional[str] = API_URL):
        seen: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        return OpenAIChatTransport(api_url=api_url, client=client), seen

    return _build


def request_json(request: httpx.Request) -> Dict[str, Any]:
    return json.loads(request.content.decode("utf-8"))


@pytest.fixture
def completion_body():
    """Factory for chat completion response bodies."""
    return completion


@pytest.fixture
def read_json():
    """Decode the JSON body of a recorded request."""
    return request_json
