"""Tests for the ChatDialogue conversation session."""
import asyncio

import httpx
import pytest

from dialogue.config.settings import settings
from dialogue.conversation import ChatDialogue, Message
from dialogue.utils.exceptions import (
    ConfigurationError,
    MalformedBodyError,
    MalformedMessageError,
    ResponseStatusError,
    TransportError,
)
from dialogue.utils.models import POST_FAILED_REASON

CONTEXT = [
    {"role": "system", "content": "You are a robot."},
    {"role": "system", "content": "Be brief."},
]


def _post(dialogue, text, **kwargs):
    return asyncio.run(dialogue.post(text, **kwargs))


def test_hello_roundtrip_through_http(mock_http, completion_body, read_json):
    """Default context, mocked reply 'Hi!': success and a two-entry history."""
    transport, seen = mock_http(lambda request: httpx.Response(200, json=completion_body("Hi!")))
    dialogue = ChatDialogue("x", transport=transport)

    result = _post(dialogue, "Hello")

    assert result.success
    assert result.value == "Hi!"
    assert dialogue.history == [
        {"role": "user", "content": "Hello"},
        {"role": "assistant", "content": "Hi!"},
    ]
    body = read_json(seen[0])
    assert body["model"] == settings.model
    assert body["messages"] == settings.default_context() + [{"role": "user", "content": "Hello"}]
    assert seen[0].headers["Authorization"] == "Bearer x"
    assert seen[0].headers["Content-Type"] == "application/json"


def test_empty_response_fails_and_keeps_history(mock_http):
    transport, _ = mock_http(lambda request: httpx.Response(200, json={}))
    dialogue = ChatDialogue("x", transport=transport)

    result = _post(dialogue, "Hello")

    assert not result.success
    assert result.reason == POST_FAILED_REASON
    assert isinstance(result.error, MalformedBodyError)
    assert dialogue.history == []


def test_request_is_context_then_history_then_message(fake_transport, completion_body):
    transport = fake_transport(
        {"role": "assistant", "content": "one"},
        {"role": "assistant", "content": "two"},
    )
    dialogue = ChatDialogue("key", CONTEXT, transport=transport)

    _post(dialogue, "first")
    _post(dialogue, "second")

    assert transport.requests[1]["messages"] == CONTEXT + [
        {"role": "user", "content": "first"},
        {"role": "assistant", "content": "one"},
        {"role": "user", "content": "second"},
    ]


def test_success_appends_exactly_two_messages(fake_transport):
    transport = fake_transport(
        {"role": "assistant", "content": "a"},
        {"role": "assistant", "content": "b"},
    )
    dialogue = ChatDialogue("key", CONTEXT, transport=transport)
    _post(dialogue, "q1")
    before = len(dialogue.history)

    _post(dialogue, "q2")

    history = dialogue.history
    assert len(history) == before + 2
    assert history[-2] == {"role": "user", "content": "q2"}
    assert history[-1] == {"role": "assistant", "content": "b"}


@pytest.mark.parametrize(
    "reply",
    [
        None,
        {"role": "robot", "content": "beep"},
        {"role": "assistant", "content": 42},
        {"content": "no role"},
        "just text",
        MalformedBodyError("no choices"),
        ResponseStatusError("500", status_code=500),
        TransportError("connection refused"),
    ],
)
def test_failure_leaves_history_unchanged(fake_transport, reply):
    transport = fake_transport({"role": "assistant", "content": "ok"}, reply)
    dialogue = ChatDialogue("key", CONTEXT, transport=transport)
    _post(dialogue, "first")
    snapshot = dialogue.history

    result = _post(dialogue, "second")

    assert not result.success
    assert result.reason == POST_FAILED_REASON
    assert dialogue.history == snapshot


def test_malformed_message_is_classified(fake_transport):
    dialogue = ChatDialogue("key", CONTEXT, transport=fake_transport({"role": "robot", "content": "beep"}))

    result = _post(dialogue, "hi")

    assert isinstance(result.error, MalformedMessageError)


def test_deadline_expiry_is_a_failure(fake_transport):
    class SlowTransport(fake_transport):
        async def send(self, messages, *, model, headers):
            await asyncio.sleep(1)
            return {"role": "assistant", "content": "late"}

    dialogue = ChatDialogue("key", CONTEXT, transport=SlowTransport())

    result = _post(dialogue, "hi", timeout=0.01)

    assert not result.success
    assert isinstance(result.error, TransportError)
    assert dialogue.history == []


def test_zero_call_timeout_is_not_the_session_default(fake_transport):
    class SlowTransport(fake_transport):
        async def send(self, messages, *, model, headers):
            await asyncio.sleep(1)
            return {"role": "assistant", "content": "late"}

    dialogue = ChatDialogue("key", CONTEXT, timeout=30, transport=SlowTransport())

    result = _post(dialogue, "hi", timeout=0)

    assert not result.success
    assert isinstance(result.error, TransportError)


async def _post_to_slow_server(delay, session_timeout, call_timeout=None):
    """Post to a local HTTP server that answers after *delay* seconds."""
    async def _handle(reader, writer):
        head = await reader.readuntil(b"\r\n\r\n")
        length = 0
        for line in head.decode("latin-1").split("\r\n"):
            name, _, value = line.partition(":")
            if name.lower() == "content-length":
                length = int(value.strip())
        await reader.readexactly(length)
        await asyncio.sleep(delay)
        body = b'{"choices": [{"message": {"role": "assistant", "content": "late"}}]}'
        try:
            writer.write(
                b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n"
                b"Content-Length: " + str(len(body)).encode() + b"\r\nConnection: close\r\n\r\n" + body
            )
            await writer.drain()
        except ConnectionError:
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(_handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        async with ChatDialogue(
            "x", CONTEXT, api_url=f"http://127.0.0.1:{port}/v1/chat/completions", timeout=session_timeout
        ) as dialogue:
            result = await dialogue.post("hi", timeout=call_timeout)
            return result, dialogue.history
    finally:
        server.close()
        await server.wait_closed()


@pytest.fixture
def direct_http(monkeypatch):
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)


def test_call_timeout_longer_than_session_default_is_honoured(direct_http):
    result, history = asyncio.run(_post_to_slow_server(delay=0.5, session_timeout=0.1, call_timeout=5))

    assert result.success, result.error
    assert result.value == "late"
    assert history[-1] == {"role": "assistant", "content": "late"}


def test_session_default_deadline_applies_to_http_posts(direct_http):
    result, history = asyncio.run(_post_to_slow_server(delay=1, session_timeout=0.1))

    assert not result.success
    assert isinstance(result.error, TransportError)
    assert history == []


def test_clear_empties_history_but_keeps_context(fake_transport):
    transport = fake_transport({"role": "assistant", "content": "a"}, {"role": "assistant", "content": "b"})
    dialogue = ChatDialogue("key", CONTEXT, transport=transport)
    _post(dialogue, "q")

    dialogue.clear()

    assert dialogue.history == []
    assert dialogue.context == CONTEXT
    _post(dialogue, "again")
    assert transport.requests[-1]["messages"] == CONTEXT + [{"role": "user", "content": "again"}]


def test_clear_on_empty_history(fake_transport):
    dialogue = ChatDialogue("key", CONTEXT, transport=fake_transport())
    dialogue.clear()
    assert dialogue.history == []


def test_history_is_an_independent_copy(fake_transport):
    dialogue = ChatDialogue("key", CONTEXT, transport=fake_transport({"role": "assistant", "content": "a"}))
    _post(dialogue, "q")

    copy = dialogue.history
    copy[0]["content"] = "tampered"
    copy.append({"role": "user", "content": "extra"})

    assert dialogue.history == [
        {"role": "user", "content": "q"},
        {"role": "assistant", "content": "a"},
    ]


def test_context_is_copied_from_caller(fake_transport):
    context = [dict(m) for m in CONTEXT]
    dialogue = ChatDialogue("key", context, transport=fake_transport())

    context.append({"role": "system", "content": "late addition"})
    context[0]["content"] = "changed"

    assert dialogue.context == CONTEXT


def test_context_accepts_message_instances(fake_transport):
    dialogue = ChatDialogue("key", [Message("system", "hello")], transport=fake_transport())
    assert dialogue.context == [{"role": "system", "content": "hello"}]


def test_invalid_context_entry_is_rejected(fake_transport):
    with pytest.raises(ValueError):
        ChatDialogue("key", [{"role": "narrator", "content": "x"}], transport=fake_transport())


def test_missing_api_key_is_a_configuration_error(fake_transport):
    with pytest.raises(ConfigurationError):
        ChatDialogue("", transport=fake_transport())


def test_model_override_is_sent(fake_transport):
    transport = fake_transport({"role": "assistant", "content": "a"})
    dialogue = ChatDialogue("key", CONTEXT, model="gpt-4o-mini", transport=transport)

    _post(dialogue, "q")

    assert dialogue.model == "gpt-4o-mini"
    assert transport.requests[0]["model"] == "gpt-4o-mini"


def test_overlapping_posts_share_the_prior_history(fake_transport):
    """Both requests are built before either reply is committed."""
    class GatedTransport(fake_transport):
        def __init__(self):
            super().__init__()
            self.gate = None

        async def send(self, messages, *, model, headers):
            self.requests.append({"messages": messages})
            await self.gate.wait()
            return {"role": "assistant", "content": messages[-1]["content"].upper()}

    transport = GatedTransport()
    dialogue = ChatDialogue("key", CONTEXT, transport=transport)

    async def scenario():
        transport.gate = asyncio.Event()
        first = asyncio.ensure_future(dialogue.post("a"))
        second = asyncio.ensure_future(dialogue.post("b"))
        await asyncio.sleep(0)
        transport.gate.set()
        return await first, await second

    first, second = asyncio.run(scenario())

    assert first.success and second.success
    assert transport.requests[0]["messages"][:-1] == transport.requests[1]["messages"][:-1] == CONTEXT
    assert len(dialogue.history) == 4


def test_async_context_manager_closes_transport(fake_transport):
    transport = fake_transport()

    async def scenario():
        async with ChatDialogue("key", CONTEXT, transport=transport):
            pass

    asyncio.run(scenario())
    assert transport.closed
