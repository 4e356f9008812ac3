from __future__ import annotations

import asyncio
from types import SimpleNamespace

import httpx
import openai
import pytest

from career_docs_ai.errors import LLMProviderError
from career_docs_ai.services import llm_client as llm_client_module
from career_docs_ai.services.llm_client import OpenAITextGenerator, get_text_generator


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _chunk(content):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


class _FakeStream:
    def __init__(self, items) -> None:
        self._items = list(items)
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self._items:
            raise StopAsyncIteration
        item = self._items.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


class _FakeCompletions:
    def __init__(self, result=None, error=None) -> None:
        self.result = result
        self.error = error
        self.kwargs: list[dict] = []

    async def create(self, **kwargs):
        self.kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


def _client(completions: _FakeCompletions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def _connection_error() -> openai.APIConnectionError:
    return openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))


def test_generate_sends_system_message_first_and_returns_text() -> None:
    completions = _FakeCompletions(result=_completion('{"skills": []}'))
    generator = OpenAITextGenerator(model="gpt-4o-mini", client=_client(completions))

    text = asyncio.run(
        generator.generate("system rules", [{"role": "user", "content": "docs"}], 4096, temperature=0.0)
    )

    assert text == '{"skills": []}'
    sent = completions.kwargs[0]
    assert sent["model"] == "gpt-4o-mini"
    assert sent["messages"][0] == {"role": "system", "content": "system rules"}
    assert sent["messages"][1] == {"role": "user", "content": "docs"}
    assert sent["max_tokens"] == 4096
    assert sent["temperature"] == 0.0


def test_generate_without_temperature_omits_it() -> None:
    completions = _FakeCompletions(result=_completion("ok"))
    generator = OpenAITextGenerator(client=_client(completions))
    asyncio.run(generator.generate("s", [], 10))
    assert "temperature" not in completions.kwargs[0]


def test_generate_returns_empty_string_without_choices() -> None:
    completions = _FakeCompletions(result=SimpleNamespace(choices=[]))
    generator = OpenAITextGenerator(client=_client(completions))
    assert asyncio.run(generator.generate("s", [], 10)) == ""


def test_generate_wraps_sdk_errors() -> None:
    completions = _FakeCompletions(error=_connection_error())
    generator = OpenAITextGenerator(client=_client(completions))
    with pytest.raises(LLMProviderError):
        asyncio.run(generator.generate("s", [], 10))


def test_generate_streaming_yields_non_empty_deltas() -> None:
    stream = _FakeStream([_chunk("Dear"), _chunk(None), SimpleNamespace(choices=[]), _chunk(" team")])
    completions = _FakeCompletions(result=stream)
    generator = OpenAITextGenerator(client=_client(completions))

    async def run() -> list[str]:
        chunks = await generator.generate_streaming("s", [{"role": "user", "content": "u"}], 100)
        return [c async for c in chunks]

    assert asyncio.run(run()) == ["Dear", " team"]
    assert completions.kwargs[0]["stream"] is True
    assert stream.closed


def test_streaming_closes_response_when_consumer_stops_early() -> None:
    stream = _FakeStream([_chunk("Dear"), _chunk(" team"), _chunk(",")])
    generator = OpenAITextGenerator(client=_client(_FakeCompletions(result=stream)))

    async def run() -> str:
        chunks = await generator.generate_streaming("s", [], 100)
        first = await chunks.__anext__()
        await chunks.aclose()
        return first

    assert asyncio.run(run()) == "Dear"
    assert stream.closed


def test_streaming_open_failure_raises_on_await() -> None:
    generator = OpenAITextGenerator(client=_client(_FakeCompletions(error=_connection_error())))
    with pytest.raises(LLMProviderError, match="could not be opened"):
        asyncio.run(generator.generate_streaming("s", [], 100))


def test_streaming_mid_stream_failure_raises_from_iterator() -> None:
    stream = _FakeStream([_chunk("Dear"), _connection_error()])
    generator = OpenAITextGenerator(client=_client(_FakeCompletions(result=stream)))

    async def run(received: list[str]) -> None:
        chunks = await generator.generate_streaming("s", [], 100)
        async for c in chunks:
            received.append(c)

    received: list[str] = []
    with pytest.raises(LLMProviderError, match="stream failed"):
        asyncio.run(run(received))
    assert received == ["Dear"]
    assert stream.closed


def test_get_text_generator_requires_api_key(monkeypatch) -> None:
    monkeypatch.setattr(llm_client_module, "OPENAI_API_KEY", "")
    with pytest.raises(LLMProviderError):
        get_text_generator("gpt-4o")


def test_get_text_generator_builds_openai_provider(monkeypatch) -> None:
    monkeypatch.setattr(llm_client_module, "OPENAI_API_KEY", "test-key")
    generator = get_text_generator("gpt-4o")
    assert isinstance(generator, OpenAITextGenerator)
    assert generator.model == "gpt-4o"
