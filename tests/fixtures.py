"""Shared test doubles."""

from collections.abc import AsyncIterator
from unittest.mock import MagicMock

from tokenchat.generation.tokens import EncodingUnavailableError, TokenCounter
from tokenchat.providers.base import (
    GenerationRequest,
    GenerationResult,
    LLMProvider,
    StreamChunk,
)


class FakeProvider(LLMProvider):
    """Streams scripted fragments, optionally ending in an error chunk."""

    def __init__(
        self,
        fragments: list[str] | None = None,
        *,
        error: str | None = None,
        name: str = "fake",
    ) -> None:
        self.fragments = fragments or []
        self.error = error
        self._name = name
        self.requests: list[GenerationRequest] = []

    @classmethod
    def from_settings(cls, settings) -> "FakeProvider":
        return cls()

    @property
    def name(self) -> str:
        return self._name

    async def generate_stream(  # type: ignore[override]
        self, request: GenerationRequest
    ) -> AsyncIterator[StreamChunk]:
        self.requests.append(request)
        for text in self.fragments:
            yield StreamChunk(type="text_delta", text=text)
        result = GenerationResult(content="".join(self.fragments), model=request.model)
        if self.error is not None:
            yield StreamChunk(type="error", is_final=True, error=self.error, result=result)
        else:
            yield StreamChunk(type="message_stop", is_final=True, result=result)


class TableTokenCounter(TokenCounter):
    """Looks counts up in a table; unknown text gets `default`."""

    def __init__(self, table: dict[str, int] | None = None, *, default: int = 0) -> None:
        self.table = table or {}
        self.default = default
        self.calls: list[str] = []
        self.fail_on: set[str] = set()

    def count(self, text: str) -> int:
        self.calls.append(text)
        if text in self.fail_on:
            raise EncodingUnavailableError("cl100k_base", "test failure")
        return self.table.get(text, self.default)


def make_stream_chunk(
    content: str | None = None,
    *,
    model: str = "gpt-3.5-turbo-0125",
    finish_reason: str | None = None,
    usage: tuple[int, int] | None = None,
) -> MagicMock:
    """Mock of one openai ChatCompletionChunk."""
    chunk = MagicMock()
    chunk.model = model
    if usage is not None:
        chunk.choices = []
        chunk.usage = MagicMock(prompt_tokens=usage[0], completion_tokens=usage[1])
        return chunk
    choice = MagicMock()
    choice.delta = MagicMock(content=content)
    choice.finish_reason = finish_reason
    chunk.choices = [choice]
    chunk.usage = None
    return chunk


def make_openai_stream(
    fragments: list[str],
    *,
    model: str = "gpt-3.5-turbo-0125",
    usage: tuple[int, int] = (12, 2),
) -> list[MagicMock]:
    """Role chunk, one chunk per fragment, a stop chunk and a usage chunk."""
    chunks = [make_stream_chunk(None, model=model)]
    chunks.extend(make_stream_chunk(text, model=model) for text in fragments)
    chunks.append(make_stream_chunk(None, model=model, finish_reason="stop"))
    chunks.append(make_stream_chunk(model=model, usage=usage))
    return chunks
