"""Abstract LLM provider interface and shared data types."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Literal

from pydantic import BaseModel, Field

from tokenchat.config import Settings
from tokenchat.models import SamplingParams


class GenerationRequest(BaseModel):
    """Everything a provider needs to make an API call."""

    model: str
    messages: list[dict[str, str]]
    sampling_params: SamplingParams = Field(default_factory=SamplingParams)


class GenerationResult(BaseModel):
    """What a stream produced by the time it ended (fully or not)."""

    content: str
    model: str
    finish_reason: str | None = None
    usage: dict[str, int] | None = None
    latency_ms: int | None = None


class StreamChunk(BaseModel):
    """A single element of a streaming response.

    Every stream is a run of "text_delta" chunks closed by exactly one final
    chunk: "message_stop" when the provider finished normally, "error" when
    the request or the stream failed. Both final kinds carry a result with
    whatever text had arrived.
    """

    type: Literal["text_delta", "message_stop", "error"]
    text: str = ""
    is_final: bool = False
    result: GenerationResult | None = None
    error: str | None = None


class LLMProvider(ABC):
    """Abstract interface for LLM providers."""

    @classmethod
    @abstractmethod
    def from_settings(cls, settings: Settings) -> "LLMProvider":
        """Build the provider from runtime settings without contacting the API."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g., 'openai')."""
        ...

    @abstractmethod
    def generate_stream(
        self, request: GenerationRequest
    ) -> AsyncIterator[StreamChunk]:
        """Send a streaming generation request. Yields chunks, never raises."""
        ...
