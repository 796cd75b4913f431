"""Shared base class for OpenAI-compatible LLM providers.

Handles client creation, parameter building and streaming. OpenAIProvider,
OpenRouterProvider and GenericOpenAIProvider only say how their client is
configured.

The SDK client is created on the first request, inside the same error
handling as the request itself: a missing or rejected credential reaches
the caller as the stream's error chunk, never as a startup crash.
"""

import logging
import time
from abc import abstractmethod
from collections.abc import AsyncIterator
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from tokenchat.providers.base import (
    GenerationRequest,
    GenerationResult,
    LLMProvider,
    StreamChunk,
)

logger = logging.getLogger(__name__)


class OpenAICompatibleProvider(LLMProvider):
    """Base provider for any API that speaks the OpenAI chat completions protocol."""

    def __init__(self, client: AsyncOpenAI | None = None) -> None:
        self._client = client

    @abstractmethod
    def _create_client(self) -> AsyncOpenAI:
        """Build the SDK client. May raise OpenAIError (e.g. missing key)."""
        ...

    def _ensure_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = self._create_client()
        return self._client

    async def generate_stream(
        self, request: GenerationRequest
    ) -> AsyncIterator[StreamChunk]:
        params = self._build_params(request)
        params["stream"] = True
        params["stream_options"] = {"include_usage": True}

        start = time.monotonic()
        accumulated_text = ""
        finish_reason: str | None = None
        model = request.model
        input_tokens = 0
        output_tokens = 0

        logger.debug(
            "%s: streaming %d messages to %s", self.name, len(request.messages), model
        )
        try:
            client = self._ensure_client()
            stream = await client.chat.completions.create(**params)
            async for chunk in stream:
                # Update model from first chunk
                if chunk.model:
                    model = chunk.model

                if chunk.choices:
                    choice = chunk.choices[0]
                    text = choice.delta.content
                    if text:
                        accumulated_text += text
                        yield StreamChunk(type="text_delta", text=text)

                    if choice.finish_reason:
                        finish_reason = choice.finish_reason

                # Usage comes in final chunk (no choices)
                if chunk.usage:
                    input_tokens = chunk.usage.prompt_tokens
                    output_tokens = chunk.usage.completion_tokens
        # ValueError: the SDK surfaces a malformed SSE payload as JSONDecodeError.
        except (OpenAIError, ValueError) as exc:
            logger.debug("%s: stream failed after %d chars", self.name, len(accumulated_text))
            yield StreamChunk(
                type="error",
                is_final=True,
                error=str(exc) or type(exc).__name__,
                result=GenerationResult(
                    content=accumulated_text,
                    model=model,
                    finish_reason=finish_reason,
                    latency_ms=int((time.monotonic() - start) * 1000),
                ),
            )
            return

        yield StreamChunk(
            type="message_stop",
            is_final=True,
            result=GenerationResult(
                content=accumulated_text,
                model=model,
                finish_reason=finish_reason,
                usage={"input_tokens": input_tokens, "output_tokens": output_tokens},
                latency_ms=int((time.monotonic() - start) * 1000),
            ),
        )

    @staticmethod
    def _build_params(request: GenerationRequest) -> dict[str, Any]:
        """Build kwargs dict for client.chat.completions.create()."""
        sp = request.sampling_params
        params: dict[str, Any] = {
            "model": request.model,
            "messages": [
                {"role": m["role"], "content": m["content"]} for m in request.messages
            ],
        }

        if sp.seed is not None:
            params["seed"] = sp.seed
        if sp.temperature is not None:
            params["temperature"] = sp.temperature
        if sp.max_completion_tokens is not None:
            params["max_tokens"] = sp.max_completion_tokens

        return params
