"""OpenRouter LLM provider: thin subclass of OpenAICompatibleProvider.

OpenRouter is an OpenAI-compatible API that routes to many models
(Llama, Mistral, Gemini, etc.) via a single API key.
"""

from openai import AsyncOpenAI, OpenAIError

from tokenchat.config import Settings
from tokenchat.providers.openai_compat import OpenAICompatibleProvider

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OpenRouterProvider(OpenAICompatibleProvider):
    """LLM provider backed by OpenRouter's API."""

    def __init__(self, *, client: AsyncOpenAI | None = None, api_key: str = "") -> None:
        super().__init__(client)
        self._api_key = api_key

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenRouterProvider":
        return cls(api_key=settings.openrouter_api_key)

    def _create_client(self) -> AsyncOpenAI:
        # No fallback to the SDK's env lookup: that would send the OpenAI key here.
        if not self._api_key:
            raise OpenAIError("Missing credentials: set OPENROUTER_API_KEY")
        return AsyncOpenAI(
            api_key=self._api_key,
            base_url=OPENROUTER_BASE_URL,
            default_headers={"X-Title": "tokenchat"},
        )

    @property
    def name(self) -> str:
        return "openrouter"
