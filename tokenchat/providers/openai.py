"""OpenAI LLM provider: thin subclass of OpenAICompatibleProvider."""

from openai import AsyncOpenAI

from tokenchat.config import Settings
from tokenchat.providers.openai_compat import OpenAICompatibleProvider


class OpenAIProvider(OpenAICompatibleProvider):
    """LLM provider backed by OpenAI's Chat Completions API."""

    def __init__(self, *, client: AsyncOpenAI | None = None, api_key: str = "") -> None:
        super().__init__(client)
        self._api_key = api_key

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIProvider":
        return cls(api_key=settings.openai_api_key)

    def _create_client(self) -> AsyncOpenAI:
        # None lets the SDK fall back to OPENAI_API_KEY and report its absence.
        return AsyncOpenAI(api_key=self._api_key or None)

    @property
    def name(self) -> str:
        return "openai"
