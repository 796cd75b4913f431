"""Self-hosted OpenAI-compatible servers (vLLM, LM Studio, llama.cpp server).

Selected as the "local" provider; TOKENCHAT_BASE_URL says where the server
lives and TOKENCHAT_API_KEY is only needed when the server checks one.
"""

from openai import AsyncOpenAI

from tokenchat.config import Settings
from tokenchat.providers.openai_compat import OpenAICompatibleProvider

# Most local servers ignore the key, but the SDK refuses to send no key at all.
PLACEHOLDER_API_KEY = "not-needed"


class GenericOpenAIProvider(OpenAICompatibleProvider):
    """Provider for an OpenAI-compatible server at a configured base URL."""

    def __init__(
        self,
        *,
        base_url: str,
        client: AsyncOpenAI | None = None,
        api_key: str = "",
    ) -> None:
        super().__init__(client)
        self.base_url = base_url
        self._api_key = api_key

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenericOpenAIProvider":
        # Settings validation guarantees base_url when provider is "local".
        return cls(base_url=settings.base_url or "", api_key=settings.api_key)

    def _create_client(self) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=self._api_key or PLACEHOLDER_API_KEY,
            base_url=self.base_url,
        )

    @property
    def name(self) -> str:
        return "local"
