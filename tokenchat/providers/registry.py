"""Provider lookup: maps the configured provider name to the class that builds it.

Only the selected provider is constructed, and construction never talks to
the API, so an unused provider's missing credential cannot block startup.
"""

from tokenchat.config import Settings
from tokenchat.providers.base import LLMProvider
from tokenchat.providers.generic_openai import GenericOpenAIProvider
from tokenchat.providers.openai import OpenAIProvider
from tokenchat.providers.openrouter import OpenRouterProvider

PROVIDERS: dict[str, type[LLMProvider]] = {
    "openai": OpenAIProvider,
    "openrouter": OpenRouterProvider,
    "local": GenericOpenAIProvider,
}


def provider_names() -> list[str]:
    return list(PROVIDERS)


def create_provider(settings: Settings) -> LLMProvider:
    """Build the provider named by settings.provider. Raises ProviderNotFoundError."""
    try:
        provider_cls = PROVIDERS[settings.provider]
    except KeyError:
        raise ProviderNotFoundError(
            f"Provider '{settings.provider}' not available. "
            f"Available: {', '.join(provider_names())}"
        ) from None
    return provider_cls.from_settings(settings)


class ProviderNotFoundError(Exception):
    pass
