"""Contract tests for provider lookup."""

import pytest

from tokenchat.config import ConfigError, Settings
from tokenchat.providers.generic_openai import GenericOpenAIProvider
from tokenchat.providers.openai import OpenAIProvider
from tokenchat.providers.openrouter import OpenRouterProvider
from tokenchat.providers.registry import (
    ProviderNotFoundError,
    create_provider,
    provider_names,
)


class TestProviderNames:
    def test_known_names(self):
        assert provider_names() == ["openai", "openrouter", "local"]


class TestCreateProvider:
    def test_openai_is_default(self):
        provider = create_provider(Settings.from_env({}))
        assert isinstance(provider, OpenAIProvider)

    def test_openai_without_key_still_builds(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        provider = create_provider(Settings.from_env({}))
        assert provider.name == "openai"

    def test_openrouter(self):
        provider = create_provider(
            Settings.from_env({"TOKENCHAT_PROVIDER": "openrouter"})
        )
        assert isinstance(provider, OpenRouterProvider)

    def test_local_takes_configured_base_url(self):
        provider = create_provider(
            Settings.from_env(
                {"TOKENCHAT_PROVIDER": "local", "TOKENCHAT_BASE_URL": "http://localhost:1234/v1"}
            )
        )
        assert isinstance(provider, GenericOpenAIProvider)
        assert provider.base_url == "http://localhost:1234/v1"

    def test_local_without_base_url_is_a_config_error(self):
        with pytest.raises(ConfigError, match="local"):
            Settings.from_env({"TOKENCHAT_PROVIDER": "local"})

    def test_unknown_raises_with_available_names(self):
        settings = Settings.from_env({"TOKENCHAT_PROVIDER": "nonexistent"})
        with pytest.raises(ProviderNotFoundError, match="Available: openai, openrouter, local"):
            create_provider(settings)
