"""Runtime configuration.

Values come from the process environment (a .env file is loaded into it by
main) and may be overridden from the command line. Everything is validated
once at startup; a bad value is a startup failure, never a mid-session one.
"""

import os
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, model_validator

from tokenchat.generation.tokens import DEFAULT_ENCODING
from tokenchat.session.stats import DEFAULT_CONTEXT_LIMIT
from tokenchat.session.transcript import DEFAULT_SYSTEM_PROMPT

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_PROVIDER = "openai"
QUIT_TOKEN = "q"

# Settings field -> environment variable
ENV_VARS: dict[str, str] = {
    "provider": "TOKENCHAT_PROVIDER",
    "model": "TOKENCHAT_MODEL",
    "max_tokens": "TOKENCHAT_MAX_TOKENS",
    "encoding": "TOKENCHAT_ENCODING",
    "token_counter": "TOKENCHAT_TOKEN_COUNTER",
    "system_prompt": "TOKENCHAT_SYSTEM_PROMPT",
    "seed": "TOKENCHAT_SEED",
    "base_url": "TOKENCHAT_BASE_URL",
    "log_level": "TOKENCHAT_LOG_LEVEL",
}


class Settings(BaseModel):
    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    max_tokens: int = Field(default=DEFAULT_CONTEXT_LIMIT, gt=0)
    encoding: str = DEFAULT_ENCODING
    token_counter: Literal["tiktoken", "approximate"] = "tiktoken"
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    seed: int | None = 1
    base_url: str | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    # Credentials are read but never checked here; the provider reports them.
    openai_api_key: str = ""
    openrouter_api_key: str = ""
    api_key: str = ""

    @model_validator(mode="after")
    def _local_needs_base_url(self) -> "Settings":
        if self.provider == "local" and not self.base_url:
            raise ValueError("provider 'local' needs TOKENCHAT_BASE_URL or --base-url")
        return self

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> "Settings":
        """Build settings from environment variables plus explicit overrides.

        Overrides whose value is None are ignored so argparse defaults can be
        passed straight through. Raises ConfigError on invalid values.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for field_name, var in ENV_VARS.items():
            raw = env.get(var)
            if raw:
                values[field_name] = raw
        if "log_level" in values:
            values["log_level"] = values["log_level"].upper()
        values["openai_api_key"] = env.get("OPENAI_API_KEY", "")
        values["openrouter_api_key"] = env.get("OPENROUTER_API_KEY", "")
        values["api_key"] = env.get("TOKENCHAT_API_KEY", "")
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigError(exc) from exc


class ConfigError(Exception):
    def __init__(self, validation_error: ValidationError) -> None:
        self.errors = validation_error.errors()
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in self.errors
        )
        super().__init__(f"Invalid configuration: {details}")
