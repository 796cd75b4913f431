"""tokenchat command-line entry point."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

from tokenchat.chat.loop import ConversationLoop
from tokenchat.config import ConfigError, Settings
from tokenchat.generation.tokens import ApproximateTokenCounter, TiktokenCounter, TokenCounter
from tokenchat.models import SamplingParams
from tokenchat.providers.base import LLMProvider
from tokenchat.providers.registry import ProviderNotFoundError, create_provider, provider_names
from tokenchat.session.stats import SessionStats
from tokenchat.session.transcript import Transcript

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
    # Keep SDK transport chatter out of the console unless debugging.
    if level != "DEBUG":
        for name in ("httpx", "openai"):
            logging.getLogger(name).setLevel(logging.WARNING)


def build_token_counter(settings: Settings) -> TokenCounter:
    if settings.token_counter == "approximate":
        return ApproximateTokenCounter()
    return TiktokenCounter(settings.encoding)


def build_loop(settings: Settings, provider: LLMProvider) -> ConversationLoop:
    return ConversationLoop(
        provider,
        build_token_counter(settings),
        model=settings.model,
        stats=SessionStats(max_tokens=settings.max_tokens),
        transcript=Transcript(settings.system_prompt),
        sampling_params=SamplingParams(seed=settings.seed),
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tokenchat",
        description="Chat with an LLM from the terminal inside a fixed token budget.",
    )
    parser.add_argument("--provider", choices=provider_names())
    parser.add_argument("--model", help="model identifier sent with each request")
    parser.add_argument("--max-tokens", type=int, help="context window budget")
    parser.add_argument("--encoding", help="tiktoken encoding name")
    parser.add_argument("--token-counter", choices=["tiktoken", "approximate"])
    parser.add_argument("--system-prompt", help="first message of the transcript")
    parser.add_argument("--seed", type=int, help="sampling seed")
    parser.add_argument("--base-url", help="OpenAI-compatible server for the 'local' provider")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)

    try:
        settings = Settings.from_env(
            provider=args.provider,
            model=args.model,
            max_tokens=args.max_tokens,
            encoding=args.encoding,
            token_counter=args.token_counter,
            system_prompt=args.system_prompt,
            seed=args.seed,
            base_url=args.base_url,
            log_level="DEBUG" if args.verbose else None,
        )
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        return 1

    configure_logging(settings.log_level)

    try:
        provider = create_provider(settings)
    except ProviderNotFoundError as exc:
        logger.error("%s", exc)
        return 1

    logger.debug(
        "Starting session: provider=%s model=%s budget=%d",
        provider.name, settings.model, settings.max_tokens,
    )
    loop = build_loop(settings, provider)
    try:
        return asyncio.run(loop.run())
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
