"""Token counting abstractions for budget enforcement.

Provides a TokenCounter interface and two implementations. TiktokenCounter
is the real one, using the BPE encoding of the target model family
(cl100k_base for gpt-3.5-turbo and gpt-4). ApproximateTokenCounter keeps the
len // 4 heuristic for running without the encoding files.
"""

import logging
from abc import ABC, abstractmethod

import tiktoken

DEFAULT_ENCODING = "cl100k_base"

logger = logging.getLogger(__name__)


class TokenCounter(ABC):
    """Interface for counting tokens in text."""

    @abstractmethod
    def count(self, text: str) -> int:
        """Return the token count for the given text."""
        ...


class ApproximateTokenCounter(TokenCounter):
    """len(text) // 4, roughly 4 characters per token for English text.

    Good enough to keep a session inside its budget; not a substitute for
    the real encoding when the numbers have to match the provider's.
    """

    def count(self, text: str) -> int:
        return len(text) // 4


class TiktokenCounter(TokenCounter):
    """Exact token counts under a named tiktoken encoding.

    The encoding is loaded on first use and cached. A failed load is not
    cached, so the next call tries again (tiktoken may need to download the
    BPE file the first time).
    """

    def __init__(self, encoding_name: str = DEFAULT_ENCODING) -> None:
        self.encoding_name = encoding_name
        self._encoding: tiktoken.Encoding | None = None

    def count(self, text: str) -> int:
        encoding = self._load()
        # Special-token text typed by the user is counted as plain text.
        return len(encoding.encode(text, disallowed_special=()))

    def _load(self) -> tiktoken.Encoding:
        if self._encoding is None:
            try:
                self._encoding = tiktoken.get_encoding(self.encoding_name)
            except (ValueError, KeyError, OSError) as exc:
                raise EncodingUnavailableError(self.encoding_name, str(exc)) from exc
            logger.debug("Loaded tiktoken encoding %s", self.encoding_name)
        return self._encoding


class EncodingUnavailableError(Exception):
    def __init__(self, encoding_name: str, reason: str = "") -> None:
        self.encoding_name = encoding_name
        self.reason = reason
        message = f"Encoding unavailable: {encoding_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
