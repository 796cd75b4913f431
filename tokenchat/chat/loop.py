"""The interactive conversation loop.

One turn at a time: read a line, check it against the token budget, stream
the model's reply to the console, then account for both sides of the
exchange. A turn moves through the LoopState values in order and always
comes back to AWAITING_INPUT unless the user quits.

Errors never end the session. A tokenizer failure or an over-budget input
skips the turn without touching the transcript or stats. A failed stream
keeps whatever text arrived before the failure: it is already on screen, so
it is recorded and counted like any other reply.
"""

import logging
import sys
from enum import Enum
from typing import TextIO

from tokenchat.config import QUIT_TOKEN
from tokenchat.generation.tokens import EncodingUnavailableError, TokenCounter
from tokenchat.models import SamplingParams
from tokenchat.providers.base import GenerationRequest, LLMProvider
from tokenchat.session.stats import SessionStats
from tokenchat.session.transcript import Transcript

logger = logging.getLogger(__name__)

PROMPT = f"\nEnter your question (or '{QUIT_TOKEN}' to exit): "


class LoopState(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    CHECKING_BUDGET = "checking_budget"
    STREAMING = "streaming"
    UPDATING_STATS = "updating_stats"
    EXITING = "exiting"


class TurnOutcome(str, Enum):
    QUIT = "quit"
    TOKENIZE_FAILED = "tokenize_failed"
    OVER_BUDGET = "over_budget"
    COMPLETED = "completed"
    STREAM_FAILED = "stream_failed"


class ConversationLoop:
    """Owns the transcript and session stats for the life of the process."""

    def __init__(
        self,
        provider: LLMProvider,
        counter: TokenCounter,
        *,
        model: str,
        stats: SessionStats,
        transcript: Transcript | None = None,
        sampling_params: SamplingParams | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        quit_token: str = QUIT_TOKEN,
    ) -> None:
        self.provider = provider
        self.counter = counter
        self.model = model
        self.stats = stats
        self.transcript = transcript if transcript is not None else Transcript()
        self.sampling_params = sampling_params or SamplingParams()
        self.quit_token = quit_token
        self.state = LoopState.AWAITING_INPUT
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    async def run(self) -> int:
        """Drive turns until the user quits. Returns the process exit status."""
        while self.state is not LoopState.EXITING:
            self._write(PROMPT)
            line = self._stdin.readline()
            if not line:
                # EOF behaves like the quit token.
                self._write("\n")
                line = self.quit_token
            await self.handle_input(line.rstrip("\r\n"))
        return 0

    async def handle_input(self, text: str) -> TurnOutcome:
        """Run one full turn for a line of input."""
        if text == self.quit_token:
            self._write("Final Stats:\n")
            self._write_stats()
            self.state = LoopState.EXITING
            return TurnOutcome.QUIT

        self.state = LoopState.CHECKING_BUDGET
        try:
            input_tokens = self.counter.count(text)
        except EncodingUnavailableError as exc:
            logger.error("Error counting tokens: %s", exc)
            self.state = LoopState.AWAITING_INPUT
            return TurnOutcome.TOKENIZE_FAILED

        if self.stats.would_exceed(input_tokens):
            self._write(
                "Warning: Adding this input would exceed token limit "
                f"({self.stats.total_tokens} + {input_tokens} > {self.stats.max_tokens})\n"
            )
            self.state = LoopState.AWAITING_INPUT
            return TurnOutcome.OVER_BUDGET

        self.state = LoopState.STREAMING
        self.transcript.add_user(text)
        self.stats.update(input_tokens)
        self._write(f"\n> {text}\n\n")

        response, error = await self._stream_reply()

        self.state = LoopState.UPDATING_STATS
        self.transcript.add_assistant(response)
        self.stats.update(self._count_reply(response))
        self._write_stats()

        self.state = LoopState.AWAITING_INPUT
        if error is not None:
            logger.error("Error from %s: %s", self.provider.name, error)
            return TurnOutcome.STREAM_FAILED
        return TurnOutcome.COMPLETED

    async def _stream_reply(self) -> tuple[str, str | None]:
        """Print fragments as they arrive. Returns (full text, error or None)."""
        request = GenerationRequest(
            model=self.model,
            messages=self.transcript.to_api_messages(),
            sampling_params=self.sampling_params,
        )
        parts: list[str] = []
        error: str | None = None
        async for chunk in self.provider.generate_stream(request):
            if chunk.type == "text_delta":
                self._write(chunk.text)
                parts.append(chunk.text)
            elif chunk.type == "error":
                error = chunk.error or "unknown error"
            if chunk.is_final and chunk.result is not None:
                result = chunk.result
                logger.debug(
                    "%s reply: model=%s finish=%s usage=%s latency=%sms",
                    self.provider.name, result.model, result.finish_reason,
                    result.usage, result.latency_ms,
                )
        self._write("\n")
        return "".join(parts), error

    def _count_reply(self, response: str) -> int:
        # The exchange is already committed, so a failed count records zero.
        try:
            return self.counter.count(response)
        except EncodingUnavailableError as exc:
            logger.error("Error counting tokens: %s", exc)
            return 0

    def _write_stats(self) -> None:
        self._write(f"\n{self.stats.display()}\n\n")

    def _write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()
