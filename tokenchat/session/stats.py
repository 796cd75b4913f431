"""Running token usage for one chat session."""

from dataclasses import dataclass, field

DEFAULT_CONTEXT_LIMIT = 4096


@dataclass
class SessionStats:
    """Cumulative tokens, exchanged messages and what is left of the window.

    remaining_tokens always equals max_tokens - total_tokens after update().
    It is not clamped: callers check would_exceed() before committing input.
    """

    max_tokens: int = DEFAULT_CONTEXT_LIMIT
    total_tokens: int = field(default=0, init=False)
    message_count: int = field(default=0, init=False)
    remaining_tokens: int = field(init=False)

    def __post_init__(self) -> None:
        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        self.remaining_tokens = self.max_tokens

    def update(self, new_tokens: int) -> None:
        self.total_tokens += new_tokens
        self.message_count += 1
        self.remaining_tokens = self.max_tokens - self.total_tokens

    def would_exceed(self, tokens: int) -> bool:
        """True when adding `tokens` would push the session past max_tokens."""
        return self.total_tokens + tokens > self.max_tokens

    @property
    def usage_percent(self) -> float:
        return self.total_tokens / self.max_tokens * 100

    def display(self) -> str:
        """Human-readable summary block, without surrounding blank lines."""
        return "\n".join(
            [
                "=== Session Stats ===",
                f"Messages: {self.message_count}",
                f"Tokens Used: {self.total_tokens}",
                f"Tokens Remaining: {self.remaining_tokens}",
                f"Context Usage: {self.usage_percent:.1f}%",
                "===================",
            ]
        )
