"""Terminal chat client that keeps a conversation inside a token budget."""

__version__ = "0.1.0"
