"""Append-only conversation history sent with every request."""

from collections.abc import Iterator

from tokenchat.models import Message, Role

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."


class Transcript:
    """Ordered role-tagged messages, seeded with a single system message.

    Nothing is ever removed: the full history goes to the provider on each
    turn, so the session budget is what eventually stops growth.
    """

    def __init__(self, system_prompt: str = DEFAULT_SYSTEM_PROMPT) -> None:
        self._messages: list[Message] = [Message(role="system", content=system_prompt)]

    def add_user(self, content: str) -> Message:
        return self._append("user", content)

    def add_assistant(self, content: str) -> Message:
        return self._append("assistant", content)

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def to_api_messages(self) -> list[dict[str, str]]:
        return [m.to_api() for m in self._messages]

    def _append(self, role: Role, content: str) -> Message:
        message = Message(role=role, content=content)
        self._messages.append(message)
        return message

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)
