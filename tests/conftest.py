"""Shared pytest fixtures for tokenchat tests."""

import io

import pytest

from tests.fixtures import FakeProvider, TableTokenCounter
from tokenchat.chat.loop import ConversationLoop
from tokenchat.session.stats import SessionStats
from tokenchat.session.transcript import Transcript


@pytest.fixture
def provider() -> FakeProvider:
    """Provider that streams "Hello", " world" unless reconfigured."""
    return FakeProvider(["Hello", " world"])


@pytest.fixture
def counter() -> TableTokenCounter:
    return TableTokenCounter({"Hello world": 2}, default=10)


@pytest.fixture
def stdout() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def loop(provider, counter, stdout) -> ConversationLoop:
    """Loop with a 4096-token budget wired to the fakes above."""
    return ConversationLoop(
        provider,
        counter,
        model="gpt-3.5-turbo",
        stats=SessionStats(max_tokens=4096),
        transcript=Transcript(),
        stdin=io.StringIO(""),
        stdout=stdout,
    )
