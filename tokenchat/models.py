"""Canonical data structures for tokenchat.

Defined once here, referenced everywhere else. A Message is the unit the
transcript stores and the provider receives; SamplingParams carries the
request knobs that stay fixed for the whole session.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class Message(BaseModel):
    """One role-tagged entry in the conversation transcript."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    def to_api(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class SamplingParams(BaseModel):
    seed: int | None = 1
    temperature: float | None = None
    max_completion_tokens: int | None = Field(default=None, gt=0)
