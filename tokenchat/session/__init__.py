"""Per-process session state: transcript and token accounting."""

from tokenchat.session.stats import SessionStats
from tokenchat.session.transcript import Transcript

__all__ = ["SessionStats", "Transcript"]
