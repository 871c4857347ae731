from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class InputEvent:
    """One key press as reported by the browser (KeyboardEvent.key)."""

    key: str
    timestamp_ms: int


@dataclass(frozen=True)
class CardToken:
    value: str


class EventKind(str, Enum):
    CHAR = "char"
    TERMINATOR = "terminator"
    IGNORED = "ignored"


class TokenizerState(str, Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"
