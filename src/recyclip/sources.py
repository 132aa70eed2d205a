"""
Selection sources: the buffers recyclip polls and the contract for reading them.

A reader answers with a ReadResult instead of raising for the everyday
outcomes (no text in the buffer, read timed out). The only failure it raises
is DisplayUnavailableError, when the display/session itself is gone.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol


READ_TIMEOUT_S = 1.0


class Source(str, Enum):
    CLIPBOARD = "clipboard"
    PRIMARY = "primary"


class ReadStatus(str, Enum):
    TEXT = "text"
    EMPTY = "empty"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class ReadResult:
    status: ReadStatus
    text: Optional[str] = None

    @classmethod
    def of(cls, text: Optional[str]) -> "ReadResult":
        if text is None:
            return cls(ReadStatus.EMPTY)
        return cls(ReadStatus.TEXT, text)

    @classmethod
    def empty(cls) -> "ReadResult":
        return cls(ReadStatus.EMPTY)

    @classmethod
    def timeout(cls) -> "ReadResult":
        return cls(ReadStatus.TIMEOUT)

    @property
    def has_text(self) -> bool:
        return self.status is ReadStatus.TEXT


class SelectionReader(Protocol):
    def read(self, source: Source, timeout: float = READ_TIMEOUT_S) -> ReadResult:
        ...


class SelectionWriter(Protocol):
    def write(self, text: str) -> None:
        ...
