"""
Selection history management.

- History is an immutable tuple, most recent selection first.
- No duplicates: re-selecting an older entry moves it back to the front.
- Bounded: the oldest entries fall off past max_len.

This module does no I/O; the poller owns the history value and decides
when to persist it (see persistence.py).
"""

from __future__ import annotations

from typing import Tuple


History = Tuple[str, ...]


def append(selection: str, history: History, max_len: int) -> History:
    """
    Return history with selection at the front.

    The selection is stripped first. Empty selections and a repeat of the
    current head return history itself, so callers can detect "no change"
    with an identity or equality check.
    """
    if max_len <= 0:
        raise ValueError("max_len must be > 0")

    text = selection.strip()
    if not text:
        return history
    if history and history[0] == text:
        return history  # dedupe consecutive duplicates

    rest = tuple(item for item in history if item != text)
    return ((text,) + rest)[:max_len]
