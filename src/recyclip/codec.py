"""
Single-line encoding of selections for menu choosers (rofi, dmenu).

Choosers read one entry per line, so line breaks inside a selection are
swapped for a NO-BREAK SPACE on the way out and restored when the chosen
entry comes back. A selection that already contains a NO-BREAK SPACE does
not survive the round trip unchanged; CR and LF both come back as LF.
"""

from __future__ import annotations


PLACEHOLDER = "\u00a0"

_ENCODE_TABLE = str.maketrans({"\n": PLACEHOLDER, "\r": PLACEHOLDER})
_DECODE_TABLE = str.maketrans({PLACEHOLDER: "\n"})


def encode(text: str) -> str:
    return text.translate(_ENCODE_TABLE)


def decode(text: str) -> str:
    return text.translate(_DECODE_TABLE)
