"""
Menu chooser integration (rofi script mode, dmenu).

    recyclip print                 -> one encoded entry per line
    recyclip print "<chosen line>" -> decoded and put on the clipboard

History entries come first, then the static list, each flattened to a
single line by the codec. Nothing here mutates either list.
"""

from __future__ import annotations

import sys
from typing import Iterator, Optional, TextIO

from .codec import decode, encode
from .config import Config
from .history import History
from .persistence import load_history, load_static_history
from .sources import SelectionWriter


def export_lines(history: History, static_history: History) -> Iterator[str]:
    for entry in history:
        yield encode(entry)
    for entry in static_history:
        yield encode(entry)


def print_history(config: Config, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    history = load_history(config.history_path)
    static_history = load_static_history(config.static_history_path)
    count = 0
    for line in export_lines(history, static_history):
        out.write(line + "\n")
        count += 1
    out.flush()
    return count


def advertise_selection(line: str, writer: SelectionWriter) -> str:
    text = decode(line)
    writer.write(text)
    return text
