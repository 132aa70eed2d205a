"""
History persistence for recyclip.

- history file: JSON array of strings, most recent first (owned by the daemon)
- static history file: plain text, one entry per line (edited by the user, read-only here)

Loading never fails: a missing or damaged file reads as an empty history.
Saving is best effort and reports failure through its return value. The file
is overwritten in place; concurrent daemons on the same path are not
coordinated.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from .history import History

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_history(path: PathLike) -> History:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return ()
    except (OSError, ValueError) as e:
        log.debug("Ignoring unreadable history file %s: %s", p, e)
        return ()

    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        log.debug("Ignoring malformed history file %s", p)
        return ()
    return tuple(data)


def save_history(path: PathLike, history: History) -> bool:
    p = Path(path)
    payload = json.dumps(list(history), ensure_ascii=False)
    try:
        # encode before opening so a lone surrogate leaves the old file intact
        data = payload.encode("utf-8")
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
    except (OSError, ValueError) as e:
        log.warning("Could not write history file %s: %s", p, e)
        return False
    return True


def clear_history(path: PathLike) -> bool:
    return save_history(path, ())


def load_static_history(path: PathLike) -> History:
    p = Path(path)
    try:
        # bytes first: text mode would turn CR and CRLF into LF
        text = p.read_bytes().decode("utf-8")
    except FileNotFoundError:
        return ()
    except (OSError, UnicodeDecodeError) as e:
        log.debug("Ignoring unreadable static history file %s: %s", p, e)
        return ()
    # LF only; form feeds and unicode line separators stay inside an entry
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return tuple(lines)
