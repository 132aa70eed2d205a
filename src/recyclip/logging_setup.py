"""
Logging setup for recyclip.

- Logs to console (stderr) and to a file under XDG state dir.
- Default level: INFO. Can be overridden via environment variable RECYCLIP_LOG_LEVEL.
- Chooser commands pass console=False so the menu only ever sees entries on stdout.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .platform import log_path


def setup_logging(console: bool = True, log_file: Optional[Path] = None) -> logging.Logger:
    level_name = os.environ.get("RECYCLIP_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    log_file = log_file or log_path()

    logger = logging.getLogger("recyclip")
    logger.setLevel(level)
    logger.propagate = False  # avoid duplicate logs

    # Clear existing handlers if any (idempotent setup)
    if logger.handlers:
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()

    fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

    if console:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(fmt)
        logger.addHandler(ch)

    # File handler (rotating); a read-only home must not keep the daemon from starting
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    except OSError as e:
        logger.addHandler(logging.NullHandler())
        logger.warning("File logging disabled (%s): %s", log_file, e)
    else:
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    logger.debug("Logging initialized at level %s", level_name)
    logger.debug("Log file: %s", str(log_file))
    return logger
