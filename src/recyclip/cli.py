#!/usr/bin/env python3
"""
recyclip CLI -- recycle your clipboard selections

Subcommands:
  - daemon                 poll the selection buffers and record history
  - print [SELECTION]      list history for a menu chooser, or re-select an entry
  - copy SELECTION         re-select an entry (same as print SELECTION)
  - clear                  empty the recorded history
  - config show/show-paths inspect the effective configuration

Using it with rofi:
    rofi -modi "clipboard:recyclip print" -show clipboard

Exit codes:
  0: success
  1: display not available, configuration or general error
  2: invalid arguments
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Dict, Optional

from .chooser import advertise_selection, print_history
from .config import Config, load_config, load_settings
from .errors import DISPLAY_UNAVAILABLE_MESSAGE, ConfigurationError, DisplayUnavailableError
from .logging_setup import setup_logging
from .persistence import clear_history, load_history
from .platform import active_env_summary, display_available, log_path, settings_path

log = logging.getLogger(__name__)


def _settings_file(args: argparse.Namespace) -> Path:
    if getattr(args, "config", None):
        return Path(args.config).expanduser()
    return settings_path()


def _load(args: argparse.Namespace) -> Config:
    return load_config(_settings_file(args))


def _display_missing() -> int:
    print(DISPLAY_UNAVAILABLE_MESSAGE, file=sys.stderr)
    return 1


def cmd_daemon(args: argparse.Namespace) -> int:
    setup_logging(console=True)
    if not display_available():
        return _display_missing()
    cfg = _load(args)

    # GTK is imported lazily so that print/clear work without a display
    from .gdk_clipboard import GdkSelections
    from .poller import initial_state, run_daemon

    log.info("Starting recyclip daemon (%s)", active_env_summary())
    state = initial_state(cfg, load_history(cfg.history_path))
    log.info("Loaded %d history entries from %s", len(state.history), cfg.history_path)
    try:
        run_daemon(cfg, GdkSelections(), state=state)
    except DisplayUnavailableError:
        return _display_missing()
    return 0


def cmd_print(args: argparse.Namespace) -> int:
    if args.selection is not None:
        return _advertise(args, args.selection)
    setup_logging(console=False)
    print_history(_load(args))
    return 0


def cmd_copy(args: argparse.Namespace) -> int:
    return _advertise(args, args.selection)


def _advertise(args: argparse.Namespace, line: str) -> int:
    setup_logging(console=False)
    if not display_available():
        return _display_missing()
    if getattr(args, "foreground", False):
        return _serve_selection(line)

    # The owner of the clipboard has to stay alive to hand out its content;
    # the child keeps serving while the caller (rofi) gets its answer at once.
    pid = os.fork()
    if pid > 0:
        return 0
    os.setsid()
    # detach from the caller's pipes so the chooser sees EOF right away
    devnull = os.open(os.devnull, os.O_RDWR)
    for fd in (0, 1, 2):
        os.dup2(devnull, fd)
    code = 1
    try:
        code = _serve_selection(line)
    except Exception as e:
        log.exception("Serving the clipboard failed: %s", e)
    finally:
        logging.shutdown()
        os._exit(code)


def _serve_selection(line: str) -> int:
    from .gdk_clipboard import GdkSelections

    selections = GdkSelections()
    try:
        text = advertise_selection(line, selections)
        log.debug("Advertised %d characters on the clipboard", len(text))
        selections.hold_ownership()
    except DisplayUnavailableError:
        return _display_missing()
    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    setup_logging(console=False)
    cfg = _load(args)
    if not clear_history(cfg.history_path):
        print(f"could not clear {cfg.history_path}", file=sys.stderr)
        return 1
    return 0


def _config_paths(args: argparse.Namespace) -> Dict[str, str]:
    cfg = _load(args)
    return {
        "settings": str(_settings_file(args)),
        "history": str(cfg.history_path),
        "static_history": str(cfg.static_history_path),
        "state_log": str(log_path()),
    }


def cmd_config_show_paths(args: argparse.Namespace) -> int:
    paths = _config_paths(args)
    if getattr(args, "json", False):
        print(json.dumps(paths, ensure_ascii=False, indent=2))
    else:
        for k, v in paths.items():
            print(f"{k}: {v}")
    return 0


def cmd_config_show(args: argparse.Namespace) -> int:
    settings = load_settings(_settings_file(args))
    print(json.dumps(settings.as_mapping(), ensure_ascii=False, indent=2))
    return 0


def cmd_help(_args: argparse.Namespace) -> int:
    build_parser().print_help()
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="recyclip", description="Recycle your clipboard selections")
    p.add_argument("--config", help="path to settings.ini (default: $RECYCLIP_CONFIG or ~/.config/recyclip/settings.ini)")
    sub = p.add_subparsers(dest="sub")

    p_daemon = sub.add_parser("daemon", help="spawn the daemon that listens to selections")
    p_daemon.set_defaults(func=cmd_daemon)

    p_print = sub.add_parser("print", help="display all selections, or re-select the given one")
    p_print.add_argument("selection", nargs="?", help="an entry as printed by 'recyclip print'")
    p_print.add_argument("--foreground", action="store_true", help="serve the selection without forking")
    p_print.set_defaults(func=cmd_print)

    p_copy = sub.add_parser("copy", help="put an entry printed by 'recyclip print' on the clipboard")
    p_copy.add_argument("selection", help="an entry as printed by 'recyclip print'")
    p_copy.add_argument("--foreground", action="store_true", help="serve the selection without forking")
    p_copy.set_defaults(func=cmd_copy)

    p_clear = sub.add_parser("clear", help="clear history")
    p_clear.set_defaults(func=cmd_clear)

    p_cfg = sub.add_parser("config", help="configuration utilities")
    sub_cfg = p_cfg.add_subparsers(dest="sub_cfg")

    p_cfg_show = sub_cfg.add_parser("show", help="print the effective settings")
    p_cfg_show.set_defaults(func=cmd_config_show)

    p_cfg_paths = sub_cfg.add_parser("show-paths", help="print important file paths")
    p_cfg_paths.add_argument("--json", action="store_true", help="print as JSON")
    p_cfg_paths.set_defaults(func=cmd_config_show_paths)

    p_help = sub.add_parser("help", help="display this message")
    p_help.set_defaults(func=cmd_help)

    return p


def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 2

    try:
        return args.func(args)
    except ConfigurationError as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 1


if __name__ == "__main__":
    sys.exit(main())
