"""
GdkSelections: GTK4/GDK-backed reads and writes of the selection buffers.

- read() schedules read_text_async on the default main context and spins a
  GLib main loop until the text arrives or the timeout fires; a timed out
  read is cancelled and reported as ReadResult.timeout().
- write() takes ownership of the CLIPBOARD buffer; hold_ownership() keeps
  serving it until another client claims the clipboard.
- No external tools; works under X11 and Wayland via Gdk.Display APIs.

Intended use:
    selections = GdkSelections()
    result = selections.read(Source.PRIMARY, timeout=1.0)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import gi
gi.require_version("Gtk", "4.0")
gi.require_version("Gdk", "4.0")
from gi.repository import Gdk, Gio, GLib, GObject, Gtk  # type: ignore

from .errors import DisplayUnavailableError
from .sources import READ_TIMEOUT_S, ReadResult, Source

log = logging.getLogger(__name__)


class GdkSelections:
    def __init__(self, display: Optional[Any] = None) -> None:
        self._display: Optional[Any] = None
        self._closed = False
        self._providers: List[Any] = []
        if display is not None:
            self._attach(display)

    def _attach(self, display: Any) -> None:
        display.connect("closed", self._on_display_closed)
        self._display = display

    def _on_display_closed(self, _display: Any, is_error: bool) -> None:
        log.error("Display connection closed (error=%s)", is_error)
        self._closed = True

    def _ensure_display(self) -> Any:
        if self._closed:
            raise DisplayUnavailableError()
        if self._display is None:
            if not Gtk.init_check():
                raise DisplayUnavailableError()
            display = Gdk.Display.get_default()
            if display is None:
                raise DisplayUnavailableError()
            self._attach(display)
            log.debug("Using display %s", display.get_name())
        return self._display

    def _clipboard(self, source: Source) -> Any:
        disp = self._ensure_display()
        if source is Source.PRIMARY:
            return disp.get_primary_clipboard()
        return disp.get_clipboard()

    def read(self, source: Source, timeout: float = READ_TIMEOUT_S) -> ReadResult:
        clip = self._clipboard(source)
        loop = GLib.MainLoop.new(None, False)
        cancellable = Gio.Cancellable()
        outcome: Dict[str, Any] = {}

        def _on_finish(src, res) -> None:
            try:
                outcome["text"] = src.read_text_finish(res)
            except GLib.Error as e:
                # no text target offered, or the read was cancelled by the timeout
                outcome.setdefault("error", e)
            if loop.is_running():
                loop.quit()

        def _on_timeout() -> bool:
            outcome["timeout"] = True
            cancellable.cancel()
            loop.quit()
            return False  # run once

        timer = GLib.timeout_add(max(1, int(timeout * 1000)), _on_timeout)
        clip.read_text_async(cancellable, _on_finish)
        if not outcome:
            loop.run()
        if not outcome.get("timeout"):
            GLib.source_remove(timer)

        # the display may have closed while the loop was running
        if self._closed:
            raise DisplayUnavailableError()
        if outcome.get("timeout"):
            log.debug("Reading %s timed out after %.1fs", source.value, timeout)
            return ReadResult.timeout()
        if "error" in outcome:
            log.debug("Reading %s gave no text: %s", source.value, outcome["error"])
            return ReadResult.empty()
        return ReadResult.of(outcome.get("text"))

    def write(self, text: str) -> None:
        clip = self._clipboard(Source.CLIPBOARD)
        # Preferred: simple set(...) for strings in GTK4 (PyGObject handles GValue)
        try:
            clip.set(text)
            return
        except (TypeError, GLib.Error):
            pass
        # Fallback: value-based provider, keep a reference to avoid GC
        val = GObject.Value()
        val.init(str)  # type: ignore[arg-type]
        val.set_string(text)
        provider = Gdk.ContentProvider.new_for_value(val)
        self._providers.append(provider)
        clip.set_content(provider)

    def hold_ownership(self) -> None:
        """Serve the CLIPBOARD content we own until someone else takes it over."""
        clip = self._clipboard(Source.CLIPBOARD)
        loop = GLib.MainLoop.new(None, False)

        def _on_changed(c) -> None:
            if not c.is_local():
                loop.quit()

        def _on_closed(_display, _is_error) -> None:
            loop.quit()

        clip.connect("changed", _on_changed)
        self._display.connect("closed", _on_closed)
        if clip.is_local():
            loop.run()
        log.debug("Clipboard ownership released")
