"""
recyclip: clipboard history daemon for menu choosers.

Polls the CLIPBOARD (and optionally PRIMARY) selection, keeps a bounded,
deduplicated, most-recent-first history on disk and prints it for rofi/dmenu.
"""

__version__ = "0.1.0"
