"""
Debug output for the calview engine.

Messages go to stderr with a timestamp and a component tag, and only
when debug output has been switched on (config [General] debug = true).
"""

import sys
from datetime import datetime


_enabled: bool = False


def set_debug(enabled: bool):
    """Enable or disable debug output."""
    global _enabled
    _enabled = bool(enabled)


def is_enabled() -> bool:
    return _enabled


def debug_print(tag: str, message: str) -> None:
    if not _enabled:
        return
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {tag}: {message}", file=sys.stderr)
