"""Single-keypress reader shared by the terminal frontends.

Arrow keys, WASD and a handful of letters are normalised to action
strings so game loops never deal with raw escape sequences:

    "up", "down", "left", "right"  arrows / WASD
    "select", "enter"              Space / Enter (click under cursor)
    "quit"                         q / Ctrl-C / Escape
    "restart"                      r (new game / shuffle / next round)
    "hint"                         n (sliding puzzle hint)
    "reference"                    t (toggle reference photo)
    "help"                         h / ?
    "<char>"                       unmapped printable char (e.g. digits)
    ""                             unrecognised key

macOS / Linux use tty+termios, Windows uses msvcrt.
"""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Callable

# -- shared key mapping --------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
    "n": "hint",
    "t": "reference",
    "h": "help",
    "?": "help",
    " ": "select",
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}

# Actions that stand for "click the slot under the cursor".
SELECT_ACTIONS = frozenset({"select", "enter"})


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    action = _KEY_MAP.get(ch) or _KEY_MAP.get(ch.lower())
    if action:
        return action
    return ch if ch.isprintable() else ""


def _resolve_escape(read_next: Callable[[], str | None]) -> str:
    """Finish an ``ESC`` sequence.  *read_next* returns None when nothing follows."""
    ch2 = read_next()
    if ch2 is None:
        return "quit"  # bare Escape
    if ch2 != "[":
        return "quit"
    ch3 = read_next()
    if ch3 is None:
        return ""
    return _ARROW_MAP.get(ch3, "")


# -- platform readers ----------------------------------------------------------


if os.name == "nt":
    import msvcrt  # type: ignore[import-not-found]

    def _read_windows() -> str:
        return msvcrt.getch().decode("utf-8", errors="ignore")

    def get_key() -> str:
        ch = _read_windows()
        if ch == "\x1b":
            return _resolve_escape(lambda: _read_windows() if msvcrt.kbhit() else None)
        return _resolve(ch)

    def get_key_timeout(timeout: float) -> str | None:
        end = time.monotonic() + timeout
        while time.monotonic() < end:
            if msvcrt.kbhit():
                return get_key()
            time.sleep(0.02)
        return None

else:
    import select
    import termios
    import tty

    def _read_ready(fd: int, timeout: float | None) -> str | None:
        """Read one byte unbuffered, or None if nothing arrives in *timeout*."""
        if timeout is not None:
            ready, _, _ = select.select([fd], [], [], timeout)
            if not ready:
                return None
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    def _read_raw(timeout: float | None) -> str | None:
        fd = sys.stdin.fileno()
        old = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            ch = _read_ready(fd, timeout)
            if ch is None:
                return None
            # os.read keeps the rest of a multi-byte sequence visible to select().
            if ch == "\x1b":
                return _resolve_escape(lambda: _read_ready(fd, 0.1))
            return _resolve(ch)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old)

    def get_key() -> str:
        return _read_raw(None) or ""

    def get_key_timeout(timeout: float) -> str | None:
        return _read_raw(timeout)

