"""Terminal helpers: cursor placement, colours and unbuffered key reads."""

from __future__ import annotations

import os
import sys

try:
    import msvcrt
except ImportError:
    msvcrt = None

try:
    import select
    import termios
    import tty
except ImportError:
    termios = None
    tty = None
    select = None


def _out(stream):
    return stream if stream is not None else sys.stdout


def gotoxy(x, y, stream=None):
    """Move the cursor to column x, row y (both zero based)."""
    out = _out(stream)
    out.write(f"\x1b[{y + 1};{x + 1}H")
    out.flush()


def _ansi_code(color):
    attr = int(color)
    base = 0
    if attr & 4:
        base |= 1
    if attr & 2:
        base |= 2
    if attr & 1:
        base |= 4
    return (90 if attr & 8 else 30) + base


def set_color(color, stream=None):
    """Switch the foreground colour to a console colour attribute."""
    _out(stream).write(f"\x1b[{_ansi_code(color)}m")


def clear_screen(stream=None):
    """Clear the terminal and put the cursor in the top-left corner."""
    out = _out(stream)
    out.write("\x1b[2J\x1b[H")
    out.flush()


def _stdin_is_tty():
    try:
        return sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False


def getch():
    """Read one key without echo; raises EOFError when input is exhausted."""
    if not _stdin_is_tty():
        ch = sys.stdin.read(1)
        if not ch:
            raise EOFError("no more input")
        return ch
    if msvcrt is not None:
        return msvcrt.getwch()
    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        data = os.read(fd, 1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    if not data:
        raise EOFError("no more input")
    return data.decode("latin-1")


def kbhit():
    """Return True when a key is waiting to be read."""
    if not _stdin_is_tty():
        try:
            fd = sys.stdin.fileno()
        except (AttributeError, OSError, ValueError):
            return True
        if select is None:
            return True
        ready, _, _ = select.select([fd], [], [], 0)
        return bool(ready)
    if msvcrt is not None:
        return bool(msvcrt.kbhit())
    ready, _, _ = select.select([sys.stdin.fileno()], [], [], 0)
    return bool(ready)