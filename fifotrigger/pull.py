"""Wake a listener by writing one byte to its named pipe."""

from __future__ import annotations

import errno
import os
import signal
import sys
from collections.abc import Sequence

from fifotrigger.errors import die
from fifotrigger.sysio import ndelay_on, open_write

FATAL = "trigger-pull: fatal: "
USAGE = "trigger-pull: usage: trigger-pull fifo"
_HARMLESS = (errno.EAGAIN, errno.EPIPE)


def _poke(fd: int) -> bool:
    """Write a NUL byte; False if the pipe is full or has no reader."""
    try:
        os.write(fd, b"\0")
    except OSError as exc:
        if exc.errno in _HARMLESS:
            return False
        raise
    return True


def pull(path: str) -> bool:
    """Write one byte to the FIFO at path without blocking.

    Returns True if the byte was written and False if the pipe was full or
    lost its reader. Raises OSError if the FIFO cannot be opened or written.
    """
    fd = open_write(path)
    try:
        ndelay_on(fd)
        return _poke(fd)
    finally:
        os.close(fd)


def main(argv: Sequence[str] | None = None) -> None:
    """Command entry point; always exits through SystemExit."""
    args = list(sys.argv if argv is None else argv)
    if len(args) < 2:
        die(100, USAGE)
    path = args[1]

    try:
        fd = open_write(path)
    except OSError as exc:
        die(111, FATAL, "cannot open ", path, ": ", error=exc)
    try:
        try:
            ndelay_on(fd)
        except OSError as exc:
            die(111, FATAL, "cannot control ", path, ": ", error=exc)
        signal.signal(signal.SIGPIPE, signal.SIG_IGN)
        try:
            _poke(fd)
        except OSError as exc:
            die(111, FATAL, "cannot write ", path, ": ", error=exc)
    finally:
        os.close(fd)
    raise SystemExit(0)