"""Wait for a byte on a named pipe, optionally running a program meanwhile."""

from __future__ import annotations

import contextlib
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import NoReturn

from fifotrigger.errors import die, warn
from fifotrigger.getopt import OptionParser
from fifotrigger.pathexec import ExecEnvironment
from fifotrigger.scan import scan_uint
from fifotrigger.sysio import (
    IOPAUSE_READ,
    IOPauseFd,
    fifo_make,
    iopause,
    ndelay_on,
    open_read,
    open_write,
    wait_pid,
)
from fifotrigger.taia import Taia

FATAL = "trigger-wait: fatal: "
USAGE = "trigger-wait: usage: trigger-wait [ -wWdD -t timeout ] fifo [ prog ]"
TIMED_OUT = 99
_MAX_UINT = (1 << 32) - 1


@dataclass
class WaitConfig:
    """Settings for one wait, as given on the command line."""

    path: str
    program: list[str] = field(default_factory=list)
    timeout: int = _MAX_UINT
    wait: bool = True
    delete: bool = True


def usage() -> NoReturn:
    """Print the usage line and exit with status 100."""
    die(100, USAGE)
    raise SystemExit(100)


def parse_args(argv: Sequence[str]) -> WaitConfig:
    """Parse the command line; exits with status 100 on a usage error.

    Waiting for the program is switched off when no program is given.
    """
    timeout = _MAX_UINT
    flag_wait = True
    delete = True
    parser = OptionParser(argv, "wWdDt:")
    for option, value in parser:
        if option == "t":
            timeout = scan_uint(value or "")[0]
        elif option == "w":
            flag_wait = True
        elif option == "W":
            flag_wait = False
        elif option == "d":
            delete = True
        elif option == "D":
            delete = False
        else:
            usage()
    rest = parser.remaining()
    if not rest:
        usage()
    program = list(rest[1:])
    return WaitConfig(
        path=rest[0],
        program=program,
        timeout=timeout,
        wait=flag_wait and bool(program),
        delete=delete,
    )


def _recreate_fifo(path: str) -> None:
    old = os.umask(0)
    try:
        with contextlib.suppress(OSError):
            os.unlink(path)
        with contextlib.suppress(OSError):
            fifo_make(path, 0o666)
    finally:
        os.umask(old)


def _run_child(program: list[str], fds: tuple[int, int]) -> NoReturn:
    try:
        for fd in fds:
            os.close(fd)
        ExecEnvironment().execute(program)
    except OSError as exc:
        warn(FATAL, "cannot run ", program[0], ": ", error=exc)
    finally:
        os._exit(111)


def _await_byte(fd: int, timeout: int) -> int:
    """Return 0 once fd is readable (consuming a byte), 99 on timeout."""
    watch = IOPauseFd(fd, IOPAUSE_READ)
    deadline = Taia.now() + Taia.from_seconds(timeout)
    while True:
        stamp = Taia.now()
        iopause([watch], deadline, stamp)
        if watch.revents:
            with contextlib.suppress(OSError):
                os.read(fd, 1)
            return 0
        if deadline < stamp:
            return TIMED_OUT


def main(argv: Sequence[str] | None = None) -> None:
    """Command entry point; exits 0 when triggered and 99 on timeout."""
    config = parse_args(sys.argv if argv is None else argv)
    path = config.path

    if config.delete:
        _recreate_fifo(path)

    try:
        fdr = open_read(path)
    except OSError as exc:
        die(111, FATAL, "cannot read ", path, ": ", error=exc)
    try:
        ndelay_on(fdr)
        try:
            fdw = open_write(path)
        except OSError as exc:
            die(111, FATAL, "cannot write ", path, ": ", error=exc)
        try:
            pid = 0
            if config.program:
                try:
                    pid = os.fork()
                except OSError as exc:
                    die(111, FATAL, "cannot fork ", config.program[0], ": ", error=exc)
                if pid == 0:
                    _run_child(config.program, (fdr, fdw))

            status = _await_byte(fdr, config.timeout)

            if config.wait:
                try:
                    reaped, _ = wait_pid(pid)
                except ChildProcessError:
                    reaped = -1
                if reaped != pid:
                    die(111, FATAL, "cannot reap child process")
        finally:
            os.close(fdw)
    finally:
        os.close(fdr)
    raise SystemExit(status)