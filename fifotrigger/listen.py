"""Run a program each time a byte is written to a named pipe."""

from __future__ import annotations

import contextlib
import os
import signal
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import NoReturn

from fifotrigger.errors import warn
from fifotrigger.getopt import OptionParser
from fifotrigger.pathexec import ExecEnvironment
from fifotrigger.scan import scan_uint, scan_ulong
from fifotrigger.sysio import (
    IOPAUSE_READ,
    IOPauseFd,
    fifo_make,
    iopause,
    ndelay_on,
    open_read,
    open_write,
    prot_gid,
    prot_uid,
    sig_block,
    sig_unblock,
    wait_nohang,
)
from fifotrigger.taia import Taia

FATAL = "trigger-listen: fatal: "
WARNING = "trigger-listen: warning: "
USAGE = (
    "trigger-listen: usage: trigger-listen "
    "[ -UdDqQv1 ] "
    "[ -c limit ] "
    "[ -t timeout ] "
    "[ -i interval ] "
    "[ -g gid ] "
    "[ -u uid ] "
    "path program"
)
_MAX_UINT = (1 << 32) - 1


@dataclass
class ListenConfig:
    """Settings for the listener, as given on the command line."""

    path: str
    program: list[str] = field(default_factory=list)
    limit: int = 1
    timeout: int = _MAX_UINT
    interval: int = 0
    verbosity: int = 1
    delete: bool = True
    first: bool = False
    uid: int = 0
    gid: int = 0


def usage() -> NoReturn:
    """Print the usage line and exit with status 100."""
    _usage(quiet=False)


def _usage(quiet: bool) -> NoReturn:
    if not quiet:
        warn(USAGE)
    raise SystemExit(100)


def parse_args(
    argv: Sequence[str], environ: Mapping[str, str] | None = None
) -> ListenConfig:
    """Parse the command line; exits with status 100 on a usage error."""
    env = os.environ if environ is None else environ
    limit = 1
    timeout = _MAX_UINT
    interval = 0
    verbosity = 1
    delete = True
    first = False
    uid = 0
    gid = 0

    parser = OptionParser(argv, "1vqQdDUu:g:c:t:i:")
    for option, value in parser:
        if option == "1":
            first = True
        elif option == "c":
            limit = scan_ulong(value or "")[0]
        elif option == "t":
            timeout = scan_uint(value or "")[0]
        elif option == "i":
            interval = scan_uint(value or "")[0]
        elif option == "v":
            verbosity = 2
        elif option == "q":
            verbosity = 0
        elif option == "Q":
            verbosity = 1
        elif option == "d":
            delete = True
        elif option == "D":
            delete = False
        elif option == "U":
            text = env.get("UID")
            if text is not None:
                uid = scan_ulong(text)[0]
            text = env.get("GID")
            if text is not None:
                gid = scan_ulong(text)[0]
        elif option == "u":
            uid = scan_ulong(value or "")[0]
        elif option == "g":
            gid = scan_ulong(value or "")[0]
        else:
            usage()

    rest = parser.remaining()
    quiet = verbosity == 0
    if not rest or not rest[0] or len(rest) < 2:
        _usage(quiet)
    return ListenConfig(
        path=rest[0],
        program=list(rest[1:]),
        limit=limit,
        timeout=timeout,
        interval=interval,
        verbosity=verbosity,
        delete=delete,
        first=first,
        uid=uid,
        gid=gid,
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


def _drain(fd: int) -> bool:
    """Read everything available; report whether anything was read."""
    got = False
    while True:
        try:
            data = os.read(fd, 512)
        except OSError:
            return got
        if not data:
            return got
        got = True


class _Listener:
    def __init__(self, config: ListenConfig) -> None:
        self.config = config
        self.children = 0
        self.fdr = -1
        self.fdw = -1
        self.selfpipe = (-1, -1)

    def _warn(self, *args: str, error: object = None) -> None:
        if self.config.verbosity:
            warn(*args, error=error)

    def _die(self, *args: str, error: object = None) -> NoReturn:
        self._warn(*args, error=error)
        raise SystemExit(111)

    def _status(self) -> None:
        if self.config.verbosity >= 2:
            warn(
                "trigger-listen: status: ",
                str(self.children),
                "/",
                str(self.config.limit),
            )

    def _spawn(self) -> None:
        self.children += 1
        self._status()
        try:
            pid = os.fork()
        except OSError as exc:
            self._warn(WARNING, "unable to fork: ", error=exc)
            self.children -= 1
            self._status()
            return
        if pid == 0:
            self._exec_child()

    def _exec_child(self) -> NoReturn:
        program = self.config.program
        try:
            for fd in (self.fdr, self.fdw, *self.selfpipe):
                os.close(fd)
            if self.config.verbosity >= 2:
                warn("trigger-listen: pid ", str(os.getpid()))
            signal.signal(signal.SIGCHLD, signal.SIG_DFL)
            sig_unblock(signal.SIGCHLD)
            signal.signal(signal.SIGTERM, signal.SIG_DFL)
            signal.signal(signal.SIGPIPE, signal.SIG_DFL)
            ExecEnvironment().execute(program)
        except OSError as exc:
            self._warn(WARNING, "unable to run ", program[0], ": ", error=exc)
        finally:
            os._exit(111)

    def _on_child(self, signum: int, frame: object) -> None:
        while True:
            try:
                reaped = wait_nohang()
            except ChildProcessError:
                break
            if reaped is None:
                break
            pid, status = reaped
            if self.config.verbosity >= 2:
                warn("trigger-listen: end ", str(pid), " status ", str(status))
            if self.children:
                self.children -= 1
            self._status()
        with contextlib.suppress(OSError):
            os.write(self.selfpipe[1], b"\0")

    @staticmethod
    def _on_term(signum: int, frame: object) -> None:
        raise SystemExit(0)

    def _setup(self) -> None:
        config = self.config
        path = config.path
        sig_block(signal.SIGCHLD)
        signal.signal(signal.SIGCHLD, self._on_child)
        signal.signal(signal.SIGTERM, self._on_term)
        signal.signal(signal.SIGPIPE, signal.SIG_IGN)

        if config.delete:
            _recreate_fifo(path)

        try:
            self.fdr = open_read(path)
        except OSError as exc:
            self._die(FATAL, "unable to read ", path, ": ", error=exc)
        ndelay_on(self.fdr)

        try:
            self.fdw = open_write(path)
        except OSError as exc:
            self._die(FATAL, "unable to write ", path, ": ", error=exc)
        ndelay_on(self.fdw)

        try:
            self.selfpipe = os.pipe()
        except OSError as exc:
            self._die(FATAL, "cannot create pipe: ", error=exc)
        for fd in self.selfpipe:
            ndelay_on(fd)

        if config.gid:
            try:
                prot_gid(config.gid)
            except OSError as exc:
                self._die(FATAL, "unable to set gid: ", error=exc)
        if config.uid:
            try:
                prot_uid(config.uid)
            except OSError as exc:
                self._die(FATAL, "unable to set uid: ", error=exc)

    def run(self) -> NoReturn:
        config = self.config
        self._setup()
        self._status()
        if config.first:
            self._spawn()

        queued = False
        interval = Taia.from_seconds(config.interval)
        resume = Taia.now() + interval
        watched = [
            IOPauseFd(self.selfpipe[0], IOPAUSE_READ),
            IOPauseFd(self.fdr, IOPAUSE_READ),
        ]

        while True:
            sig_unblock(signal.SIGCHLD)
            stamp = Taia.now()
            deadline = stamp + Taia.from_seconds(config.timeout)
            if queued and resume < deadline:
                deadline = resume

            while True:
                stamp = Taia.now()
                if deadline < stamp:
                    queued = True
                    if self.children < config.limit:
                        break
                    deadline = stamp + Taia.from_seconds(_MAX_UINT)
                if iopause(watched, deadline, stamp):
                    break

            sig_block(signal.SIGCHLD)
            _drain(self.selfpipe[0])
            if _drain(self.fdr):
                queued = True

            if not queued or self.children >= config.limit:
                continue
            if Taia.now() < resume:
                continue

            self._spawn()
            queued = False
            resume = Taia.now() + interval


def main(argv: Sequence[str] | None = None) -> None:
    """Run the listener; it runs until terminated."""
    config = parse_args(sys.argv if argv is None else argv, os.environ)
    _Listener(config).run()