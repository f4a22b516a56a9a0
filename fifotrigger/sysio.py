"""Thin POSIX helpers: opening, FIFOs, locks, privileges, children, polling."""

from __future__ import annotations

import fcntl
import os
import select
import signal
from collections.abc import Iterable
from dataclasses import dataclass

from fifotrigger.taia import Taia

IOPAUSE_READ = select.POLLIN
IOPAUSE_WRITE = select.POLLOUT
_ERROR_EVENTS = select.POLLERR | select.POLLHUP | select.POLLNVAL


def open_read(path: str) -> int:
    """Open path for non-blocking reading and return the descriptor."""
    return os.open(path, os.O_RDONLY | os.O_NONBLOCK)


def open_write(path: str) -> int:
    """Open an existing path for non-blocking writing."""
    return os.open(path, os.O_WRONLY | os.O_NONBLOCK)


def open_append(path: str) -> int:
    """Open path for appending, creating it with mode 0600 if needed."""
    return os.open(
        path, os.O_WRONLY | os.O_NONBLOCK | os.O_APPEND | os.O_CREAT, 0o600
    )


def fifo_make(path: str, mode: int) -> None:
    """Create a named pipe."""
    os.mkfifo(path, mode)


def ndelay_on(fd: int) -> None:
    """Put the descriptor in non-blocking mode."""
    os.set_blocking(fd, False)


def ndelay_off(fd: int) -> None:
    """Put the descriptor in blocking mode."""
    os.set_blocking(fd, True)


def lock_ex(fd: int) -> None:
    """Take an exclusive lock, waiting for it."""
    fcntl.flock(fd, fcntl.LOCK_EX)


def lock_exnb(fd: int) -> None:
    """Take an exclusive lock; raise BlockingIOError if it is held."""
    fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)


def prot_gid(gid: int) -> None:
    """Set the supplementary groups and the group id to gid."""
    os.setgroups([gid])
    os.setgid(gid)


def prot_uid(uid: int) -> None:
    """Set the user id."""
    os.setuid(uid)


def wait_pid(pid: int) -> tuple[int, int]:
    """Wait for the child pid; return (pid, raw status)."""
    return os.waitpid(pid, 0)


def wait_nohang() -> tuple[int, int] | None:
    """Reap one exited child if any; None when none has exited yet.

    Raises ChildProcessError when there are no children at all.
    """
    pid, status = os.waitpid(-1, os.WNOHANG)
    if pid == 0:
        return None
    return pid, status


def wait_exitcode(status: int) -> int:
    """Return the exit code part of a raw wait status."""
    return status >> 8


def wait_crashed(status: int) -> int:
    """Return the terminating signal of a raw wait status, or 0."""
    return status & 127


@dataclass
class IOPauseFd:
    """A descriptor to watch, the events wanted, and the events seen."""

    fd: int
    events: int
    revents: int = 0


def iopause(fds: Iterable[IOPauseFd], deadline: Taia, stamp: Taia) -> int:
    """Wait until a descriptor is ready or about the deadline passes.

    The wait lasts at most about a second. Each entry's ``revents`` is set;
    negative descriptors are ignored. Returns the number of ready entries.
    """
    if deadline < stamp:
        millisecs = 0
    else:
        seconds = min((deadline - stamp).approx(), 1000.0)
        millisecs = int(seconds * 1000.0 + 20.0)

    entries = list(fds)
    wanted: dict[int, int] = {}
    for entry in entries:
        entry.revents = 0
        if entry.fd >= 0:
            wanted[entry.fd] = wanted.get(entry.fd, 0) | entry.events

    poller = select.poll()
    for fd, events in wanted.items():
        poller.register(fd, events)
    try:
        results = dict(poller.poll(millisecs))
    except InterruptedError:
        results = {}

    for entry in entries:
        if entry.fd >= 0:
            entry.revents = results.get(entry.fd, 0) & (entry.events | _ERROR_EVENTS)
    return sum(1 for entry in entries if entry.revents)


def sig_block(sig: int) -> None:
    """Add sig to the blocked signals."""
    signal.pthread_sigmask(signal.SIG_BLOCK, {sig})


def sig_unblock(sig: int) -> None:
    """Remove sig from the blocked signals."""
    signal.pthread_sigmask(signal.SIG_UNBLOCK, {sig})


def sig_blocknone() -> None:
    """Unblock every signal."""
    signal.pthread_sigmask(signal.SIG_SETMASK, set())