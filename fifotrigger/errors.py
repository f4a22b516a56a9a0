"""Error descriptions and diagnostic output for the trigger commands."""

from __future__ import annotations

import errno
import sys
from typing import TextIO

# Codes checked first, in order; the negative numbers stand in for codes
# that the platform does not define.
_PRIMARY = (
    ("EINTR", -1, "interrupted system call"),
    ("ENOMEM", -2, "out of memory"),
    ("ENOENT", -3, "file does not exist"),
    ("ETXTBSY", -4, "text busy"),
    ("EIO", -5, "input/output error"),
    ("EEXIST", -6, "file already exists"),
    ("ETIMEDOUT", -7, "timed out"),
    ("EINPROGRESS", -8, "operation in progress"),
    ("EAGAIN", -10, "temporary failure"),
    ("EWOULDBLOCK", -9, "input/output would block"),
    ("EPIPE", -11, "broken pipe"),
    ("EPERM", -12, "permission denied"),
    ("EACCES", -13, "access denied"),
    ("ENXIO", -14, "device not configured"),
    ("EPROTO", -15, "protocol error"),
    ("EISDIR", -16, "is a directory"),
    ("ECONNREFUSED", -17, "connection refused"),
    ("ENOTDIR", -18, "not a directory"),
    ("EROFS", -19, "read-only file system"),
)

# Codes described only where the platform defines them.
_OPTIONAL = (
    ("ESRCH", "no such process"),
    ("E2BIG", "argument list too long"),
    ("ENOEXEC", "exec format error"),
    ("EBADF", "file descriptor not open"),
    ("ECHILD", "no child processes"),
    ("EDEADLK", "operation would cause deadlock"),
    ("EFAULT", "bad address"),
    ("ENOTBLK", "not a block device"),
    ("EBUSY", "device busy"),
    ("EXDEV", "cross-device link"),
    ("ENODEV", "device does not support operation"),
    ("EINVAL", "invalid argument"),
    ("ENFILE", "system cannot open more files"),
    ("EMFILE", "process cannot open more files"),
    ("ENOTTY", "not a tty"),
    ("EFBIG", "file too big"),
    ("ENOSPC", "out of disk space"),
    ("ESPIPE", "unseekable descriptor"),
    ("EMLINK", "too many links"),
    ("EDOM", "input out of range"),
    ("ERANGE", "output out of range"),
    ("EALREADY", "operation already in progress"),
    ("ENOTSOCK", "not a socket"),
    ("EDESTADDRREQ", "destination address required"),
    ("EMSGSIZE", "message too long"),
    ("EPROTOTYPE", "incorrect protocol type"),
    ("ENOPROTOOPT", "protocol not available"),
    ("EPROTONOSUPPORT", "protocol not supported"),
    ("ESOCKTNOSUPPORT", "socket type not supported"),
    ("EOPNOTSUPP", "operation not supported"),
    ("EPFNOSUPPORT", "protocol family not supported"),
    ("EAFNOSUPPORT", "address family not supported"),
    ("EADDRINUSE", "address already used"),
    ("EADDRNOTAVAIL", "address not available"),
    ("ENETDOWN", "network down"),
    ("ENETUNREACH", "network unreachable"),
    ("ENETRESET", "network reset"),
    ("ECONNABORTED", "connection aborted"),
    ("ECONNRESET", "connection reset"),
    ("ENOBUFS", "out of buffer space"),
    ("EISCONN", "already connected"),
    ("ENOTCONN", "not connected"),
    ("ESHUTDOWN", "socket shut down"),
    ("ETOOMANYREFS", "too many references"),
    ("ELOOP", "symbolic link loop"),
    ("ENAMETOOLONG", "file name too long"),
    ("EHOSTDOWN", "host down"),
    ("EHOSTUNREACH", "host unreachable"),
    ("ENOTEMPTY", "directory not empty"),
    ("EPROCLIM", "too many processes"),
    ("EUSERS", "too many users"),
    ("EDQUOT", "disk quota exceeded"),
    ("ESTALE", "stale NFS file handle"),
    ("EREMOTE", "too many levels of remote in path"),
    ("EBADRPC", "RPC structure is bad"),
    ("ERPCMISMATCH", "RPC version mismatch"),
    ("EPROGUNAVAIL", "RPC program unavailable"),
    ("EPROGMISMATCH", "program version mismatch"),
    ("EPROCUNAVAIL", "bad procedure for program"),
    ("ENOLCK", "no locks available"),
    ("ENOSYS", "system call not available"),
    ("EFTYPE", "bad file type"),
    ("EAUTH", "authentication error"),
    ("ENEEDAUTH", "not authenticated"),
    ("ENOSTR", "not a stream device"),
    ("ETIME", "timer expired"),
    ("ENOSR", "out of stream resources"),
    ("ENOMSG", "no message of desired type"),
    ("EBADMSG", "bad message type"),
    ("EIDRM", "identifier removed"),
    ("ENONET", "machine not on network"),
    ("ERREMOTE", "object not local"),
    ("ENOLINK", "link severed"),
    ("EADV", "advertise error"),
    ("ESRMNT", "srmount error"),
    ("ECOMM", "communication error"),
    ("EMULTIHOP", "multihop attempted"),
    ("EREMCHG", "remote address changed"),
)


def _build_table() -> dict[int, str]:
    table: dict[int, str] = {0: "no error"}
    for name, fallback, message in _PRIMARY:
        table.setdefault(getattr(errno, name, fallback), message)
    for name, message in _OPTIONAL:
        code = getattr(errno, name, None)
        if code is not None:
            table.setdefault(code, message)
    return table


_TABLE = _build_table()


def error_str(code: int) -> str:
    """Return a short description of an errno value."""
    return _TABLE.get(code, "unknown error")


def _describe(error: object) -> str:
    if error is None:
        return ""
    if isinstance(error, str):
        return error
    if isinstance(error, bool):
        raise TypeError("error must be an exception, an errno value or a string")
    if isinstance(error, int):
        return error_str(error)
    if isinstance(error, OSError) and error.errno is not None:
        return error_str(error.errno)
    if isinstance(error, BaseException):
        return str(error)
    raise TypeError("error must be an exception, an errno value or a string")


def format_message(*args: str | None, error: object = None) -> str:
    """Join the message parts, skipping None, and append the error's description."""
    return "".join(part for part in args if part is not None) + _describe(error)


def warn(*args: str | None, error: object = None, stream: TextIO | None = None) -> None:
    """Write one diagnostic line to the stream (standard error by default)."""
    out = sys.stderr if stream is None else stream
    out.write(format_message(*args, error=error) + "\n")
    out.flush()


def die(
    status: int,
    *args: str | None,
    error: object = None,
    stream: TextIO | None = None,
) -> None:
    """Write a diagnostic line and exit with the given status."""
    warn(*args, error=error, stream=stream)
    raise SystemExit(status)