"""Running a program found on PATH, with an adjusted environment."""

from __future__ import annotations

import errno
import os
from collections.abc import Mapping, Sequence

_DEFAULT_PATH = "/bin:/usr/bin"
_TOLERATED = (errno.EACCES, errno.EPERM, errno.EISDIR)


def pathexec_run(file: str, argv: Sequence[str], env: Mapping[str, str]) -> None:
    """Replace the process with file, searching PATH if file has no slash.

    Returns only by raising OSError. A permission or is-a-directory failure
    is remembered while the search goes on, and raised if nothing runs.
    """
    if "/" in file:
        os.execve(file, list(argv), dict(env))
    path = os.environ.get("PATH")
    if path is None:
        path = _DEFAULT_PATH
    saved: OSError | None = None
    last: OSError | None = None
    for directory in path.split(":"):
        candidate = f"{directory or '.'}/{file}"
        try:
            os.execve(candidate, list(argv), dict(env))
        except OSError as exc:
            last = exc
            if exc.errno != errno.ENOENT:
                saved = exc
                if exc.errno not in _TOLERATED:
                    raise
    raise saved if saved is not None else last  # type: ignore[misc]


class ExecEnvironment:
    """Changes to apply to the environment before running a program."""

    def __init__(self) -> None:
        self._entries: list[str] = []

    def set(self, name: str, value: str | None) -> None:
        """Set name to value, or remove name when value is None."""
        self._entries.append(name if value is None else f"{name}={value}")

    def build(self, base: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return base (the current environment by default) with the changes."""
        env = dict(os.environ if base is None else base)
        for entry in self._entries:
            name, sep, value = entry.partition("=")
            env.pop(name, None)
            if sep:
                env[name] = value
        return env

    def execute(self, argv: Sequence[str]) -> None:
        """Run argv[0] with the changed environment; raises OSError on failure."""
        pathexec_run(argv[0], argv, self.build())