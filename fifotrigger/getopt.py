"""Short-option parsing in the traditional getopt style."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterator, Sequence
from typing import TextIO

_SPEC = re.compile(r"(.)(:?)", re.S)


def _parse_spec(opts: str) -> dict[str, bool]:
    spec: dict[str, bool] = {}
    for match in _SPEC.finditer(opts):
        spec.setdefault(match.group(1), bool(match.group(2)))
    return spec


class OptionParser:
    """Iterate over the options in argv (argv[0] is the program name).

    Each item is (option, argument); argument is None for options that take
    none. An unknown option or a missing argument yields ("?", None), sets
    ``problem`` to the offending character and, if ``report`` is true,
    writes a diagnostic line to ``stream`` (standard error by default).
    Parsing stops at the first non-option, at "-" (kept) or at "--"
    (consumed); ``remaining()`` gives what is left.
    """

    def __init__(
        self,
        argv: Sequence[str],
        opts: str,
        report: bool = True,
        stream: TextIO | None = None,
    ) -> None:
        self._argv = list(argv)
        self._spec = _parse_spec(opts)
        self._report = report
        self._stream = stream
        self._pos = 0
        self.index = 1
        self.problem: str | None = None
        name = self._argv[0] if self._argv else ""
        self.progname = name.rsplit("/", 1)[-1]

    def __iter__(self) -> Iterator[tuple[str, str | None]]:
        while True:
            item = self._next()
            if item is None:
                return
            yield item

    def remaining(self) -> list[str]:
        """Return the arguments after the options."""
        return self._argv[self.index:]

    def _next(self) -> tuple[str, str | None] | None:
        args = self._argv
        if self.index >= len(args):
            return None
        if self._pos and self._pos >= len(args[self.index]):
            self.index += 1
            self._pos = 0
            if self.index >= len(args):
                return None
        if not self._pos:
            arg = args[self.index]
            if not arg.startswith("-"):
                return None
            self._pos = 1
            first = arg[1:2]
            if first in ("-", ""):
                if first:
                    self.index += 1
                self._pos = 0
                return None
        arg = args[self.index]
        option = arg[self._pos]
        self._pos += 1
        takes_argument = self._spec.get(option)
        if takes_argument is None:
            return self._fail(option)
        if not takes_argument:
            return option, None
        value = arg[self._pos:]
        self.index += 1
        self._pos = 0
        if not value:
            if self.index >= len(args):
                return self._fail(option)
            value = args[self.index]
            self.index += 1
        return option, value

    def _fail(self, option: str) -> tuple[str, None]:
        self.problem = option
        if self._report:
            if self.index < len(self._argv):
                reason = ": illegal option -- "
            else:
                reason = ": option requires an argument -- "
            out = sys.stderr if self._stream is None else self._stream
            out.write(f"{self.progname}{reason}{option}\n")
            out.flush()
        return "?", None