"""TAI timestamps with nanosecond and attosecond parts."""

from __future__ import annotations

import functools
import time
from dataclasses import dataclass

_BILLION = 1_000_000_000
_WRAP = 1 << 64
_UNIX_EPOCH_LABEL = 4611686018427387914


@functools.total_ordering
@dataclass(frozen=True)
class Taia:
    """A TAI label in seconds plus nanoseconds and attoseconds."""

    sec: int = 0
    nano: int = 0
    atto: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.sec < _WRAP:
            raise ValueError("sec out of range")
        if not 0 <= self.nano < _BILLION:
            raise ValueError("nano out of range")
        if not 0 <= self.atto < _BILLION:
            raise ValueError("atto out of range")

    @classmethod
    def now(cls) -> Taia:
        """Return the current time."""
        ns = time.time_ns()
        seconds, rest = divmod(ns, _BILLION)
        usec = rest // 1000
        return cls((_UNIX_EPOCH_LABEL + seconds) % _WRAP, 1000 * usec + 500, 0)

    @classmethod
    def from_seconds(cls, seconds: int) -> Taia:
        """Return a value holding a whole number of seconds."""
        return cls(seconds, 0, 0)

    def __add__(self, other: object) -> Taia:
        if not isinstance(other, Taia):
            return NotImplemented
        sec = self.sec + other.sec
        nano = self.nano + other.nano
        atto = self.atto + other.atto
        if atto >= _BILLION:
            atto -= _BILLION
            nano += 1
        if nano >= _BILLION:
            nano -= _BILLION
            sec += 1
        return Taia(sec % _WRAP, nano, atto)

    def __sub__(self, other: object) -> Taia:
        if not isinstance(other, Taia):
            return NotImplemented
        sec = self.sec - other.sec
        nano = self.nano - other.nano
        atto = self.atto - other.atto
        if atto < 0:
            atto += _BILLION
            nano -= 1
        if nano < 0:
            nano += _BILLION
            sec -= 1
        return Taia(sec % _WRAP, nano, atto)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Taia):
            return NotImplemented
        return (self.sec, self.nano, self.atto) < (other.sec, other.nano, other.atto)

    def approx(self) -> float:
        """Return the value as a float number of seconds."""
        return float(self.sec) + self.frac()

    def frac(self) -> float:
        """Return the fractional second as a float."""
        return (self.atto * 0.000000001 + self.nano) * 0.000000001