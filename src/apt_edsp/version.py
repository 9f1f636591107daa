"""Debian package versions and their total order.

A version string has the shape ``[epoch:]upstream[-revision]``. Comparison
follows dpkg: epochs compare numerically, then upstream and revision are
compared run by run, alternating between non-digit and digit runs.
"""

from __future__ import annotations

import functools
import re
from itertools import zip_longest
from typing import List, Tuple, Union

from .errors import VersionParseError

_EPOCH_RE = re.compile(r"^[0-9]+$")
_RUN_RE = re.compile(r"([^0-9]*)([0-9]*)")

Run = Union[str, int]


def _order(char: str) -> int:
    """Sort weight of a single character inside a non-digit run."""
    if char == "~":
        return -1
    if char.isascii() and char.isalpha():
        return ord(char)
    return ord(char) + 256


def _split_runs(value: str) -> List[Run]:
    """Split into alternating non-digit (str) and digit (int) runs.

    The list always starts with a non-digit run, which may be empty.
    """
    runs: List[Run] = []
    for text, digits in _RUN_RE.findall(value):
        runs.append(text)
        runs.append(int(digits) if digits else 0)
    return runs


def _cmp_non_digit(a: str, b: str) -> int:
    # End of run weighs 0: above "~", below everything else.
    for char_a, char_b in zip_longest(a, b):
        weight_a = _order(char_a) if char_a is not None else 0
        weight_b = _order(char_b) if char_b is not None else 0
        if weight_a != weight_b:
            return -1 if weight_a < weight_b else 1
    return 0


def compare_strings(a: str, b: str) -> int:
    """Compare two upstream or revision strings with the dpkg algorithm.

    Returns a negative number, zero or a positive number like a classic cmp.
    """
    for index, (run_a, run_b) in enumerate(zip_longest(_split_runs(a), _split_runs(b))):
        if index % 2 == 0:
            result = _cmp_non_digit(run_a or "", run_b or "")
        else:
            num_a = run_a or 0
            num_b = run_b or 0
            result = (num_a > num_b) - (num_a < num_b)
        if result:
            return result
    return 0


def _normalize(value: str) -> Tuple[Run, ...]:
    """Canonical run sequence: two strings compare equal iff these are equal."""
    runs = _split_runs(value)
    while runs and runs[-1] in ("", 0):
        runs.pop()
    return tuple(runs)


@functools.total_ordering
class Version:
    """An immutable Debian version.

    Equality, ordering and hashing all derive from the normalized
    ``(epoch, upstream, revision)`` key, so ``Version("1.0")`` equals
    ``Version("0:1.0-0")``. The original text is kept for serialization.
    """

    __slots__ = ("_original", "_epoch", "_upstream", "_revision", "_key")

    def __init__(self, value: str):
        if not isinstance(value, str):
            raise VersionParseError(f"version must be a string, not {type(value).__name__}")
        value = value.strip()
        remainder = value
        epoch = 0
        if ":" in value:
            epoch_str, remainder = value.split(":", 1)
            if not _EPOCH_RE.match(epoch_str):
                raise VersionParseError(f"invalid epoch {epoch_str!r} in version {value!r}")
            epoch = int(epoch_str)

        if "-" in remainder:
            upstream, revision = remainder.rsplit("-", 1)
        else:
            upstream, revision = remainder, "0"

        if not upstream:
            raise VersionParseError(f"empty upstream version in {value!r}")

        self._original = value
        self._epoch = epoch
        self._upstream = upstream
        self._revision = revision
        self._key = (epoch, _normalize(upstream), _normalize(revision))

    @classmethod
    def parse(cls, value: str) -> "Version":
        """Alias of the constructor for symmetry with the other scalar types."""
        return cls(value)

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def upstream(self) -> str:
        return self._upstream

    @property
    def revision(self) -> str:
        return self._revision

    def as_str(self) -> str:
        """Return the version exactly as it was written."""
        return self._original

    def compare(self, other: "Version") -> int:
        """Three-way comparison: negative, zero or positive."""
        if self._epoch != other._epoch:
            return -1 if self._epoch < other._epoch else 1
        result = compare_strings(self._upstream, other._upstream)
        if result:
            return result
        return compare_strings(self._revision, other._revision)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        return self._original

    def __repr__(self) -> str:
        return f"Version({self._original!r})"
