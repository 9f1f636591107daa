"""Dependency relations: atoms, OR-groups and AND-of-OR expressions.

Grammar of a single atom::

    name[:arch] [(op version)]

A field value is split on ``,`` into groups that must all hold, and each group
on ``|`` into alternatives of which one suffices.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .errors import RelationParseError, VersionParseError
from .version import Version


class Operator(Enum):
    """Comparator of a version constraint."""

    EARLIER = "<<"
    EARLIER_EQUAL = "<="
    EQUAL = "="
    LATER_EQUAL = ">="
    LATER = ">>"

    def satisfied_by(self, candidate: Version, target: Version) -> bool:
        """Return True when ``candidate <op> target`` holds."""
        result = candidate.compare(target)
        if self is Operator.EARLIER:
            return result < 0
        if self is Operator.EARLIER_EQUAL:
            return result <= 0
        if self is Operator.EQUAL:
            return result == 0
        if self is Operator.LATER_EQUAL:
            return result >= 0
        return result > 0

    def __str__(self) -> str:
        return self.value


# Longest tokens first so "<=" is not read as "<" followed by "=".
_OPERATOR_TOKENS = ("<<", "<=", ">=", ">>", "=")

_NAME_RE = re.compile(r"^(?P<name>[^\s():|,]+)(?::(?P<arch>[^\s():|,]+))?")
_CONSTRAINT_RE = re.compile(r"^\(\s*(?P<op>[<>=]+)\s*(?P<version>[^()\s]+)\s*\)$")


def _parse_name(token: str) -> Tuple[str, Optional[str], str]:
    """Split ``name[:arch]`` off the front of ``token``; return the rest stripped."""
    match = _NAME_RE.match(token)
    if not match:
        raise RelationParseError(f"missing package name in {token!r}")
    return match.group("name"), match.group("arch"), token[match.end():].strip()


@dataclass(frozen=True)
class ArchQualifiedName:
    """A package name with an optional ``:arch`` qualifier, e.g. ``libc6:amd64``."""

    name: str
    architecture: Optional[str] = None

    @classmethod
    def parse(cls, token: str) -> "ArchQualifiedName":
        token = token.strip()
        if not token:
            raise RelationParseError("empty package name")
        name, arch, rest = _parse_name(token)
        if rest:
            raise RelationParseError(f"unexpected trailing text {rest!r} in {token!r}")
        return cls(name, arch)

    def __str__(self) -> str:
        if self.architecture:
            return f"{self.name}:{self.architecture}"
        return self.name


@dataclass(frozen=True)
class Relation:
    """One dependency atom: a package, its architecture and an optional constraint."""

    package: str
    architecture: Optional[str] = None
    constraint: Optional[Tuple[Operator, Version]] = None

    @classmethod
    def parse(cls, token: str) -> "Relation":
        """Parse a single atom such as ``libfoo:amd64 (>= 1.2-1)``."""
        token = token.strip()
        if not token:
            raise RelationParseError("empty relation")

        package, arch, rest = _parse_name(token)
        if not rest:
            return cls(package, arch)

        match = _CONSTRAINT_RE.match(rest)
        if not match:
            raise RelationParseError(f"malformed version constraint {rest!r} in {token!r}")

        op_token = match.group("op")
        if op_token not in _OPERATOR_TOKENS:
            raise RelationParseError(f"unknown operator {op_token!r} in {token!r}")
        try:
            version = Version(match.group("version"))
        except VersionParseError as exc:
            raise RelationParseError(f"bad version in {token!r}: {exc}") from exc
        return cls(package, arch, (Operator(op_token), version))

    @property
    def operator(self) -> Optional[Operator]:
        return self.constraint[0] if self.constraint else None

    @property
    def version(self) -> Optional[Version]:
        return self.constraint[1] if self.constraint else None

    def matches(self, version: Version) -> bool:
        """Check whether ``version`` of this package satisfies the constraint.

        An unconstrained relation accepts every version.
        """
        if self.constraint is None:
            return True
        operator, target = self.constraint
        return operator.satisfied_by(version, target)

    def __str__(self) -> str:
        text = self.package
        if self.architecture:
            text += f":{self.architecture}"
        if self.constraint is not None:
            operator, version = self.constraint
            text += f" ({operator.value} {version.as_str()})"
        return text


@dataclass
class Dependency:
    """An OR-group: at least one of ``alternatives`` must be satisfied."""

    alternatives: List[Relation] = field(default_factory=list)

    def __post_init__(self):
        if not self.alternatives:
            raise ValueError("a dependency needs at least one alternative")

    @classmethod
    def parse(cls, text: str) -> "Dependency":
        return cls([Relation.parse(atom) for atom in text.split("|")])

    @property
    def first(self) -> Relation:
        return self.alternatives[0]

    def __iter__(self):
        return iter(self.alternatives)

    def __len__(self) -> int:
        return len(self.alternatives)

    def __str__(self) -> str:
        return " | ".join(str(alt) for alt in self.alternatives)


def parse_dependencies(text: str) -> List[Dependency]:
    """Parse a Depends-style field value into its AND-list of OR-groups.

    A blank value is the empty expression. A single malformed atom fails
    the whole value with RelationParseError.
    """
    if not text.strip():
        return []
    return [Dependency.parse(group) for group in text.split(",")]


def format_dependencies(groups: Iterable[Dependency]) -> str:
    """Exact inverse of :func:`parse_dependencies` for canonical input."""
    return ", ".join(str(group) for group in groups)


def parse_names(text: str) -> List[ArchQualifiedName]:
    """Parse a whitespace separated list of ``name[:arch]`` tokens."""
    return [ArchQualifiedName.parse(token) for token in text.split()]


def format_names(names: Iterable[ArchQualifiedName]) -> str:
    return " ".join(str(name) for name in names)
