"""Value kinds understood by the stanza codec.

Each kind converts between the textual field value and its Python model.
Decoders raise ``ValueError`` (or one of the parse errors derived from it);
the codec wraps those into ``FieldDecodeError`` with the field name.
"""

from __future__ import annotations

import re
from typing import Any, List

from .boolean import Bool
from .relations import ArchQualifiedName, Dependency, format_dependencies, format_names, parse_dependencies, parse_names
from .version import Version

_UINT_RE = re.compile(r"^[0-9]+$")


class Kind:
    """Plain string value."""

    name = "string"

    def decode(self, text: str) -> Any:
        return text

    def encode(self, value: Any) -> str:
        return str(value)

    def is_empty(self, value: Any) -> bool:
        return value is None or value == ""

    def __repr__(self) -> str:
        return f"<{self.name} kind>"


class BoolKind(Kind):
    name = "bool"

    def decode(self, text: str) -> Bool:
        return Bool.parse(text)

    def encode(self, value: Any) -> str:
        if isinstance(value, bool):
            value = Bool(value)
        return value.as_str()

    def is_empty(self, value: Any) -> bool:
        return value is None


class VersionKind(Kind):
    name = "version"

    def decode(self, text: str) -> Version:
        return Version(text)

    def encode(self, value: Version) -> str:
        return value.as_str()

    def is_empty(self, value: Any) -> bool:
        return value is None


class UIntKind(Kind):
    name = "unsigned integer"

    def decode(self, text: str) -> int:
        if not _UINT_RE.match(text):
            raise ValueError(f"expected an unsigned integer, got {text!r}")
        return int(text)

    def encode(self, value: int) -> str:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"expected an unsigned integer, got {value!r}")
        return str(value)

    def is_empty(self, value: Any) -> bool:
        return value is None


class PercentageKind(UIntKind):
    name = "percentage"

    def decode(self, text: str) -> int:
        value = super().decode(text)
        if value > 100:
            raise ValueError(f"percentage {value} out of range 0-100")
        return value


class DependenciesKind(Kind):
    """AND-of-OR dependency expression; the empty list means no constraint."""

    name = "dependency expression"

    def decode(self, text: str) -> List[Dependency]:
        return parse_dependencies(text)

    def encode(self, value: List[Dependency]) -> str:
        return format_dependencies(value)

    def is_empty(self, value: Any) -> bool:
        return not value


class NamesKind(Kind):
    """Whitespace separated ``name[:arch]`` identifiers."""

    name = "identifier list"

    def decode(self, text: str) -> List[ArchQualifiedName]:
        return parse_names(text)

    def encode(self, value: List[ArchQualifiedName]) -> str:
        return format_names(value)

    def is_empty(self, value: Any) -> bool:
        return not value


class WordsKind(Kind):
    """Whitespace separated plain words, e.g. the Architectures list."""

    name = "word list"

    def decode(self, text: str) -> List[str]:
        return text.split()

    def encode(self, value: List[str]) -> str:
        return " ".join(value)

    def is_empty(self, value: Any) -> bool:
        return not value


STRING = Kind()
BOOL = BoolKind()
VERSION = VersionKind()
UINT = UIntKind()
PERCENTAGE = PercentageKind()
DEPENDENCIES = DependenciesKind()
NAMES = NamesKind()
WORDS = WordsKind()
