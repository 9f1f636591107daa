"""Generic stanza codec.

A stanza is a block of ``Field: value`` lines terminated by a blank line.
Records are dataclasses whose fields are declared with :func:`stanza_field`;
the declaration carries the wire name and the value kind, so a single pair of
routines (:func:`decode_record` / :func:`encode_record`) serves every record
type.
"""

from __future__ import annotations

import dataclasses
import io
import logging
from dataclasses import MISSING, dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Type, TypeVar

from .errors import EdspError, FieldDecodeError, MissingFieldError, StanzaReadError
from .kinds import Kind

logger = logging.getLogger(__name__)

T = TypeVar("T")

_METADATA_KEY = "edsp"
_EXTRA_KEY = "edsp_extra"

Pairs = List[Tuple[str, str]]


@dataclass(frozen=True)
class Field:
    """Schema entry of one stanza field."""

    name: str
    attr: str
    kind: Kind
    required: bool
    default: Any = None

    def is_default(self, value: Any) -> bool:
        if self.required:
            return False
        if value is None or self.kind.is_empty(value):
            return True
        return value == self.default


def stanza_field(
    name: str,
    kind: Kind,
    *,
    default: Any = MISSING,
    default_factory: Any = MISSING,
    required: Optional[bool] = None,
):
    """Declare a dataclass attribute as the stanza field ``name`` of ``kind``.

    A field with neither ``default`` nor ``default_factory`` is required.
    ``required=True`` keeps a field mandatory on the wire (never omitted,
    never optional on read) while still giving the constructor a default.
    """
    if required is None:
        required = default is MISSING and default_factory is MISSING
    metadata = {_METADATA_KEY: (name, kind, required)}
    return dataclasses.field(default=default, default_factory=default_factory, metadata=metadata)


def extra_fields():
    """Declare the attribute holding fields that are not part of the schema.

    It maps each unrecognised field name, as written, to its raw value. The
    codec fills it on read and writes it back after the schema fields.
    """
    return dataclasses.field(default_factory=dict, metadata={_EXTRA_KEY: True})


_SCHEMAS: Dict[type, Tuple[Field, ...]] = {}
_EXTRAS: Dict[type, Optional[str]] = {}


def schema(cls: type) -> Tuple[Field, ...]:
    """Return the ordered field table of a record class."""
    cached = _SCHEMAS.get(cls)
    if cached is not None:
        return cached

    entries = []
    extra_attr = None
    for dc_field in dataclasses.fields(cls):
        if dc_field.metadata.get(_EXTRA_KEY):
            extra_attr = dc_field.name
            continue
        declared = dc_field.metadata.get(_METADATA_KEY)
        if declared is None:
            continue
        name, kind, required = declared
        if required:
            entries.append(Field(name, dc_field.name, kind, True))
        elif dc_field.default is not MISSING:
            entries.append(Field(name, dc_field.name, kind, False, dc_field.default))
        elif dc_field.default_factory is not MISSING:
            entries.append(Field(name, dc_field.name, kind, False, dc_field.default_factory()))
    result = tuple(entries)
    _SCHEMAS[cls] = result
    _EXTRAS[cls] = extra_attr
    return result


def extra_attribute(cls: type) -> Optional[str]:
    """Name of the attribute declared with :func:`extra_fields`, if any."""
    schema(cls)
    return _EXTRAS[cls]


def decode_record(cls: Type[T], stanza: Mapping[str, str]) -> T:
    """Build a record of type ``cls`` from a parsed stanza.

    Field names match case-insensitively. Fields outside the schema are kept
    in the record's :func:`extra_fields` attribute, or dropped when the class
    declares none. Absent optional fields keep their declared default without
    being decoded.

    Raises:
        MissingFieldError: a required field is absent.
        FieldDecodeError: a present field does not decode as its kind.
    """
    by_name = {key.lower(): (key, value) for key, value in stanza.items()}
    kwargs: Dict[str, Any] = {}
    for entry in schema(cls):
        found = by_name.pop(entry.name.lower(), None)
        if found is None:
            if entry.required:
                raise MissingFieldError(entry.name)
            continue
        try:
            kwargs[entry.attr] = entry.kind.decode(found[1])
        except (EdspError, ValueError) as exc:
            raise FieldDecodeError(entry.name, exc) from exc

    if by_name:
        extra_attr = extra_attribute(cls)
        if extra_attr is not None:
            kwargs[extra_attr] = dict(by_name.values())
        elif logger.isEnabledFor(logging.DEBUG):
            logger.debug("Ignoring unknown %s fields: %s", cls.__name__, ", ".join(sorted(by_name)))
    return cls(**kwargs)


def encode_record(record: Any) -> Pairs:
    """Encode a record into ``(name, value)`` pairs in schema order.

    Fields equal to their declared default and empty optional fields are
    omitted. Extra fields follow the schema fields in insertion order; an
    extra field named like a schema field is skipped.
    """
    pairs: Pairs = []
    entries = schema(type(record))
    for entry in entries:
        value = getattr(record, entry.attr)
        if entry.required and value is None:
            raise MissingFieldError(entry.name)
        if entry.is_default(value):
            continue
        pairs.append((entry.name, entry.kind.encode(value)))

    extra_attr = extra_attribute(type(record))
    if extra_attr is not None:
        known = {entry.name.lower() for entry in entries}
        for name, value in getattr(record, extra_attr).items():
            if name.lower() not in known:
                pairs.append((name, value))
    return pairs


def format_stanza(pairs: Iterable[Tuple[str, str]]) -> str:
    """Render pairs as stanza lines, without the blank-line terminator.

    Multi-line values are folded onto continuation lines; empty lines inside
    a value are written as `` .``.

    Raises:
        ValueError: a value would not read back unchanged, i.e. its first
            line has surrounding whitespace, or a later line has trailing
            whitespace or is a lone ``.``.
    """
    lines = []
    for name, value in pairs:
        first, *rest = value.split("\n")
        if first != first.strip():
            raise ValueError(f"value of {name!r} has surrounding whitespace: {first!r}")
        lines.append(f"{name}: {first}".rstrip() + "\n")
        for line in rest:
            if line != line.rstrip() or line.strip() == ".":
                raise ValueError(f"continuation line of {name!r} would not read back: {line!r}")
            lines.append(f" {line}\n" if line else " .\n")
    return "".join(lines)


def _write_text(stream: Any, text: str) -> None:
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        stream.write(text.encode("utf-8"))
    else:
        stream.write(text)


def write_stanza(stream: Any, pairs: Iterable[Tuple[str, str]]) -> None:
    """Write one stanza followed by its blank-line terminator.

    Accepts text streams and binary streams (encoded as UTF-8). OS errors
    propagate to the caller unchanged.
    """
    _write_text(stream, format_stanza(pairs) + "\n")


def write_record(stream: Any, record: Any) -> None:
    write_stanza(stream, encode_record(record))


def iter_stanzas(stream: Iterable[Any]) -> Iterator[Dict[str, str]]:
    """Lazily split a line iterable into stanzas.

    Yields one insertion-ordered ``{field: value}`` mapping per stanza. Runs
    of blank lines separate stanzas and the final terminator may be missing.

    Raises:
        StanzaReadError: on I/O failure, undecodable bytes, a line without a
            colon, a continuation line with no field, or a repeated field.
    """
    current: Dict[str, str] = {}
    seen: Dict[str, int] = {}
    last_name: Optional[str] = None
    line_number = 0
    try:
        for line_number, raw in enumerate(stream, 1):
            line = raw.decode("utf-8") if isinstance(raw, bytes) else raw
            line = line.rstrip("\r\n")

            if not line.strip():
                if current:
                    yield current
                current, seen, last_name = {}, {}, None
                continue

            if line[0] in " \t":
                if last_name is None:
                    raise StanzaReadError("continuation line without a field", line_number)
                continuation = line[1:].rstrip()
                current[last_name] += "\n" + ("" if continuation.strip() == "." else continuation)
                continue

            name, sep, value = line.partition(":")
            name = name.strip()
            if not sep or not name:
                raise StanzaReadError(f"expected 'Field: value', got {line!r}", line_number)
            folded = name.lower()
            if folded in seen:
                raise StanzaReadError(f"field '{name}' repeated in stanza", line_number)
            seen[folded] = line_number
            current[name] = value.strip()
            last_name = name
    except UnicodeDecodeError as exc:
        raise StanzaReadError(f"invalid UTF-8 input: {exc}", line_number) from exc
    except OSError as exc:
        raise StanzaReadError(f"I/O error: {exc}", line_number + 1) from exc

    if current:
        yield current


def parse_stanzas(text: str) -> List[Dict[str, str]]:
    """Split a complete text into stanzas."""
    return list(iter_stanzas(io.StringIO(text)))
