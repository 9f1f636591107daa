"""Exception types raised while decoding and encoding EDSP data."""

from __future__ import annotations

from typing import Optional


class EdspError(Exception):
    """Base class for every error raised by this package."""


class VersionParseError(EdspError, ValueError):
    """Raised when a version string has a malformed epoch or upstream part."""


class RelationParseError(EdspError, ValueError):
    """Raised when a dependency atom or its operator cannot be parsed."""


class BoolParseError(EdspError, ValueError):
    """Raised when a token is neither ``yes`` nor ``no``."""


class MissingFieldError(EdspError):
    """A required field is absent from a stanza."""

    def __init__(self, field: str):
        super().__init__(f"missing required field '{field}'")
        self.field = field


class FieldDecodeError(EdspError):
    """A field is present but its value does not decode as the declared kind."""

    def __init__(self, field: str, cause: Exception):
        super().__init__(f"invalid value for field '{field}': {cause}")
        self.field = field
        self.cause = cause


class StanzaReadError(EdspError):
    """I/O failure or framing error while splitting a stream into stanzas."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class ScenarioReadError(EdspError):
    """Reading a scenario failed at the stanza with the given zero-based ordinal."""

    def __init__(self, ordinal: int, cause: Exception):
        kind = "request" if ordinal == 0 else "package"
        super().__init__(f"error in stanza {ordinal} ({kind}): {cause}")
        self.ordinal = ordinal
        self.cause = cause


class AnswerWriteError(EdspError):
    """Writing an answer stanza to the output stream failed."""

    def __init__(self, cause: Exception):
        super().__init__(f"failed to write answer: {cause}")
        self.cause = cause


class ProgressWriteError(EdspError):
    """Writing a progress stanza to the output stream failed."""

    def __init__(self, cause: Exception):
        super().__init__(f"failed to write progress: {cause}")
        self.cause = cause
