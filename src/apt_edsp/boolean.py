"""Boolean scalar encoded as the literal tokens ``yes`` and ``no``."""

from __future__ import annotations

from .errors import BoolParseError


class Bool:
    """A ``bool`` wrapper that serializes ``True``/``False`` to ``"yes"``/``"no"``.

    Kept as a distinct type so the stanza codec never applies a generic
    ``str(bool)`` conversion to protocol flags.

    Examples:
        >>> Bool.YES.as_str()
        'yes'
        >>> Bool.parse("no") == Bool.NO
        True
    """

    __slots__ = ("_value",)

    YES: "Bool"
    NO: "Bool"

    def __init__(self, value: bool = False):
        self._value = bool(value)

    @property
    def value(self) -> bool:
        """The wrapped native boolean."""
        return self._value

    @classmethod
    def yes(cls) -> "Bool":
        """Return the ``Bool`` corresponding to ``"yes"``."""
        return cls.YES

    @classmethod
    def no(cls) -> "Bool":
        """Return the ``Bool`` corresponding to ``"no"``."""
        return cls.NO

    @classmethod
    def parse(cls, token: str) -> "Bool":
        """Decode exactly ``"yes"`` or ``"no"``; anything else is a BoolParseError."""
        if token == "yes":
            return cls.YES
        if token == "no":
            return cls.NO
        raise BoolParseError(f'expected "yes" or "no", got {token!r}')

    def as_str(self) -> str:
        """Return the string literal representation (``"yes"`` or ``"no"``)."""
        return "yes" if self._value else "no"

    def __bool__(self) -> bool:
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Bool):
            return self._value == other._value
        if isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self.as_str()

    def __repr__(self) -> str:
        return f"Bool.{self.as_str().upper()}"


Bool.YES = Bool(True)
Bool.NO = Bool(False)
