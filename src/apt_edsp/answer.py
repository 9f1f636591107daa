"""Models for EDSP answers.

Every answer is a single stanza whose tag field (``Install``, ``Remove``,
``Keep``, ``Autoremove`` or ``Error``) selects the variant. A full answer is
the ordered sequence of stanzas; the order is the order APT applies them in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type, Union

from .errors import AnswerWriteError, FieldDecodeError, MissingFieldError
from .kinds import STRING, VERSION
from .stanza import decode_record, extra_fields, stanza_field, write_record
from .version import Version

logger = logging.getLogger(__name__)


class _Stanza:
    """Shared behavior of all answer variants."""

    tag: ClassVar[str]

    def write_to(self, stream: Any) -> None:
        """Write this answer as one stanza; the caller flushes."""
        try:
            write_record(stream, self)
        except (OSError, ValueError, MissingFieldError) as exc:
            raise AnswerWriteError(exc) from exc
        logger.debug("Wrote %s answer", self.tag)


@dataclass
class Install(_Stanza):
    """Install the package with the given ``APT-ID``."""

    tag: ClassVar[str] = "Install"

    package_id: str = stanza_field("Install", STRING)
    package: Optional[str] = stanza_field("Package", STRING, default=None)
    version: Optional[Version] = stanza_field("Version", VERSION, default=None)
    architecture: Optional[str] = stanza_field("Architecture", STRING, default=None)
    extra: Dict[str, str] = extra_fields()


@dataclass
class Remove(_Stanza):
    """Remove the installed package with the given ``APT-ID``."""

    tag: ClassVar[str] = "Remove"

    package_id: str = stanza_field("Remove", STRING)
    package: Optional[str] = stanza_field("Package", STRING, default=None)
    version: Optional[Version] = stanza_field("Version", VERSION, default=None)
    architecture: Optional[str] = stanza_field("Architecture", STRING, default=None)
    extra: Dict[str, str] = extra_fields()


@dataclass
class Keep(_Stanza):
    tag: ClassVar[str] = "Keep"

    package_id: str = stanza_field("Keep", STRING)
    package: Optional[str] = stanza_field("Package", STRING, default=None)
    version: Optional[Version] = stanza_field("Version", VERSION, default=None)
    architecture: Optional[str] = stanza_field("Architecture", STRING, default=None)
    extra: Dict[str, str] = extra_fields()


@dataclass
class Autoremove(_Stanza):
    """Mark the package as no longer needed."""

    tag: ClassVar[str] = "Autoremove"

    package_id: str = stanza_field("Autoremove", STRING)
    package: Optional[str] = stanza_field("Package", STRING, default=None)
    version: Optional[Version] = stanza_field("Version", VERSION, default=None)
    architecture: Optional[str] = stanza_field("Architecture", STRING, default=None)
    extra: Dict[str, str] = extra_fields()


@dataclass
class Error(_Stanza):
    """Terminal failure reported instead of an action plan."""

    tag: ClassVar[str] = "Error"

    message: str = stanza_field("Error", STRING)
    detail: Optional[str] = stanza_field("Message", STRING, default=None)


Answer = Union[Install, Remove, Keep, Autoremove, Error]

ANSWER_TYPES: Tuple[Type[Any], ...] = (Install, Remove, Keep, Autoremove, Error)

TAGS = tuple(cls.tag for cls in ANSWER_TYPES)


def decode_answer(stanza: Mapping[str, str]) -> Answer:
    """Decode one answer stanza, choosing the variant from its tag field.

    Raises:
        MissingFieldError: none of the tag fields is present.
        FieldDecodeError: several tags are present, or a field is malformed.
    """
    present = {key.lower() for key in stanza}
    matches = [cls for cls in ANSWER_TYPES if cls.tag.lower() in present]
    if not matches:
        raise MissingFieldError(" | ".join(TAGS))
    if len(matches) > 1:
        tags = ", ".join(cls.tag for cls in matches)
        raise FieldDecodeError(matches[1].tag, ValueError(f"conflicting answer tags: {tags}"))
    return decode_record(matches[0], stanza)
