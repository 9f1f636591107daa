"""Progress reports emitted by a solver while it works."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from email.utils import formatdate
from typing import Any, Optional

from .constants import Constants
from .errors import MissingFieldError, ProgressWriteError
from .kinds import PERCENTAGE, STRING
from .stanza import stanza_field, write_record

logger = logging.getLogger(__name__)


def _now() -> str:
    # RFC 2822 date, the format APT expects in the Progress field.
    return formatdate(localtime=True)


@dataclass(kw_only=True)
class Progress:
    """One progress event: a percentage and an optional human readable message."""

    timestamp: str = stanza_field("Progress", STRING, default_factory=_now, required=True)
    percentage: int = stanza_field("Percentage", PERCENTAGE)
    message: Optional[str] = stanza_field("Message", STRING, default=None)

    def __post_init__(self):
        if isinstance(self.percentage, bool) or not isinstance(self.percentage, int):
            raise ValueError(f"percentage must be an integer, got {self.percentage!r}")
        if not Constants.PERCENTAGE_MIN <= self.percentage <= Constants.PERCENTAGE_MAX:
            raise ValueError(f"percentage {self.percentage} out of range 0-100")
        if not isinstance(self.timestamp, str):
            raise ValueError(f"timestamp must be a date string, got {self.timestamp!r}")

    def write_to(self, stream: Any) -> None:
        """Write this event as one stanza; the caller flushes."""
        try:
            write_record(stream, self)
        except (OSError, ValueError, MissingFieldError) as exc:
            raise ProgressWriteError(exc) from exc
        logger.debug("Wrote progress %d%%", self.percentage)
