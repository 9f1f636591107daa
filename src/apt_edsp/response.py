"""The solver's side of the pipe: progress events followed by answer stanzas."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, List, Optional, Union

from .answer import Answer, Error, decode_answer
from .config import load_config
from .errors import FieldDecodeError, MissingFieldError, StanzaReadError
from .progress import Progress
from .stanza import decode_record, iter_stanzas

logger = logging.getLogger(__name__)

Message = Union[Progress, Answer]


class ResponseWriter:
    """Writes progress and answer stanzas in emission order.

    Each stanza is flushed as soon as it is written (unless ``flush`` is
    False), so a reader blocking on stanza boundaries sees every event.
    """

    def __init__(self, stream: Any, flush: Optional[bool] = None):
        if flush is None:
            flush = bool(load_config()["writer"]["flush"])
        self.stream = stream
        self.flush = flush
        self.count = 0

    def write(self, message: Message) -> None:
        message.write_to(self.stream)
        self.count += 1
        if self.flush and hasattr(self.stream, "flush"):
            self.stream.flush()

    def progress(self, percentage: int, message: Optional[str] = None, **kwargs: Any) -> Progress:
        event = Progress(percentage=percentage, message=message, **kwargs)
        self.write(event)
        return event

    def answer(self, answers: Iterable[Answer]) -> None:
        for answer in answers:
            self.write(answer)

    def error(self, message: str, detail: Optional[str] = None) -> Error:
        failure = Error(message, detail)
        logger.warning("Reporting solver error: %s", message)
        self.write(failure)
        return failure


def decode_message(stanza: dict) -> Message:
    """Decode a response stanza as Progress when it carries the field, else as an answer."""
    if any(key.lower() == "progress" for key in stanza):
        return decode_record(Progress, stanza)
    return decode_answer(stanza)


def iter_response(stream: Iterable[Any]) -> Iterator[Message]:
    """Lazily decode a solver response, one message per stanza.

    Raises:
        StanzaReadError, MissingFieldError, FieldDecodeError: as soon as a
            malformed stanza is reached.
    """
    for stanza in iter_stanzas(stream):
        yield decode_message(stanza)


def read_response(stream: Iterable[Any]) -> List[Message]:
    """Read a complete solver response, keeping emission order."""
    try:
        messages = list(iter_response(stream))
    except (StanzaReadError, MissingFieldError, FieldDecodeError) as exc:
        logger.error("Failed to read solver response: %s", exc)
        raise
    logger.debug("Read %d response stanzas", len(messages))
    return messages
