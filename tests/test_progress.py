"""Tests for progress stanzas."""

import io
from email.utils import parsedate_to_datetime

import pytest

from apt_edsp.errors import FieldDecodeError, MissingFieldError, ProgressWriteError
from apt_edsp.progress import Progress
from apt_edsp.stanza import decode_record

STAMP = "Mon, 08 Jun 2015 12:00:00 +0200"


def test_write():
    out = io.StringIO()
    Progress(timestamp=STAMP, percentage=50, message="resolving").write_to(out)
    assert out.getvalue() == f"Progress: {STAMP}\nPercentage: 50\nMessage: resolving\n\n"


def test_message_optional():
    out = io.StringIO()
    Progress(timestamp=STAMP, percentage=0).write_to(out)
    assert out.getvalue() == f"Progress: {STAMP}\nPercentage: 0\n\n"


def test_default_timestamp_is_rfc2822():
    event = Progress(percentage=10)
    assert parsedate_to_datetime(event.timestamp) is not None


@pytest.mark.parametrize("percentage", [-1, 101])
def test_percentage_range(percentage):
    with pytest.raises(ValueError):
        Progress(percentage=percentage)


def test_decode():
    event = decode_record(Progress, {"Progress": STAMP, "Percentage": "75", "Message": "almost"})
    assert event == Progress(timestamp=STAMP, percentage=75, message="almost")


def test_decode_errors():
    with pytest.raises(MissingFieldError):
        decode_record(Progress, {"Percentage": "75"})
    with pytest.raises(FieldDecodeError):
        decode_record(Progress, {"Progress": STAMP, "Percentage": "150"})


def test_write_failure_wrapped():
    class Full:
        def write(self, data):
            raise OSError(28, "No space left on device")

    with pytest.raises(ProgressWriteError):
        Progress(percentage=1).write_to(Full())


@pytest.mark.parametrize("percentage", [50.7, 50.0, True, "50"])
def test_percentage_must_be_integer(percentage):
    with pytest.raises(ValueError):
        Progress(timestamp=STAMP, percentage=percentage)


def test_non_integer_percentage_not_truncated_on_write():
    event = Progress(timestamp=STAMP, percentage=50)
    event.percentage = 50.7
    out = io.StringIO()
    with pytest.raises(ProgressWriteError):
        event.write_to(out)
    assert "Percentage: 50\n" not in out.getvalue()


def test_missing_timestamp_rejected():
    with pytest.raises(ValueError):
        Progress(timestamp=None, percentage=5)


def test_cleared_timestamp_wrapped_on_write():
    event = Progress(timestamp=STAMP, percentage=5)
    event.timestamp = None
    with pytest.raises(ProgressWriteError) as excinfo:
        event.write_to(io.StringIO())
    assert isinstance(excinfo.value.cause, MissingFieldError)
