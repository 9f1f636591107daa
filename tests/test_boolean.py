"""Tests for the yes/no boolean scalar."""

import pytest

from apt_edsp.boolean import Bool
from apt_edsp.errors import BoolParseError


def test_consts():
    assert Bool.YES == Bool(True)
    assert Bool.NO == Bool(False)
    assert Bool.yes() is Bool.YES
    assert Bool.no() is Bool.NO


def test_encode():
    assert Bool(True).as_str() == "yes"
    assert str(Bool.NO) == "no"


def test_decode():
    assert Bool.parse("yes") == Bool.YES
    assert Bool.parse("no") == Bool.NO


@pytest.mark.parametrize("token", ["YES", "No", "true", "1", "", " yes"])
def test_decode_rejects_other_tokens(token):
    with pytest.raises(BoolParseError):
        Bool.parse(token)


def test_truthiness_and_comparison_with_bool():
    assert Bool.YES
    assert not Bool.NO
    assert Bool.YES == True  # noqa: E712
    assert hash(Bool.YES) == hash(True)
    assert Bool.NO != "no"
