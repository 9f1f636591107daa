"""Tests for Debian version parsing and ordering."""

import itertools

import pytest

from apt_edsp.errors import VersionParseError
from apt_edsp.version import Version, compare_strings


class TestVersionParse:
    """Splitting of epoch, upstream and revision."""

    def test_all_components(self):
        """Epoch is split at the first colon and revision at the last hyphen."""
        v = Version("1:foo:bar-baz-qux")
        assert v.epoch == 1
        assert v.upstream == "foo:bar-baz"
        assert v.revision == "qux"

    def test_no_epoch(self):
        v = Version("foo.123+bar-baz-qux")
        assert v.epoch == 0
        assert v.upstream == "foo.123+bar-baz"
        assert v.revision == "qux"

    def test_no_revision_defaults_to_zero(self):
        v = Version("90:foo.123+bar")
        assert v.epoch == 90
        assert v.upstream == "foo.123+bar"
        assert v.revision == "0"

    def test_original_text_preserved(self):
        """Serialization keeps the text as written, not the normalized form."""
        v = Version("0:1.00-0")
        assert v.as_str() == "0:1.00-0"
        assert str(v) == "0:1.00-0"

    @pytest.mark.parametrize("text", ["foo:bar", "-1:1.0", "1a:2.0", ":1.0"])
    def test_bad_epoch(self, text):
        with pytest.raises(VersionParseError):
            Version(text)

    @pytest.mark.parametrize("text", ["", "1:", "-1", "2:-3"])
    def test_empty_upstream(self, text):
        with pytest.raises(VersionParseError):
            Version(text)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            Version("x:1")


@pytest.mark.parametrize(
    "left, expected, right",
    [
        ("1.1.1", -1, "1.1.2"),
        ("1b", 1, "1a"),
        ("1~~", -1, "1~~a"),
        ("1~~a", -1, "1~"),
        ("1", -1, "1.1"),
        ("1.0", -1, "1.1"),
        ("1.2", -1, "1.11"),
        ("1.0-1", -1, "1.1"),
        ("1.0-1", -1, "1.0-12"),
        ("1:1.0-0", 0, "1:1.0"),
        ("1.0", 0, "1.0"),
        ("1.0-1", 0, "1.0-1"),
        ("1:1.0-1", 0, "1:1.0-1"),
        ("1.0-1", -1, "1.0-2"),
        ("1.0final-5", 1, "1.0a7-2"),
        ("0.9.2-5", -1, "0.9.2+cvs.1.0.dev.2004.07.28-1"),
        ("1:500", -1, "1:5000"),
        ("100:500", 1, "11:5000"),
        ("1.0.4-2", 1, "1.0pre7-2"),
        ("1.5~rc1", -1, "1.5"),
        ("1.5~rc1", -1, "1.5+1"),
        ("1.5~rc1", -1, "1.5~rc2"),
        ("1.5~rc1", 1, "1.5~dev0"),
        ("1.0~beta1", -1, "1.0"),
        ("1.0", -1, "1.0.1"),
        ("10:0.9", 1, "2:1.0"),
        ("1.01", 0, "1.1"),
    ],
)
def test_ordering(left, expected, right):
    a, b = Version(left), Version(right)
    result = a.compare(b)
    assert (result > 0) - (result < 0) == expected
    assert (a < b) == (expected < 0)
    assert (a > b) == (expected > 0)
    assert (a == b) == (expected == 0)


@pytest.mark.parametrize(
    "left, right",
    [
        ("1.0-1", "0:1.0-1"),
        ("1.1+git2021", "0:1.1+git2021"),
        ("1.0", "1.0-0"),
        ("1.0", "0:1.00"),
        ("1a", "1a0"),
        ("00:1.0", "1.0"),
    ],
)
def test_equal_versions_hash_equal(left, right):
    a, b = Version(left), Version(right)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_tilde_sorts_below_end_of_string():
    assert compare_strings("~", "") < 0
    assert compare_strings("", "+") < 0
    assert compare_strings("~r", "~d") > 0


def test_letters_sort_below_other_characters():
    assert compare_strings("a", ".") < 0
    assert compare_strings("Z", "+") < 0
    assert compare_strings("A", "a") < 0


def test_total_order_over_sample():
    """Trichotomy, transitivity and sort stability over a mixed sample."""
    sample = [
        Version(text)
        for text in [
            "1.0", "1.0-1", "1:0.1", "1.0~rc1", "1.0+b1", "1.0a", "1.0.0", "0.9",
            "2.0~~", "2.0~", "2.0", "1.00", "0:1.0-0", "1.0-0.1", "1.0-a", "10", "9",
        ]
    ]
    for a, b in itertools.product(sample, repeat=2):
        outcomes = [a < b, a == b, a > b]
        assert outcomes.count(True) == 1, (a, b)
    for a, b, c in itertools.product(sample, repeat=3):
        if a < b and b < c:
            assert a < c, (a, b, c)

    ordered = sorted(sample)
    for earlier, later in zip(ordered, ordered[1:]):
        assert earlier <= later


def test_not_equal_to_plain_string():
    assert Version("1.0") != "1.0"
