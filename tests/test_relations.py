"""Tests for dependency atoms and AND-of-OR expressions."""

import textwrap

import pytest

from apt_edsp.errors import RelationParseError
from apt_edsp.relations import (
    ArchQualifiedName,
    Dependency,
    Operator,
    Relation,
    format_dependencies,
    parse_dependencies,
    parse_names,
)
from apt_edsp.version import Version


class TestRelationParse:
    """Parsing of single atoms."""

    def test_bare_name(self):
        assert Relation.parse("foo") == Relation("foo")

    @pytest.mark.parametrize(
        "text, operator",
        [
            ("foo (<< 2.2.1)", Operator.EARLIER),
            ("foo (<= 2.2.1)", Operator.EARLIER_EQUAL),
            ("foo (= 2.2.1)", Operator.EQUAL),
            ("foo (>= 2.2.1)", Operator.LATER_EQUAL),
            ("foo (>> 2.2.1)", Operator.LATER),
        ],
    )
    def test_operators(self, text, operator):
        relation = Relation.parse(text)
        assert relation.package == "foo"
        assert relation.constraint == (operator, Version("2.2.1"))
        assert str(relation) == text

    def test_architecture_qualifier(self):
        relation = Relation.parse("libc6:amd64 (>= 2.36)")
        assert relation.package == "libc6"
        assert relation.architecture == "amd64"
        assert relation.operator is Operator.LATER_EQUAL
        assert relation.version == Version("2.36")
        assert str(relation) == "libc6:amd64 (>= 2.36)"

    def test_loose_whitespace(self):
        relation = Relation.parse("  foo(>=1.0 )  ")
        assert relation == Relation("foo", None, (Operator.LATER_EQUAL, Version("1.0")))
        assert str(relation) == "foo (>= 1.0)"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "foo (< 1.0)",
            "foo (> 1.0)",
            "foo (=> 1.0)",
            "foo (>= )",
            "foo (>= 1.0",
            "foo >= 1.0",
            "foo bar",
            "foo (>= 1.0) trailing",
            "foo (>= x:1.0)",
            "(>= 1.0)",
        ],
    )
    def test_malformed(self, text):
        with pytest.raises(RelationParseError):
            Relation.parse(text)

    def test_bad_version_chains_cause(self):
        with pytest.raises(RelationParseError) as excinfo:
            Relation.parse("foo (>= a:1)")
        assert excinfo.value.__cause__ is not None


class TestRelationMatches:
    """Constraint evaluation against candidate versions."""

    def test_unconstrained_matches_everything(self):
        assert Relation("foo").matches(Version("0~"))

    @pytest.mark.parametrize(
        "text, candidate, expected",
        [
            ("foo (<< 1.0)", "1.0~rc1", True),
            ("foo (<< 1.0)", "1.0", False),
            ("foo (<= 1.0)", "1.0-0", True),
            ("foo (= 1:2.0)", "1:2.0", True),
            ("foo (= 1:2.0)", "2.0", False),
            ("foo (>= 1.0)", "1.0.1", True),
            ("foo (>> 1.0)", "1.0", False),
        ],
    )
    def test_constraints(self, text, candidate, expected):
        assert Relation.parse(text).matches(Version(candidate)) is expected


class TestDependencies:
    """AND-of-OR expressions as found in Depends-style fields."""

    def test_groups_and_alternatives(self):
        groups = parse_dependencies("a (>= 1.0) | b, c")
        assert len(groups) == 2
        assert [str(alt) for alt in groups[0]] == ["a (>= 1.0)", "b"]
        assert groups[1].alternatives == [Relation("c")]
        assert format_dependencies(groups) == "a (>= 1.0) | b, c"

    def test_round_trip_is_byte_identical(self):
        text = "foo (= v1.0.0) | bar | baz (>> 0.1~1), qux:any, quux (<< 2:3-4)"
        assert format_dependencies(parse_dependencies(text)) == text

    def test_folded_value(self):
        text = textwrap.dedent(
            """\
            foo (= v1.0.0) | bar,
                 baz,
                 qux | quux (>> 0.1~1)"""
        )
        groups = parse_dependencies(text)
        assert [len(group) for group in groups] == [2, 1, 2]
        assert groups[2].alternatives[1] == Relation(
            "quux", None, (Operator.LATER, Version("0.1~1"))
        )

    def test_duplicates_preserved(self):
        groups = parse_dependencies("a | a, a")
        assert format_dependencies(groups) == "a | a, a"

    def test_blank_is_empty_expression(self):
        assert parse_dependencies("") == []
        assert parse_dependencies("  ") == []
        assert format_dependencies([]) == ""

    @pytest.mark.parametrize("text", ["a, , b", "a |", "a, b,", "a | (>= 1)", "good, bad (<> 1)"])
    def test_one_bad_atom_fails_whole_value(self, text):
        with pytest.raises(RelationParseError):
            parse_dependencies(text)

    def test_first_alternative(self):
        assert Dependency.parse("x | y").first == Relation("x")

    def test_empty_group_rejected(self):
        with pytest.raises(ValueError):
            Dependency([])


class TestArchQualifiedNames:
    """Whitespace separated identifier lists."""

    def test_parse_list(self):
        names = parse_names("libc:amd64 rustc:i386 python3")
        assert names == [
            ArchQualifiedName("libc", "amd64"),
            ArchQualifiedName("rustc", "i386"),
            ArchQualifiedName("python3"),
        ]
        assert [str(name) for name in names] == ["libc:amd64", "rustc:i386", "python3"]

    def test_reject_constraint(self):
        with pytest.raises(RelationParseError):
            ArchQualifiedName.parse("foo(>=1)")
