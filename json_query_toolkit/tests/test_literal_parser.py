"""
Tests for the JavaScript object-literal grammar.
"""

from __future__ import annotations

import json
import math

import pytest

from json_query_toolkit.errors import EvaluationError
from json_query_toolkit.literal_parser import LiteralParser, parse_literal


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("{a:1,b:'x',}", {"a": 1, "b": "x"}),
        ("{'a': 1, \"b\": [1, 2, 3,],}", {"a": 1, "b": [1, 2, 3]}),
        ("{ $id: 1, _x: 2, ünï: 3 }", {"$id": 1, "_x": 2, "ünï": 3}),
        ("{1: 'one', 2.50: 'two', 0x10: 'hex'}", {"1": "one", "2.5": "two", "16": "hex"}),
        ("{null: 1, true: 2}", {"null": 1, "true": 2}),
        ("{a: 1, a: 2}", {"a": 2}),
        ("[1,,2]", [1, None, 2]),
        ("[,]", [None]),
        ("[]", []),
        ("{}", {}),
        ("({a: [ {b: undefined} ]});", {"a": [{"b": None}]}),
    ],
)
def test_object_and_array_literals(text, expected) -> None:
    """Relaxed keys, trailing commas, holes and parentheses are accepted."""

    assert parse_literal(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("0x1F", 31),
        ("0o17", 15),
        ("0b101", 5),
        ("017", 15),
        ("089", 89),
        ("-5", -5),
        ("+5", 5),
        ("- 5", -5),
        (".5", 0.5),
        ("5.", 5.0),
        ("1e3", 1000.0),
        ("-2.5E-1", -0.25),
        ("10n", 10),
    ],
)
def test_number_forms(text, expected) -> None:
    """Number literals follow JavaScript rules."""

    value = parse_literal(text)

    assert value == expected
    assert type(value) is type(expected)


def test_special_number_keywords() -> None:
    """Infinity and NaN are literals, optionally signed."""

    assert parse_literal("Infinity") == math.inf
    assert parse_literal("-Infinity") == -math.inf
    assert math.isnan(parse_literal("NaN"))


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (r"'it\'s'", "it's"),
        (r'"tab\there"', "tab\there"),
        (r"'\x41B\u{43}'", "ABC"),
        (r"'\ud83d\ude00'", "\U0001F600"),
        (r"'\0'", "\x00"),
        (r"'\101'", "A"),
        (r"'\q'", "q"),
        ("'line\\\ncontinued'", "linecontinued"),
        ("'\\\r\nx'", "x"),
    ],
)
def test_string_escapes(text, expected) -> None:
    """JS escape sequences decode to the same characters a browser produces."""

    assert parse_literal(text) == expected


def test_comments_and_whitespace_are_skipped() -> None:
    """Line and block comments may appear between tokens."""

    text = """
    // leading comment
    {
      /* block */ name: 'demo', // trailing
      list: [1, /* inline */ 2],
    }
    """

    assert parse_literal(text) == {"name": "demo", "list": [1, 2]}


@pytest.mark.parametrize(
    "text",
    [
        '{"a": 1, "b": [true, false, null]}',
        '[1, -2.5, 3e10, "x\\u00e9\\n"]',
        '"\\ud83d\\ude00"',
        "-0",
        '{"a": {"b": {"c": []}}}',
    ],
)
def test_json_superset(text: str) -> None:
    """Anything valid as JSON reads to the same value."""

    assert parse_literal(text) == json.loads(text)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "{a}",
        "{,}",
        "{a:1,,}",
        "[1 2]",
        "foo",
        "alert(1)",
        "while(true){}",
        "for(;;){}",
        "1 + 2",
        "{a: b}",
        "'unterminated",
        "'line\nbreak'",
        "/* open comment",
        "0x",
        "1.e",
        "3in",
        ".",
        "-'5'",
        "`template`",
        "{a: 1} {b: 2}",
        r"'\xZZ'",
        r"'\u{110000}'",
    ],
)
def test_non_literals_are_rejected(text: str) -> None:
    """Expressions, statements and broken literals raise EvaluationError."""

    with pytest.raises(EvaluationError):
        parse_literal(text)


def test_error_reports_position() -> None:
    """EvaluationError carries the offending offset."""

    with pytest.raises(EvaluationError) as excinfo:
        parse_literal("{a: 1, b: oops}")

    assert excinfo.value.position == 10


def test_depth_limit() -> None:
    """Nesting beyond max_depth is rejected instead of overflowing the stack."""

    assert parse_literal("[[[1]]]", max_depth=3) == [[[1]]]
    with pytest.raises(EvaluationError):
        parse_literal("[[[[1]]]]", max_depth=3)
    with pytest.raises(EvaluationError):
        parse_literal("[" * 5000 + "]" * 5000)


def test_non_string_input() -> None:
    """Only text can be parsed."""

    with pytest.raises(EvaluationError):
        LiteralParser(b"{}")  # type: ignore[arg-type]


def test_depth_limit_counts_empty_containers() -> None:
    """Empty innermost containers count toward the nesting limit."""

    assert parse_literal("[[]]", max_depth=2) == [[]]
    with pytest.raises(EvaluationError):
        parse_literal("[[[]]]", max_depth=2)
    with pytest.raises(EvaluationError):
        parse_literal("{a: {b: {}}}", max_depth=2)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("{1e21: 'x'}", {"1e+21": "x"}),
        ("{1000000000000000000000: 'x'}", {"1e+21": "x"}),
        ("{999999999999999999999: 'x'}", {"1e+21": "x"}),
        ("{9007199254740993: 'x'}", {"9007199254740992": "x"}),
        ("{1e20: 'x'}", {"100000000000000000000": "x"}),
        ("{" + "9" * 400 + ": 'x'}", {"Infinity": "x"}),
    ],
)
def test_large_numeric_keys_use_exponent_form(text, expected) -> None:
    """Numeric keys of 1e21 and above are named in exponent form."""

    assert parse_literal(text) == expected
