"""Tests for segment splitting, class headers and the field parser."""

import logging
import math

import pytest

from gfc.lexer import LSTLexer
from gfc.parser import (
    LSTParser,
    MalformedValue,
    parse_boolean,
    parse_class_header,
    parse_float,
    parse_integer,
    parse_long,
    split_segments,
)

QUIET = {"enable_logger": False}


def tokens(text):
    return LSTLexer(text, config=QUIET).tokens


def parse(text, **config):
    return LSTParser.from_text(text, lexer_config=QUIET, parser_config={**QUIET, **config}).document


# ---------------------------------------------------------------------------
# split_segments
# ---------------------------------------------------------------------------

def test_split_segments_on_end():
    segments = split_segments(tokens("class A: int x = 1 end class B: end"))
    assert [[t.value for t in s] for s in segments] == [
        ["class", "A:", "int", "x", "=", "1"],
        ["class", "B:"],
        [],
    ]

def test_split_segments_ignores_end_inside_words():
    segments = split_segments(tokens('class Friend: str s = "weekend" end'))
    assert len(segments) == 2
    assert segments[0][1].value == "Friend:"

def test_split_segments_keeps_trailing_text():
    segments = split_segments(tokens("class A: end class B: int y = 2"))
    assert [t.value for t in segments[-1]] == ["class", "B:", "int", "y", "=", "2"]


# ---------------------------------------------------------------------------
# parse_class_header
# ---------------------------------------------------------------------------

def test_header_with_class_keyword():
    header = parse_class_header(tokens("class Window: int w = 1"))
    assert header.name == "Window"
    assert [t.value for t in header.body] == ["int", "w", "=", "1"]

def test_header_offset_shift_without_class_keyword():
    header = parse_class_header(tokens("stray class Window: int w = 1"))
    assert header.name == "Window"
    assert [t.value for t in header.body] == ["int", "w", "=", "1"]

def test_header_empty_segment():
    assert parse_class_header([]) is None

def test_header_too_short():
    assert parse_class_header(tokens("class")) is None
    assert parse_class_header(tokens("garbage tokens")) is None

def test_header_requires_colon():
    assert parse_class_header(tokens("class Window int w = 1")) is None

def test_header_rejects_empty_name():
    assert parse_class_header(tokens("class : int w = 1")) is None


# ---------------------------------------------------------------------------
# Value parsers
# ---------------------------------------------------------------------------

def test_parse_integer():
    assert parse_integer("42") == 42
    assert parse_integer("-7") == -7
    assert parse_integer("+3") == 3

@pytest.mark.parametrize("raw", ["1.5", "abc", "", "2147483648", "1_000", " 1"])
def test_parse_integer_rejects(raw):
    with pytest.raises(ValueError):
        parse_integer(raw)

def test_parse_long_range():
    assert parse_long("9223372036854775807") == 2**63 - 1
    with pytest.raises(ValueError):
        parse_long("9223372036854775808")

def test_parse_float():
    assert parse_float("1.5") == 1.5
    assert parse_float("2f") == 2.0
    assert parse_float("-1e3") == -1000.0
    assert parse_float(".5") == 0.5
    assert parse_float("Infinity") == math.inf
    assert math.isnan(parse_float("NaN"))

def test_parse_float_narrows_to_single_precision():
    assert parse_float("0.1") != 0.1
    assert parse_float("0.1") == pytest.approx(0.1)

@pytest.mark.parametrize("raw", ["abc", "1e40", "1e400", "-1e400f", "1.2.3", "inf", ""])
def test_parse_float_rejects(raw):
    with pytest.raises(ValueError):
        parse_float(raw)

def test_parse_boolean():
    assert parse_boolean("true") is True
    assert parse_boolean("FALSE") is False
    with pytest.raises(ValueError):
        parse_boolean("yes")


# ---------------------------------------------------------------------------
# Field parser
# ---------------------------------------------------------------------------

def test_all_field_types(sample_text):
    document = parse(sample_text)
    window = document.get_class("Window")
    assert window.strings == {"title": "Main Window"}
    assert window.integers == {"width": 800, "height": 600}
    assert window.floats == {"scale": 1.5}
    assert window.booleans == {"resizable": True}
    build = document.get_class("Build")
    assert build.longs == {"timestamp": 1640995200000}
    assert build.floats == {"ratio": 0.25}
    assert build.strings == {"author": "0x1905"}

def test_multi_word_string_keeps_spaces():
    document = parse('class A:\r\nstr name = "a b c"\r\nint after = 1\r\nend')
    assert document.get_string("A", "name") == "a b c"
    assert document.get_integer("A", "after") == 1

def test_empty_string():
    assert parse('class A: str s = "" end').get_string("A", "s") == ""

def test_string_of_a_single_quote():
    assert parse('class A: str s = """ end').get_string("A", "s") == '"'

def test_lone_quote_opens_string():
    assert parse('class A: str s = " x" end').get_string("A", "s") == " x"

def test_unterminated_string_stays_in_class():
    with pytest.raises(MalformedValue) as info:
        parse('class A:\r\nstr s = "never closed\r\nend\r\nclass B:\r\nstr t = "x"\r\nend')
    assert info.value.class_name == "A"
    assert info.value.field_name == "s"
    assert "unterminated" in str(info.value)

def test_unquoted_string():
    with pytest.raises(MalformedValue):
        parse("class A: str s = bare end")

def test_malformed_integer_names_class_and_field():
    with pytest.raises(MalformedValue) as info:
        parse("class A:\r\nint x = notanumber\r\nend")
    error = info.value
    assert (error.class_name, error.field_name, error.raw) == ("A", "x", "notanumber")
    assert "line 2, column 9" in str(error)

def test_int32_overflow_is_malformed():
    with pytest.raises(MalformedValue):
        parse("class A: int x = 2147483648 end")

@pytest.mark.parametrize("raw", ["1e40", "1e400", "-1e400"])
def test_float_overflow_is_malformed(raw):
    with pytest.raises(MalformedValue) as info:
        parse(f"class A: flt f = {raw} end")
    assert (info.value.field_name, info.value.raw) == ("f", raw)

def test_infinity_literal_still_accepted():
    assert parse("class A: flt f = -Infinity end").get_float("A", "f") == -math.inf

def test_missing_value_is_malformed():
    with pytest.raises(MalformedValue) as info:
        parse("class A: int x = end")
    assert info.value.field_name == "x"

def test_missing_field_name_is_malformed():
    with pytest.raises(MalformedValue):
        parse("class A: int end")

def test_assignment_not_validated(caplog):
    with caplog.at_level(logging.WARNING, logger="LST Parser"):
        document = LSTParser.from_text("class A: int x : 5 end", lexer_config=QUIET).document
    assert document.get_integer("A", "x") == 5
    assert "Expected '='" in caplog.text

def test_unknown_tags_skipped():
    document = parse("class A: chr c = x int y = 2 end")
    assert document.get_integer("A", "y") == 2

def test_later_duplicate_wins():
    assert parse("class A: int x = 1 int x = 2 end").get_integer("A", "x") == 2

def test_commented_field_ignored():
    document = parse("class A:\r\n# int x = 1\r\nint y = 2\r\nend")
    assert document.get_class("A").integers == {"y": 2}

def test_cross_type_collision_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="LST Parser"):
        document = LSTParser.from_text("class A: int x = 1 str x = \"one\" end", lexer_config=QUIET).document
    assert document.get_integer("A", "x") == 1
    assert document.get_string("A", "x") == "one"
    assert "Field 'x' in class 'A' declared as str, int" in caplog.text

def test_collision_warning_can_be_disabled(caplog):
    with caplog.at_level(logging.WARNING, logger="LST Parser"):
        LSTParser.from_text(
            "class A: int x = 1 bol x = true end", lexer_config=QUIET, parser_config={"warn_on_collisions": False}
        )
    assert "declared as" not in caplog.text


# ---------------------------------------------------------------------------
# Document scan
# ---------------------------------------------------------------------------

def test_two_classes_lf_text():
    document = parse('class A:\nint x = 1\nend\nclass B:\nstr y = "hi"\nend\n')
    assert document.class_names() == ["A", "B"]

def test_trailing_garbage_keeps_parsed_classes():
    document = parse("class A: int x = 1 end class B: int y = 2 end junk")
    assert document.class_names() == ["A", "B"]

def test_malformed_header_stops_scan(caplog):
    parser = LSTParser(tokens("class A: end class B end class C: end"), config={"parse": False})
    with caplog.at_level(logging.INFO, logger="LST Parser"):
        document = parser.parse_tokens()
    assert document.class_names() == ["A"]
    assert "stopping with 1 classes" in caplog.text

def test_missing_final_end_still_parses():
    assert parse("class A: int x = 1").get_integer("A", "x") == 1

def test_redeclared_class_replaces():
    document = parse("class A: int x = 1 end class A: int y = 2 end")
    assert document.get_class("A").integers == {"y": 2}

def test_empty_text():
    assert len(parse("")) == 0

def test_parse_disabled_until_called():
    parser = LSTParser(tokens("class A: end"), config={"parse": False, **QUIET})
    assert len(parser.document) == 0
    assert parser.parse_tokens().class_names() == ["A"]
