import pytest

from nite.config import (
    FOREGROUND_BLUE,
    FOREGROUND_GREEN,
    FOREGROUND_INTENSITY,
    FOREGROUND_RED,
    ColorScheme,
)
from nite.cxx_highlight import (
    KEYWORDS,
    Category,
    category_color,
    highlight_line,
)

SCHEME = ColorScheme()
PLAIN = FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE


def test_disabled_uses_default_everywhere():
    custom = ColorScheme(default=FOREGROUND_GREEN)
    attrs = highlight_line("int x;", custom, enabled=False)
    assert attrs == [FOREGROUND_GREEN] * len("int x;")


def test_type_keyword_colored():
    attrs = highlight_line("int x", SCHEME)
    assert attrs[:3] == [SCHEME.type] * 3
    assert attrs[3] == PLAIN
    assert attrs[4] == PLAIN


def test_if_and_else_are_control_flow_not_preprocessor():
    assert KEYWORDS["if"] is Category.CONTROL_FLOW
    assert KEYWORDS["else"] is Category.CONTROL_FLOW
    attrs = highlight_line("if", SCHEME)
    assert attrs == [SCHEME.control_flow] * 2


def test_comment_colored_to_end():
    line = "x // note"
    attrs = highlight_line(line, SCHEME)
    assert attrs[2:] == [SCHEME.misc] * (len(line) - 2)
    assert attrs[0] == PLAIN


def test_string_contents_and_quotes():
    attrs = highlight_line('x = "ab";', SCHEME)
    assert attrs[2] == SCHEME.operator
    assert attrs[4] == PLAIN
    assert attrs[5:7] == [SCHEME.type, SCHEME.type]
    assert attrs[7] == PLAIN
    assert attrs[8] == PLAIN


def test_keywords_inside_string_are_not_keywords():
    attrs = highlight_line('"int"', SCHEME)
    assert attrs[1:4] == [SCHEME.type] * 3


def test_angle_bracket_include():
    line = "#include <vector>"
    attrs = highlight_line(line, SCHEME)
    start = line.index("<")
    assert attrs[start:] == [FOREGROUND_RED | FOREGROUND_INTENSITY] * (len(line) - start)


def test_std_prefix():
    attrs = highlight_line("std::string", SCHEME)
    assert attrs[:5] == [FOREGROUND_RED] * 5
    assert attrs[5:] == [PLAIN] * len("string")


def test_std_single_colon_marks_first_letter():
    attrs = highlight_line("std:a", SCHEME)
    assert attrs[0] == FOREGROUND_RED
    assert attrs[1] == PLAIN


def test_operators_colored():
    attrs = highlight_line("a++", SCHEME)
    assert attrs == [PLAIN, SCHEME.operator, SCHEME.operator]


def test_unknown_identifier_stays_plain():
    attrs = highlight_line("foo", SCHEME)
    assert attrs == [PLAIN] * 3


def test_width_limits_result():
    line = "int value = 42;"
    attrs = highlight_line(line, SCHEME, width=4)
    assert len(attrs) == 4
    assert attrs[:3] == [SCHEME.type] * 3


def test_col_offset_shifts_view():
    line = "x int"
    attrs = highlight_line(line, SCHEME, col_offset=2)
    assert attrs == [SCHEME.type] * 3


def test_offset_past_end_gives_empty():
    assert highlight_line("ab", SCHEME, col_offset=10) == []


def test_negative_offset_rejected():
    with pytest.raises(ValueError):
        highlight_line("ab", SCHEME, col_offset=-1)


def test_custom_scheme_respected():
    custom = ColorScheme(type=FOREGROUND_BLUE)
    assert highlight_line("bool", custom) == [FOREGROUND_BLUE] * 4


@pytest.mark.parametrize(
    "category, field",
    [
        (Category.TYPE, "type"),
        (Category.CAST_INTROSPECTION, "cast"),
        (Category.OPERATOR_OVERLOADING, "operator"),
        (Category.OBJECT_ORIENTED, "oop"),
        (Category.COROUTINES, "coroutine"),
        (Category.NULL_UNDEFINED, "null"),
        (Category.MISCELLANEOUS, "misc"),
    ],
)
def test_category_color(category, field):
    assert category_color(category, SCHEME) == getattr(SCHEME, field)


def test_every_category_maps_to_scheme_value():
    values = {getattr(SCHEME, name) for name in vars(SCHEME)}
    for category in Category:
        assert category_color(category, SCHEME) in values