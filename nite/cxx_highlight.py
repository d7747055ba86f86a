"""Keyword-table syntax highlighting for C++ source lines."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from nite.config import (
    FOREGROUND_BLUE,
    FOREGROUND_GREEN,
    FOREGROUND_INTENSITY,
    FOREGROUND_RED,
    ColorScheme,
)

PLAIN = FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE
STD_COLOR = FOREGROUND_RED
ANGLE_BRACKET_COLOR = FOREGROUND_RED | FOREGROUND_INTENSITY


class Category(Enum):
    """Syntax category of a C++ keyword or operator."""

    TYPE = "Type"
    TYPE_MODIFIER = "Type Modifier"
    CAST = "Cast"
    CONTROL_FLOW = "Control Flow"
    OPERATOR = "Operator"
    MEMORY_MANAGEMENT = "Memory Management"
    EXCEPTION_HANDLING = "Exception Handling"
    OBJECT_ORIENTED = "Object-Oriented"
    TEMPLATE = "Template"
    NAMESPACE = "Namespace"
    CAST_INTROSPECTION = "Cast/Introspection"
    OPERATOR_OVERLOADING = "Operator Overloading"
    BOOLEAN_LITERAL = "Boolean Literal"
    NULL_UNDEFINED = "Null/Undefined"
    PREPROCESSOR = "Preprocessor"
    COROUTINES = "Coroutines"
    CONCEPTS = "Concepts"
    MISCELLANEOUS = "Miscellaneous"


_KEYWORD_GROUPS: tuple[tuple[Category, str], ...] = (
    (Category.TYPE, "bool char char8_t char16_t char32_t double float int long "
                    "short signed unsigned void wchar_t"),
    (Category.TYPE_MODIFIER, "const constexpr consteval constinit inline mutable "
                             "volatile static register thread_local"),
    (Category.CAST, "const_cast dynamic_cast reinterpret_cast static_cast"),
    (Category.CONTROL_FLOW, "break case continue default do else for goto if "
                            "return switch while"),
    (Category.OPERATOR, "and and_eq bitand bitor compl not not_eq or or_eq xor xor_eq"),
    (Category.OPERATOR, "+ - * / % ++ -- == != < > <= >= ! && || & | ^ ~ << >> "
                        "= += -= *= /= %= &= |= ^= <<= >>= ? : . -> ->* .* ,"),
    (Category.MEMORY_MANAGEMENT, "new delete sizeof alignas alignof"),
    (Category.EXCEPTION_HANDLING, "try catch throw"),
    (Category.OBJECT_ORIENTED, "struct enum class friend private protected public "
                               "this virtual"),
    (Category.TEMPLATE, "template typename using"),
    (Category.NAMESPACE, "namespace export"),
    (Category.CAST_INTROSPECTION, "decltype typeid"),
    (Category.OPERATOR_OVERLOADING, "operator"),
    (Category.BOOLEAN_LITERAL, "true false"),
    (Category.NULL_UNDEFINED, "nullptr"),
    (Category.PREPROCESSOR, "define include undef ifdef ifndef if else elif endif pragma"),
    (Category.COROUTINES, "co_await co_return co_yield"),
    (Category.CONCEPTS, "concept requires"),
    (Category.MISCELLANEOUS, "asm explicit extern noexcept static_assert"),
)


def _build_keywords() -> dict[str, Category]:
    table: dict[str, Category] = {}
    for category, words in _KEYWORD_GROUPS:
        for word in words.split():
            # The first category listed for a word wins ("if" stays control flow).
            table.setdefault(word, category)
    return table


KEYWORDS: dict[str, Category] = _build_keywords()

OPERATORS: tuple[str, ...] = (
    "==", "!=", "<=", ">=", "->", "::",
    "+", "-", "*", "/", "%", "=", "<", ">", "&", "|", "^", "~", "!", "++", "--",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "<<", ">>", "<<=", ">>=",
)

_SCHEME_FIELD: dict[Category, str] = {
    Category.TYPE: "type",
    Category.TYPE_MODIFIER: "type_modifier",
    Category.CAST: "cast",
    Category.CAST_INTROSPECTION: "cast",
    Category.CONTROL_FLOW: "control_flow",
    Category.OPERATOR: "operator",
    Category.OPERATOR_OVERLOADING: "operator",
    Category.MEMORY_MANAGEMENT: "memory_management",
    Category.EXCEPTION_HANDLING: "exception_handling",
    Category.OBJECT_ORIENTED: "oop",
    Category.TEMPLATE: "template",
    Category.NAMESPACE: "namespace",
    Category.COROUTINES: "coroutine",
    Category.CONCEPTS: "concept",
    Category.BOOLEAN_LITERAL: "boolean_literal",
    Category.NULL_UNDEFINED: "null",
    Category.PREPROCESSOR: "preprocessor",
    Category.MISCELLANEOUS: "misc",
}


def category_color(category: Category, scheme: Optional[ColorScheme] = None) -> int:
    """Return the console attribute the scheme assigns to ``category``."""
    scheme = scheme if scheme is not None else ColorScheme()
    name = _SCHEME_FIELD.get(category)
    return getattr(scheme, name) if name is not None else scheme.default


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalpha())


def _is_ident_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def highlight_line(
    line: str,
    scheme: Optional[ColorScheme] = None,
    col_offset: int = 0,
    width: Optional[int] = None,
    enabled: bool = True,
) -> list[int]:
    """Return one console attribute per visible character of ``line``.

    The visible part starts at ``col_offset`` and holds at most ``width``
    characters (all of the rest of the line when ``width`` is None).
    """
    if col_offset < 0:
        raise ValueError("col_offset must not be negative")
    if width is not None and width < 0:
        raise ValueError("width must not be negative")
    scheme = scheme if scheme is not None else ColorScheme()

    line_end = len(line) if width is None else min(len(line), col_offset + width)
    visible = max(0, line_end - col_offset)
    if not enabled:
        return [scheme.default] * visible

    attrs = [PLAIN] * visible

    def paint(start: int, stop: int, attr: int) -> None:
        for pos in range(max(start, col_offset), min(stop, line_end)):
            attrs[pos - col_offset] = attr

    x = col_offset
    in_string = False
    while x < line_end:
        ch = line[x]

        if ch in "\"'":
            in_string = not in_string
            x += 1
            continue

        if in_string:
            start = x
            while x < line_end and line[x] not in "\"'":
                x += 1
            paint(start, x, scheme.type)
            continue

        if ch == "/" and x + 1 < line_end and line[x + 1] == "/":
            paint(x, line_end, scheme.misc)
            x = line_end
            continue

        if ch == "<":
            close = line.find(">", x + 1)
            if close != -1 and close < line_end:
                paint(x, close + 1, ANGLE_BRACKET_COLOR)
                x = close + 1
                continue

        if line.startswith("std::", x):
            paint(x, x + 5, STD_COLOR)
            x += 5
            continue

        op = next((candidate for candidate in OPERATORS if line.startswith(candidate, x)), None)
        if op is not None:
            paint(x, x + len(op), scheme.operator)
            x += len(op)
            continue

        if _is_ident_start(ch):
            start = x
            while x < line_end and _is_ident_char(line[x]):
                x += 1
            token = line[start:x]
            if token == "std" and x < line_end and line[x] == ":":
                paint(start, start + 1, STD_COLOR)
                continue
            category = KEYWORDS.get(token)
            if category is not None:
                paint(start, x, category_color(category, scheme))
        else:
            x += 1

    return attrs