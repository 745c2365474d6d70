"""Tests for the shared text helpers."""

import pytest

from converter.patterns import (
    COUNTING_FOR_RE, counting_loop, fstring_to_concat, from_python_expression, outside_strings, range_arguments,
    split_blocks, to_python_expression,
)


@pytest.mark.parametrize("header, expected", [
    ("for (let i = 0; i < 5; i++) {", "0, 5"),
    ("for (let i = 0; i <= 10; i++) {", "0, 11"),
    ("for (int i = 0; i < n; i += 2) {", "0, n, 2"),
    ("for (let i = 10; i > 0; i--) {", "10, 0, -1"),
    ("for (int i = n; i >= 1; i -= 2) {", "n, 0, -2"),
    ("for (let i = 1; i <= n; ++i) {", "1, n + 1"),
])
def test_range_arguments(header, expected):
    assert range_arguments(COUNTING_FOR_RE.match(header)) == expected


def test_range_arguments_against_step_direction():
    assert range_arguments(COUNTING_FOR_RE.match("for (let i = 0; i > 5; i++) {")) is None


def test_counting_loop():
    assert counting_loop("i", ["5"], "let ") == "(let i = 0; i < 5; i++)"
    assert counting_loop("i", ["2", "8", "3"], "int ") == "(int i = 2; i < 8; i += 3)"
    assert counting_loop("i", ["10", "0", "-2"]) == "(i = 10; i > 0; i -= 2)"
    assert counting_loop("i", []) is None


def test_split_blocks_single_line_blocks():
    pieces = split_blocks("if (a) { b(); } else { c(); }")
    assert pieces == ["if (a) {", "b();", "}", "else {", "c();", "}"]


def test_split_blocks_leaves_literals_alone():
    assert split_blocks("const o = { a: 1 };") == ["const o = { a: 1 };"]
    assert split_blocks('print("{ not a block }")') == ['print("{ not a block }")']


def test_split_blocks_canonical_line():
    assert split_blocks("function f(a) {") == ["function f(a) {"]
    assert split_blocks("});") == ["});"]


def test_to_python_expression():
    assert to_python_expression("a && !b || c === null") == "a and not b or c == None"
    assert to_python_expression("this.done !== true") == "self.done != True"


def test_from_python_expression():
    assert from_python_expression("x is not None and not y", strict_equality=True) == "x !== null && !y"
    assert from_python_expression("self.n == 0 or flag") == "this.n == 0 || flag"
    assert from_python_expression("self.n", receiver="$this->") == "$this->n"


def test_fstring_to_concat():
    assert fstring_to_concat('f"Hi {name}!"') == '"Hi " + name + "!"'
    assert fstring_to_concat('f"{a}{b}"', " . ") == "a . b"


def test_respelling_skips_string_literals():
    assert to_python_expression('x && "a && !b"') == 'x and "a && !b"'
    assert to_python_expression("msg === 'true || false'") == "msg == 'true || false'"
    assert from_python_expression('s == "None or True"', strict_equality=True) == 's === "None or True"'
    assert from_python_expression("print('not and or')") == "print('not and or')"


def test_respelling_reaches_interpolated_code():
    assert to_python_expression("`${this.name} && ${a && b}`") == "`${self.name} && ${a and b}`"
    assert from_python_expression('f"{self.x} or {not y}"') == 'f"{this.x} or {!y}"'


def test_outside_strings_escaped_quote():
    assert outside_strings(r'a + "say \"a\"" + a', str.upper) == r'A + "say \"a\"" + A'
    assert outside_strings("a + 'unterminated a", str.upper) == "A + 'unterminated a"
