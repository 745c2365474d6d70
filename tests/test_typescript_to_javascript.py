"""Tests for TypeScript to JavaScript conversion."""

from converter.typescript_to_javascript import TypeScriptToJavaScriptConverter, strip_param


def convert(source):
    return TypeScriptToJavaScriptConverter().convert(source)


def test_interface_and_signature(lines):
    """Test interfaces are skipped and signatures lose their annotations"""
    source = lines(
        "interface User {",
        "  name: string;",
        "}",
        "function greet(user: User): string {",
        "  return `Hi ${user.name}`;",
        "}",
    )
    assert convert(source) == lines(
        "function greet(user) {",
        "  return `Hi ${user.name}`;",
        "}",
    )


def test_variable_annotation():
    assert convert("const count: number = 5;") == "const count = 5;"


def test_class_property_modifiers():
    """Test access modifiers and property types are removed, indentation kept"""
    assert convert("  private count: number = 0;") == "  count = 0;"


def test_enum():
    assert convert("enum Color { Red, Green }") == "const Color = { Red: 0, Green: 1 };"


def test_optional_chaining_and_nullish():
    assert convert("const v = a?.b ?? 0;") == "const v = (a && a.b) || 0;"


def test_strip_param():
    assert strip_param("a?: number") == "a"
    assert strip_param("b: string = 'x'") == "b = 'x'"
    assert strip_param("c") == "c"
