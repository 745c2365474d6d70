"""Tests for Python to Java and PHP conversion."""

from converter.python_to_java import PythonToJavaConverter, java_literal
from converter.python_to_php import PythonToPhpConverter


def test_java_typed_function(lines):
    """Test annotated parameters and return types"""
    source = lines(
        "def add(a: int, b: int) -> int:",
        "    return a + b",
    )
    assert PythonToJavaConverter().convert(source) == lines(
        "public static int add(int a, int b) {",
        "    return a + b;",
        "}",
    )


def test_java_main(lines):
    """Test a parameterless main gets the standard signature"""
    source = lines(
        "def main():",
        '    print("hi")',
    )
    assert PythonToJavaConverter().convert(source) == lines(
        "public static void main(String[] args) {",
        '    System.out.println("hi");',
        "}",
    )


def test_java_declarations(lines):
    """Test local types inferred from literals"""
    output = PythonToJavaConverter().convert(lines("count = 0", 'names = ["a", "b"]'))
    assert output == lines(
        "int count = 0;",
        'List<Object> names = new ArrayList<>(List.of("a", "b"));',
    )


def test_java_print_joins_arguments():
    assert PythonToJavaConverter().convert('print("a", x)') == 'System.out.println("a" + " " + x);'


def test_java_literal():
    assert java_literal("[]") == "new ArrayList<>()"
    assert java_literal("{}") == "new HashMap<>()"
    assert java_literal('{"a": 1}') == 'new HashMap<>(Map.of("a", 1))'
    assert java_literal("x") == "x"


def test_php_function(lines):
    """Test sigils, echo and the php tags"""
    source = lines(
        "def greet(name):",
        '    print("Hello", name)',
    )
    assert PythonToPhpConverter().convert(source) == lines(
        "<?php",
        "function greet($name) {",
        "    echo \"Hello\" . ' ' . $name . PHP_EOL;",
        "}",
        "?>",
    )


def test_php_assignments(lines):
    """Test bound names get a sigil and dicts become arrays"""
    output = PythonToPhpConverter().convert(lines("total = 0", 'ages = {"a": 1}'))
    assert output == lines(
        "<?php",
        "$total = 0;",
        '$ages = array("a" => 1);',
        "?>",
    )


def test_php_blank_input_not_wrapped():
    assert PythonToPhpConverter().convert("\n") == "\n"


def test_java_void_without_return(lines):
    """Test an untyped function that never returns a value is void"""
    source = lines(
        "def greet(name):",
        "    print(name)",
        "    return",
        "def echo(x):",
        "    return x",
    )
    assert PythonToJavaConverter().convert(source) == lines(
        "public static void greet(Object name) {",
        "    System.out.println(name);",
        "    return;",
        "}",
        "public static Object echo(Object x) {",
        "    return x;",
        "}",
    )


def test_java_void_method_in_class(lines):
    """Test methods and empty bodies settle their return type on close"""
    source = lines(
        "class Counter:",
        "    def reset(self):",
        "        self.count = 0",
        "    def noop(self):",
        "        pass",
    )
    output = PythonToJavaConverter().convert(source)
    assert "    public void reset() {" in output.split("\n")
    assert "    public void noop() {" in output.split("\n")


def test_java_string_literals_untouched():
    assert PythonToJavaConverter().convert('print("len(x) and not")') == 'System.out.println("len(x) and not");'
