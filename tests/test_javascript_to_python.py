"""Tests for JavaScript to Python conversion."""

from converter.javascript_to_python import JavaScriptToPythonConverter


def convert(source):
    return JavaScriptToPythonConverter().convert(source)


def test_function(lines):
    """Test a function declaration becomes a def with an indented body"""
    source = lines(
        "function add(a, b) {",
        "  return a + b;",
        "}",
    )
    assert convert(source) == "def add(a, b):\n    return a + b"


def test_counting_loop(lines):
    """Test a counting for loop becomes a range loop"""
    source = lines(
        "for (let i = 0; i < 5; i++) {",
        "  console.log(i);",
        "}",
    )
    assert convert(source) == "for i in range(0, 5):\n    print(i)"


def test_class_with_constructor_and_method(lines):
    """Test classes gain a self receiver and template literals become f-strings"""
    source = lines(
        "class Dog extends Animal {",
        "  constructor(name) {",
        "    this.name = name;",
        "  }",
        "  speak() {",
        "    console.log(`${this.name} barks`);",
        "  }",
        "}",
    )
    assert convert(source) == lines(
        "class Dog(Animal):",
        "    def __init__(self, name):",
        "        self.name = name",
        "    def speak(self):",
        '        print(f"{self.name} barks")',
    )


def test_if_else_with_operators(lines):
    """Test logical operators and literals are respelled"""
    source = lines(
        "if (x > 0 && y !== null) {",
        "  return true;",
        "} else {",
        "  return false;",
        "}",
    )
    assert convert(source) == lines(
        "if x > 0 and y != None:",
        "    return True",
        "else:",
        "    return False",
    )


def test_comments():
    """Test line and block comments"""
    assert convert("// hello") == "# hello"
    assert convert("/* a */") == '""" a """'


def test_blank_lines_preserved():
    """Test blank lines pass through"""
    assert convert("\n\n") == "\n\n"


def test_string_literals_untouched(lines):
    """Test operators and keywords inside strings are not respelled"""
    source = lines(
        'console.log("Hello, World!");',
        'let ok = !done && name === "null";',
        "console.log(`${count} items && more`);",
    )
    assert convert(source) == lines(
        'print("Hello, World!")',
        'ok = not done and name == "null"',
        'print(f"{count} items && more")',
    )
