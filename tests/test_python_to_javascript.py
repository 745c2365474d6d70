"""Tests for Python to JavaScript and TypeScript conversion."""

from converter.python_to_javascript import PythonToJavaScriptConverter
from converter.python_to_typescript import PythonToTypeScriptConverter, typescript_type


def convert(source):
    return PythonToJavaScriptConverter().convert(source)


def test_function(lines):
    """Test def becomes function and dedent closes the brace"""
    source = lines(
        "def f(x):",
        "    return x + 1",
    )
    assert convert(source) == "function f(x) {\n  return x + 1;\n}"


def test_class(lines):
    """Test __init__ becomes constructor and self becomes this"""
    source = lines(
        "class Dog(Animal):",
        "    def __init__(self, name):",
        "        self.name = name",
        "    def speak(self):",
        '        print(f"{self.name} barks")',
    )
    assert convert(source) == lines(
        "class Dog extends Animal {",
        "  constructor(name) {",
        "    this.name = name;",
        "  }",
        "  speak() {",
        "    console.log(`${this.name} barks`);",
        "  }",
        "}",
    )


def test_if_elif_else(lines):
    """Test continuation headers merge with the closing brace"""
    source = lines(
        "if x > 0 and not done:",
        '    print("pos")',
        "elif x == 0:",
        '    print("zero")',
        "else:",
        '    print("neg")',
    )
    assert convert(source) == lines(
        "if (x > 0 && !done) {",
        '  console.log("pos");',
        "} else if (x === 0) {",
        '  console.log("zero");',
        "} else {",
        '  console.log("neg");',
        "}",
    )


def test_range_loops(lines):
    """Test range() with one and three arguments"""
    assert convert(lines("for i in range(5):", "    print(i)")) == lines(
        "for (let i = 0; i < 5; i++) {",
        "  console.log(i);",
        "}",
    )
    assert convert(lines("for i in range(10, 0, -2):", "    print(i)")) == lines(
        "for (let i = 10; i > 0; i -= 2) {",
        "  console.log(i);",
        "}",
    )


def test_first_binding_declared(lines):
    """Test only the first assignment to a name declares it"""
    assert convert(lines("x = 1", "x = 2")) == "let x = 1;\nx = 2;"


def test_comments_and_docstrings():
    """Test comment and docstring markers"""
    assert convert("# note") == "// note"
    assert convert('"""Doc."""') == "/* Doc. */"


def test_braces_balance(lines):
    """Test every opened brace is closed"""
    source = lines(
        "class A:",
        "    def f(self):",
        "        for i in range(3):",
        "            if i:",
        "                pass",
        "while True:",
        "    break",
    )
    output = convert(source)
    assert output.count("{") == output.count("}")


def test_typescript_annotations(lines):
    """Test annotations are mapped onto TypeScript types"""
    source = lines(
        "def add(a: int, b: int) -> int:",
        "    return a + b",
    )
    assert PythonToTypeScriptConverter().convert(source) == lines(
        "function add(a: number, b: number): number {",
        "  return a + b;",
        "}",
    )


def test_typescript_inferred_declarations(lines):
    """Test declarations are typed from literal initializers"""
    output = PythonToTypeScriptConverter().convert(lines("count = 0", 'name = "Bob"'))
    assert output == 'let count: number = 0;\nlet name: string = "Bob";'


def test_typescript_type():
    assert typescript_type("List[int]") == "number[]"
    assert typescript_type("Optional[str]") == "string | null"
    assert typescript_type("Dict[str, float]") == "Record<string, number>"
    assert typescript_type(None) == "any"


def test_string_literals_untouched(lines):
    """Test keywords inside strings are kept while f-string fields are converted"""
    source = lines(
        'print("rock and roll or not")',
        'print(f"{self.name} and {len(items)}")',
        'done = name == "not None"',
    )
    assert convert(source) == lines(
        'console.log("rock and roll or not");',
        "console.log(`${this.name} and ${items.length}`);",
        'let done = name === "not None";',
    )
