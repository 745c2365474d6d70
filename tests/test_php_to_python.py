"""Tests for PHP to Python conversion."""

from converter.php_to_python import PhpToPythonConverter


def test_script(lines):
    """Test open tags, sigils, interpolation, arrays and foreach"""
    source = lines(
        "<?php",
        "function greet($name) {",
        '    echo "Hello, $name";',
        "}",
        "$items = array(1, 2, 3);",
        "foreach ($items as $item) {",
        "    echo $item;",
        "}",
        "?>",
    )
    assert PhpToPythonConverter().convert(source) == lines(
        "def greet(name):",
        '    print(f"Hello, {name}")',
        "items = [1, 2, 3]",
        "for item in items:",
        "    print(item)",
    )


def test_hash_comment():
    """Test shell style comments"""
    assert PhpToPythonConverter().convert("# note") == "# note"
