"""Tests for pair dispatch, fallbacks and the language catalogue."""

import pytest

from converter import LANGUAGES, UnknownLanguageError, get_language, supported_pairs, translate
from converter.languages import comment_marker, is_known
from converter.registry import convert_code, fallback, is_supported


def test_supported_pairs():
    pairs = supported_pairs()
    assert len(pairs) == 13
    assert ("javascript", "python") in pairs
    assert ("typescript", "python") in pairs
    assert ("ruby", "rust") not in pairs


def test_fallback_uses_target_comment_marker():
    """Test unsupported pairs return the source under a comment"""
    assert convert_code("puts 1", "ruby", "rust") == (
        "// Conversion from ruby to rust is not supported yet\nputs 1"
    )
    assert convert_code("puts 1", "ruby", "python").startswith("# Conversion from ruby to python")
    assert fallback("x", "go", "haskell") == "-- Conversion from go to haskell is not supported yet\nx"


def test_same_language_falls_back():
    assert not is_supported("python", "python")
    assert convert_code("x = 1", "python", "python").endswith("\nx = 1")


@pytest.mark.parametrize("pair", supported_pairs())
def test_blank_lines_preserved(pair):
    """Test blank input stays blank for every registered pair"""
    source, target = pair
    assert convert_code("\n\n", source, target) == "\n\n"


def test_typescript_to_python_chain(lines):
    """Test TypeScript reaches Python through JavaScript"""
    source = lines(
        "function double(n: number): number {",
        "  return n * 2;",
        "}",
    )
    assert convert_code(source, "typescript", "python") == "def double(n):\n    return n * 2"


def test_translate_explanation():
    result = translate("console.log(1);", "javascript", "python")
    assert result["targetCode"] == "print(1)"
    explanation = result["explanation"]
    assert len(explanation["stepByStep"]) == 1
    step = explanation["stepByStep"][0]
    assert step["title"] == "Code Conversion"
    assert step["sourceCode"] == "console.log(1);"
    assert step["targetCode"] == "print(1)"
    assert step["explanation"] == "Converted javascript code to python using local conversion logic."
    assert explanation["highLevel"].startswith("Code was converted from javascript to python")
    assert "javascript and python" in explanation["languageDifferences"]


def test_translate_unsupported_pair():
    result = translate("fn main() {}", "rust", "go")
    assert result["targetCode"].startswith("// Conversion from rust to go is not supported yet")
    assert "returned unchanged" in result["explanation"]["stepByStep"][0]["explanation"]


def test_language_catalogue():
    assert len(LANGUAGES) == 18
    assert get_language("csharp").display_name == "C#"
    assert is_known("bash")
    assert not is_known("cobol")


def test_unknown_language():
    with pytest.raises(UnknownLanguageError) as excinfo:
        get_language("cobol")
    assert excinfo.value.tag == "cobol"
    assert excinfo.value.message == "Unknown language 'cobol'"


def test_comment_marker():
    assert comment_marker("ruby") == "#"
    assert comment_marker("haskell") == "--"
    assert comment_marker("java") == "//"
    assert comment_marker("cobol") == "//"


@pytest.mark.parametrize("source, target, expected", [
    ("javascript", "python", "foo()"),
    ("typescript", "python", "foo()"),
    ("java", "python", "foo()"),
    ("php", "python", "foo()"),
    ("typescript", "javascript", "foo();"),
    ("csharp", "javascript", "foo();"),
    ("javascript", "csharp", "foo();"),
    ("java", "javascript", "foo();"),
    ("javascript", "java", "    foo();"),
])
def test_unrecognised_statement_passes_through(source, target, expected):
    """Test a bare call statement survives every brace source converter"""
    assert expected in convert_code("foo();", source, target).split("\n")
