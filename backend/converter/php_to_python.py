import re
from typing import List

from .brace_converter import (
    CATCH_RE, CLOSE_BRACE_RE, ELSE_IF_RE, ELSE_RE, FINALLY_RE, IF_RE, OPEN_BRACE_RE, RETURN_RE, TRY_RE,
    WHILE_RE, BraceToIndentConverter,
)
from .patterns import COUNTING_FOR_RE, split_args

MODIFIERS = r'((?:(?:public|private|protected|static|final|abstract)\s+)*)'

OPEN_TAG_RE = re.compile(r'^<\?(?:php)?\s*')
CLOSE_TAG_RE = re.compile(r'\s*\?>$')
NAMESPACE_RE = re.compile(r'^(?:namespace|use|require|require_once|include|include_once|declare)\b.*;$')
CLASS_RE = re.compile(
    r'^(?:(?:abstract|final)\s+)?(?:class|interface|trait)\s+(\w+)'
    r'(?:\s+extends\s+([\w\\]+))?(?:\s+implements\s+[\w\\,\s]+?)?\s*\{?$'
)
CONSTRUCTOR_RE = re.compile(r'^' + MODIFIERS + r'function\s+__construct\s*\((.*)\)\s*\{?$')
FUNCTION_RE = re.compile(r'^' + MODIFIERS + r'function\s+&?(\w+)\s*\((.*)\)\s*(?::\s*\??[\w\\]+\s*)?\{?$')
PROPERTY_RE = re.compile(r'^(?:(?:public|private|protected|var|static|readonly)\s+)+(?:\??[\w\\]+\s+)?(\w+)\s*(?:=\s*(.*?))?\s*;$')
CONST_RE = re.compile(r'^(?:(?:public|private|protected)\s+)?const\s+(\w+)\s*=\s*(.*?)\s*;$')
PHP_ELSE_IF_RE = re.compile(r'^elseif\s*\((.*)\)\s*\{?$')
FOREACH_RE = re.compile(r'^foreach\s*\(\s*(.+?)\s+as\s+(?:&?(\w+)\s*=>\s*)?&?(\w+)\s*\)\s*\{?$')
ECHO_RE = re.compile(r'^(?:echo|print)\b\s*(.*?)\s*;?$')
ARRAY_RE = re.compile(r'\barray\(([^()]*)\)')
INTERPOLATED_RE = re.compile(r'"([^"]*\$\w[^"]*)"')
SHORT_ARRAY_RE = re.compile(r'\[([^\[\]]*=>[^\[\]]*)\]')


def to_collection(items: str) -> str:
    """Render PHP array contents as a Python dict or list literal."""
    if '=>' in items:
        return '{' + re.sub(r'\s*=>\s*', ': ', items) + '}'
    return '[' + items + ']'


def unwrap(text: str) -> str:
    """Drop one pair of parentheses wrapping the whole text."""
    if not (text.startswith('(') and text.endswith(')')):
        return text
    depth = 0
    for i, ch in enumerate(text):
        depth += {'(': 1, ')': -1}.get(ch, 0)
        if depth == 0 and i < len(text) - 1:
            return text
    return text[1:-1]


class PhpToPythonConverter(BraceToIndentConverter):
    line_comments = ('//', '#')

    templates = [
        ('namespace', NAMESPACE_RE),
        ('class', CLASS_RE),
        ('constructor', CONSTRUCTOR_RE),
        ('function', FUNCTION_RE),
        ('const', CONST_RE),
        ('property', PROPERTY_RE),
        ('if', IF_RE),
        ('else_if', ELSE_IF_RE),
        ('else_if', PHP_ELSE_IF_RE),
        ('else', ELSE_RE),
        ('for', COUNTING_FOR_RE),
        ('foreach', FOREACH_RE),
        ('while', WHILE_RE),
        ('echo', ECHO_RE),
        ('return', RETURN_RE),
        ('try', TRY_RE),
        ('catch', CATCH_RE),
        ('finally', FINALLY_RE),
        ('open_brace', OPEN_BRACE_RE),
        ('close_brace', CLOSE_BRACE_RE),
    ]

    def visit_line(self, line):
        stripped = CLOSE_TAG_RE.sub('', OPEN_TAG_RE.sub('', line.strip()))
        if line.strip() and not stripped:
            return
        super().visit_line(stripped)

    def prepare(self, line):
        line = INTERPOLATED_RE.sub(
            lambda m: 'f"' + re.sub(r'\{?\$(\w+(?:->\w+)*)\}?', r'{\1}', m.group(1)) + '"', line
        )
        line = line.replace('$this->', 'this.')
        line = re.sub(r'\$(\w)', r'\1', line)
        line = line.replace('->', '.')
        return re.sub(r'\b(?:self|static|parent)::', 'self.', line).replace('::', '.')

    def expression(self, text):
        while ARRAY_RE.search(text):
            text = ARRAY_RE.sub(lambda m: to_collection(m.group(1)), text)
        text = SHORT_ARRAY_RE.sub(lambda m: to_collection(m.group(1)), text)
        text = re.sub(r'\s+\.\s+', ' + ', text)
        text = text.replace('.=', '+=')
        text = re.sub(r'\b(?:count|strlen|sizeof)\(', 'len(', text)
        text = re.sub(r'\bstrtoupper\(([^()]*)\)', r'\1.upper()', text)
        text = re.sub(r'\bstrtolower\(([^()]*)\)', r'\1.lower()', text)
        return super().expression(text)

    def params(self, params: str) -> List[str]:
        names = []
        for param in split_args(params):
            param = re.sub(r'^(?:(?:public|private|protected|readonly)\s+)*(?:\??[\w\\]+\s+)?&?(?:\.\.\.)?', '', param)
            names.append(self.expression(param))
        return names

    def visit_namespace(self, match):
        return None

    def visit_class(self, match):
        name, base = match.group(1), match.group(2)
        if base:
            return self.header(match, f'class {name}({base})', 'class')
        return self.header(match, f'class {name}', 'class')

    def visit_constructor(self, match):
        return self.header(match, f'def __init__({", ".join(["self"] + self.params(match.group(2)))})')

    def visit_function(self, match):
        modifiers, name = match.group(1), match.group(2)
        params = self.params(match.group(3))
        if not self.in_class_body():
            return self.header(match, f'def {name}({", ".join(params)})')
        if 'static' in modifiers.split():
            return ['@staticmethod', self.header(match, f'def {name}({", ".join(params)})')]
        return self.header(match, f'def {name}({", ".join(["self"] + params)})')

    def visit_const(self, match):
        return f'{match.group(1)} = {self.expression(match.group(2))}'

    def visit_property(self, match):
        name, value = match.group(1), match.group(2)
        if not value:
            return f'{name} = None'
        return f'{name} = {self.expression(value)}'

    def visit_foreach(self, match):
        items, key, value = self.expression(match.group(1)), match.group(2), match.group(3)
        if key:
            return self.header(match, f'for {key}, {value} in {items}.items()')
        return self.header(match, f'for {value} in {items}')

    def visit_echo(self, match):
        value = re.sub(r'\s*\.\s*(?:"\\n"|PHP_EOL)$', '', unwrap(match.group(1)))
        if value in ('"\\n"', 'PHP_EOL'):
            return 'print()'
        parts = split_args(value)
        return f'print({", ".join(self.expression(part) for part in parts)})'
