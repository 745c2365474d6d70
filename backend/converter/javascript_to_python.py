import re

from .brace_converter import (
    CATCH_RE, CLOSE_BRACE_RE, ELSE_IF_RE, ELSE_RE, FINALLY_RE, IF_RE, OPEN_BRACE_RE, RETURN_RE, TRY_RE,
    WHILE_RE, BraceToIndentConverter,
)
from .patterns import COUNTING_FOR_RE, outside_strings, split_args, template_to_fstring

CLASS_RE = re.compile(r'^(?:export\s+(?:default\s+)?)?class\s+(\w+)(?:\s+extends\s+([\w.]+))?\s*\{?$')
CONSTRUCTOR_RE = re.compile(r'^constructor\s*\((.*)\)\s*\{?$')
FUNCTION_RE = re.compile(r'^(?:export\s+(?:default\s+)?)?(?:async\s+)?function\s*\*?\s*(\w+)\s*\((.*)\)\s*\{?$')
ARROW_BLOCK_RE = re.compile(r'^(?:export\s+)?(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?\(([^)]*)\)\s*=>\s*\{$')
ARROW_EXPRESSION_RE = re.compile(
    r'^(?:export\s+)?(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?(?:\(([^)]*)\)|(\w+))\s*=>\s*([^{\s].*?)\s*;?$'
)
VARIABLE_RE = re.compile(r'^(?:export\s+)?(?:const|let|var)\s+(\w+)\s*(?:=\s*(.*?))?\s*;?$')
FOR_EACH_RE = re.compile(r'^for\s*\(\s*(?:const|let|var)?\s*(\w+)\s+(?:of|in)\s+(.+?)\s*\)\s*\{?$')
PRINT_RE = re.compile(r'^console\.(?:log|info|warn|error)\s*\((.*)\)\s*;?$')
METHOD_RE = re.compile(
    r'^(static\s+)?(?:async\s+)?(?!if\b|for\b|while\b|switch\b|catch\b|function\b|return\b)'
    r'(\w+)\s*\((.*)\)\s*\{?$'
)


def python_params(params: str) -> str:
    """Rest parameters become star-args; defaults are kept as written."""
    return ', '.join(re.sub(r'^\.\.\.', '*', param) for param in split_args(params))


class JavaScriptToPythonConverter(BraceToIndentConverter):
    templates = [
        ('class', CLASS_RE),
        ('constructor', CONSTRUCTOR_RE),
        ('function', FUNCTION_RE),
        ('arrow_function', ARROW_BLOCK_RE),
        ('lambda', ARROW_EXPRESSION_RE),
        ('variable', VARIABLE_RE),
        ('if', IF_RE),
        ('else_if', ELSE_IF_RE),
        ('else', ELSE_RE),
        ('for', COUNTING_FOR_RE),
        ('for_each', FOR_EACH_RE),
        ('while', WHILE_RE),
        ('print', PRINT_RE),
        ('return', RETURN_RE),
        ('try', TRY_RE),
        ('catch', CATCH_RE),
        ('finally', FINALLY_RE),
        ('open_brace', OPEN_BRACE_RE),
        ('close_brace', CLOSE_BRACE_RE),
        ('method', METHOD_RE),
    ]

    def python_calls(self, code: str) -> str:
        code = re.sub(r'([\w.]+)\.length\b', r'len(\1)', code)
        return code.replace('.push(', '.append(')

    def expression(self, text):
        text = super().expression(template_to_fstring(text))
        return outside_strings(text, self.python_calls)

    def visit_class(self, match):
        name, base = match.group(1), match.group(2)
        if base:
            return self.header(match, f'class {name}({base})', 'class')
        return self.header(match, f'class {name}', 'class')

    def visit_constructor(self, match):
        params = python_params(match.group(1))
        params = f'self, {params}' if params else 'self'
        return self.header(match, f'def __init__({params})')

    def visit_method(self, match):
        if not self.in_class_body():
            return self.generic_visit(match)
        static, name = match.group(1), match.group(2)
        params = python_params(match.group(3))
        if static:
            return ['@staticmethod', self.header(match, f'def {name}({params})')]
        params = f'self, {params}' if params else 'self'
        return self.header(match, f'def {name}({params})')

    def visit_function(self, match):
        return self.header(match, f'def {match.group(1)}({python_params(match.group(2))})')

    def visit_arrow_function(self, match):
        return self.header(match, f'def {match.group(1)}({python_params(match.group(2))})')

    def visit_lambda(self, match):
        params = python_params(match.group(2) or match.group(3) or '')
        body = self.expression(match.group(4))
        if params:
            return f'{match.group(1)} = lambda {params}: {body}'
        return f'{match.group(1)} = lambda: {body}'

    def visit_variable(self, match):
        name, value = match.group(1), match.group(2)
        if not value:
            return f'{name} = None'
        self.track_literal(value)
        return f'{name} = {self.expression(value)}'

    def visit_for_each(self, match):
        return self.header(match, f'for {match.group(1)} in {self.expression(match.group(2))}')

    def visit_print(self, match):
        return f'print({self.expression(match.group(1))})'
