import re
from typing import List

from .brace_converter import (
    CATCH_RE, CLOSE_BRACE_RE, ELSE_IF_RE, ELSE_RE, FINALLY_RE, IF_RE, OPEN_BRACE_RE, RETURN_RE, TRY_RE,
    WHILE_RE, BraceToBraceConverter,
)
from .javascript_to_python import (
    ARROW_BLOCK_RE, ARROW_EXPRESSION_RE, CLASS_RE, CONSTRUCTOR_RE, FOR_EACH_RE, FUNCTION_RE, METHOD_RE, PRINT_RE,
    VARIABLE_RE,
)
from .patterns import COUNTING_FOR_RE, split_args

FOR_IN_RE = re.compile(r'^for\s*\(\s*(?:const|let|var)?\s*(\w+)\s+in\s+(.+?)\s*\)\s*\{?$')
TEMPLATE_RE = re.compile(r'`([^`]*)`')


def csharp_params(params: str) -> List[str]:
    result = []
    for param in split_args(params):
        if param.startswith('...'):
            result.append(f'params object[] {param[3:]}')
        else:
            result.append(f'object {param}')
    return result


def csharp_collection(value: str) -> str:
    """Rewrite a whole-value array or object literal as a C# collection."""
    if value == '[]':
        return 'new List<object>()'
    if value.startswith('[') and value.endswith(']'):
        return f'new List<object> {{ {value[1:-1].strip()} }}'
    if value == '{}':
        return 'new Dictionary<string, object>()'
    return value


class JavaScriptToCSharpConverter(BraceToBraceConverter):
    """JavaScript to C#, Allman style.

    Parameters, locals without an initializer and return values are typed
    `object`; initialized locals use `var`.
    """

    allman = True
    terminates = True
    loop_declaration = 'int '
    catch_type = 'Exception '
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
        ('for_in', FOR_IN_RE),
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

    def __init__(self):
        super().__init__()
        self.class_names: List[str] = []

    def close_block(self):
        scope = super().close_block()
        if scope == 'class':
            self.class_names.pop()
        return scope

    def expression(self, text):
        text = TEMPLATE_RE.sub(lambda m: '$"' + re.sub(r'\$\{(.*?)\}', r'{\1}', m.group(1)) + '"', text)
        text = text.replace('===', '==').replace('!==', '!=')
        text = re.sub(r'\bundefined\b', 'null', text)
        text = re.sub(r'\.length\b', '.Length', text)
        text = re.sub(r'\bMath\.([a-z])', lambda m: 'Math.' + m.group(1).upper(), text)
        text = re.sub(r'\bparseInt\(', 'int.Parse(', text)
        text = re.sub(r'\bparseFloat\(', 'double.Parse(', text)
        text = re.sub(r'\bsuper\.', 'base.', text)
        text = text.replace('.push(', '.Add(').replace('.includes(', '.Contains(')
        text = text.replace('.toString()', '.ToString()')
        return text.replace('.toUpperCase()', '.ToUpper()').replace('.toLowerCase()', '.ToLower()')

    def in_function(self) -> bool:
        return 'function' in self.scopes

    def signature(self, name: str, params: str) -> str:
        params = ', '.join(csharp_params(params))
        if self.in_function():
            return f'object {name}({params})'
        return f'public static object {name}({params})'

    def visit_class(self, match):
        name, base = match.group(1), match.group(2)
        self.class_names.append(name)
        if base:
            return self.block(match, f'public class {name} : {base}', 'class')
        return self.block(match, f'public class {name}', 'class')

    def visit_constructor(self, match):
        name = self.class_names[-1] if self.class_names else 'Main'
        return self.block(match, f'public {name}({", ".join(csharp_params(match.group(1)))})', 'function')

    def visit_function(self, match):
        return self.block(match, self.signature(match.group(1), match.group(2)), 'function')

    def visit_arrow_function(self, match):
        return self.visit_function(match)

    def visit_lambda(self, match):
        name, params, body = match.group(1), match.group(2) or match.group(3) or '', match.group(4)
        return f'{self.signature(name, params)} => {self.expression(body)};'

    def visit_method(self, match):
        if not self.in_class_body():
            return self.generic_visit(match)
        static, name = match.group(1), match.group(2)
        prefix = 'public static' if static else 'public'
        params = ', '.join(csharp_params(match.group(3)))
        return self.block(match, f'{prefix} object {name}({params})', 'function')

    def visit_variable(self, match):
        name, value = match.group(1), match.group(2)
        if not value:
            return f'object {name};'
        if value in ('null', 'undefined'):
            return f'object {name} = null;'
        if self.track_literal(value):
            return f'var {name} = {self.expression(value)}'
        return f'var {name} = {csharp_collection(self.expression(value))};'

    def visit_for_in(self, match):
        return self.block(match, f'foreach (var {match.group(1)} in {self.expression(match.group(2))}.Keys)')

    def visit_for_each(self, match):
        return self.block(match, f'foreach (var {match.group(1)} in {self.expression(match.group(2))})')

    def visit_print(self, match):
        separator = ' + " " + '
        args = [self.expression(arg) for arg in split_args(match.group(1))]
        return f'Console.WriteLine({separator.join(args)});'
