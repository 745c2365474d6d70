import re
from typing import List

from .brace_converter import (
    CATCH_RE, CLOSE_BRACE_RE, ELSE_IF_RE, ELSE_RE, FINALLY_RE, IF_RE, OPEN_BRACE_RE, RETURN_RE, TRY_RE,
    WHILE_RE, BraceToBraceConverter,
)
from .javascript_to_python import (
    ARROW_BLOCK_RE, CLASS_RE, CONSTRUCTOR_RE, FOR_EACH_RE, FUNCTION_RE, METHOD_RE, PRINT_RE, VARIABLE_RE,
)
from .patterns import COUNTING_FOR_RE, fstring_to_concat, infer_type, split_args, template_to_fstring
from .python_to_java import LITERAL_TYPES, java_literal

MAIN_STUB = [
    '',
    'public static void main(String[] args) {',
    '    // Add your main method implementation here',
    '}',
]


def java_params(params: str) -> List[str]:
    result = []
    for param in split_args(params):
        name = param.partition('=')[0].strip()
        if name.startswith('...'):
            result.append(f'Object... {name[3:]}')
        else:
            result.append(f'Object {name}')
    return result


class JavaScriptToJavaConverter(BraceToBraceConverter):
    """JavaScript to Java.

    The program becomes the body of `public class Main`; functions turn into
    static methods and a `main` stub is added when the input has none.
    """

    base_depth = 1
    terminates = True
    loop_declaration = 'int '
    catch_type = 'Exception '
    templates = [
        ('class', CLASS_RE),
        ('constructor', CONSTRUCTOR_RE),
        ('function', FUNCTION_RE),
        ('function', ARROW_BLOCK_RE),
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

    def __init__(self):
        super().__init__()
        self.class_names: List[str] = []
        self.has_main = False

    def finish(self):
        if not self.has_content:
            return
        if not self.has_main:
            self.emit(MAIN_STUB, self.base_depth)
        self.output.insert(0, 'public class Main {')
        self.output.append('}')

    def close_block(self):
        scope = super().close_block()
        if scope == 'class':
            self.class_names.pop()
        return scope

    def expression(self, text):
        text = fstring_to_concat(template_to_fstring(text))
        text = re.sub(r"'([^'\"\\]*)'", r'"\1"', text)
        text = text.replace('===', '==').replace('!==', '!=')
        text = re.sub(r'\bundefined\b', 'null', text)
        return text.replace('.push(', '.add(')

    def visit_class(self, match):
        name, base = match.group(1), match.group(2)
        self.class_names.append(name)
        if base:
            return self.block(match, f'static class {name} extends {base}', 'class')
        return self.block(match, f'static class {name}', 'class')

    def visit_constructor(self, match):
        name = self.class_names[-1] if self.class_names else 'Main'
        return self.block(match, f'public {name}({", ".join(java_params(match.group(1)))})', 'function')

    def visit_function(self, match):
        name, params = match.group(1), ', '.join(java_params(match.group(2)))
        if name == 'main':
            self.has_main = True
            return self.block(match, 'public static void main(String[] args)', 'function')
        return self.block(match, f'public static Object {name}({params})', 'function')

    def visit_method(self, match):
        if not self.in_class_body():
            return self.generic_visit(match)
        static, name = match.group(1), match.group(2)
        prefix = 'public static' if static else 'public'
        return self.block(match, f'{prefix} Object {name}({", ".join(java_params(match.group(3)))})', 'function')

    def visit_variable(self, match):
        name, value = match.group(1), match.group(2)
        prefix = 'static ' if not self.scopes else ''
        if not value:
            return f'{prefix}Object {name};'
        value = self.expression(value)
        if self.track_literal(value):
            return f'{prefix}Object {name} = {value}'
        kind = infer_type(value, LITERAL_TYPES) or 'Object'
        return f'{prefix}{kind} {name} = {java_literal(value)};'

    def visit_for_each(self, match):
        return self.block(match, f'for (Object {match.group(1)} : {self.expression(match.group(2))})')

    def visit_print(self, match):
        separator = ' + " " + '
        args = [self.expression(arg) for arg in split_args(match.group(1))]
        return f'System.out.println({separator.join(args)});'
