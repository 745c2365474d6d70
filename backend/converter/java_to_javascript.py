import re
from typing import List

from .brace_converter import (
    CATCH_RE, CLOSE_BRACE_RE, ELSE_IF_RE, ELSE_RE, FINALLY_RE, IF_RE, OPEN_BRACE_RE, RETURN_RE, TRY_RE,
    WHILE_RE, BraceToBraceConverter,
)
from .java_to_python import (
    ANNOTATION_RE, CLASS_RE, CONSTRUCTOR_RE, FOR_EACH_RE, IMPORT_RE, METHOD_RE, PRINT_RE, VARIABLE_RE,
)
from .patterns import COUNTING_FOR_RE, split_args

MAIN_RE = re.compile(r'^(?:public\s+)?static\s+void\s+main\s*\(\s*(?:final\s+)?String\b[^)]*\)\s*(?:throws\s+[\w.,\s]+?)?\s*\{?$')


class JavaToJavaScriptConverter(BraceToBraceConverter):
    """Java to JavaScript.

    The outermost class is only a wrapper: its braces and the `main`
    signature are dropped, its static methods become plain functions.
    Nested classes are kept as JavaScript classes.
    """

    indent_size = 2
    hidden_scopes = ('silent', 'skip', 'wrapper')
    templates = [
        ('import', IMPORT_RE),
        ('annotation', ANNOTATION_RE),
        ('class', CLASS_RE),
        ('main', MAIN_RE),
        ('constructor', CONSTRUCTOR_RE),
        ('method', METHOD_RE),
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
    ]

    def __init__(self):
        super().__init__()
        self.class_names: List[str] = []

    def close_block(self):
        scope = super().close_block()
        if scope in ('class', 'wrapper'):
            self.class_names.pop()
        return scope

    def in_wrapper(self) -> bool:
        return bool(self.scopes) and self.scopes[-1] == 'wrapper'

    def expression(self, text):
        text = re.sub(r'\bnew\s+(?:ArrayList|LinkedList)<[^>]*>\(\)', '[]', text)
        text = re.sub(r'\bnew\s+(?:HashMap|TreeMap|LinkedHashMap)<[^>]*>\(\)', '{}', text)
        text = re.sub(r'\((?:int|long|short|byte|float|double|char|String|Integer|Double)\)\s*', '', text)
        text = re.sub(r'\.(?:length|size)\(\)', '.length', text)
        text = re.sub(r'\.equals\((.*?)\)', r' === \1', text)
        text = re.sub(r'\bString\.valueOf\(', 'String(', text)
        text = re.sub(r'\bInteger\.parseInt\(', 'parseInt(', text)
        text = re.sub(r'\bDouble\.parseDouble\(', 'parseFloat(', text)
        return text.replace('.add(', '.push(')

    def params(self, params: str) -> str:
        names = []
        for param in split_args(params):
            words = param.split()
            if not words:
                continue
            name = words[-1]
            names.append(f'...{name}' if '...' in param else name)
        return ', '.join(names)

    def visit_import(self, match):
        return None

    def visit_annotation(self, match):
        return None

    def visit_class(self, match):
        name, base = match.group(1), match.group(2)
        self.class_names.append(name)
        if not any(scope in ('class', 'wrapper') for scope in self.scopes):
            self.open_block(match, 'wrapper')
            return None
        if base:
            return self.block(match, f'class {name} extends {base}', 'class')
        return self.block(match, f'class {name}', 'class')

    def visit_main(self, match):
        self.open_block(match, 'silent')
        return None

    def visit_constructor(self, match):
        if not self.class_names or match.group(1) != self.class_names[-1]:
            return self.generic_visit(match)
        params = self.params(match.group(2))
        if self.in_wrapper():
            return self.block(match, f'function {match.group(1)}({params})', 'function')
        return self.block(match, f'constructor({params})', 'function')

    def visit_method(self, match):
        modifiers, name = match.group(1).split(), match.group(2)
        params = self.params(match.group(3))
        if self.in_class_body():
            prefix = 'static ' if 'static' in modifiers else ''
            return self.block(match, f'{prefix}{name}({params})', 'function')
        return self.block(match, f'function {name}({params})', 'function')

    def visit_variable(self, match):
        name, value = match.group(1), match.group(2)
        modifiers = match.string.split()
        if self.in_class_body():
            prefix = 'static ' if 'static' in modifiers else ''
            return f'{prefix}{name} = {self.expression(value)};' if value else f'{prefix}{name};'
        keyword = 'const' if 'final' in modifiers else 'let'
        if not value:
            return f'{keyword} {name};'
        value = re.sub(r'^new\s+[\w.]+(?:\[\])+\s*(?=\{)', '', value)
        if value.startswith('{') and value.endswith('}'):
            value = '[' + value[1:-1] + ']'
        value = re.sub(r'^new\s+\w+\[(.+)\]$', r'new Array(\1).fill(0)', value)
        if self.track_literal(value):
            return f'{keyword} {name} = {self.expression(value)}'
        return f'{keyword} {name} = {self.expression(value)};'

    def visit_for_each(self, match):
        return self.block(match, f'for (const {match.group(1)} of {self.expression(match.group(2))})')

    def visit_print(self, match):
        return f'console.log({self.expression(match.group(2))});'
