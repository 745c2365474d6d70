import re
from typing import List

from .brace_converter import (
    CATCH_RE, CLOSE_BRACE_RE, ELSE_IF_RE, ELSE_RE, FINALLY_RE, IF_RE, OPEN_BRACE_RE, RETURN_RE, TRY_RE,
    WHILE_RE, BraceToIndentConverter,
)
from .patterns import COUNTING_FOR_RE, outside_strings, split_args

MODIFIERS = r'(?:(?:public|private|protected|static|final|abstract|synchronized|native|default|transient|volatile)\s+)*'
TYPE = r'[\w.]+(?:<[^()]*?>)?(?:\[\])*'

IMPORT_RE = re.compile(r'^(?:package|import)\s+(?:static\s+)?[\w.*]+\s*;$')
ANNOTATION_RE = re.compile(r'^@\w+(?:\(.*\))?$')
CLASS_RE = re.compile(
    r'^' + MODIFIERS + r'(?:class|interface|enum|record)\s+(\w+)(?:<[^>]*>)?'
    r'(?:\s+extends\s+([\w.]+)(?:<[^>]*>)?)?(?:\s+implements\s+[\w.<>,\s]+?)?\s*\{?$'
)
CONSTRUCTOR_RE = re.compile(r'^(?:(?:public|private|protected)\s+)?([A-Z]\w*)\s*\((.*)\)\s*(?:throws\s+[\w.,\s]+?)?\s*\{?$')
METHOD_RE = re.compile(
    r'^(' + MODIFIERS + r')(?:<[^>]+>\s+)?(?!return\b|new\b|else\b|throw\b)'
    + TYPE + r'\s+(\w+)\s*\((.*)\)\s*(?:throws\s+[\w.,\s]+?)?\s*\{?$'
)
VARIABLE_RE = re.compile(
    r'^' + MODIFIERS + r'(?!return\b|throw\b|new\b|else\b)' + TYPE + r'\s+(\w+)\s*(?:=\s*(.*?))?\s*;$'
)
FOR_EACH_RE = re.compile(r'^for\s*\(\s*(?:final\s+)?' + TYPE + r'\s+(\w+)\s*:\s*(.+?)\s*\)\s*\{?$')
PRINT_RE = re.compile(r'^System\.(?:out|err)\.(println|print|printf)\s*\((.*)\)\s*;?$')


class JavaToPythonConverter(BraceToIndentConverter):
    """Java to Python.

    Class bodies are tracked so that instance methods gain a `self` receiver
    and static ones are marked with `@staticmethod`.
    """

    templates = [
        ('import', IMPORT_RE),
        ('annotation', ANNOTATION_RE),
        ('class', CLASS_RE),
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
        if scope == 'class':
            self.class_names.pop()
        return scope

    def expression(self, text):
        text = re.sub(r'\bnew\s+(?:ArrayList|LinkedList)<[^>]*>\(\)', '[]', text)
        text = re.sub(r'\bnew\s+(?:HashMap|TreeMap|LinkedHashMap)<[^>]*>\(\)', '{}', text)
        text = re.sub(r'\((?:int|long|short|byte|float|double|char|String|Integer|Double)\)\s*', '', text)
        return outside_strings(super().expression(text), self.python_calls)

    def python_calls(self, code: str) -> str:
        code = re.sub(r'([\w.]+)\.(?:length|size)\(\)', r'len(\1)', code)
        code = re.sub(r'([\w.]+)\.length\b', r'len(\1)', code)
        code = re.sub(r'([\w.]+)\.equals\((.*?)\)', r'\1 == \2', code)
        return code.replace('.add(', '.append(')

    def params(self, params: str) -> List[str]:
        return [param.split()[-1].lstrip('.') for param in split_args(params) if param.split()]

    def visit_import(self, match):
        return None

    def visit_annotation(self, match):
        return None

    def visit_class(self, match):
        name, base = match.group(1), match.group(2)
        self.class_names.append(name)
        if base:
            return self.header(match, f'class {name}({base})', 'class')
        return self.header(match, f'class {name}', 'class')

    def visit_constructor(self, match):
        if not self.in_class_body() or match.group(1) != self.class_names[-1]:
            return self.generic_visit(match)
        params = ', '.join(['self'] + self.params(match.group(2)))
        return self.header(match, f'def __init__({params})')

    def visit_method(self, match):
        modifiers, name = match.group(1), match.group(2)
        params = self.params(match.group(3))
        if not self.in_class_body():
            return self.header(match, f'def {name}({", ".join(params)})')
        if 'static' in modifiers.split():
            return ['@staticmethod', self.header(match, f'def {name}({", ".join(params)})')]
        return self.header(match, f'def {name}({", ".join(["self"] + params)})')

    def visit_variable(self, match):
        name, value = match.group(1), match.group(2)
        if not value:
            return f'{name} = None'
        value = re.sub(r'^new\s+[\w.]+(?:\[\])+\s*(?=\{)', '', value)
        if value.startswith('{') and value.endswith('}'):
            value = '[' + value[1:-1] + ']'
        self.track_literal(value)
        return f'{name} = {self.expression(value)}'

    def visit_for_each(self, match):
        return self.header(match, f'for {match.group(1)} in {self.expression(match.group(2))}')

    def visit_print(self, match):
        method, args = match.group(1), self.expression(match.group(2))
        if method == 'println':
            return f'print({args})'
        if method == 'printf' and args:
            fmt, *values = split_args(args)
            if values:
                args = f'{fmt} % ({", ".join(values)},)'
        return f"print({args}, end='')" if args else "print(end='')"
