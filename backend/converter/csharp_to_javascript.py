import re
from typing import List

from .brace_converter import (
    CATCH_RE, CLOSE_BRACE_RE, ELSE_IF_RE, ELSE_RE, FINALLY_RE, IF_RE, OPEN_BRACE_RE, RETURN_RE, TRY_RE,
    WHILE_RE, BraceToBraceConverter,
)
from .patterns import COUNTING_FOR_RE, split_args

MODIFIERS = (
    r'(?:(?:public|private|protected|internal|static|virtual|override|abstract|sealed|async|'
    r'readonly|extern|new|partial|unsafe|const)\s+)*'
)
TYPE = r'[\w.]+(?:<[^()]*?>)?(?:\[,*\])*\??'
PARAMS = r'\(([^()]*(?:\([^()]*\)[^()]*)*)\)'
NOT_A_TYPE = r'(?!return\b|throw\b|new\b|else\b|await\b|yield\b|goto\b|using\b|case\b)'

USING_RE = re.compile(r'^(?:global\s+)?using\s+(?:static\s+)?[\w.]+(?:\s*=\s*[\w.<>]+)?\s*;$')
NAMESPACE_RE = re.compile(r'^namespace\s+[\w.]+\s*(;|\{?)$')
ATTRIBUTE_RE = re.compile(r'^\[\w[\w.]*(?:\(.*\))?\]$')
INTERFACE_RE = re.compile(r'^' + MODIFIERS + r'interface\s+\w+')
CLASS_RE = re.compile(
    r'^' + MODIFIERS + r'(?:class|struct|record)\s+(\w+)(?:<[^>]*>)?'
    r'(?:\s*:\s*([\w.<>,\s]+?))?(?:\s+where\s+.*?)?\s*\{?$'
)
CONSTRUCTOR_RE = re.compile(
    r'^(?:(?:public|private|protected|internal|static)\s+)*([A-Z]\w*)\s*' + PARAMS +
    r'(?:\s*:\s*(base|this)\s*\((.*)\))?\s*\{?$'
)
METHOD_RE = re.compile(
    r'^(' + MODIFIERS + r')' + NOT_A_TYPE + TYPE + r'\s+(\w+)(?:<[^>]*>)?\s*' + PARAMS +
    r'\s*(?:where\s+.*?)?\s*(?:=>\s*(.+?)\s*;|(;)|\{?)$'
)
PROPERTY_RE = re.compile(
    r'^(' + MODIFIERS + r')' + NOT_A_TYPE + TYPE + r'\s+(\w+)\s*\{\s*(?:get|set|init)\b[^{}]*\}'
    r'(?:\s*=\s*(.+?)\s*;)?$'
)
VARIABLE_RE = re.compile(
    r'^(' + MODIFIERS + r')' + NOT_A_TYPE + TYPE + r'\s+(\w+)\s*(?:=\s*(.*?))?\s*;$'
)
FOR_EACH_RE = re.compile(r'^foreach\s*\(\s*' + TYPE + r'\s+(\w+)\s+in\s+(.+?)\s*\)\s*\{?$')
PRINT_RE = re.compile(r'^Console\.(?:WriteLine|Write)\s*\((.*)\)\s*;$')
INTERPOLATED_RE = re.compile(r'\$@?"((?:[^"\\]|\\.)*)"')
COLLECTION_RE = re.compile(r'\bnew\s+(?:List|HashSet|Queue|Stack)<[^()]*?>\s*(?:\(\))?(?:\s*\{\s*(.*?)\s*\})?')
ARRAY_RE = re.compile(r'\bnew\s+(?:[\w.]+)?\[\]\s*\{\s*(.*?)\s*\}')
DICTIONARY_RE = re.compile(r'\bnew\s+Dictionary<[^()]*?>\s*\(\)')


def javascript_params(params: str) -> List[str]:
    """Drop types and passing modifiers; `params T[] xs` becomes a rest parameter."""
    names = []
    for param in split_args(params):
        head, _, default = param.partition('=')
        words = head.split()
        if not words:
            continue
        name = words[-1]
        if words[0] == 'params':
            names.append(f'...{name}')
        elif default:
            names.append(f'{name} = {default.strip()}')
        else:
            names.append(name)
    return names


class CSharpToJavaScriptConverter(BraceToBraceConverter):
    """C# to JavaScript.

    Namespaces are absorbed, interfaces are dropped and members of a class
    keep their place inside a JavaScript class body.
    """

    indent_size = 2
    templates = [
        ('using', USING_RE),
        ('namespace', NAMESPACE_RE),
        ('attribute', ATTRIBUTE_RE),
        ('interface', INTERFACE_RE),
        ('class', CLASS_RE),
        ('constructor', CONSTRUCTOR_RE),
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
        ('property', PROPERTY_RE),
        ('method', METHOD_RE),
        ('variable', VARIABLE_RE),
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
        text = INTERPOLATED_RE.sub(
            lambda m: '`' + re.sub(r'\{([^{}]*)\}', r'${\1}', m.group(1)) + '`', text
        )
        text = COLLECTION_RE.sub(lambda m: f'[{m.group(1) or ""}]', text)
        text = ARRAY_RE.sub(r'[\1]', text)
        text = DICTIONARY_RE.sub('{}', text)
        text = re.sub(r'\((?:int|long|short|byte|float|double|decimal|char|string|object)\)\s*', '', text)
        text = re.sub(r'\.(?:Length|Count)\b(?:\(\))?', '.length', text)
        text = re.sub(r'\bMath\.([A-Z])', lambda m: 'Math.' + m.group(1).lower(), text)
        text = re.sub(r'\b(?:int|long)\.Parse\(', 'parseInt(', text)
        text = re.sub(r'\b(?:double|float|decimal)\.Parse\(', 'parseFloat(', text)
        text = re.sub(r'\bbase\.', 'super.', text)
        text = text.replace('.Add(', '.push(').replace('.Contains(', '.includes(')
        text = text.replace('.ToString()', '.toString()')
        text = text.replace('.ToUpper()', '.toUpperCase()').replace('.ToLower()', '.toLowerCase()')
        return text

    def visit_using(self, match):
        return None

    def visit_namespace(self, match):
        if match.group(1) != ';':
            self.open_block(match, 'silent')
        return None

    def visit_attribute(self, match):
        return None

    def visit_interface(self, match):
        self.open_block(match, 'skip')
        return None

    def visit_class(self, match):
        name, bases = match.group(1), match.group(2)
        self.class_names.append(name)
        base = split_args(bases)[0] if bases else ''
        base = re.sub(r'<.*>$', '', base)
        # IName bases are interfaces
        if base and not re.match(r'^I[A-Z]', base):
            return self.block(match, f'class {name} extends {base}', 'class')
        return self.block(match, f'class {name}', 'class')

    def visit_constructor(self, match):
        name, params = match.group(1), ', '.join(javascript_params(match.group(2)))
        if not self.class_names or name != self.class_names[-1]:
            return self.generic_visit(match)
        header = self.block(match, f'constructor({params})', 'function')
        if match.group(3) == 'base':
            body = ' ' * self.indent_size
            return [header, f'{body}super({self.expression(match.group(4))});']
        return header

    def visit_method(self, match):
        modifiers, name = match.group(1).split(), match.group(2)
        params = ', '.join(javascript_params(match.group(3)))
        if match.group(5):
            return None
        if self.in_class_body():
            prefix = 'static ' if 'static' in modifiers else ''
            header = f'{prefix}{name}({params})'
        else:
            header = f'function {name}({params})'
        if match.group(4):
            return f'{header} {{ return {self.expression(match.group(4))}; }}'
        return self.block(match, header, 'function')

    def visit_property(self, match):
        modifiers, name, value = match.group(1).split(), match.group(2), match.group(3)
        prefix = 'static ' if 'static' in modifiers else ''
        if value:
            return f'{prefix}{name} = {self.expression(value)};'
        return f'{prefix}{name};'

    def visit_variable(self, match):
        modifiers, name, value = match.group(1).split(), match.group(2), match.group(3)
        if self.in_class_body():
            prefix = 'static ' if 'static' in modifiers or 'const' in modifiers else ''
            return f'{prefix}{name} = {self.expression(value)};' if value else f'{prefix}{name};'
        keyword = 'const' if 'const' in modifiers else 'let'
        if not value:
            return f'{keyword} {name};'
        if self.track_literal(value):
            return f'{keyword} {name} = {self.expression(value)}'
        return f'{keyword} {name} = {self.expression(value)};'

    def visit_for_each(self, match):
        return self.block(match, f'for (const {match.group(1)} of {self.expression(match.group(2))})')

    def visit_print(self, match):
        return f'console.log({self.expression(match.group(1))});'
