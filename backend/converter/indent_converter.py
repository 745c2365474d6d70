import re
from typing import Iterable, List, Optional, Set, Tuple

from .base_converter import BaseConverter, Code
from .patterns import counting_loop, from_python_expression, split_args

IMPORT_RE = re.compile(r'^(?:import\s+[\w.]+|from\s+[\w.]+\s+import\b).*$')
DECORATOR_RE = re.compile(r'^@([\w.]+)(?:\(.*\))?$')
CLASS_RE = re.compile(r'^class\s+(\w+)\s*(?:\(([^)]*)\))?\s*:$')
DEF_RE = re.compile(r'^(?:async\s+)?def\s+(\w+)\s*\((.*)\)\s*(?:->\s*(.+?))?\s*:$')
MAIN_GUARD_RE = re.compile(r'^if\s+__name__\s*==\s*[\'"]__main__[\'"]\s*:$')
IF_RE = re.compile(r'^if\s+(.+?)\s*:$')
ELIF_RE = re.compile(r'^elif\s+(.+?)\s*:$')
ELSE_RE = re.compile(r'^else\s*:$')
RANGE_FOR_RE = re.compile(r'^for\s+(\w+)\s+in\s+range\((.*)\)\s*:$')
FOR_RE = re.compile(r'^for\s+(.+?)\s+in\s+(.+?)\s*:$')
WHILE_RE = re.compile(r'^while\s+(.+?)\s*:$')
PRINT_RE = re.compile(r'^print\((.*)\)$')
ASSIGN_RE = re.compile(r'^([A-Za-z_][\w.]*(?:\[[^\]]*\])?)\s*(?::\s*([^=]+?))?\s*=(?!=)\s*(.+)$')
RETURN_RE = re.compile(r'^return\b\s*(.*)$')
TRY_RE = re.compile(r'^try\s*:$')
EXCEPT_RE = re.compile(r'^except\b\s*(?:([\w.]+|\([^)]*\))(?:\s+as\s+(\w+))?)?\s*:$')
FINALLY_RE = re.compile(r'^finally\s*:$')
PASS_RE = re.compile(r'^pass$')
RAISE_RE = re.compile(r'^raise\b\s*(.*)$')
PRINT_OPTION_RE = re.compile(r'^(?:sep|end|file|flush)\s*=')


def split_comment(line: str) -> Tuple[str, Optional[str]]:
    """Split a trailing `#` comment off a line of Python."""
    quote = None
    for i, ch in enumerate(line):
        if quote:
            if ch == quote:
                quote = None
        elif ch in '\'"':
            quote = ch
        elif ch == '#':
            return line[:i].rstrip(), line[i + 1:].strip()
    return line, None


def bracket_balance(line: str) -> int:
    """Net count of brackets a line leaves open, string contents ignored."""
    balance = 0
    quote = None
    for ch in line:
        if quote:
            if ch == quote:
                quote = None
        elif ch in '\'"':
            quote = ch
        elif ch in '([{':
            balance += 1
        elif ch in ')]}':
            balance -= 1
    return balance


class IndentConverter(BaseConverter):
    """Scan for Python sources, where indentation alone marks blocks.

    `indent_stack` holds the column widths of the open blocks, starting from
    a zero sentinel; `scopes` and `names` run parallel to it with the kind of
    each block and the names first bound inside it. Silent scopes (the body
    of a main guard) keep their contents but get no braces or indentation.
    """

    indent_size = 2
    line_comment = '//'
    block_comment = ('/*', '*/')
    closing = '}'
    strict_equality = False
    receiver = 'this.'
    loop_declaration = 'let '
    continuations = ('elif', 'else', 'except', 'finally')

    templates = [
        ('import', IMPORT_RE),
        ('decorator', DECORATOR_RE),
        ('class', CLASS_RE),
        ('function', DEF_RE),
        ('main_guard', MAIN_GUARD_RE),
        ('if', IF_RE),
        ('elif', ELIF_RE),
        ('else', ELSE_RE),
        ('range_for', RANGE_FOR_RE),
        ('for', FOR_RE),
        ('while', WHILE_RE),
        ('print', PRINT_RE),
        ('assignment', ASSIGN_RE),
        ('return', RETURN_RE),
        ('try', TRY_RE),
        ('except', EXCEPT_RE),
        ('finally', FINALLY_RE),
        ('pass', PASS_RE),
        ('raise', RAISE_RE),
    ]

    def __init__(self):
        super().__init__()
        self.indent_stack: List[int] = [0]
        self.scopes: List[str] = ['module']
        self.names: List[Set[str]] = [set()]
        self.pending_scope: Optional[str] = None
        self.pending_names: Set[str] = set()
        self.decorators: List[str] = []
        self.comment_delimiter: Optional[str] = None
        self.brackets = 0
        self.closed = 0

    @property
    def depth(self) -> int:
        return sum(1 for scope in self.scopes[1:] if scope != 'silent')

    def in_class_body(self) -> bool:
        return self.scopes[-1] == 'class'

    def declare(self, name: str) -> bool:
        """Record a binding; True when the name is new to every enclosing scope."""
        if '.' in name or '[' in name or any(name in names for names in self.names):
            return False
        self.names[-1].add(name)
        return True

    def open(self, kind: str = 'block', names: Iterable[str] = ()) -> None:
        """Mark the current line as a header whose indented body follows."""
        self.pending_scope = kind
        self.pending_names = set(names)

    def push(self, width: int) -> None:
        self.indent_stack.append(width)
        self.scopes.append(self.pending_scope or 'block')
        self.names.append(self.pending_names)
        self.pending_scope = None
        self.pending_names = set()

    def pop(self) -> None:
        self.indent_stack.pop()
        scope = self.scopes.pop()
        self.names.pop()
        if scope != 'silent':
            self.emit(self.closing, self.depth)
            self.closed += 1

    def close_empty_block(self) -> None:
        if self.pending_scope and self.pending_scope != 'silent':
            self.emit(self.closing, self.depth)
            self.closed += 1
        self.pending_scope = None
        self.pending_names = set()

    def visit_line(self, line: str) -> None:
        if not line.strip():
            self.output.append('')
            return
        self.has_content = True
        text = line.strip()
        if self.in_comment:
            self.emit(self.visit_docstring(text), self.depth)
            return
        if self.brackets > 0:
            self.visit_continuation(text)
            return
        if text.startswith('#'):
            self.emit(f'{self.line_comment} {text[1:].strip()}'.rstrip(), self.depth)
            return
        expanded = line.expandtabs(4)
        width = len(expanded) - len(expanded.lstrip())
        self.closed = 0
        if self.pending_scope:
            if width > self.indent_stack[-1]:
                self.push(width)
            else:
                self.close_empty_block()
        while len(self.indent_stack) > 1 and self.indent_stack[-1] > width:
            self.pop()
        if text.startswith(('"""', "'''")):
            self.emit(self.visit_docstring(text), self.depth)
            return
        text, comment = split_comment(text)
        self.brackets = max(bracket_balance(text), 0)
        kind, match = self.classify(text)
        code = self.visit(kind, match)
        if kind in self.continuations and isinstance(code, str):
            code = self.merge_continuation(code)
        if comment:
            note = f'{self.line_comment} {comment}'
            code = note if code is None else self.annotate(code, note)
        self.emit(code, self.depth)

    def annotate(self, code: Code, note: str) -> Code:
        if isinstance(code, list):
            return code[:-1] + [f'{code[-1]}  {note}']
        return f'{code}  {note}'

    def merge_continuation(self, code: str) -> str:
        """Fold the brace closed by this line's dedent into `} else {`."""
        if self.closed and self.output and self.output[-1].strip() == self.closing:
            self.output.pop()
            return code
        return code[len(self.closing):].lstrip() if code.startswith(self.closing) else code

    def visit_continuation(self, text: str) -> None:
        """Lines inside brackets left open by the previous line."""
        self.brackets = max(self.brackets + bracket_balance(text), 0)
        code = self.expression(text)
        if self.brackets == 0:
            code = self.terminate(code)
        depth = self.depth if text[0] in ')]}' else self.depth + 1
        self.emit(code, depth)

    def visit_docstring(self, text: str) -> str:
        opener, closer = self.block_comment
        if self.in_comment:
            if self.comment_delimiter in text:
                self.in_comment = False
                if text == self.comment_delimiter:
                    return closer
                return text.replace(self.comment_delimiter, ' ' + closer)
            return text
        delimiter = text[:3]
        if text.count(delimiter) >= 2:
            head, _, tail = text[3:].rpartition(delimiter)
            return f'{opener} {head.strip()} {closer}{tail}'
        self.in_comment = True
        self.comment_delimiter = delimiter
        return f'{opener} {text[3:].strip()}'.rstrip()

    def finish(self) -> None:
        if self.pending_scope:
            self.close_empty_block()
        while len(self.indent_stack) > 1:
            self.pop()

    def expression(self, text: str) -> str:
        return from_python_expression(text, self.strict_equality, self.receiver)

    def terminate(self, code: str) -> str:
        if self.brackets > 0 or code.endswith((';', '{')):
            return code
        return code + ';'

    def condition(self, text: str) -> str:
        text = self.expression(text)
        if text.startswith('(') and text.endswith(')'):
            return text
        return f'({text})'

    def visit_import(self, match):
        return f'{self.line_comment} {match.string}'

    def visit_decorator(self, match):
        if match.group(1) in ('staticmethod', 'classmethod'):
            self.decorators.append(match.group(1))
            return None
        return f'{self.line_comment} {match.string}'

    def visit_main_guard(self, match):
        self.open('silent')
        return None

    def visit_if(self, match):
        self.open()
        return f'if {self.condition(match.group(1))} {{'

    def visit_elif(self, match):
        self.open()
        return f'{self.closing} else if {self.condition(match.group(1))} {{'

    def visit_else(self, match):
        self.open()
        return f'{self.closing} else {{'

    def visit_range_for(self, match):
        name = match.group(1)
        loop = counting_loop(name, split_args(self.expression(match.group(2))), self.loop_declaration)
        if loop is None:
            return self.generic_visit(match)
        self.open(names=[name])
        return f'for {loop} {{'

    def visit_while(self, match):
        self.open()
        return f'while {self.condition(match.group(1))} {{'

    def visit_return(self, match):
        if not match.group(1):
            return 'return;'
        return self.terminate(f'return {self.expression(match.group(1))}')

    def visit_try(self, match):
        self.open()
        return 'try {'

    def visit_except(self, match):
        self.open(names=[match.group(2) or 'e'])
        return f'{self.closing} catch ({match.group(2) or "e"}) {{'

    def visit_finally(self, match):
        self.open()
        return f'{self.closing} finally {{'

    def visit_pass(self, match):
        return None

    def visit_raise(self, match):
        if not match.group(1):
            return 'throw e;'
        error = re.sub(r'^(?:Exception|ValueError|TypeError|RuntimeError|KeyError|IndexError)\(', 'Error(',
                       match.group(1))
        return self.terminate(f'throw new {self.expression(error)}')

    def print_args(self, text: str) -> List[str]:
        """Arguments of a print() call, keyword options dropped."""
        return [self.expression(arg) for arg in split_args(text) if not PRINT_OPTION_RE.match(arg)]

    def param_names(self, text: str) -> List[str]:
        """Bare parameter names of a def, without annotations, defaults or stars."""
        names = []
        for param in split_args(text):
            name = re.split(r'[:=]', param, 1)[0].strip().lstrip('*')
            if name and name not in ('self', 'cls'):
                names.append(name)
        return names

    def take_decorators(self) -> List[str]:
        decorators, self.decorators = self.decorators, []
        return decorators

    def generic_visit(self, match):
        line = self.expression(match.string)
        if line.endswith(':') and self.brackets == 0:
            self.open()
            return line[:-1].rstrip() + ' {'
        return self.terminate(line)
