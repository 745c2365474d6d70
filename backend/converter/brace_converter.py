import re
from typing import List, Optional

from .base_converter import BaseConverter, Code
from .patterns import (
    BLOCK_HEADER_RE, COUNTING_FOR_RE, outside_strings, range_arguments, split_blocks, to_python_expression,
)

IF_RE = re.compile(r'^if\s*\((.*)\)\s*\{?$')
ELSE_IF_RE = re.compile(r'^else\s+if\s*\((.*)\)\s*\{?$')
ELSE_RE = re.compile(r'^else\s*\{?$')
WHILE_RE = re.compile(r'^while\s*\((.*)\)\s*\{?$')
RETURN_RE = re.compile(r'^return\b\s*(.*?)\s*;?$')
TRY_RE = re.compile(r'^try\s*\{?$')
CATCH_RE = re.compile(r'^catch\s*(?:\(\s*(?:([\w.|\s]+?)\s+)?(\w+)\s*\))?\s*\{?$')
FINALLY_RE = re.compile(r'^finally\s*\{?$')
OPEN_BRACE_RE = re.compile(r'^\{$')
CLOSE_BRACE_RE = re.compile(r'^\}[);,\s]*$')
LITERAL_CLOSE_RE = re.compile(r'^[}\])][)\];,]*$')
INCREMENT_RE = re.compile(r'^(?:([\w.\[\]]+)\s*(\+\+|--)|(\+\+|--)\s*([\w.\[\]]+));?$')


class BraceConverter(BaseConverter):
    """Scan for sources that delimit blocks with braces.

    Nesting is tracked on `self.scopes`, one entry per open brace. Entries are
    'block', 'class', 'function', 'literal', 'silent' or 'skip'. Silent scopes
    (namespaces, dropped wrappers) do not add indentation and their closing
    brace is not emitted. Everything inside a skip scope is dropped.
    """

    line_comments = ('//',)
    line_comment = '#'
    block_comment: Optional[tuple] = ('"""', '"""')
    closes_blocks = False
    base_depth = 0
    hidden_scopes = ('silent', 'skip')

    def __init__(self):
        super().__init__()
        self.scopes: List[str] = []
        self.awaiting_brace = False

    @property
    def depth(self) -> int:
        return self.base_depth + sum(1 for scope in self.scopes if scope not in self.hidden_scopes)

    def in_class_body(self) -> bool:
        return bool(self.scopes) and self.scopes[-1] == 'class'

    def in_literal(self) -> bool:
        return bool(self.scopes) and self.scopes[-1] == 'literal'

    def visit_line(self, line: str) -> None:
        line = line.strip()
        if not line:
            self.output.append('')
            return
        self.has_content = True
        if self.in_comment or '/*' in line:
            self.emit(self.visit_block_comment(line), self.depth)
            return
        for marker in self.line_comments:
            if line.startswith(marker):
                text = line[len(marker):].strip()
                self.emit(f'{self.line_comment} {text}'.rstrip(), self.depth)
                return
        for piece in split_blocks(line):
            piece = self.prepare(piece)
            if piece:
                self.handle_statement(piece)

    def visit_block_comment(self, line: str) -> str:
        last_open, last_close = line.rfind('/*'), line.rfind('*/')
        if last_open > last_close:
            self.in_comment = True
        elif last_close >= 0:
            self.in_comment = False
        if self.block_comment:
            line = re.sub(r'/\*+', self.block_comment[0], line)
            line = re.sub(r'\*+/', self.block_comment[1], line)
        return line

    def prepare(self, line: str) -> str:
        """Hook applied to each split piece before classification."""
        return line

    def handle_statement(self, line: str) -> None:
        if 'skip' in self.scopes:
            self.skip_statement(line)
            return
        kind, match = self.classify(line)
        if kind != 'open_brace':
            self.awaiting_brace = False
        before = self.depth
        code = self.visit(kind, match)
        self.emit(code, min(before, self.depth))

    def skip_statement(self, line: str) -> None:
        if line == '{' and self.awaiting_brace:
            self.awaiting_brace = False
        elif line.endswith('{'):
            self.scopes.append('skip')
        elif CLOSE_BRACE_RE.match(line):
            self.scopes.pop()

    def open_block(self, match: re.Match, kind: str = 'block') -> None:
        self.scopes.append(kind)
        self.awaiting_brace = not match.string.rstrip().endswith('{')

    def close_block(self) -> Optional[str]:
        if not self.scopes:
            return None
        return self.scopes.pop()

    def visit_open_brace(self, match: re.Match) -> Code:
        if self.awaiting_brace:
            self.awaiting_brace = False
            return None
        self.scopes.append('block')
        return '{' if self.closes_blocks else None

    def visit_close_brace(self, match: re.Match) -> Code:
        scope = self.close_block()
        if not self.closes_blocks or scope in self.hidden_scopes:
            return None
        return match.string

    def generic_visit(self, match: re.Match) -> Code:
        line = match.string
        if line.endswith('{'):
            self.open_block(match)
        return line


class BraceToIndentConverter(BraceConverter):
    """Brace source to Python: headers end in a colon, braces disappear."""

    templates = [
        ('if', IF_RE),
        ('else_if', ELSE_IF_RE),
        ('else', ELSE_RE),
        ('for', COUNTING_FOR_RE),
        ('while', WHILE_RE),
        ('return', RETURN_RE),
        ('try', TRY_RE),
        ('catch', CATCH_RE),
        ('finally', FINALLY_RE),
        ('open_brace', OPEN_BRACE_RE),
        ('close_brace', CLOSE_BRACE_RE),
    ]

    def expression(self, text: str) -> str:
        """Rewrite operators and literals of an expression for Python."""
        text = outside_strings(text, lambda code: re.sub(r'\bnew\s+', '', code))
        return to_python_expression(text)

    def header(self, match: re.Match, text: str, kind: str = 'block') -> str:
        self.open_block(match, kind)
        return text + ':'

    def visit_if(self, match):
        return self.header(match, f'if {self.expression(match.group(1))}')

    def visit_else_if(self, match):
        return self.header(match, f'elif {self.expression(match.group(1))}')

    def visit_else(self, match):
        return self.header(match, 'else')

    def visit_for(self, match):
        args = range_arguments(match)
        if args is None:
            return self.generic_visit(match)
        return self.header(match, f'for {match.group(1)} in range({args})')

    def visit_while(self, match):
        return self.header(match, f'while {self.expression(match.group(1))}')

    def visit_return(self, match):
        value = match.group(1).rstrip(';').strip()
        if not value:
            return 'return'
        return f'return {self.expression(value)}'

    def visit_try(self, match):
        return self.header(match, 'try')

    def visit_catch(self, match):
        if match.group(2):
            return self.header(match, f'except Exception as {match.group(2)}')
        return self.header(match, 'except Exception')

    def visit_finally(self, match):
        return self.header(match, 'finally')

    def opens_literal(self, text: str) -> bool:
        """True when text ends inside an unfinished array, call or object literal."""
        if text.endswith(('[', '(')):
            return True
        return text.endswith('{') and not BLOCK_HEADER_RE.search(text[:-1].strip())

    def track_literal(self, text: str) -> None:
        if self.opens_literal(text):
            self.scopes.append('literal')

    def visit_close_brace(self, match):
        if self.in_literal():
            self.close_block()
            return match.string.rstrip(';')
        return super().visit_close_brace(match)

    def generic_visit(self, match):
        line = match.string
        if self.in_literal():
            if LITERAL_CLOSE_RE.match(line):
                self.close_block()
                return line.rstrip(';')
            line = re.sub(r'^(\w+)\s*:\s*', r"'\1': ", line)
        if self.opens_literal(line):
            self.scopes.append('literal')
            return self.expression(line)
        if line.endswith('{'):
            return self.header(match, self.expression(line[:-1].rstrip()))
        line = line.rstrip(';').rstrip()
        step = INCREMENT_RE.match(line)
        if step:
            target = step.group(1) or step.group(4)
            operator = (step.group(2) or step.group(3))[0]
            return f'{target} {operator}= 1'
        return self.expression(line)


class BraceToBraceConverter(BraceConverter):
    """Brace source to brace target: headers are rewritten, braces re-emitted.

    With `allman` set every opening brace goes on its own line. Otherwise a
    closing brace followed by `else`, `catch` or `finally` is merged back
    onto one line.
    """

    line_comment = '//'
    block_comment = None
    closes_blocks = True
    allman = False
    terminates = False
    loop_declaration = 'let '
    catch_type = ''

    def expression(self, text: str) -> str:
        return text

    def block(self, match: re.Match, text: str, kind: str = 'block') -> Code:
        self.open_block(match, kind)
        if self.allman:
            return [text, '{']
        return text + ' {'

    def continue_block(self, match: re.Match, text: str) -> Code:
        if not self.allman and self.output and self.output[-1].strip() == '}':
            self.output.pop()
            text = '} ' + text
        return self.block(match, text)

    def terminate(self, text: str) -> str:
        if not self.terminates or self.in_literal() or text.endswith((';', '{', '}', '(', '[', ',', ':')):
            return text
        return text + ';'

    def track_literal(self, text: str) -> bool:
        """Open a literal scope when text stops inside an object or array literal."""
        if text.endswith(('{', '[', '(')):
            self.scopes.append('literal')
            return True
        return False

    def visit_if(self, match):
        return self.block(match, f'if ({self.expression(match.group(1))})')

    def visit_else_if(self, match):
        return self.continue_block(match, f'else if ({self.expression(match.group(1))})')

    def visit_else(self, match):
        return self.continue_block(match, 'else')

    def visit_for(self, match):
        header = match.string.rstrip('{').rstrip()
        header = re.sub(r'^for\s*\(\s*(?:[\w<>\[\]]+\s+(?=\w+\s*=))?', f'for ({self.loop_declaration}', header)
        return self.block(match, self.expression(header))

    def visit_while(self, match):
        return self.block(match, f'while ({self.expression(match.group(1))})')

    def visit_return(self, match):
        value = match.group(1).rstrip(';').strip()
        if not value:
            return 'return;'
        if self.track_literal(value):
            return f'return {self.expression(value)}'
        return f'return {self.expression(value)};'

    def visit_try(self, match):
        return self.block(match, 'try')

    def visit_catch(self, match):
        name = match.group(2) or 'e'
        return self.continue_block(match, f'catch ({self.catch_type}{name})')

    def visit_finally(self, match):
        return self.continue_block(match, 'finally')

    def generic_visit(self, match):
        line = match.string
        if self.in_literal() and LITERAL_CLOSE_RE.match(line):
            self.close_block()
            return line
        if line.endswith('{'):
            head = line[:-1].rstrip()
            if BLOCK_HEADER_RE.search(head) or re.match(r'^(?:switch|do)\b', head):
                return self.block(match, self.expression(head))
            self.scopes.append('literal')
            return self.expression(line)
        if self.track_literal(line):
            return self.expression(line)
        return self.terminate(self.expression(line))
