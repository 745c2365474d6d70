"""Shared text patterns and substitution helpers for the line converters."""

import re
from typing import Callable, List, Optional, Tuple

# A `{` opens a block when the text in front of it looks like a block header.
BLOCK_HEADER_RE = re.compile(
    r'(?:\)\s*(?:throws\s+[\w.]+(?:\s*,\s*[\w.]+)*)?|\belse|\btry|\bfinally|\bdo)\s*$'
    r'|^(?:export\s+)?(?:(?:public|private|protected|internal|abstract|final|static|sealed|partial)\s+)*'
    r'(?:class|interface|enum|namespace|struct)\b'
)

# for (int i = 0; i < n; i++) in any C-family language, PHP after sigil removal included
COUNTING_FOR_RE = re.compile(
    r'^for\s*\(\s*(?:[\w<>\[\]]+\s+)?(\w+)\s*=\s*([^;]+?)\s*;'
    r'\s*\1\s*(<=|<|>=|>)\s*([^;]+?)\s*;'
    r'\s*(?:\1\s*(\+\+|--|\+=\s*[^)]+?|-=\s*[^)]+?)|(\+\+|--)\s*\1)\s*\)\s*\{?$'
)

INTEGER_RE = re.compile(r'^-?\d+$')
SIMPLE_OPERAND_RE = re.compile(r'^[\w.]+$')
LITERAL_TOKEN_RE = re.compile(r'\x00(\d+)\x00')


def split_blocks(line: str) -> List[str]:
    """Break `head { body }` and `} else {` shapes into one piece per line.

    Braces inside string literals and object literals are left alone. A line
    that is already in canonical form comes back as a single piece.
    """
    pieces = []
    current = ''
    stack = []
    quote = None
    i = 0
    while i < len(line):
        ch = line[i]
        if quote:
            current += ch
            if ch == '\\' and i + 1 < len(line):
                current += line[i + 1]
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in '\'"`':
            quote = ch
            current += ch
        elif line.startswith('//', i):
            current += line[i:]
            break
        elif ch == '{':
            if BLOCK_HEADER_RE.search(current.strip()):
                pieces.append(current.strip() + ' {')
                current = ''
                stack.append('block')
            else:
                stack.append('literal')
                current += ch
        elif ch == '}':
            if stack and stack[-1] == 'literal':
                stack.pop()
                current += ch
            else:
                if stack:
                    stack.pop()
                if current.strip():
                    pieces.append(current.strip())
                # `});` and `},` stay glued to their brace
                tail = re.match(r'[);,]*', line[i + 1:]).group()
                pieces.append('}' + tail)
                current = ''
                i += 1 + len(tail)
                continue
        else:
            current += ch
        i += 1
    if current.strip():
        pieces.append(current.strip())
    return pieces


def split_args(text: str) -> List[str]:
    """Split a comma separated argument list, ignoring nested commas."""
    args = []
    depth = 0
    quote = None
    current = ''
    for ch in text:
        if quote:
            if ch == quote:
                quote = None
        elif ch in '\'"`':
            quote = ch
        elif ch in '([{':
            depth += 1
        elif ch in ')]}':
            depth -= 1
        elif ch == ',' and depth == 0:
            args.append(current.strip())
            current = ''
            continue
        current += ch
    if current.strip():
        args.append(current.strip())
    return args


def offset_bound(expr: str, delta: int) -> str:
    """Shift a loop bound by `delta`, folding integer literals."""
    expr = expr.strip()
    if INTEGER_RE.match(expr):
        return str(int(expr) + delta)
    if delta > 0:
        return f'{expr} + {delta}'
    return f'{expr} - {-delta}'


def negate(expr: str) -> str:
    expr = expr.strip()
    if expr.startswith('-'):
        return expr[1:].strip()
    if SIMPLE_OPERAND_RE.match(expr):
        return f'-{expr}'
    return f'-({expr})'


def parse_step(match: re.Match) -> Tuple[str, str]:
    """Return (direction, amount) for a COUNTING_FOR_RE match."""
    step = (match.group(5) or match.group(6)).replace(' ', '')
    if step == '++':
        return '+', '1'
    if step == '--':
        return '-', '1'
    return step[0], step[2:]


def range_arguments(match: re.Match) -> Optional[str]:
    """Rewrite a counting loop header into the argument list of range().

    Returns None when the comparison runs against the step direction, since
    no bounded range expresses that loop.
    """
    start, op, end = match.group(2), match.group(3), match.group(4)
    direction, amount = parse_step(match)
    if direction == '+':
        if op == '<':
            stop = end
        elif op == '<=':
            stop = offset_bound(end, 1)
        else:
            return None
        if amount == '1':
            return f'{start}, {stop}'
        return f'{start}, {stop}, {amount}'
    if op == '>':
        stop = end
    elif op == '>=':
        stop = offset_bound(end, -1)
    else:
        return None
    return f'{start}, {stop}, {negate(amount)}'


def counting_loop(var: str, range_args: List[str], decl: str = '') -> Optional[str]:
    """Render the parenthesised header of a C-style loop equivalent to range().

    `decl` is prefixed to the first mention of the variable (`let `, `int `).
    """
    if len(range_args) == 1:
        start, stop, step = '0', range_args[0], '1'
    elif len(range_args) == 2:
        start, stop, step = range_args[0], range_args[1], '1'
    elif len(range_args) == 3:
        start, stop, step = range_args
    else:
        return None
    step = step.replace(' ', '') if INTEGER_RE.match(step.replace(' ', '')) else step
    if step.startswith('-'):
        amount = step[1:].strip()
        update = f'{var}--' if amount == '1' else f'{var} -= {amount}'
        return f'({decl}{var} = {start}; {var} > {stop}; {update})'
    update = f'{var}++' if step == '1' else f'{var} += {step}'
    return f'({decl}{var} = {start}; {var} < {stop}; {update})'


def python_spelling(code: str) -> str:
    code = code.replace('===', '==').replace('!==', '!=')
    code = re.sub(r'\s*&&\s*', ' and ', code)
    code = re.sub(r'\s*\|\|\s*', ' or ', code)
    code = re.sub(r'!(?!=)\s*', 'not ', code)
    code = re.sub(r'\b(?:null|undefined)\b', 'None', code)
    code = re.sub(r'\btrue\b', 'True', code)
    code = re.sub(r'\bfalse\b', 'False', code)
    return re.sub(r'\bthis\.', 'self.', code)


def to_python_expression(text: str) -> str:
    """Apply C-family to Python operator and literal spellings outside string literals."""
    return outside_strings(text, python_spelling)


def from_python_expression(text: str, strict_equality: bool = False, receiver: str = 'this.') -> str:
    """Apply Python to C-family operator and literal spellings outside string literals."""
    return outside_strings(text, lambda code: c_spelling(code, strict_equality, receiver))


def c_spelling(text: str, strict_equality: bool, receiver: str) -> str:
    text = re.sub(r'\bis\s+not\s+None\b', '!= None', text)
    text = re.sub(r'\bis\s+None\b', '== None', text)
    if strict_equality:
        text = re.sub(r'(?<![=!<>])==(?!=)', '===', text)
        text = re.sub(r'!=(?!=)', '!==', text)
    text = re.sub(r'\bnot\s+', '!', text)
    text = re.sub(r'\band\b', '&&', text)
    text = re.sub(r'\bor\b', '||', text)
    text = re.sub(r'\bNone\b', 'null', text)
    text = re.sub(r'\bTrue\b', 'true', text)
    text = re.sub(r'\bFalse\b', 'false', text)
    text = re.sub(r'\bself\.', receiver, text)
    return text


def template_to_fstring(text: str) -> str:
    """Turn JavaScript template literals into f-strings."""
    return re.sub(
        r'`([^`]*)`',
        lambda m: 'f"' + re.sub(r'\$\{(.*?)\}', r'{\1}', m.group(1)) + '"',
        text,
    )


def fstring_to_template(text: str) -> str:
    """Turn f-strings into JavaScript template literals."""
    return re.sub(
        r'\bf(["\'])(.*?)\1',
        lambda m: '`' + re.sub(r'\{(.*?)\}', r'${\1}', m.group(2)) + '`',
        text,
    )


def infer_type(value: str, type_map: dict) -> Optional[str]:
    """Guess a static type name from a literal initializer."""
    value = value.strip()
    if INTEGER_RE.match(value):
        return type_map.get('int')
    if re.match(r'^-?\d+\.\d*$', value):
        return type_map.get('float')
    if re.match(r'^(["\']).*\1$', value):
        return type_map.get('str')
    if value in ('True', 'False', 'true', 'false'):
        return type_map.get('bool')
    if value.startswith('['):
        return type_map.get('list')
    if value.startswith('{'):
        return type_map.get('dict')
    return None


def fstring_to_concat(text: str, joiner: str = ' + ') -> str:
    """Turn f-strings into string concatenation for targets without interpolation."""
    def render(match):
        parts = re.split(r'\{(.*?)\}', match.group(2))
        pieces = []
        for i, part in enumerate(parts):
            if i % 2:
                pieces.append(part)
            elif part:
                pieces.append(f'"{part}"')
        return joiner.join(pieces) or '""'

    return re.sub(r'\bf(["\'])(.*?)\1', render, text)


def string_end(text: str, start: int) -> int:
    """Index of the quote closing the literal opened at `start`, or the last index."""
    quote = text[start]
    i = start + 1
    while i < len(text):
        if text[i] == '\\':
            i += 2
            continue
        if text[i] == quote:
            return i
        i += 1
    return len(text) - 1


def outside_strings(text: str, rewrite: Callable[[str], str]) -> str:
    """Apply `rewrite` to text with its string literals masked out.

    Literals are swapped for numbered placeholders while `rewrite` runs, so
    a pattern may still span code on both sides of a literal. The
    interpolated parts of template literals and f-strings are code and get
    rewritten on their own.
    """
    literals = []
    masked = ''
    i = 0
    while i < len(text):
        ch = text[i]
        if ch not in '\'"`':
            masked += ch
            i += 1
            continue
        end = string_end(text, i)
        literal = text[i:end + 1]
        if ch == '`':
            literal = re.sub(r'\$\{([^{}]*)\}',
                             lambda m: '${' + outside_strings(m.group(1), rewrite) + '}', literal)
        elif re.search(r'(?<!\w)[fF]$', masked):
            literal = re.sub(r'(?<!\{)\{([^{}]*)\}',
                             lambda m: '{' + outside_strings(m.group(1), rewrite) + '}', literal)
        masked += f'\x00{len(literals)}\x00'
        literals.append(literal)
        i = end + 1
    return LITERAL_TOKEN_RE.sub(lambda m: literals[int(m.group(1))], rewrite(masked))
