import re
from typing import List

from .base_converter import BaseConverter

INTERFACE_RE = re.compile(r'^(?:export\s+)?(?:default\s+)?(?:declare\s+)?interface\s+\w+')
TYPE_ALIAS_RE = re.compile(r'^(?:export\s+)?(?:declare\s+)?type\s+\w+(?:<[^=]*>)?\s*=')
DECLARE_RE = re.compile(r'^(?:export\s+)?declare\s+')
IMPORT_TYPE_RE = re.compile(r'^(?:import|export)\s+type\b')
INDEX_SIGNATURE_RE = re.compile(r'^\[\s*\w+\s*:\s*\w+\s*\]\s*:.*;$')
ENUM_RE = re.compile(r'^(export\s+)?(?:declare\s+)?(?:const\s+)?enum\s+(\w+)\s*\{\s*(.*?)\s*(\}\s*;?)?$')
ENUM_MEMBER_RE = re.compile(r'^(\w+|["\'][^"\']*["\'])\s*(?:=\s*(.+?))?\s*,?$')

MODIFIER_RE = re.compile(r'\b(?:public|private|protected|readonly|abstract|override|declare)\s+(?=[\w#\[(*])')
IMPLEMENTS_RE = re.compile(r'\s+implements\s+[\w.<>,\s]+?(?=\s*\{|\s*$)')
GENERIC_PARAMS_RE = re.compile(r'(\b(?:function\s*\*?\s*|class\s+)?[\w$]+)<[\w\s,=.\[\]|\'"{}:?]*?>(?=\s*[({=]|\s+extends\b)')
AS_CAST_RE = re.compile(r'\s+as\s+(?:const\b|unknown\b|[\w.]+(?:<[^<>]*(?:<[^<>]*>)?[^<>]*>)?(?:\[\])*)')
NON_NULL_RE = re.compile(r'(?<=[\w)\]])!(?=[.\[);,\s]|$)')
OPTIONAL_CHAIN_RE = re.compile(r'[\w$]+(?:\??\.[\w$]+)+')
CATCH_ANNOTATION_RE = re.compile(r'\bcatch\s*\(\s*([\w$]+)\s*:\s*\w+\s*\)')
TEMPLATE_ONLY_RE = re.compile(r'`\$\{([^{}`]*)\}`')
VARIABLE_ANNOTATION_RE = re.compile(r'\b(?:const|let|var)\s+[\w$]+\s*(:)')
PROPERTY_RE = re.compile(r'^(?!default\b|case\b)((?:static\s+)?#?[\w$]+)[?!]?\s*:')
CONTROL_HEAD_RE = re.compile(r'\b(?:if|while|for|switch|catch)\s*$')
SIGNATURE_HEAD_RE = re.compile(
    r'^(?:(?:export\s+)?(?:default\s+)?(?:async\s+)?function\b.*|(?:static\s+)?(?:async\s+)?[\w$]+|constructor)\s*\($'
)


def type_end(text: str, start: int = 0, return_type: bool = False) -> int:
    """Index just past a type annotation beginning at `start`.

    A return type also ends at a top-level `{` or `=>`, where the body starts.
    """
    depth = 0
    i = start
    while i < len(text):
        if text.startswith('=>', i):
            if return_type and depth == 0:
                return i
            i += 2
            continue
        ch = text[i]
        if ch == '{' and depth == 0 and return_type:
            return i
        if ch in '(<[{':
            depth += 1
        elif ch in ')>]}':
            if depth == 0:
                return i
            depth -= 1
        elif depth == 0 and ch in '=,;':
            return i
        i += 1
    return i


def split_top_level(text: str) -> List[str]:
    """Split on commas outside brackets, generics and strings."""
    parts = []
    depth = 0
    quote = None
    current = ''
    i = 0
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = None
        elif text.startswith('=>', i):
            current += '=>'
            i += 2
            continue
        elif ch in '\'"`':
            quote = ch
        elif ch in '([{<':
            depth += 1
        elif ch in ')]}>':
            depth -= 1
        elif ch == ',' and depth == 0:
            parts.append(current)
            current = ''
            i += 1
            continue
        current += ch
        i += 1
    if current.strip():
        parts.append(current)
    return parts


def strip_param(param: str) -> str:
    """`a?: T = v` becomes `a = v`."""
    param = param.strip()
    depth = 0
    for i, ch in enumerate(param):
        if ch in '([{<':
            depth += 1
        elif ch in ')]}>':
            depth -= 1
        elif ch == '=' and depth == 0:
            return param
        elif ch == ':' and depth == 0:
            name = param[:i].rstrip().rstrip('?')
            rest = param[i + 1:]
            default = rest[type_end(rest):].strip()
            return f'{name} {default}' if default else name
    return param.rstrip('?')


def strip_params(params: str) -> str:
    return ', '.join(strip_param(param) for param in split_top_level(params))


def matching_paren(text: str, start: int) -> int:
    depth = 0
    quote = None
    for i in range(start, len(text)):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in '\'"`':
            quote = ch
        elif ch == '(':
            depth += 1
        elif ch == ')':
            depth -= 1
            if depth == 0:
                return i
    return -1


def strip_signatures(text: str) -> str:
    """Remove parameter and return annotations from every signature on a line."""
    position = text.find('(')
    while position >= 0:
        close = matching_paren(text, position)
        if close < 0:
            break
        after = text[close + 1:]
        rest = after.lstrip()
        returns = ''
        if rest.startswith(':'):
            end = type_end(rest, 1, return_type=True)
            returns, rest = rest[:end], rest[end:].lstrip()
        head = text[:position].rstrip()
        if rest.startswith(('{', '=>')) or (returns and not rest):
            if not CONTROL_HEAD_RE.search(head):
                params = strip_params(text[position + 1:close])
                text = f'{text[:position + 1]}{params}) {rest}'.rstrip()
        position = text.find('(', position + 1)
    return text


def expand_chain(match: re.Match) -> str:
    """`a?.b?.c` becomes `(a && a.b && a.b.c)`."""
    chain = match.group(0)
    if '?.' not in chain:
        return chain
    parts = chain.split('?.')
    guards = [parts[0]]
    for part in parts[1:]:
        guards.append(f'{guards[-1]}.{part}')
    return '(' + ' && '.join(guards) + ')'


class TypeScriptToJavaScriptConverter(BaseConverter):
    """TypeScript to JavaScript by deleting what only the type checker reads.

    Lines map one to one with their indentation kept; a line left empty by
    the deletions is dropped. Interface and type alias bodies spanning
    several lines are skipped until their braces balance.
    """

    templates = [
        ('skip', INTERFACE_RE),
        ('skip', TYPE_ALIAS_RE),
        ('skip', DECLARE_RE),
        ('skip', IMPORT_TYPE_RE),
        ('skip', INDEX_SIGNATURE_RE),
        ('enum', ENUM_RE),
    ]

    def __init__(self):
        super().__init__()
        self.skipping = 0
        self.enum_index = None
        self.in_params = False

    def visit_line(self, line):
        text = line.strip()
        if not text:
            self.output.append('')
            return
        self.has_content = True
        indent = line[:len(line) - len(line.lstrip())]
        if self.skipping:
            self.skipping += text.count('{') - text.count('}')
            return
        if self.in_comment or text.startswith('/*'):
            last_open, last_close = text.rfind('/*'), text.rfind('*/')
            if last_open > last_close:
                self.in_comment = True
            elif last_close >= 0:
                self.in_comment = False
            self.output.append(line.rstrip())
            return
        if text.startswith('//'):
            self.output.append(line.rstrip())
            return
        if self.enum_index is not None:
            code = self.visit_enum_member(text)
        else:
            kind, match = self.classify(text)
            code = self.visit(kind, match)
        if code:
            self.output.append(indent + code)

    def visit_skip(self, match):
        balance = match.string.count('{') - match.string.count('}')
        if balance > 0:
            self.skipping = balance
        return None

    def visit_enum(self, match):
        export, name, members, closed = match.group(1) or '', match.group(2), match.group(3), match.group(4)
        self.enum_index = 0
        entries = ', '.join(self.enum_entry(member) for member in split_top_level(members))
        if closed is None:
            return f'{export}const {name} = {{ {entries}'.rstrip()
        self.enum_index = None
        return f'{export}const {name} = {{ {entries} }};' if entries else f'{export}const {name} = {{}};'

    def enum_entry(self, member: str) -> str:
        match = ENUM_MEMBER_RE.match(member.strip())
        if not match:
            return member.strip()
        name, value = match.group(1), match.group(2)
        if value is None:
            value = str(self.enum_index)
        if re.match(r'^-?\d+$', value):
            self.enum_index = int(value) + 1
        return f'{name}: {value}'

    def visit_enum_member(self, text: str) -> str:
        if text.startswith('}'):
            self.enum_index = None
            return '};'
        trailing = ',' if text.endswith(',') else ''
        return self.enum_entry(text) + trailing

    def generic_visit(self, match):
        text = match.string
        abstract = re.search(r'\babstract\b', text) is not None
        text = MODIFIER_RE.sub('', text)
        text = IMPLEMENTS_RE.sub('', text)
        text = GENERIC_PARAMS_RE.sub(r'\1', text)
        if not re.match(r'^(?:import|export)\b', text):
            text = AS_CAST_RE.sub('', text)
        text = NON_NULL_RE.sub('', text)
        text = CATCH_ANNOTATION_RE.sub(r'catch (\1)', text)
        text = self.strip_annotations(text)
        if abstract and text.endswith(';') and '(' in text:
            return None
        return self.strip_operators(text)

    def strip_annotations(self, text: str) -> str:
        if self.in_params:
            if text.startswith(')'):
                self.in_params = False
                return strip_signatures('(' + text)[1:].lstrip()
            trailing = ',' if text.endswith(',') else ''
            return strip_param(text.rstrip(',')) + trailing
        if SIGNATURE_HEAD_RE.match(text) and not CONTROL_HEAD_RE.search(text[:-1]):
            self.in_params = True
            return text
        text = strip_signatures(text)
        for match in reversed(list(VARIABLE_ANNOTATION_RE.finditer(text))):
            colon = match.start(1)
            end = type_end(text, colon + 1)
            separator = ' ' if text[end:end + 1] == '=' else ''
            text = text[:colon].rstrip() + separator + text[end:].lstrip()
        declared = PROPERTY_RE.match(text)
        if declared and text.endswith(';') and '(' not in text[:declared.end()]:
            rest = text[declared.end():]
            value = rest[type_end(rest):].strip()
            text = f'{declared.group(1)} {value}' if value and value != ';' else f'{declared.group(1)};'
        return text

    def strip_operators(self, text: str) -> str:
        text = OPTIONAL_CHAIN_RE.sub(expand_chain, text)
        text = text.replace('??', '||')
        return TEMPLATE_ONLY_RE.sub(r'\1', text)
