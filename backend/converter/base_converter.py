import re
from typing import List, Pattern, Tuple, Union

Code = Union[str, List[str], None]

LINE_RE = re.compile(r'^(.*)$')


class BaseConverter:
    """Line-oriented converter: classify each line, then visit it by kind.

    Subclasses list their structural templates in priority order; the first
    template matching a trimmed line decides which `visit_<kind>` method
    rewrites it. Lines no template recognises go to `generic_visit`.
    """

    indent_size = 4
    templates: List[Tuple[str, Pattern]] = []

    def __init__(self):
        self.output: List[str] = []
        self.in_comment = False
        self.has_content = False

    def convert(self, source_code: str) -> str:
        """Convert source code to the target language."""
        self.begin()
        for line in source_code.split('\n'):
            self.visit_line(line)
        self.finish()
        return '\n'.join(self.output)

    def begin(self) -> None:
        """Hook run before the first line."""

    def finish(self) -> None:
        """Hook run after the last line."""

    def visit_line(self, line: str) -> None:
        raise NotImplementedError

    def classify(self, line: str) -> Tuple[str, re.Match]:
        """Return the kind and match of the first template matching the line."""
        for kind, pattern in self.templates:
            match = pattern.match(line)
            if match:
                return kind, match
        return 'generic', LINE_RE.match(line)

    def visit(self, kind: str, match: re.Match) -> Code:
        """Visit a classified line."""
        method = 'visit_' + kind
        visitor = getattr(self, method, self.generic_visit)
        return visitor(match)

    def generic_visit(self, match: re.Match) -> Code:
        """Called if no explicit visitor exists for a line."""
        return match.string

    def indent(self, code: Union[str, List[str]], depth: int) -> str:
        """Add indentation for the given nesting depth."""
        if isinstance(code, list):
            code = '\n'.join(code)
        indent = ' ' * (depth * self.indent_size)
        return '\n'.join(indent + line if line else line for line in code.split('\n'))

    def emit(self, code: Code, depth: int) -> None:
        if code is None:
            return
        self.output.extend(self.indent(code, depth).split('\n'))
