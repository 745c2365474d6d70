import re
from typing import Optional

from .patterns import infer_type, split_args
from .python_to_javascript import PythonToJavaScriptConverter

LITERAL_TYPES = {
    'int': 'number',
    'float': 'number',
    'str': 'string',
    'bool': 'boolean',
    'list': 'any[]',
    'dict': 'Record<string, any>',
}

ANNOTATION_TYPES = {
    'int': 'number',
    'float': 'number',
    'complex': 'number',
    'str': 'string',
    'bool': 'boolean',
    'None': 'void',
    'Any': 'any',
    'object': 'any',
    'list': 'any[]',
    'List': 'any[]',
    'dict': 'Record<string, any>',
    'Dict': 'Record<string, any>',
}


def typescript_type(annotation: Optional[str]) -> str:
    """Map a Python annotation onto the nearest TypeScript type."""
    if not annotation:
        return 'any'
    annotation = annotation.strip().strip('\'"')
    generic = re.match(r'^(\w+)\[(.*)\]$', annotation)
    if generic:
        name, args = generic.group(1), split_args(generic.group(2))
        if name in ('list', 'List', 'Sequence', 'Iterable', 'set', 'Set') and args:
            inner = typescript_type(args[0])
            return f'({inner})[]' if '|' in inner else f'{inner}[]'
        if name in ('dict', 'Dict', 'Mapping') and len(args) == 2:
            return f'Record<{typescript_type(args[0])}, {typescript_type(args[1])}>'
        if name == 'Optional' and args:
            return f'{typescript_type(args[0])} | null'
        if name == 'Union':
            return ' | '.join(typescript_type(arg) for arg in args)
        return 'any'
    if '|' in annotation:
        return ' | '.join(typescript_type(part) for part in annotation.split('|'))
    return ANNOTATION_TYPES.get(annotation, annotation)


class PythonToTypeScriptConverter(PythonToJavaScriptConverter):
    """Python to TypeScript: JavaScript output plus type annotations."""

    def params(self, text):
        params = []
        for param in split_args(text):
            head, _, default = param.partition('=')
            name, _, annotation = head.partition(':')
            name = name.strip()
            if name in ('self', 'cls'):
                continue
            kind = typescript_type(annotation)
            if name.startswith('**'):
                params.append(f'{name[2:]}: Record<string, any> = {{}}')
            elif name.startswith('*'):
                params.append(f'...{name[1:]}: {kind}[]')
            elif default:
                params.append(f'{name}: {kind} = {self.expression(default.strip())}')
            else:
                params.append(f'{name}: {kind}')
        return params

    def value_type(self, annotation: Optional[str], value: str) -> Optional[str]:
        if annotation:
            return typescript_type(annotation)
        return infer_type(value, LITERAL_TYPES)

    def declaration(self, target, annotation, value):
        kind = self.value_type(annotation, value)
        if kind:
            return f'let {target}: {kind} = {value}'
        return f'let {target} = {value}'

    def visit_function(self, match):
        name, params = match.group(1), self.params(match.group(2))
        static = 'staticmethod' in self.take_decorators()
        returns = f': {typescript_type(match.group(3))}' if match.group(3) else ''
        self.open('function', self.param_names(match.group(2)))
        if self.in_class_body():
            if name == '__init__':
                return f'constructor({", ".join(params)}) {{'
            prefix = 'public static ' if static else 'public '
            return f'{prefix}{name}({", ".join(params)}){returns} {{'
        return f'function {name}({", ".join(params)}){returns} {{'

    def visit_assignment(self, match):
        if not self.in_class_body():
            return super().visit_assignment(match)
        target, annotation = match.group(1), match.group(2)
        value = self.expression(match.group(3))
        kind = self.value_type(annotation, value)
        if kind:
            return self.terminate(f'{target}: {kind} = {value}')
        return self.terminate(f'{target} = {value}')
