import re
from typing import List, Optional

from .indent_converter import IndentConverter
from .patterns import fstring_to_template, outside_strings, split_args


class PythonToJavaScriptConverter(IndentConverter):
    """Python to JavaScript.

    Functions inside a class body become methods, `__init__` becomes the
    constructor and the first binding of a name in a scope is declared
    with `let`.
    """

    strict_equality = True

    def javascript_calls(self, code: str) -> str:
        code = re.sub(r'\blen\(([^()]*)\)', r'\1.length', code)
        code = re.sub(r'\bstr\(([^()]*)\)', r'String(\1)', code)
        return code.replace('.append(', '.push(')

    def expression(self, text):
        text = super().expression(fstring_to_template(text))
        return outside_strings(text, self.javascript_calls)

    def params(self, text: str) -> List[str]:
        params = []
        for param in split_args(text):
            name, _, default = param.partition('=')
            name = name.split(':')[0].strip()
            if name in ('self', 'cls'):
                continue
            if name.startswith('**'):
                params.append(f'{name[2:]} = {{}}')
            elif name.startswith('*'):
                params.append(f'...{name[1:]}')
            elif default:
                params.append(f'{name} = {self.expression(default.strip())}')
            else:
                params.append(name)
        return params

    def declaration(self, target: str, annotation: Optional[str], value: str) -> str:
        return f'let {target} = {value}'

    def visit_class(self, match):
        name, base = match.group(1), match.group(2)
        self.open('class')
        if base and base.strip() not in ('object', ''):
            return f'class {name} extends {base.strip()} {{'
        return f'class {name} {{'

    def visit_function(self, match):
        name, params = match.group(1), self.params(match.group(2))
        static = 'staticmethod' in self.take_decorators()
        self.open('function', self.param_names(match.group(2)))
        if self.in_class_body():
            if name == '__init__':
                name = 'constructor'
            prefix = 'static ' if static else ''
            return f'{prefix}{name}({", ".join(params)}) {{'
        return f'function {name}({", ".join(params)}) {{'

    def visit_for(self, match):
        names = [name.strip() for name in match.group(1).strip('()').split(',')]
        iterable = match.group(2)
        mapping = re.match(r'^(.+)\.(items|keys|values)\(\)$', iterable)
        enumerated = re.match(r'^enumerate\((.+)\)$', iterable)
        if mapping:
            method = {'items': 'entries', 'keys': 'keys', 'values': 'values'}[mapping.group(2)]
            iterable = f'Object.{method}({self.expression(mapping.group(1))})'
        elif enumerated:
            iterable = f'{self.expression(enumerated.group(1))}.entries()'
        else:
            iterable = self.expression(iterable)
        binding = names[0] if len(names) == 1 else '[' + ', '.join(names) + ']'
        self.open(names=names)
        return f'for (const {binding} of {iterable}) {{'

    def visit_print(self, match):
        return self.terminate(f'console.log({", ".join(self.print_args(match.group(1)))})')

    def visit_assignment(self, match):
        target, annotation, value = match.group(1), match.group(2), self.expression(match.group(3))
        if self.in_class_body():
            return self.terminate(f'{target} = {value}')
        if self.declare(target):
            return self.terminate(self.declaration(target, annotation, value))
        return self.terminate(f'{self.expression(target)} = {value}')
