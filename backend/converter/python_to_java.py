import re
from typing import List, Optional

from .indent_converter import IndentConverter
from .patterns import fstring_to_concat, infer_type, outside_strings, split_args

LITERAL_TYPES = {
    'int': 'int',
    'float': 'double',
    'str': 'String',
    'bool': 'boolean',
    'list': 'List<Object>',
    'dict': 'Map<String, Object>',
}

ANNOTATION_TYPES = {
    'int': 'int',
    'float': 'double',
    'str': 'String',
    'bool': 'boolean',
    'None': 'void',
    'list': 'List<Object>',
    'List': 'List<Object>',
    'dict': 'Map<String, Object>',
    'Dict': 'Map<String, Object>',
}


def java_type(annotation: Optional[str]) -> str:
    if not annotation:
        return 'Object'
    annotation = annotation.strip()
    return ANNOTATION_TYPES.get(re.sub(r'\[.*\]$', '', annotation), 'Object')


def java_literal(value: str) -> str:
    """Rewrite a whole-value list or dict literal as a Java collection."""
    if value == '[]':
        return 'new ArrayList<>()'
    if value.startswith('[') and value.endswith(']'):
        return f'new ArrayList<>(List.of({value[1:-1]}))'
    if value == '{}':
        return 'new HashMap<>()'
    if value.startswith('{') and value.endswith('}'):
        entries = []
        for item in split_args(value[1:-1]):
            key, _, item_value = item.partition(':')
            entries.append(f'{key.strip()}, {item_value.strip()}')
        return f'new HashMap<>(Map.of({", ".join(entries)}))'
    return value


class PythonToJavaConverter(IndentConverter):
    """Python to Java.

    Free functions become `public static` members, so the output reads as the
    body of a class. Parameter and local types come from annotations or
    literal initializers and default to `Object`.
    """

    indent_size = 4
    loop_declaration = 'int '

    def __init__(self):
        super().__init__()
        self.class_names: List[str] = []
        # output index of each open function header still typed `Object`
        self.untyped: List[Optional[int]] = []

    def pop(self):
        scope = self.scopes[-1]
        super().pop()
        if scope == 'class':
            self.class_names.pop()
        elif scope == 'function':
            self.settle_return_type()

    def close_empty_block(self):
        if self.pending_scope == 'class':
            self.class_names.pop()
        elif self.pending_scope == 'function':
            self.settle_return_type()
        super().close_empty_block()

    def settle_return_type(self):
        """Retype a closed function that never returned a value as `void`."""
        index = self.untyped.pop()
        if index is not None:
            self.output[index] = self.output[index].replace(' Object ', ' void ', 1)

    def expression(self, text):
        text = fstring_to_concat(text)
        text = re.sub(r"'([^'\"\\]*)'", r'"\1"', text)
        return outside_strings(super().expression(text), self.java_calls)

    def java_calls(self, code: str) -> str:
        code = re.sub(r'\blen\(([^()]*)\)', r'\1.size()', code)
        code = re.sub(r'\bstr\(([^()]*)\)', r'String.valueOf(\1)', code)
        return code.replace('.append(', '.add(')

    def params(self, text: str) -> List[str]:
        params = []
        for param in split_args(text):
            head = param.partition('=')[0]
            name, _, annotation = head.partition(':')
            name = name.strip().lstrip('*')
            if name in ('self', 'cls'):
                continue
            if param.strip().startswith('*'):
                params.append(f'Object... {name}')
            else:
                params.append(f'{java_type(annotation)} {name}')
        return params

    def visit_class(self, match):
        name, base = match.group(1), match.group(2)
        self.class_names.append(name)
        self.open('class')
        if base and base.strip() not in ('object', ''):
            return f'public class {name} extends {base.strip()} {{'
        return f'public class {name} {{'

    def visit_function(self, match):
        name, params = match.group(1), ', '.join(self.params(match.group(2)))
        returns = java_type(match.group(3)) if match.group(3) else 'Object'
        static = 'staticmethod' in self.take_decorators()
        self.open('function', self.param_names(match.group(2)))
        entry_point = name == 'main' and not params and not self.in_class_body()
        typed = bool(match.group(3)) or name == '__init__' or entry_point
        self.untyped.append(None if typed else len(self.output))
        if self.in_class_body():
            if name == '__init__':
                return f'public {self.class_names[-1]}({params}) {{'
            prefix = 'public static' if static else 'public'
            return f'{prefix} {returns} {name}({params}) {{'
        if name == 'main' and not params:
            return 'public static void main(String[] args) {'
        return f'public static {returns} {name}({params}) {{'

    def visit_main_guard(self, match):
        self.open('function')
        self.untyped.append(None)
        return 'public static void main(String[] args) {'

    def visit_for(self, match):
        target, iterable = match.group(1).strip('()'), match.group(2)
        names = [name.strip() for name in target.split(',')]
        mapping = re.match(r'^(.+)\.items\(\)$', iterable)
        if mapping and len(names) == 2:
            self.open(names=names + ['entry'])
            entries = f'{self.expression(mapping.group(1))}.entrySet()'
            body = ' ' * self.indent_size
            return [
                f'for (Map.Entry<Object, Object> entry : {entries}) {{',
                f'{body}Object {names[0]} = entry.getKey();',
                f'{body}Object {names[1]} = entry.getValue();',
            ]
        self.open(names=names)
        return f'for (Object {names[0]} : {self.expression(iterable)}) {{'

    def visit_print(self, match):
        separator = ' + " " + '
        return f'System.out.println({separator.join(self.print_args(match.group(1)))});'

    def visit_assignment(self, match):
        target, annotation = match.group(1), match.group(2)
        value = java_literal(self.expression(match.group(3)))
        kind = java_type(annotation) if annotation else (infer_type(match.group(3), LITERAL_TYPES) or 'Object')
        if self.in_class_body():
            return self.terminate(f'public {kind} {target} = {value}')
        if self.declare(target):
            return self.terminate(f'{kind} {target} = {value}')
        return self.terminate(f'{self.expression(target)} = {value}')

    def visit_return(self, match):
        if match.group(1) and self.untyped:
            self.untyped[-1] = None
        return super().visit_return(match)

    def visit_except(self, match):
        name = match.group(2) or 'e'
        self.open(names=[name])
        return f'}} catch (Exception {name}) {{'

    def visit_raise(self, match):
        if not match.group(1):
            return 'throw e;'
        error = re.sub(r'^\w*(?:Exception|Error)\(', 'RuntimeException(', match.group(1))
        return self.terminate(f'throw new {self.expression(error)}')
