import re
from typing import List

from .indent_converter import IndentConverter
from .patterns import counting_loop, fstring_to_concat, outside_strings, split_args

DICT_RE = re.compile(r'\{([^{}]*)\}')


def php_array(match: re.Match) -> str:
    entries = []
    for item in split_args(match.group(1)):
        key, _, value = item.partition(':')
        entries.append(f'{key.strip()} => {value.strip()}')
    return f'array({", ".join(entries)})'


class PythonToPhpConverter(IndentConverter):
    """Python to PHP.

    Names bound by assignment, parameters and loops get a `$` sigil wherever
    they are used afterwards. The output is wrapped in `<?php` and `?>`.
    """

    indent_size = 4
    receiver = '$this->'

    def finish(self):
        super().finish()
        if self.has_content:
            self.output.insert(0, '<?php')
            self.output.append('?>')

    def known(self, name: str) -> bool:
        return any(name in names for names in self.names) or name in self.pending_names

    def sigils(self, segment: str) -> str:
        segment = re.sub(
            r'(?<![\w$>.])([A-Za-z_]\w*)\b(?!\s*\()',
            lambda m: f'${m.group(1)}' if self.known(m.group(1)) else m.group(1),
            segment,
        )
        return re.sub(r'(?<=[\w)\]])\.(?=[A-Za-z_])', '->', segment)

    def expression(self, text):
        text = fstring_to_concat(text, ' . ')
        text = super().expression(text)
        text = outside_strings(text, self.sigils)
        text = DICT_RE.sub(php_array, text) if ':' in text else text.replace('{}', 'array()')
        text = re.sub(r'\blen\(', 'count(', text)
        text = re.sub(r'\bstr\(', 'strval(', text)
        return re.sub(r'(\$[\w>-]+)->append\((.*)\)', r'array_push(\1, \2)', text)

    def params(self, text: str) -> List[str]:
        params = []
        for param in split_args(text):
            name, _, default = param.partition('=')
            name = name.split(':')[0].strip()
            if name in ('self', 'cls'):
                continue
            if name.startswith('*'):
                params.append(f'...${name.lstrip("*")}')
            elif default:
                params.append(f'${name} = {self.expression(default.strip())}')
            else:
                params.append(f'${name}')
        return params

    def visit_class(self, match):
        name, base = match.group(1), match.group(2)
        self.open('class')
        if base and base.strip() not in ('object', ''):
            return f'class {name} extends {base.strip()} {{'
        return f'class {name} {{'

    def visit_function(self, match):
        name, params = match.group(1), ', '.join(self.params(match.group(2)))
        static = 'staticmethod' in self.take_decorators()
        self.open('function', self.param_names(match.group(2)))
        if self.in_class_body():
            if name == '__init__':
                name = '__construct'
            prefix = 'public static function' if static else 'public function'
            return f'{prefix} {name}({params}) {{'
        return f'function {name}({params}) {{'

    def visit_range_for(self, match):
        name = match.group(1)
        self.open(names=[name])
        loop = counting_loop(f'${name}', split_args(self.expression(match.group(2))))
        if loop is None:
            return self.generic_visit(match)
        return f'for {loop} {{'

    def visit_for(self, match):
        names = [name.strip() for name in match.group(1).strip('()').split(',')]
        iterable = match.group(2)
        mapping = re.match(r'^(.+)\.items\(\)$', iterable)
        self.open(names=names)
        if mapping and len(names) == 2:
            return f'foreach ({self.expression(mapping.group(1))} as ${names[0]} => ${names[1]}) {{'
        return f'foreach ({self.expression(iterable)} as ${names[0]}) {{'

    def visit_print(self, match):
        args = self.print_args(match.group(1))
        if not args:
            return 'echo PHP_EOL;'
        separator = " . ' ' . "
        return f'echo {separator.join(args)} . PHP_EOL;'

    def visit_assignment(self, match):
        target, value = match.group(1), match.group(3)
        if self.in_class_body():
            return self.terminate(f'public ${target} = {self.expression(value)}')
        self.declare(target)
        return self.terminate(f'{self.expression(target)} = {self.expression(value)}')

    def visit_except(self, match):
        name = match.group(2) or 'e'
        self.open(names=[name])
        return f'}} catch (Exception ${name}) {{'

    def visit_raise(self, match):
        if not match.group(1):
            return 'throw $e;'
        error = re.sub(r'^\w*(?:Exception|Error)\(', 'Exception(', match.group(1))
        return self.terminate(f'throw new {self.expression(error)}')
