"""
Code generation utilities

Provides helpers for generating Rust code.
"""

from typing import Iterable


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = '    '  # 4 spaces

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def lines(self, *texts: str):
        """Add multiple lines"""
        for text in texts:
            self.line(text)

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = '}'):
        """Context manager for code blocks"""
        return _BlockContext(self, header, footer)

    def section(self, title: str):
        """Add a section comment preceded by a blank line"""
        self.line()
        self.line(f'// {title}')

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines) + '\n'


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)


def doc_line(foreign_name: str) -> str:
    """Documentation pointer to the foreign declaration"""
    return f'See [{foreign_name}] for more documentation.'


def ret_suffix(output) -> str:
    """Return type suffix of a signature (empty for no return value)"""
    return f' -> {output}' if output else ''


def join_args(pairs: Iterable[tuple[str, str]]) -> str:
    """Render ``name: type`` argument pairs"""
    return ', '.join(f'{name}: {ty}' for name, ty in pairs)


def into_args(names: Iterable[str]) -> str:
    """Render call arguments, each converted with ``.into()``"""
    return ', '.join(f'{name}.into()' for name in names)


def gen_newtype_impls(gen: CodeGen, rust_name: str, name: str):
    """Conversions between a newtype wrapper and the wrapped foreign value"""
    with gen.block(f'impl From<{name}> for {rust_name} {{'):
        with gen.block(f'fn from(value: {name}) -> Self {{'):
            gen.line('Self(value)')
    gen.line()
    with gen.block(f'impl Into<{name}> for {rust_name} {{'):
        with gen.block(f'fn into(self) -> {name} {{'):
            gen.line('self.0')
    gen.line()
    with gen.block(f'impl AsRef<{name}> for {rust_name} {{'):
        with gen.block(f'fn as_ref(&self) -> &{name} {{'):
            gen.line('&self.0')
    gen.line()
    with gen.block(f'impl AsMut<{name}> for {rust_name} {{'):
        with gen.block(f'fn as_mut(&mut self) -> &mut {name} {{'):
            gen.line('&mut self.0')
    gen.line()
    with gen.block(f'impl Default for {rust_name} {{'):
        with gen.block('fn default() -> Self {'):
            gen.line('Self(unsafe { std::mem::zeroed() })')
    gen.line()
