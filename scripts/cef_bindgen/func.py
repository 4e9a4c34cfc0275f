"""
Function binding generation module

Generates safe wrapper functions for the functions of the extern block.
"""

from typing import Optional, TYPE_CHECKING

from .codegen import CodeGen, into_args, join_args, ret_suffix

if TYPE_CHECKING:
    from .config import GeneratorConfig
    from .ir import GlobalFnDecl


class FuncGenerator:
    """Generates global function wrappers"""

    def __init__(self, config: 'GeneratorConfig', ignores: Optional[set[str]] = None):
        self.config = config
        self.ignores = ignores or set()

    def is_ignored(self, func: 'GlobalFnDecl') -> bool:
        return func.name in self.ignores or func.symbol in self.ignores

    def callee(self, func: 'GlobalFnDecl') -> str:
        """Path of the foreign function called by the wrapper"""
        if func.original_name is not None:
            return func.original_name
        # The wrapper has the same name and would shadow the glob import
        return f'{self.config.sys_crate}::{func.name}'

    def generate(self, func: 'GlobalFnDecl', gen: CodeGen):
        """Generate wrapper for a function"""
        if self.is_ignored(func):
            return

        params = join_args((arg.host_name, arg.type) for arg in func.args)
        call = f'{self.callee(func)}({into_args(arg.host_name for arg in func.args)})'
        if func.output:
            call += '.into()'

        with gen.block(f'pub fn {func.name}({params}){ret_suffix(func.output)} {{'):
            gen.line(f'unsafe {{ {call} }}')
        gen.line()
