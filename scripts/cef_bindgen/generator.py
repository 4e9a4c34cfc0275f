"""
Main generator module

Orchestrates all components to generate the CEF wrapper bindings.
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from .callback import TrampolineGenerator
from .codegen import CodeGen
from .config import GeneratorConfig
from .enum import EnumGenerator
from .func import FuncGenerator
from .ir import IR
from .names import NameMapper
from .parser import DeclarationParser
from .struct import StructGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatResult:
    """Outcome of running the external formatter"""
    ok: bool
    message: str = ''
    skipped: bool = False


@dataclass(frozen=True)
class GenerationResult:
    path: str
    format_result: FormatResult


def format_file(path: str, command: Sequence[str]) -> FormatResult:
    """Run the formatter on ``path``; failures are reported, not raised"""
    if not command:
        return FormatResult(ok=True, message='formatting disabled', skipped=True)
    try:
        result = subprocess.run([*command, path], capture_output=True, text=True)
    except OSError as e:
        return FormatResult(ok=False, message=f'{command[0]}: {e}')
    if result.returncode != 0:
        message = result.stderr.strip() or f'{command[0]} exited with status {result.returncode}'
        return FormatResult(ok=False, message=message)
    return FormatResult(ok=True)


class Generator:
    """Main binding generator"""

    def __init__(self, output_root: str, config: Optional[GeneratorConfig] = None):
        self.output_root = output_root
        self.config = config or GeneratorConfig()
        self._global_ignores: set[str] = set()

    @property
    def output_path(self) -> str:
        return os.path.join(self.output_root, self.config.output_name)

    def ignore(self, *names: str):
        """Add global functions to skip (host or foreign names)"""
        self._global_ignores.update(names)

    def prepare(self):
        """Prepare output directory"""
        print('=== Generating CEF bindings:')
        os.makedirs(self.output_root, exist_ok=True)

    def generate(self, source_path: str) -> GenerationResult:
        """Generate bindings for one declaration file

        The source is parsed and its bases resolved before the output
        directory is touched, so bad input leaves it as it was.
        """
        ir = self.parse(source_path)
        code = self.generate_code(ir)

        self.prepare()
        output_path = self.output_path
        print(f'  {source_path} => {output_path}')
        with open(output_path, 'w', encoding='utf-8', newline='\n') as f:
            f.write(code)

        format_result = format_file(output_path, self.config.formatter)
        if not format_result.ok:
            logger.warning('formatting %s failed: %s', output_path, format_result.message)
            print(f'  >> warning: formatter failed, keeping unformatted {output_path}')
        return GenerationResult(path=output_path, format_result=format_result)

    def parse(self, source_path: str) -> IR:
        """Build the IR of a declaration file"""
        mapper = NameMapper(self.config.patterns)
        return IR.load(source_path, DeclarationParser(mapper, self.config))

    def generate_code(self, ir: IR) -> str:
        """Generate wrapper source code"""
        gen = CodeGen()
        mapper = NameMapper(self.config.patterns)

        # Prelude
        gen.lines(*self.config.prelude)

        # Resolve every base chain up front so cycles fail before emission
        for struct in ir.structs:
            if struct.host_name is not None:
                ir.base_types.chain(struct.host_name)

        # Create generators
        callback_gen = TrampolineGenerator(ir, self.config)
        struct_gen = StructGenerator(ir, callback_gen, self.config)
        enum_gen = EnumGenerator(mapper)
        func_gen = FuncGenerator(self.config, self._global_ignores)

        gen.section('Type aliases')
        self._gen_aliases(ir, mapper, gen)

        gen.section('Struct wrappers')
        for struct in ir.structs:
            struct_gen.generate(struct, gen)

        gen.section('Enum aliases')
        for enum in ir.enums:
            enum_gen.generate(enum, gen)

        gen.section('Global function wrappers')
        for func in ir.globals:
            func_gen.generate(func, gen)

        return gen.output()

    def _gen_aliases(self, ir: IR, mapper: NameMapper, gen: CodeGen):
        for alias in ir.aliases:
            name = mapper.host_type_name(alias.name)
            target = mapper.host_type_name(alias.target)
            if name == target:
                continue
            gen.line(f'pub type {name} = {target};')
        gen.line()
