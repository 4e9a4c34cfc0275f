"""
Struct binding generation module

Chooses a wrapping strategy for every struct and generates opaque newtype
and aggregate wrappers. Ref-counted polymorphic structs are handed to the
callback (trampoline) generator.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, TYPE_CHECKING

from .codegen import CodeGen, doc_line, gen_newtype_impls

if TYPE_CHECKING:
    from .bases import BaseTypes
    from .callback import TrampolineGenerator
    from .config import GeneratorConfig
    from .ir import IR, StructDecl

logger = logging.getLogger(__name__)


class StructStrategy(Enum):
    REF_COUNTED = 'ref_counted'
    OPAQUE = 'opaque'
    AGGREGATE = 'aggregate'


@dataclass(frozen=True)
class StrategyContext:
    """What strategy predicates need to know besides the struct itself"""
    base_types: 'BaseTypes'
    config: 'GeneratorConfig'


def is_ref_counted(struct: 'StructDecl', ctx: StrategyContext) -> bool:
    """Descends from the ref-counted marker type (and is not the marker)"""
    if struct.host_name is None:
        return False
    root = ctx.base_types.root(struct.host_name)
    return root == ctx.config.marker_type and root != struct.host_name


def is_opaque(struct: 'StructDecl', ctx: StrategyContext) -> bool:
    """Has methods, or no usable data fields"""
    names = struct.field_names
    return bool(struct.methods) or not names or names == [ctx.config.sentinel_field]


def is_aggregate(struct: 'StructDecl', ctx: StrategyContext) -> bool:
    """Plain data record"""
    return not struct.methods and bool(struct.fields)


# Evaluated in order, first match wins
STRUCT_STRATEGIES: tuple[tuple[StructStrategy, Callable[['StructDecl', StrategyContext], bool]], ...] = (
    (StructStrategy.REF_COUNTED, is_ref_counted),
    (StructStrategy.OPAQUE, is_opaque),
    (StructStrategy.AGGREGATE, is_aggregate),
)


def select_strategy(struct: 'StructDecl', ctx: StrategyContext) -> StructStrategy:
    """Select the wrapping strategy of a named-field struct"""
    for strategy, applies in STRUCT_STRATEGIES:
        if applies(struct, ctx):
            return strategy
    raise ValueError(f'no wrapping strategy for {struct.name}')


class StructGenerator:
    """Generates struct wrappers"""

    def __init__(self, ir: 'IR', callback_gen: 'TrampolineGenerator', config: 'GeneratorConfig'):
        self.ir = ir
        self.callback_gen = callback_gen
        self.config = config
        self.ctx = StrategyContext(base_types=ir.base_types, config=config)

    def strategy(self, struct: 'StructDecl') -> StructStrategy:
        return select_strategy(struct, self.ctx)

    def generate(self, struct: 'StructDecl', gen: CodeGen):
        """Generate the wrapper of one struct"""
        if struct.host_name is None:
            logger.debug('struct %s has no host name, skipped', struct.name)
            return

        strategy = self.strategy(struct)
        if strategy is StructStrategy.REF_COUNTED:
            self.callback_gen.generate(struct, gen)
        elif strategy is StructStrategy.OPAQUE:
            self._gen_opaque(struct, gen)
        else:
            self._gen_aggregate(struct, gen)

    def _gen_opaque(self, struct: 'StructDecl', gen: CodeGen):
        gen.line(f'/// {doc_line(struct.name)}')
        gen.line(f'pub struct {struct.host_name}({struct.name});')
        gen.line()
        gen_newtype_impls(gen, struct.host_name, struct.name)

    def _gen_aggregate(self, struct: 'StructDecl', gen: CodeGen):
        rust_name = struct.host_name
        name = struct.name

        gen.line(f'/// {doc_line(name)}')
        with gen.block(f'pub struct {rust_name} {{'):
            for f in struct.fields:
                gen.line(f'pub {f.host_name}: {f.type},')
        gen.line()

        with gen.block(f'impl From<{name}> for {rust_name} {{'):
            with gen.block(f'fn from(value: {name}) -> Self {{'):
                with gen.block('Self {'):
                    for f in struct.fields:
                        gen.line(f'{f.host_name}: value.{f.name}.into(),')
        gen.line()

        with gen.block(f'impl Into<{name}> for {rust_name} {{'):
            with gen.block(f'fn into(self) -> {name} {{'):
                with gen.block(f'{name} {{'):
                    for f in struct.fields:
                        gen.line(f'{f.name}: self.{f.host_name}.into(),')
        gen.line()

        with gen.block(f'impl Default for {rust_name} {{'):
            with gen.block('fn default() -> Self {'):
                gen.line(f'let value: {name} = unsafe {{ std::mem::zeroed() }};')
                gen.line('value.into()')
        gen.line()
