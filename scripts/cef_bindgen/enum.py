"""
Enum binding generation module

Generates value-like newtype wrappers for enums and single-field tuple
structs.
"""

import logging
from typing import TYPE_CHECKING

from .codegen import CodeGen, doc_line, gen_newtype_impls

if TYPE_CHECKING:
    from .ir import EnumDecl
    from .names import NameMapper

logger = logging.getLogger(__name__)

VALUE_DERIVES = ('Debug', 'Copy', 'Clone', 'Hash', 'PartialEq', 'Eq')


class EnumGenerator:
    """Generates enum wrappers"""

    def __init__(self, mapper: 'NameMapper'):
        self.mapper = mapper

    def generate(self, enum: 'EnumDecl', gen: CodeGen):
        """Generate a copyable newtype around the enum value"""
        rust_name = self.mapper.type_name(enum.name)
        if rust_name is None:
            logger.debug('enum %s has no host name, skipped', enum.name)
            return

        gen.line(f'/// {doc_line(enum.name)}')
        gen.line(f'#[derive({", ".join(VALUE_DERIVES)})]')
        gen.line(f'pub struct {rust_name}({enum.name});')
        gen.line()
        gen_newtype_impls(gen, rust_name, enum.name)
