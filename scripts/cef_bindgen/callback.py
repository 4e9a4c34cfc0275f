"""
Callback binding generation module

Generates the wrapper, the overridable trait and the C-ABI trampolines of
ref-counted polymorphic structs. Each vtable slot gets an ``extern "C"``
thunk that recovers the user's implementation from the ref-counted wrapper
and forwards the call.
"""

import logging
from typing import TYPE_CHECKING

from .codegen import CodeGen, doc_line, into_args, join_args, ret_suffix
from .errors import UnrecognizedInterfaceDeclaration

if TYPE_CHECKING:
    from .config import GeneratorConfig
    from .ir import IR, MethodDecl, StructDecl

logger = logging.getLogger(__name__)


def trait_name(host_name: str) -> str:
    return f'Impl{host_name}'


def module_name(foreign_name: str) -> str:
    return f'impl{foreign_name}'


class TrampolineGenerator:
    """Generates trait and trampoline bindings for polymorphic structs"""

    def __init__(self, ir: 'IR', config: 'GeneratorConfig'):
        self.ir = ir
        self.config = config

    def dispatchable_methods(self, struct: 'StructDecl') -> list['MethodDecl']:
        """Slots that have a receiver and can be dispatched to a trait impl"""
        methods = []
        for method in struct.methods:
            receiver = method.receiver
            if receiver is None or receiver.name != self.config.receiver:
                e = UnrecognizedInterfaceDeclaration(f'{struct.name}.{method.name} has no receiver')
                logger.info('slot excluded: %s', e)
                continue
            expected = f'*mut {struct.name}'
            if receiver.foreign_type != expected:
                logger.warning('%s.%s: receiver type %s, expected %s',
                               struct.name, method.name, receiver.foreign_type, expected)
            methods.append(method)
        return methods

    def generate(self, struct: 'StructDecl', gen: CodeGen):
        """Generate wrapper, trait and trampolines for a struct"""
        methods = self.dispatchable_methods(struct)
        self._gen_wrapper(struct, methods, gen)
        self._gen_trait(struct, methods, gen)
        self._gen_trampolines(struct, methods, gen)

    def _gen_wrapper(self, struct: 'StructDecl', methods: list['MethodDecl'], gen: CodeGen):
        gen.line('wrapper!(')
        gen.indent()
        gen.line(f'#[doc = "{doc_line(struct.name)}"]')
        gen.line('#[derive(Clone)]')
        gen.line(f'pub struct {struct.host_name}({struct.name});')
        if methods:
            gen.line()
        for method in methods:
            gen.line(f'pub fn {self._signature(method)};')
        gen.dedent()
        gen.line(');')
        gen.line()

    def _gen_trait(self, struct: 'StructDecl', methods: list['MethodDecl'], gen: CodeGen):
        rust_name = struct.host_name
        base = self.ir.base_types.base(rust_name)
        root = self.ir.base_types.root(rust_name)
        supertrait = 'Sized' if base is None or base == root else trait_name(base)

        with gen.block(f'pub trait {trait_name(rust_name)}: {supertrait} {{'):
            for method in methods:
                signature = self._signature(method)
                if method.output:
                    with gen.block(f'fn {signature} {{'):
                        gen.line('Default::default()')
                else:
                    gen.line(f'fn {signature} {{}}')
            if methods:
                gen.line()
            self._gen_into_raw(struct, gen)
        gen.line()

    def _gen_into_raw(self, struct: 'StructDecl', gen: CodeGen):
        """Populate every inherited vtable, most distant ancestor first"""
        name = struct.name
        ancestors = self.ir.base_types.ancestors(struct.host_name, self.ir.get_struct)
        with gen.block(f'fn into_raw(self) -> *mut {name} {{'):
            gen.line(f'let mut object: {name} = unsafe {{ std::mem::zeroed() }};')
            for ancestor in reversed(ancestors):
                path = ancestor.access_path('object', self.config.base_field)
                gen.line(f'{module_name(ancestor.struct.name)}::init_methods::<Self>(&mut {path});')
            gen.line(f'{module_name(name)}::init_methods::<Self>(&mut object);')
            gen.line('RcImpl::new(object, self) as *mut _')

    def _gen_trampolines(self, struct: 'StructDecl', methods: list['MethodDecl'], gen: CodeGen):
        name = struct.name
        bound = trait_name(struct.host_name)

        with gen.block(f'mod {module_name(name)} {{'):
            gen.line('use super::*;')
            gen.line()
            with gen.block(f'pub fn init_methods<I: {bound}>(object: &mut {name}) {{'):
                for method in methods:
                    gen.line(f'object.{method.name} = Some({method.name}::<I>);')
            for method in methods:
                gen.line()
                self._gen_thunk(method, bound, gen)
        gen.line()

    def _gen_thunk(self, method: 'MethodDecl', bound: str, gen: CodeGen):
        receiver = method.receiver
        params = join_args((arg.host_name, arg.foreign_type) for arg in method.args)
        header = (f'extern "C" fn {method.name}<I: {bound}>({params})'
                  f'{ret_suffix(method.foreign_output)} {{')
        with gen.block(header):
            gen.line(f'let obj: &RcImpl<_, I> = RcImpl::get({receiver.host_name});')
            args = into_args(arg.host_name for arg in method.forwarded_args)
            call = f'obj.interface.{method.name}({args})'
            gen.line(f'{call}.into()' if method.output else f'{call};')

    def _signature(self, method: 'MethodDecl') -> str:
        params = ['&self'] + [f'{arg.host_name}: {arg.type}' for arg in method.forwarded_args]
        return f'{method.name}({", ".join(params)}){ret_suffix(method.output)}'
