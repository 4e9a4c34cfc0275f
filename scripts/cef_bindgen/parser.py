"""
Declaration parser

Parses a bindgen-generated Rust file with lark and builds the IR from the
recognized item shapes. Items the generator has no use for (impl blocks,
consts, unions, ...) are accepted by the grammar and skipped here.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from .bases import BaseTypes
from .classify import StructClassifier
from .config import GeneratorConfig
from .errors import ParseFailure, Unrecognized, UnrecognizedInterfaceDeclaration
from .ir import IR, EnumDecl, GlobalFnDecl, StructDecl, TypeAlias
from .names import NameMapper
from .syntax import (
    ArrayType, Field, FnParam, FnType, NeverType, PathSegment, PathType,
    PointerType, RefType, SliceType, TupleType, TypeExpr,
)
from .types import TypeRenderer

logger = logging.getLogger(__name__)

_GRAMMAR_PATH = Path(__file__).with_name('grammar.lark')
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text(encoding='utf-8')

_GROUP_DELIMITERS = {
    'brace_group': ('{', '}'),
    'paren_group': ('(', ')'),
    'bracket_group': ('[', ']'),
}


class DeclarationParser:
    """Builds an IR from declaration source text"""

    def __init__(self, mapper: NameMapper, config: Optional[GeneratorConfig] = None):
        self.mapper = mapper
        self.config = config or GeneratorConfig()
        self.classifier = StructClassifier(mapper, self.config)
        self.renderer = TypeRenderer(mapper)
        self._lark = Lark(
            _GRAMMAR_SRC,
            parser='lalr',
            lexer='contextual',
            start='start',
            maybe_placeholders=False,
        )

    def parse(self, source: str, source_name: str = '<bindings>') -> IR:
        """Parse declaration source; raises ParseFailure on malformed input"""
        try:
            tree = self._lark.parse(source)
        except UnexpectedInput as e:
            raise ParseFailure(e, source_name) from e
        return self._build_ir(tree)

    def _build_ir(self, tree: Tree) -> IR:
        aliases: dict[str, TypeAlias] = {}
        structs: list[StructDecl] = []
        enums: list[EnumDecl] = []
        global_fns: list[GlobalFnDecl] = []

        for child in tree.children:
            if _name(child) != 'item':
                continue
            body = child.children[-1]
            kind = _name(body)
            if kind == 'type_alias':
                alias = self._build_alias(body)
                aliases[alias.name] = alias
            elif kind == 'struct_named':
                structs.append(self._build_struct(body))
            elif kind == 'struct_tuple':
                enum = _build_tuple_struct(body)
                if enum is not None:
                    enums.append(enum)
            elif kind == 'enum_decl':
                enums.append(EnumDecl(name=_first_name(body)))
            elif kind == 'foreign_block':
                global_fns.extend(self._build_foreign_block(body))

        structs_t = tuple(structs)
        return IR(
            aliases=tuple(aliases[name] for name in sorted(aliases)),
            structs=structs_t,
            enums=tuple(enums),
            globals=tuple(global_fns),
            base_types=BaseTypes.from_structs(structs_t, self.config.base_field),
        )

    def _build_alias(self, node: Tree) -> TypeAlias:
        target = _build_type(node.children[-1])
        return TypeAlias(
            name=_first_name(node),
            target=self.renderer.host_type_or_verbatim(target),
        )

    def _build_struct(self, node: Tree) -> StructDecl:
        name = _first_name(node)
        fields = [_build_field(c) for c in node.children if _name(c) == 'field']
        return self.classifier.classify_struct(name, fields)

    def _build_foreign_block(self, node: Tree) -> list[GlobalFnDecl]:
        is_unsafe = any(_name(c) == 'UNSAFE' for c in node.children)
        abi = _unquote(next(c for c in node.children if _name(c) == 'STRING'))
        if not is_unsafe or abi != self.config.abi:
            e = UnrecognizedInterfaceDeclaration(f'extern "{abi}" block')
            logger.info('extern block ignored: %s', e)
            return []

        global_fns = []
        for item in node.children:
            if _name(item) != 'foreign_item':
                continue
            decl = item.children[-1]
            if _name(decl) != 'foreign_fn':
                continue
            name = _first_name(decl)
            params, variadic = _build_params(_child(decl, 'fn_params'))
            if variadic:
                logger.info('global function %s excluded: variadic', name)
                continue
            output = _build_output(decl)
            try:
                global_fns.append(self.classifier.global_fn(name, params, output))
            except Unrecognized as e:
                logger.info('global function %s excluded: %s', name, e)
        return global_fns


def _name(node: Union[Tree, Token]) -> str:
    if isinstance(node, Tree):
        data = node.data
        if isinstance(data, Token):
            return data.value
        return data
    if isinstance(node, Token):
        return node.type
    return str(node)


def _first_name(node: Tree) -> str:
    return next(c.value for c in node.children if isinstance(c, Token) and c.type == 'NAME')


def _child(node: Tree, kind: str) -> Optional[Tree]:
    return next((c for c in node.children if _name(c) == kind), None)


def _unquote(token: Token) -> str:
    return token.value[1:-1]


def _build_field(node: Tree) -> Field:
    return Field(name=_first_name(node), type=_build_type(node.children[-1]))


def _build_tuple_struct(node: Tree) -> Optional[EnumDecl]:
    # Only newtype structs wrap an enum value
    fields = [c for c in node.children if _name(c) == 'tuple_field']
    if len(fields) != 1:
        return None
    return EnumDecl(name=_first_name(node))


def _build_params(node: Optional[Tree]) -> tuple[list[FnParam], bool]:
    params: list[FnParam] = []
    variadic = False
    if node is None:
        return params, variadic
    for child in node.children:
        kind = _name(child)
        if kind == 'VARIADIC':
            variadic = True
        elif kind == 'named_param':
            name, ty = child.children
            params.append(FnParam(type=_build_type(ty), name=name.value))
        elif kind == 'anon_param':
            params.append(FnParam(type=_build_type(child.children[0])))
    return params, variadic


def _build_output(node: Tree) -> Optional[TypeExpr]:
    ret = _child(node, 'ret_type')
    if ret is None:
        return None
    return _build_type(ret.children[0])


def _build_type(node: Union[Tree, Token]) -> TypeExpr:
    kind = _name(node)
    if kind in ('path_type', 'global_path_type'):
        return PathType(
            segments=tuple(_build_segment(c) for c in node.children),
            is_global=kind == 'global_path_type',
        )
    if kind == 'pointer_type':
        qualifier, pointee = node.children
        return PointerType(pointee=_build_type(pointee), mutable=qualifier.type == 'MUT')
    if kind == 'array_type':
        element, *length = node.children
        return ArrayType(element=_build_type(element), length=_render_tokens(length))
    if kind == 'slice_type':
        return SliceType(element=_build_type(node.children[0]))
    if kind == 'tuple_type':
        return TupleType(elements=tuple(_build_type(c) for c in node.children))
    if kind == 'never_type':
        return NeverType()
    if kind == 'ref_type':
        lifetime = None
        mutable = False
        for c in node.children[:-1]:
            if _name(c) == 'LIFETIME':
                lifetime = c.value
            elif _name(c) == 'MUT':
                mutable = True
        return RefType(referent=_build_type(node.children[-1]), mutable=mutable, lifetime=lifetime)
    if kind == 'fn_type':
        return _build_fn_type(node)
    raise ValueError(f'unexpected type node: {kind}')


def _build_segment(node: Tree) -> PathSegment:
    name = node.children[0].value
    args = _child(node, 'generic_args')
    if args is None:
        return PathSegment(name=name)
    return PathSegment(
        name=name,
        args=tuple(c.value if _name(c) == 'LIFETIME' else _build_type(c) for c in args.children),
    )


def _build_fn_type(node: Tree) -> FnType:
    abi = None
    abi_node = _child(node, 'abi')
    if abi_node is not None:
        # `extern fn` without a string defaults to the C ABI
        abi = _unquote(abi_node.children[0]) if abi_node.children else 'C'
    params, variadic = _build_params(_child(node, 'fn_params'))
    return FnType(
        params=tuple(params),
        output=_build_output(node),
        is_unsafe=any(_name(c) == 'UNSAFE' for c in node.children),
        abi=abi,
        is_variadic=variadic,
    )


def _render_tokens(nodes) -> str:
    parts = []
    for node in nodes:
        if isinstance(node, Token):
            parts.append(node.value)
            continue
        kind = _name(node)
        if kind in _GROUP_DELIMITERS:
            open_, close = _GROUP_DELIMITERS[kind]
            parts.append(f'{open_}{_render_tokens(node.children)}{close}')
        else:
            parts.append(';')
    return ' '.join(parts)
