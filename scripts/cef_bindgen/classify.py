"""
Struct classification

Splits the named fields of a struct into plain data fields and vtable slots.
A slot is a field of type ``Option<unsafe extern "C" fn(...)>``; anything
else that renders as a host type is a data field.
"""

import logging
from typing import Iterable, Optional, Union

from .config import GeneratorConfig
from .errors import Unrecognized, UnrecognizedFieldType, UnrecognizedFnArg
from .ir import Argument, FieldDecl, GlobalFnDecl, MethodDecl, StructDecl
from .names import NameMapper
from .syntax import Field, FnParam, FnType, PathType, TypeExpr
from .types import TypeRenderer

logger = logging.getLogger(__name__)

OPTION_PATH = ('std', 'option', 'Option')


class StructClassifier:
    """Builds typed field/method records from raw struct fields"""

    def __init__(self, mapper: NameMapper, config: Optional[GeneratorConfig] = None):
        self.mapper = mapper
        self.config = config or GeneratorConfig()
        self.renderer = TypeRenderer(mapper)

    def classify_struct(self, name: str, fields: Iterable[Field]) -> StructDecl:
        """Classify every field of struct ``name``, dropping unrecognized ones"""
        data_fields: list[FieldDecl] = []
        methods: list[MethodDecl] = []
        for f in fields:
            try:
                decl = self.classify(f)
            except Unrecognized as e:
                logger.info('%s.%s excluded: %s', name, f.name, e)
                continue
            if isinstance(decl, MethodDecl):
                methods.append(decl)
            else:
                data_fields.append(decl)
        return StructDecl(
            name=name,
            host_name=self.mapper.type_name(name),
            fields=tuple(data_fields),
            methods=tuple(methods),
        )

    def classify(self, field: Field) -> Union[MethodDecl, FieldDecl]:
        """Try the field as a vtable slot first, then as a data field"""
        try:
            return self.as_method(field)
        except Unrecognized:
            return self.as_field(field)

    def as_method(self, field: Field) -> MethodDecl:
        fn = self._slot_fn_type(field.type)
        output, foreign_output = self._output(fn.output)
        return MethodDecl(
            name=field.name,
            args=tuple(self.argument(param) for param in fn.params),
            output=output,
            foreign_output=foreign_output,
        )

    def as_field(self, field: Field) -> FieldDecl:
        return FieldDecl(
            name=field.name,
            host_name=self.mapper.value_name(field.name),
            type=self.renderer.host_type(field.type),
        )

    def argument(self, param: FnParam) -> Argument:
        """Build an argument record; every argument must be named"""
        if param.name is None:
            raise UnrecognizedFnArg(str(param.type))
        return Argument(
            name=param.name,
            host_name=self.mapper.value_name(param.name),
            type=self.renderer.host_type_or_verbatim(param.type),
            foreign_type=str(param.type),
        )

    def global_fn(self, name: str, params: Iterable[FnParam],
                  output: Optional[TypeExpr]) -> GlobalFnDecl:
        """Build a global function record from an extern block function"""
        host_name, original_name = self.mapper.global_fn_name(name)
        host_output, foreign_output = self._output(output)
        return GlobalFnDecl(
            name=host_name,
            original_name=original_name,
            args=tuple(self.argument(param) for param in params),
            output=host_output,
            foreign_output=foreign_output,
        )

    def _slot_fn_type(self, ty: TypeExpr) -> FnType:
        if not isinstance(ty, PathType) or ty.names != OPTION_PATH:
            raise UnrecognizedFieldType(str(ty))
        *outer, last = ty.segments
        if any(segment.args for segment in outer) or len(last.args) != 1:
            raise UnrecognizedFieldType(str(ty))
        fn = last.args[0]
        if not isinstance(fn, FnType):
            raise UnrecognizedFieldType(str(ty))
        if not fn.is_unsafe or fn.abi != self.config.abi or fn.is_variadic:
            raise UnrecognizedFieldType(str(ty))
        return fn

    def _output(self, output: Optional[TypeExpr]) -> tuple[Optional[str], Optional[str]]:
        if output is None:
            return None, None
        return self.renderer.host_type_or_verbatim(output), str(output)
