"""
Type rendering module

Renders foreign type expressions as host (wrapper) type text.
"""

from .errors import UnrecognizedFieldType, UnrecognizedGenericType, Unrecognized
from .names import NameMapper
from .syntax import (
    ArrayType, FnType, NeverType, PathType, PointerType, RefType, SliceType,
    TupleType, TypeExpr,
)


class TypeRenderer:
    """Maps foreign types to host types"""

    def __init__(self, mapper: NameMapper):
        self.mapper = mapper

    def host_type(self, ty: TypeExpr) -> str:
        """Render ``ty`` as a host type

        Raises UnrecognizedFieldType for function pointer and never types,
        UnrecognizedGenericType for generic paths over function types.
        """
        if isinstance(ty, PathType):
            if ty.has_generics:
                self._check_generic_args(ty)
            return self.mapper.host_type_name(str(ty))

        if isinstance(ty, PointerType):
            # Pointers to wrapped types collapse to the wrapper itself
            if isinstance(ty.pointee, PathType):
                name = self.mapper.type_name(str(ty.pointee))
                if name is not None:
                    return name
            qualifier = 'mut' if ty.mutable else 'const'
            return f'*{qualifier} {self.host_type(ty.pointee)}'

        if isinstance(ty, TupleType):
            return f'({", ".join(self.host_type(elem) for elem in ty.elements)})'

        if isinstance(ty, ArrayType):
            return f'[{self.host_type(ty.element)}; {ty.length}]'

        if isinstance(ty, SliceType):
            return f'[{self.host_type(ty.element)}]'

        if isinstance(ty, RefType):
            return str(ty)

        if isinstance(ty, (FnType, NeverType)):
            raise UnrecognizedFieldType(str(ty))

        raise UnrecognizedFieldType(repr(ty))

    def host_type_or_verbatim(self, ty: TypeExpr) -> str:
        """Render ``ty`` as a host type, keeping the foreign text on failure"""
        try:
            return self.host_type(ty)
        except Unrecognized:
            return str(ty)

    def _check_generic_args(self, ty: PathType):
        for segment in ty.segments:
            for arg in segment.args:
                if isinstance(arg, FnType):
                    raise UnrecognizedGenericType(str(ty))
