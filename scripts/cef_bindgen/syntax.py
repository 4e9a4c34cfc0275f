"""
Syntax tree types

Type expressions as they appear in the declaration file. ``str()`` of any
node renders it back into canonical Rust source text, which is kept verbatim
wherever generated code must use the exact foreign type.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class PathSegment:
    name: str
    args: tuple[Union['TypeExpr', str], ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f'{self.name}<{", ".join(str(arg) for arg in self.args)}>'


@dataclass(frozen=True)
class PathType:
    """Type path such as ``::std::os::raw::c_int`` or ``Option<T>``"""
    segments: tuple[PathSegment, ...]
    is_global: bool = False

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(segment.name for segment in self.segments)

    @property
    def has_generics(self) -> bool:
        return any(segment.args for segment in self.segments)

    def __str__(self) -> str:
        text = '::'.join(str(segment) for segment in self.segments)
        return f'::{text}' if self.is_global else text


@dataclass(frozen=True)
class PointerType:
    pointee: 'TypeExpr'
    mutable: bool

    def __str__(self) -> str:
        qualifier = 'mut' if self.mutable else 'const'
        return f'*{qualifier} {self.pointee}'


@dataclass(frozen=True)
class ArrayType:
    element: 'TypeExpr'
    length: str

    def __str__(self) -> str:
        return f'[{self.element}; {self.length}]'


@dataclass(frozen=True)
class SliceType:
    element: 'TypeExpr'

    def __str__(self) -> str:
        return f'[{self.element}]'


@dataclass(frozen=True)
class TupleType:
    elements: tuple['TypeExpr', ...] = ()

    def __str__(self) -> str:
        return f'({", ".join(str(elem) for elem in self.elements)})'


@dataclass(frozen=True)
class FnParam:
    type: 'TypeExpr'
    name: Optional[str] = None

    def __str__(self) -> str:
        if self.name is None:
            return str(self.type)
        return f'{self.name}: {self.type}'


@dataclass(frozen=True)
class FnType:
    """Bare function pointer type"""
    params: tuple[FnParam, ...] = ()
    output: Optional['TypeExpr'] = None
    is_unsafe: bool = False
    abi: Optional[str] = None
    is_variadic: bool = False

    def __str__(self) -> str:
        prefix = ''
        if self.is_unsafe:
            prefix += 'unsafe '
        if self.abi is not None:
            prefix += f'extern "{self.abi}" '
        params = [str(param) for param in self.params]
        if self.is_variadic:
            params.append('...')
        output = f' -> {self.output}' if self.output is not None else ''
        return f'{prefix}fn({", ".join(params)}){output}'


@dataclass(frozen=True)
class NeverType:
    def __str__(self) -> str:
        return '!'


@dataclass(frozen=True)
class RefType:
    referent: 'TypeExpr'
    mutable: bool = False
    lifetime: Optional[str] = None

    def __str__(self) -> str:
        text = '&'
        if self.lifetime:
            text += f'{self.lifetime} '
        if self.mutable:
            text += 'mut '
        return text + str(self.referent)


TypeExpr = Union[PathType, PointerType, ArrayType, SliceType, TupleType,
                 FnType, NeverType, RefType]


@dataclass(frozen=True)
class Field:
    """Named struct field before classification"""
    name: str
    type: TypeExpr
