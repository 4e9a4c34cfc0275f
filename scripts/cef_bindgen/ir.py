"""
IR (Intermediate Representation) module

Declarations recovered from a bindgen-generated Rust file. The IR is built
once by ``DeclarationParser`` and only read afterwards.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from .bases import BaseTypes
from .errors import ParseFailure

if TYPE_CHECKING:
    from .parser import DeclarationParser


@dataclass(frozen=True)
class TypeAlias:
    """``pub type name = target;``"""
    name: str
    target: str


@dataclass(frozen=True)
class FieldDecl:
    """Plain data member of a struct"""
    name: str
    host_name: str
    type: str


@dataclass(frozen=True)
class Argument:
    """Function or vtable slot argument

    ``foreign_type`` is the exact declared type, used where generated code
    has to match the C ABI signature.
    """
    name: str
    host_name: str
    type: str
    foreign_type: str


@dataclass(frozen=True)
class MethodDecl:
    """One vtable slot; the first argument is the receiver"""
    name: str
    args: tuple[Argument, ...] = ()
    output: Optional[str] = None
    foreign_output: Optional[str] = None
    original_name: Optional[str] = None

    @property
    def receiver(self) -> Optional[Argument]:
        return self.args[0] if self.args else None

    @property
    def forwarded_args(self) -> tuple[Argument, ...]:
        return self.args[1:]


@dataclass(frozen=True)
class StructDecl:
    """Struct with named fields, split into data fields and vtable slots"""
    name: str
    host_name: Optional[str] = None
    fields: tuple[FieldDecl, ...] = ()
    methods: tuple[MethodDecl, ...] = ()

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


@dataclass(frozen=True)
class EnumDecl:
    """Enum, or single-field tuple struct emitted the same way"""
    name: str


@dataclass(frozen=True)
class GlobalFnDecl:
    """Function declared in the ``unsafe extern "C"`` block"""
    name: str
    args: tuple[Argument, ...] = ()
    output: Optional[str] = None
    foreign_output: Optional[str] = None
    original_name: Optional[str] = None

    @property
    def symbol(self) -> str:
        """Name of the foreign function to call"""
        return self.original_name or self.name


@dataclass(frozen=True)
class IR:
    """Intermediate representation of one declaration file"""
    aliases: tuple[TypeAlias, ...] = ()
    structs: tuple[StructDecl, ...] = ()
    enums: tuple[EnumDecl, ...] = ()
    globals: tuple[GlobalFnDecl, ...] = ()
    base_types: BaseTypes = field(default_factory=BaseTypes)
    _by_host_name: dict[str, StructDecl] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        by_host_name = {s.host_name: s for s in self.structs if s.host_name is not None}
        object.__setattr__(self, '_by_host_name', by_host_name)

    @classmethod
    def load(cls, path: str, parser: 'DeclarationParser') -> 'IR':
        """Load IR from a declaration file"""
        try:
            source = Path(path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ParseFailure(e, str(path)) from e
        return parser.parse(source, source_name=str(path))

    def get_struct(self, host_name: str) -> Optional[StructDecl]:
        """Get struct by host name"""
        return self._by_host_name.get(host_name)
