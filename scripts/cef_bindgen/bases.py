"""
Base type resolution

Inheritance is encoded structurally: a struct whose only data field is named
``base`` extends the type of that field. This module recovers the hierarchy.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, TYPE_CHECKING

from .errors import CyclicBaseChain

if TYPE_CHECKING:
    from .ir import StructDecl


@dataclass(frozen=True)
class Ancestor:
    """Ancestor struct and the number of ``base`` hops needed to reach it"""
    struct: 'StructDecl'
    depth: int

    def access_path(self, root: str = 'object', base_field: str = 'base') -> str:
        """Field access expression of this ancestor's sub-record"""
        return '.'.join([root] + [base_field] * self.depth)


class BaseTypes:
    """Host struct name -> host name of its parent"""

    def __init__(self, parents: Optional[dict[str, str]] = None):
        self._parents: dict[str, str] = dict(parents or {})

    @classmethod
    def from_structs(cls, structs: Iterable['StructDecl'], base_field: str = 'base') -> 'BaseTypes':
        """Collect parents from structs whose only field is ``base_field``"""
        parents = {}
        for struct in structs:
            if struct.host_name is None:
                continue
            if struct.field_names == [base_field]:
                parents[struct.host_name] = struct.fields[0].type
        return cls(parents)

    def base(self, name: str) -> Optional[str]:
        """Direct parent, if any"""
        return self._parents.get(name)

    def chain(self, name: str) -> list[str]:
        """All ancestors, nearest first, ending with the root

        Raises CyclicBaseChain if a type is reached twice.
        """
        chain: list[str] = []
        seen = {name}
        current = self.base(name)
        while current is not None:
            if current in seen:
                raise CyclicBaseChain([name] + chain + [current])
            seen.add(current)
            chain.append(current)
            current = self.base(current)
        return chain

    def root(self, name: str) -> str:
        """Terminal type of the base chain (``name`` itself without a parent)"""
        chain = self.chain(name)
        return chain[-1] if chain else name

    def ancestors(self, name: str,
                  lookup: Callable[[str], Optional['StructDecl']]) -> list[Ancestor]:
        """Ancestor records from the immediate parent outward, excluding the root"""
        chain = self.chain(name)
        if not chain:
            return []
        root = chain[-1]
        ancestors = []
        for depth, parent in enumerate(chain, start=1):
            if parent == root:
                break
            struct = lookup(parent)
            if struct is None:
                break
            ancestors.append(Ancestor(struct=struct, depth=depth))
        return ancestors
