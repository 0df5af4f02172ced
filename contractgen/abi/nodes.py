"""
Typed data model for contract ABIs.

These dataclasses are produced by the ABI reader and consumed by the code
generators. They carry the raw ABI type tags unchanged; the type system
module is responsible for interpreting them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class MemberKind(Enum):
    """Callable ABI entry kinds that produce client methods."""
    FUNCTION = 'function'
    CONSTRUCTOR = 'constructor'


class Mutability(Enum):
    """Calling convention of a function member."""
    READ_ONLY = 'read_only'
    MUTATING = 'mutating'


READ_ONLY_STATES = ('view', 'pure')
MUTATING_STATES = ('nonpayable', 'payable')


@dataclass
class AbiParameter:
    """One input or output slot of a member, or one field of a tuple."""
    name: str
    type: str  # raw ABI tag, e.g. 'uint256', 'address[]', 'tuple[2]'
    internal_type: str = ''  # solc internalType, e.g. 'struct Lib.Point[]'
    components: Optional[List['AbiParameter']] = None

    @property
    def is_tuple(self) -> bool:
        return self.type == 'tuple' or self.type.startswith('tuple[')

    def canonical_type(self) -> str:
        """Type as it appears in a function signature."""
        if self.is_tuple:
            inner = ','.join(c.canonical_type() for c in (self.components or []))
            return f'({inner}){self.type[len("tuple"):]}'
        return self.type


@dataclass
class AbiMember:
    """A function or constructor entry of the ABI."""
    kind: MemberKind
    name: str = ''
    inputs: List[AbiParameter] = field(default_factory=list)
    outputs: List[AbiParameter] = field(default_factory=list)
    state_mutability: str = 'nonpayable'

    @property
    def mutability(self) -> Optional[Mutability]:
        """ReadOnly/Mutating for functions; constructors have none."""
        if self.kind == MemberKind.CONSTRUCTOR:
            return None
        if self.state_mutability in READ_ONLY_STATES:
            return Mutability.READ_ONLY
        return Mutability.MUTATING

    @property
    def signature(self) -> str:
        """Canonical signature, e.g. 'transfer(address,uint256)'."""
        types = ','.join(p.canonical_type() for p in self.inputs)
        return f'{self.name}({types})'


@dataclass
class CompiledContract:
    """Compiler output for one contract: its name, raw ABI and bytecode."""
    name: str
    abi: List[Dict[str, Any]] = field(default_factory=list)
    bytecode: str = ''
