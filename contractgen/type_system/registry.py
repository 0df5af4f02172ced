"""
Declaration registry for generated TypeScript interfaces.

The DeclarationRegistry collects the record types discovered while mapping a
single contract: struct tuples and multi-value return shapes. Structurally
identical shapes are emitted once, and the registry keeps first-discovered
order so the module renders nested declarations before the ones using them.

A registry belongs to exactly one generation pass and must not be shared
between contracts.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..abi.nodes import AbiParameter
    from ..codegen.diagnostics import GeneratorDiagnostics

from ..errors import InvalidShapeError
from .mappings import map_parameter


@dataclass
class DeclarationField:
    """One property of a generated interface."""
    name: str
    ts_type: str
    optional: bool = False


@dataclass
class Declaration:
    """A named TypeScript interface emitted into the module."""
    name: str
    fields: List[DeclarationField] = field(default_factory=list)
    origin: str = 'struct'  # 'struct' or 'result'

    def signature(self) -> Tuple[Tuple[str, str], ...]:
        """Canonical shape: sorted (field name, type) pairs."""
        return tuple(sorted((f.name, f.ts_type) for f in self.fields))

    def field_type(self, name: str) -> Optional[str]:
        for f in self.fields:
            if f.name == name:
                return f.ts_type
        return None


_ARRAY_SUFFIXES = re.compile(r'(\[\d*\])+$')


class DeclarationRegistry:
    """
    Registry of declarations discovered during one generation pass.

    Tracks:
    - Declarations in discovery order
    - Canonical shape -> declaration, for deduplication
    - Names already taken (including reserved module names)
    """

    def __init__(
        self,
        reserved_names: Optional[Set[str]] = None,
        result_suffix: str = 'Result',
        diagnostics: Optional['GeneratorDiagnostics'] = None,
        contract_name: str = '',
    ):
        self._declarations: List[Declaration] = []
        self._by_signature: Dict[Tuple[Tuple[str, str], ...], Declaration] = {}
        self._taken: Set[str] = set(reserved_names or ())
        self._result_suffix = result_suffix
        self._diagnostics = diagnostics
        self._contract_name = contract_name

    def __iter__(self) -> Iterator[Declaration]:
        return iter(self._declarations)

    def __len__(self) -> int:
        return len(self._declarations)

    def get(self, name: str) -> Optional[Declaration]:
        for decl in self._declarations:
            if decl.name == name:
                return decl
        return None

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    def resolve_compound(self, declared_name: str, components: List['AbiParameter']) -> str:
        """Return the declaration name for a struct tuple, registering it if new.

        Args:
            declared_name: The struct's declared name, e.g. 'struct Lib.Point'
            components: The tuple's fields

        Returns:
            The name of the new or reused declaration
        """
        if not components:
            raise InvalidShapeError(f'Compound "{declared_name}" has no fields')
        # Nested tuples register first so they render before this one
        fields = [
            DeclarationField(c.name, map_parameter(c, self))
            for c in components
        ]
        for i, f in enumerate(fields):
            if not f.name:
                raise InvalidShapeError(f'Field {i} of "{declared_name}" has no name')
        return self._register(self.compound_name(declared_name), fields, 'struct')

    def resolve_return_shape(self, member_name: str, outputs: List['AbiParameter']) -> str:
        """Return the declaration name for a member with two or more outputs."""
        if not member_name:
            raise InvalidShapeError('Return shape requires a member name')
        if len(outputs) < 2:
            raise InvalidShapeError(
                f'Return shape of "{member_name}" needs at least two outputs, got {len(outputs)}'
            )
        fields = [
            DeclarationField(name, map_parameter(o, self, member_name))
            for name, o in zip(self.output_field_names(outputs), outputs)
        ]
        return self._register(self.return_shape_name(member_name), fields, 'result')

    # =========================================================================
    # NAMING
    # =========================================================================

    @staticmethod
    def compound_name(declared_name: str) -> str:
        """'struct Lib.Point[]' -> 'Lib_Point'."""
        name = declared_name.strip()
        if name.startswith('struct '):
            name = name[len('struct '):]
        name = _ARRAY_SUFFIXES.sub('', name).strip()
        if not name:
            raise InvalidShapeError(f'Cannot derive a name from "{declared_name}"')
        return name.replace('.', '_')

    def return_shape_name(self, member_name: str) -> str:
        """'getPair' -> 'GetPairResult'."""
        return f'{member_name[0].upper()}{member_name[1:]}{self._result_suffix}'

    @staticmethod
    def output_field_names(outputs: List['AbiParameter']) -> List[str]:
        """Field names of a return shape, in output order.

        Unnamed outputs become ``value<position>``, moving to the next free
        number when a named output already uses that name.
        """
        taken = {o.name for o in outputs if o.name}
        names = []
        for position, output in enumerate(outputs):
            name = output.name
            if not name:
                index = position
                while f'value{index}' in taken:
                    index += 1
                name = f'value{index}'
                taken.add(name)
            names.append(name)
        return names

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _register(self, requested: str, fields: List[DeclarationField], origin: str) -> str:
        decl = Declaration(requested, fields, origin)
        signature = decl.signature()
        if len({f.name for f in fields}) != len(fields):
            raise InvalidShapeError(f'Declaration "{requested}" has duplicate field names')

        existing = self._by_signature.get(signature)
        if existing is not None:
            return existing.name

        name = requested
        suffix = 2
        while name in self._taken:
            name = f'{requested}_{suffix}'
            suffix += 1
        if name != requested and self._diagnostics is not None:
            self._diagnostics.warn_declaration_renamed(requested, name, self._contract_name)

        decl.name = name
        self._declarations.append(decl)
        self._by_signature[signature] = decl
        self._taken.add(name)
        return name
