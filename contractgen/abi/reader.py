"""
ABI reader.

Turns the JSON-like ABI produced by the compiler (a list of dicts) into
``AbiMember``/``AbiParameter`` nodes. Entries that never produce a client
method (events, errors, fallback and receive) are skipped and reported;
anything structurally malformed raises ``InvalidShapeError``.
"""

from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..codegen.diagnostics import GeneratorDiagnostics

from ..errors import InvalidShapeError
from .nodes import (
    AbiMember,
    AbiParameter,
    MemberKind,
    READ_ONLY_STATES,
    MUTATING_STATES,
)


SKIPPED_ENTRY_TYPES = ('event', 'error', 'fallback', 'receive')


class AbiReader:
    """
    Reads a raw ABI into typed member nodes.

    Usage:
        reader = AbiReader(diagnostics)
        members = reader.read(contract.abi)
    """

    def __init__(self, diagnostics: Optional['GeneratorDiagnostics'] = None, contract_name: str = ''):
        self._diagnostics = diagnostics
        self._contract_name = contract_name

    def read(self, abi: Any) -> List[AbiMember]:
        """Read every callable entry of ``abi`` in declaration order."""
        if not isinstance(abi, list):
            raise InvalidShapeError(f'ABI must be a list of entries, got {type(abi).__name__}')

        members: List[AbiMember] = []
        seen_signatures = set()
        has_constructor = False
        for index, entry in enumerate(abi):
            if not isinstance(entry, dict):
                raise InvalidShapeError(f'ABI entry {index} must be an object')

            entry_type = entry.get('type', 'function')
            if entry_type in SKIPPED_ENTRY_TYPES:
                if self._diagnostics is not None:
                    self._diagnostics.warn_member_skipped(
                        entry_type, entry.get('name', ''), self._contract_name
                    )
                continue

            member = self.read_member(entry, index)
            if member.kind == MemberKind.CONSTRUCTOR:
                if has_constructor:
                    raise InvalidShapeError('ABI declares more than one constructor')
                has_constructor = True
            else:
                if member.signature in seen_signatures:
                    raise InvalidShapeError(f'Duplicate function signature {member.signature}')
                seen_signatures.add(member.signature)
            members.append(member)
        return members

    def read_member(self, entry: Dict[str, Any], index: int = 0) -> AbiMember:
        """Read a single function or constructor entry."""
        entry_type = entry.get('type', 'function')
        try:
            kind = MemberKind(entry_type)
        except ValueError:
            raise InvalidShapeError(f'Unsupported ABI entry type "{entry_type}" at index {index}') from None

        name = entry.get('name', '')
        if not isinstance(name, str):
            raise InvalidShapeError(f'ABI entry {index} has a non-string name')
        if kind == MemberKind.FUNCTION and not name:
            raise InvalidShapeError(f'Function at index {index} has no name')

        inputs = self.read_parameters(entry.get('inputs'), name or 'constructor')
        outputs: List[AbiParameter] = []
        if kind == MemberKind.FUNCTION:
            outputs = self.read_parameters(entry.get('outputs'), name)

        return AbiMember(
            kind=kind,
            name=name if kind == MemberKind.FUNCTION else '',
            inputs=inputs,
            outputs=outputs,
            state_mutability=self._read_state_mutability(entry, name or 'constructor'),
        )

    def read_parameters(self, params: Any, owner: str) -> List[AbiParameter]:
        """Read an ``inputs``/``outputs``/``components`` list."""
        if params is None:
            return []
        if not isinstance(params, list):
            raise InvalidShapeError(f'Parameters of "{owner}" must be a list')
        return [self._read_parameter(p, owner, i) for i, p in enumerate(params)]

    def _read_parameter(self, param: Any, owner: str, index: int) -> AbiParameter:
        if not isinstance(param, dict):
            raise InvalidShapeError(f'Parameter {index} of "{owner}" must be an object')

        raw_type = param.get('type')
        if not isinstance(raw_type, str) or not raw_type:
            raise InvalidShapeError(f'Parameter {index} of "{owner}" has no type')

        name = param.get('name') or ''
        internal_type = param.get('internalType') or ''
        components = None
        if 'components' in param:
            components = self.read_parameters(param['components'], f'{owner}.{name or index}')

        return AbiParameter(
            name=str(name),
            type=raw_type.strip(),
            internal_type=str(internal_type),
            components=components,
        )

    def _read_state_mutability(self, entry: Dict[str, Any], owner: str) -> str:
        state = entry.get('stateMutability')
        if state is None:
            # Pre-0.5 ABIs only carry the constant/payable flags
            if entry.get('constant'):
                return 'view'
            if entry.get('payable'):
                return 'payable'
            return 'nonpayable'
        if state not in READ_ONLY_STATES + MUTATING_STATES:
            raise InvalidShapeError(f'Unknown stateMutability "{state}" on "{owner}"')
        return state


def read_abi(abi: Any, diagnostics: Optional['GeneratorDiagnostics'] = None) -> List[AbiMember]:
    """Convenience wrapper around ``AbiReader.read``."""
    return AbiReader(diagnostics).read(abi)
