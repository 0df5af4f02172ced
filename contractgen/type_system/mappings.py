"""
Type mappings from ABI type tags to TypeScript.

This module parses raw ABI type tags into a closed set of kinds and maps each
kind to its TypeScript equivalent. Integer types of every width map to
``bigint`` so values above 2^53 survive the round trip. Tuple types are
resolved through the declaration registry into named interfaces.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from ..abi.nodes import AbiParameter
    from .registry import DeclarationRegistry

from ..errors import InvalidShapeError, UnsupportedTypeError


# =============================================================================
# RAW TYPES
# =============================================================================

class RawKind(Enum):
    """Every ABI base type the generator knows how to map."""
    BOOL = auto()
    BYTES = auto()
    FIXED_BYTES = auto()
    UINT = auto()
    INT = auto()
    STRING = auto()
    ADDRESS = auto()
    TUPLE = auto()


@dataclass(frozen=True)
class RawType:
    """A parsed ABI type tag.

    ``dims`` holds one entry per array suffix in written order: ``None`` for
    a dynamic ``[]`` and the length for a fixed ``[N]``.
    """
    kind: RawKind
    bits: Optional[int] = None  # integer width
    size: Optional[int] = None  # bytesN length
    dims: Tuple[Optional[int], ...] = ()

    @property
    def is_array(self) -> bool:
        return bool(self.dims)

    def __str__(self) -> str:
        if self.kind in (RawKind.UINT, RawKind.INT):
            base = f'{self.kind.name.lower()}{self.bits}'
        elif self.kind == RawKind.FIXED_BYTES:
            base = f'bytes{self.size}'
        else:
            base = self.kind.name.lower()
        return base + ''.join(f'[{d}]' if d is not None else '[]' for d in self.dims)


_ARRAY_SUFFIX = re.compile(r'\[(\d*)\]$')
_INTEGER = re.compile(r'^(u?int)(\d*)$')
_FIXED_BYTES = re.compile(r'^bytes(\d+)$')

_SIMPLE_KINDS: Dict[str, RawKind] = {
    'bool': RawKind.BOOL,
    'bytes': RawKind.BYTES,
    'string': RawKind.STRING,
    'address': RawKind.ADDRESS,
    'tuple': RawKind.TUPLE,
}


def parse_raw_type(tag: str) -> RawType:
    """
    Parse an ABI type tag such as ``uint256``, ``bytes32[]`` or ``tuple[2]``.

    Raises:
        UnsupportedTypeError: if the tag is outside the supported set
    """
    base = tag.strip()
    dims = []
    while True:
        match = _ARRAY_SUFFIX.search(base)
        if not match:
            break
        length = match.group(1)
        if length and int(length) == 0:
            raise UnsupportedTypeError(tag)
        dims.insert(0, int(length) if length else None)
        base = base[:match.start()]

    if base in _SIMPLE_KINDS:
        return RawType(_SIMPLE_KINDS[base], dims=tuple(dims))

    match = _INTEGER.match(base)
    if match:
        bits = int(match.group(2)) if match.group(2) else 256
        if bits < 8 or bits > 256 or bits % 8:
            raise UnsupportedTypeError(tag)
        kind = RawKind.UINT if match.group(1) == 'uint' else RawKind.INT
        return RawType(kind, bits=bits, dims=tuple(dims))

    match = _FIXED_BYTES.match(base)
    if match:
        size = int(match.group(1))
        if size < 1 or size > 32:
            raise UnsupportedTypeError(tag)
        return RawType(RawKind.FIXED_BYTES, size=size, dims=tuple(dims))

    raise UnsupportedTypeError(tag)


# =============================================================================
# TYPE MAPPING CONSTANTS
# =============================================================================

BIGINT_TYPE = 'bigint'

PRIMITIVE_TS_TYPES: Dict[RawKind, str] = {
    RawKind.BOOL: 'boolean',
    RawKind.BYTES: 'string',
    RawKind.FIXED_BYTES: 'string',
    RawKind.UINT: BIGINT_TYPE,
    RawKind.INT: BIGINT_TYPE,
    RawKind.STRING: 'string',
    RawKind.ADDRESS: 'string',
}


# =============================================================================
# TYPE CONVERSION FUNCTIONS
# =============================================================================

def map_type(
    raw_type: Union[str, RawType],
    param: Optional['AbiParameter'] = None,
    registry: Optional['DeclarationRegistry'] = None,
) -> str:
    """
    Map an ABI type to its TypeScript equivalent.

    Args:
        raw_type: The raw tag or an already parsed RawType
        param: The parameter carrying tuple components (tuples only)
        registry: Registry receiving tuple declarations (tuples only)

    Returns:
        The TypeScript type string

    Raises:
        UnsupportedTypeError: for tags outside the supported set
        InvalidShapeError: for tuples missing their components or context
    """
    if isinstance(raw_type, str):
        raw_type = parse_raw_type(raw_type)

    if raw_type.kind == RawKind.TUPLE:
        base = _map_compound(param, registry)
    else:
        base = PRIMITIVE_TS_TYPES[raw_type.kind]
    return base + '[]' * len(raw_type.dims)


def map_parameter(
    param: 'AbiParameter',
    registry: Optional['DeclarationRegistry'] = None,
    member: str = '',
) -> str:
    """Map a parameter, tagging unsupported types with where they occurred."""
    try:
        return map_type(param.type, param, registry)
    except UnsupportedTypeError as e:
        e.locate(member, param.name)
        raise


def _map_compound(param: Optional['AbiParameter'], registry: Optional['DeclarationRegistry']) -> str:
    if param is None:
        raise InvalidShapeError('Tuple type without parameter information')
    if not param.components:
        raise InvalidShapeError(f'Tuple "{param.name}" has no components definition')
    if registry is None:
        raise InvalidShapeError(f'Tuple "{param.name}" needs a declaration registry')
    return registry.resolve_compound(compound_declared_name(param), param.components)


def compound_declared_name(param: 'AbiParameter') -> str:
    """The declared struct name of a tuple parameter.

    solc records it in internalType ('struct Lib.Point[]'). Hand-written ABIs
    often omit it, in which case the parameter name is used.
    """
    if param.internal_type.startswith('struct '):
        return param.internal_type
    if param.name:
        name = param.name.lstrip('_')
        if name:
            return f'{name[0].upper()}{name[1:]}Struct'
    raise InvalidShapeError('Tuple without internalType or name cannot be named')
