"""
Types module for the contract client generator.

This module provides ABI type parsing, the TypeScript type mapping and the
per-pass declaration registry.
"""

from .registry import DeclarationRegistry, Declaration, DeclarationField
from .mappings import (
    RawKind,
    RawType,
    parse_raw_type,
    map_type,
    map_parameter,
    compound_declared_name,
    BIGINT_TYPE,
    PRIMITIVE_TS_TYPES,
)

__all__ = [
    'DeclarationRegistry',
    'Declaration',
    'DeclarationField',
    'RawKind',
    'RawType',
    'parse_raw_type',
    'map_type',
    'map_parameter',
    'compound_declared_name',
    'BIGINT_TYPE',
    'PRIMITIVE_TS_TYPES',
]
