"""
ABI module for the contract client generator.

This module provides the typed ABI data model and the reader that builds it.
"""

from .nodes import (
    AbiMember,
    AbiParameter,
    CompiledContract,
    MemberKind,
    Mutability,
    READ_ONLY_STATES,
    MUTATING_STATES,
)
from .reader import AbiReader, read_abi

__all__ = [
    'AbiMember',
    'AbiParameter',
    'CompiledContract',
    'MemberKind',
    'Mutability',
    'READ_ONLY_STATES',
    'MUTATING_STATES',
    'AbiReader',
    'read_abi',
]
