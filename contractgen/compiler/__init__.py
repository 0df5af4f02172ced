"""
Contract inputs: Solidity compilation and precompiled artifact loading.
"""

from .solc import build_standard_input, compile_source, compile_file, contracts_from_output
from .artifacts import load_artifact, parse_artifact

__all__ = [
    'build_standard_input',
    'compile_source',
    'compile_file',
    'contracts_from_output',
    'load_artifact',
    'parse_artifact',
]
