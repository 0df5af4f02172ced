"""
ABI to TypeScript Client Generator

This package generates typed web3.js client modules from compiled smart
contract ABIs.

Module Structure:
- abi/: ABI data model and reader (AbiMember, AbiParameter, AbiReader)
- type_system/: Type parsing, TypeScript mappings and the declaration registry
- codegen/: Client generation (MemberSynthesizer, ModuleAssembler, packagers)
- compiler/: Solidity compilation (py-solc-x) and artifact loading
- abi2ts.py: Orchestration and the command line interface

Usage:
    from contractgen import CompiledContract, generate

    result = generate(CompiledContract('Token', abi, bytecode))
    print(result.ts_source)
"""

from .abi import AbiMember, AbiParameter, AbiReader, CompiledContract
from .abi2ts import GenerationResult, generate, generate_all, load_contracts
from .config import GeneratorOptions
from .errors import CompilationFailure, GeneratorError, InvalidShapeError, UnsupportedTypeError

__all__ = [
    'AbiMember',
    'AbiParameter',
    'AbiReader',
    'CompiledContract',
    'GenerationResult',
    'generate',
    'generate_all',
    'load_contracts',
    'GeneratorOptions',
    'CompilationFailure',
    'GeneratorError',
    'InvalidShapeError',
    'UnsupportedTypeError',
]
