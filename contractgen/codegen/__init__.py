"""
Code generation module for the ABI to TypeScript generator.

This module provides TypeScript client generation from parsed ABI members.
"""

from .context import GenerationContext, CONTRACT_INFO_NAME, CLASS_MEMBERS, MODULE_TYPE_NAMES
from .base import BaseGenerator
from .member import MemberSynthesizer, Argument
from .definition import DefinitionGenerator
from .imports import ImportGenerator
from .contract import ContractGenerator
from .module import ModuleAssembler, assemble_module
from .artifacts import package_abi, package_bytecode
from .diagnostics import GeneratorDiagnostics, Diagnostic, DiagnosticSeverity

__all__ = [
    'GenerationContext',
    'CONTRACT_INFO_NAME',
    'CLASS_MEMBERS',
    'MODULE_TYPE_NAMES',
    'BaseGenerator',
    'MemberSynthesizer',
    'Argument',
    'DefinitionGenerator',
    'ImportGenerator',
    'ContractGenerator',
    'ModuleAssembler',
    'assemble_module',
    'package_abi',
    'package_bytecode',
    'GeneratorDiagnostics',
    'Diagnostic',
    'DiagnosticSeverity',
]
