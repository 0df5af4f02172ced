"""
Code generation context for one contract.

This module provides a context class that holds all state needed during a
single generation pass, separating state management from the generation
logic. A fresh context is built for every contract.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from ..config import GeneratorOptions
from ..type_system import DeclarationRegistry
from .diagnostics import GeneratorDiagnostics


CONTRACT_INFO_NAME = 'ContractInfo'

# Members every generated client class defines itself
CLASS_MEMBERS: Set[str] = {
    'web3', 'contract', 'abi', 'address', 'bytecode',
    'constructor', 'checkInitialized', 'balance', 'deploy',
}

# Type names the emitted module refers to: web3 imports and the globals
# used in method signatures and bodies
MODULE_TYPE_NAMES: Set[str] = {
    'Web3', 'Contract', 'SendOptions', 'CallOptions', 'PromiEvent', 'TransactionReceipt',
    'Promise', 'BigInt', 'Error', 'Array', 'Object', 'String', 'Number', 'Boolean',
}


@dataclass
class GenerationContext:
    """
    Holds all state needed while generating one client module.
    """

    contract_name: str = ''
    options: GeneratorOptions = field(default_factory=GeneratorOptions)

    # Indentation state
    indent_level: int = 0

    # Import tracking: module specifier -> imported names
    imports_used: Dict[str, Set[str]] = field(default_factory=dict)

    # Method names already assigned on the client class
    method_names: Set[str] = field(default_factory=set)

    has_deploy: bool = False

    _registry: Optional[DeclarationRegistry] = None
    _diagnostics: Optional[GeneratorDiagnostics] = None

    @property
    def class_name(self) -> str:
        return f'{self.contract_name}{self.options.class_suffix}'

    @property
    def diagnostics(self) -> GeneratorDiagnostics:
        """Get the diagnostics collector, creating one if needed."""
        if self._diagnostics is None:
            self._diagnostics = GeneratorDiagnostics()
        return self._diagnostics

    @property
    def registry(self) -> DeclarationRegistry:
        """Get the declaration registry for this pass, creating it on first use."""
        if self._registry is None:
            self._registry = DeclarationRegistry(
                reserved_names={CONTRACT_INFO_NAME, self.class_name} | MODULE_TYPE_NAMES,
                result_suffix=self.options.result_suffix,
                diagnostics=self.diagnostics,
                contract_name=self.contract_name,
            )
        return self._registry

    def indent(self, level: Optional[int] = None) -> str:
        """Return the indentation string for ``level`` (default: current level)."""
        if level is None:
            level = self.indent_level
        return self.options.indent_str * level

    def use_import(self, module: str, *names: str) -> None:
        """Record that the module needs ``names`` from ``module``."""
        self.imports_used.setdefault(module, set()).update(names)

    def imported_names(self, module: str) -> List[str]:
        return sorted(self.imports_used.get(module, ()))
