"""
Definition generation for contract client modules.

This module renders the TypeScript interfaces of a module: the fixed
``ContractInfo`` descriptor and every declaration collected by the registry
(struct tuples and multi-value results).
"""

from typing import List

from .base import BaseGenerator
from .context import CONTRACT_INFO_NAME
from ..type_system import Declaration, DeclarationField


CONTRACT_INFO = Declaration(
    CONTRACT_INFO_NAME,
    [
        DeclarationField('abi', 'any'),
        DeclarationField('bytecode', 'string', optional=True),
        DeclarationField('address', 'string', optional=True),
    ],
    origin='builtin',
)


class DefinitionGenerator(BaseGenerator):
    """
    Generates TypeScript interfaces.

    This class handles:
    - The ContractInfo descriptor accepted by the client constructor
    - Struct and result declarations, in discovery order
    """

    def generate_declaration(self, decl: Declaration) -> str:
        """Generate an exported TypeScript interface.

        Args:
            decl: The declaration to render

        Returns:
            TypeScript interface code
        """
        lines = [f'export interface {decl.name} {{']
        for f in decl.fields:
            optional = '?' if f.optional else ''
            lines.append(f'{self._ctx.indent(1)}{f.name}{optional}: {f.ts_type};')
        lines.append('}')
        return '\n'.join(lines)

    def generate_all(self) -> str:
        """Generate ContractInfo followed by every registered declaration."""
        decls: List[Declaration] = [CONTRACT_INFO]
        decls.extend(self.registry)
        return '\n\n'.join(self.generate_declaration(d) for d in decls)
