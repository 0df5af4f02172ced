"""
Import generation for contract client modules.

This module renders the TypeScript import statements for the web3 packages
referenced while the class body was generated.
"""

from typing import List

from .base import BaseGenerator


class ImportGenerator(BaseGenerator):
    """
    Generates TypeScript import statements.

    The ``Web3`` default import is always present since the client class
    holds a Web3 instance. Named imports are emitted only for the types the
    synthesized methods actually used.
    """

    def generate(self) -> str:
        """Generate import statements for the module.

        Returns:
            The import statements, one per line
        """
        opts = self._ctx.options
        lines = [f"import Web3 from '{opts.web3_module}';"]

        fixed_order = list(dict.fromkeys([opts.contract_module, opts.core_module]))
        others = sorted(m for m in self._ctx.imports_used if m not in fixed_order)
        for module in fixed_order + others:
            lines.extend(self._generate_named_import(module))

        return '\n'.join(lines)

    def _generate_named_import(self, module: str) -> List[str]:
        names = self._ctx.imported_names(module)
        if not names:
            return []
        return [f"import {{ {', '.join(names)} }} from '{module}';"]
