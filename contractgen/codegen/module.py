"""
Module assembly.

The ModuleAssembler drives one generation pass: it synthesizes the client
class first (which discovers declarations and imports as a side effect), then
renders the sections in their fixed order:

    header, imports, declarations, client class

Empty sections are dropped without leaving blank separators.
"""

from typing import List, Optional

from .context import GenerationContext
from .contract import ContractGenerator
from .definition import DefinitionGenerator
from .imports import ImportGenerator
from .member import MemberSynthesizer
from ..abi.nodes import AbiMember
from ..config import GeneratorOptions
from .diagnostics import GeneratorDiagnostics


class ModuleAssembler:
    """
    Assembles a complete client module for one contract.

    Instances are single-use: the context (declaration registry, argument
    counter, method names) belongs to one pass.
    """

    def __init__(self, ctx: GenerationContext):
        self._ctx = ctx
        self._members = MemberSynthesizer(ctx)
        self._contract = ContractGenerator(ctx, self._members)
        self._definitions = DefinitionGenerator(ctx)
        self._imports = ImportGenerator(ctx)
        self._used = False

    @property
    def context(self) -> GenerationContext:
        return self._ctx

    def assemble(self, module_name: str, members: List[AbiMember]) -> str:
        """Generate the module text.

        Args:
            module_name: Contract name; the class is named ``<module_name>Contract``
            members: Callable members in ABI order

        Returns:
            The module source, ending with a single newline
        """
        if self._used:
            raise RuntimeError('ModuleAssembler is single-use; create one per contract')
        self._used = True
        if module_name:
            self._ctx.contract_name = module_name

        class_text = self._contract.generate_class(members)
        sections = [
            self._ctx.options.header.strip(),
            self._imports.generate(),
            self._definitions.generate_all(),
            class_text,
        ]
        return '\n\n'.join(s for s in sections if s) + '\n'


def assemble_module(
    module_name: str,
    members: List[AbiMember],
    options: Optional[GeneratorOptions] = None,
    diagnostics: Optional[GeneratorDiagnostics] = None,
) -> str:
    """Run one pass with a freshly built context."""
    ctx = GenerationContext(
        contract_name=module_name,
        options=options or GeneratorOptions(),
        _diagnostics=diagnostics,
    )
    return ModuleAssembler(ctx).assemble(module_name, members)
