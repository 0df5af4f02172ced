"""
Client class generation.

This module generates the ``export default class <Name>Contract`` body: the
fixed fields, constructor, initialization guard and balance query, followed by
one method per ABI member and exactly one ``deploy`` method.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import GenerationContext
    from .member import MemberSynthesizer

from .base import BaseGenerator
from .context import CONTRACT_INFO_NAME
from ..abi.nodes import AbiMember, MemberKind


class ContractGenerator(BaseGenerator):
    """
    Generates the client class of a module.

    This class handles:
    - Class fields and constructor
    - The idempotent checkInitialized guard
    - The balance query
    - Member methods, delegated to the MemberSynthesizer
    - The explicit or default deploy method
    """

    def __init__(self, ctx: 'GenerationContext', member_synthesizer: 'MemberSynthesizer'):
        """
        Initialize the contract generator.

        Args:
            ctx: The code generation context
            member_synthesizer: Generator for per-member methods
        """
        super().__init__(ctx)
        self._members = member_synthesizer

    def generate_class(self, members: List[AbiMember]) -> str:
        """Generate the client class.

        Args:
            members: Callable ABI members in declaration order

        Returns:
            TypeScript code for the class
        """
        self._ctx.use_import(self._ctx.options.contract_module, 'Contract')
        self._members.plan(members)

        saved_level = self.indent_level
        self.indent_level = 1
        try:
            parts = [
                self._generate_fields(),
                self._generate_constructor(),
                self._generate_check_initialized(),
                self._generate_balance(),
            ]

            constructor: Optional[AbiMember] = None
            for member in members:
                if member.kind == MemberKind.CONSTRUCTOR:
                    constructor = member
                    continue
                parts.append(self._members.synthesize(member))

            if constructor is None:
                self._ctx.diagnostics.info_default_deploy(self._ctx.contract_name)
            parts.append(self._members.synthesize_deploy(constructor))
        finally:
            self.indent_level = saved_level

        body = '\n\n'.join(parts)
        return f'export default class {self._ctx.class_name} {{\n{body}\n}}'

    # =========================================================================
    # FIXED CLASS SURFACE
    # =========================================================================

    def _generate_fields(self) -> str:
        return self.block([
            self.line('private web3: Web3;'),
            self.line('private contract: Contract | undefined;'),
            self.line('private abi: any | undefined;'),
            self.line('private address: string | undefined;'),
            self.line('private bytecode: string | undefined;'),
        ])

    def _generate_constructor(self) -> str:
        return self.block([
            self.line(f'constructor(web3: Web3, contractInfo?: {CONTRACT_INFO_NAME}) {{'),
            self.line('this.web3 = web3;', 1),
            self.line('this.abi = contractInfo?.abi;', 1),
            self.line('this.address = contractInfo?.address;', 1),
            self.line('this.bytecode = contractInfo?.bytecode;', 1),
            self.line('}'),
        ])

    def _generate_check_initialized(self) -> str:
        return self.block([
            self.line('private checkInitialized = () => {'),
            self.line('if (!this.contract) {', 1),
            self.line('if (!this.abi || !this.address) {', 2),
            self.line("throw new Error('Abi and Address are required');", 3),
            self.line('}', 2),
            self.line('this.contract = new this.web3.eth.Contract(this.abi, this.address);', 2),
            self.line('}', 1),
            self.line('};'),
        ])

    def _generate_balance(self) -> str:
        return self.block([
            self.line('balance = async (): Promise<bigint> => {'),
            self.line('this.checkInitialized();', 1),
            self.line('const result = await this.web3.eth.getBalance(this.contract!.options.address);', 1),
            self.line('return BigInt(result);', 1),
            self.line('};'),
        ])
