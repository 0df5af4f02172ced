"""
Member synthesis for contract client generation.

This module turns each callable ABI member into a method of the generated
client class: constructors become ``deploy``, read-only functions become
``call`` queries and state-mutating functions become ``send`` transactions.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import GenerationContext

from .base import BaseGenerator
from .context import CLASS_MEMBERS
from ..abi.nodes import AbiMember, AbiParameter, MemberKind, Mutability
from ..errors import InvalidShapeError, UnsupportedTypeError
from ..type_system import BIGINT_TYPE, map_parameter, parse_raw_type, RawKind


# Words that cannot be used as parameter names in TypeScript
TS_RESERVED_WORDS: Set[str] = {
    'break', 'case', 'catch', 'class', 'const', 'continue', 'debugger',
    'default', 'delete', 'do', 'else', 'enum', 'export', 'extends', 'false',
    'finally', 'for', 'function', 'if', 'import', 'in', 'instanceof', 'new',
    'null', 'return', 'super', 'switch', 'this', 'throw', 'true', 'try',
    'typeof', 'var', 'void', 'while', 'with', 'yield', 'let', 'static',
    'implements', 'interface', 'package', 'private', 'protected', 'public',
    'await', 'arguments', 'eval',
}

OPTIONS_ARG = 'options'


@dataclass
class Argument:
    """A generated method parameter."""
    name: str
    ts_type: str


class MemberSynthesizer(BaseGenerator):
    """
    Generates client methods from ABI members.

    This class handles:
    - Method naming, including overloaded functions
    - Argument naming (placeholder names for unnamed parameters)
    - Return shapes (void, single value, named result interface)
    - Call, send and deploy method bodies
    """

    def __init__(self, ctx: 'GenerationContext'):
        """
        Initialize the member synthesizer.

        Args:
            ctx: The code generation context
        """
        super().__init__(ctx)
        self._arg_count = 0
        self._method_names: Dict[str, str] = {}
        self._overloaded: Set[str] = set()

    # =========================================================================
    # MAIN ENTRY POINTS
    # =========================================================================

    def synthesize(self, member: AbiMember) -> str:
        """Generate the client method for one member.

        Args:
            member: A function or constructor member

        Returns:
            TypeScript source of the method at the current indentation
        """
        if member.kind == MemberKind.CONSTRUCTOR:
            return self.synthesize_deploy(member)
        return self.synthesize_function(member)

    def synthesize_function(self, member: AbiMember) -> str:
        """Generate a query (read-only) or transaction (mutating) method."""
        args = self.generate_arguments(member.inputs, member.name)
        method = self.method_name(member)
        contract_module = self._ctx.options.contract_module

        if member.mutability == Mutability.READ_ONLY:
            return_type = self.generate_return_type(member)
            self._ctx.use_import(contract_module, 'CallOptions')
            params = self._params_str(args, f'{OPTIONS_ARG}?: CallOptions')
            header = f'{method} = async ({params}): Promise<{return_type}> => {{'
            body = self._generate_call_body(member, return_type, args)
        else:
            # Transactions return no typed values; outputs are only validated
            self._check_parameters(member.outputs, member.name)
            self._ctx.use_import(contract_module, 'SendOptions')
            self._ctx.use_import(self._ctx.options.core_module, 'PromiEvent', 'TransactionReceipt')
            params = self._params_str(args, f'{OPTIONS_ARG}: SendOptions')
            header = f'{method} = ({params}): PromiEvent<TransactionReceipt> => {{'
            body = [self.line(f'return {self._invocation(member, args)}.send({OPTIONS_ARG});', 1)]

        lines = [self.line(header), self.line('this.checkInitialized();', 1)]
        lines.extend(body)
        lines.append(self.line('};'))
        return self.block(lines)

    def synthesize_deploy(self, member: Optional[AbiMember] = None) -> str:
        """Generate ``deploy``; without a constructor member the default form is used."""
        if self._ctx.has_deploy:
            raise InvalidShapeError(f'deploy was already generated for "{self._ctx.contract_name}"')
        args: List[Argument] = []
        if member is not None:
            args = self.generate_arguments(member.inputs, 'constructor')

        self._ctx.use_import(self._ctx.options.contract_module, 'Contract', 'SendOptions')
        self._ctx.has_deploy = True

        params = self._params_str(args, f'{OPTIONS_ARG}: SendOptions')
        if args:
            deploy_args = f'{{ data: this.bytecode, arguments: [{self._names_str(args)}] }}'
        else:
            deploy_args = '{ data: this.bytecode }'

        return self.block([
            self.line(f'deploy = async ({params}): Promise<Contract> => {{'),
            self.line('if (!this.abi || !this.bytecode) {', 1),
            self.line("throw new Error('Abi and Bytecode are required');", 2),
            self.line('}', 1),
            self.line('this.contract = await new this.web3.eth.Contract(this.abi)', 1),
            self.line(f'.deploy({deploy_args})', 2),
            self.line(f'.send({OPTIONS_ARG});', 2),
            self.line('this.address = this.contract.options.address;', 1),
            self.line('return this.contract;', 1),
            self.line('};'),
        ])

    # =========================================================================
    # NAMING
    # =========================================================================

    def plan(self, members: List[AbiMember]) -> None:
        """Assign method names to every function up front.

        The first function with a given name keeps it; later overloads get
        ``<name>_<n>`` and are invoked through their full signature.
        """
        functions = [m for m in members if m.kind == MemberKind.FUNCTION]
        counts = Counter(m.name for m in functions)
        self._overloaded.update(name for name, count in counts.items() if count > 1)

        taken = set(CLASS_MEMBERS) | self._ctx.method_names
        pending = []
        for member in functions:
            if member.signature in self._method_names:
                continue
            base = self._safe_method_name(member.name)
            if base in taken:
                pending.append((member, base))
                continue
            self._assign_method_name(member, base, taken)

        for member, base in pending:
            suffix = 2
            while f'{base}_{suffix}' in taken:
                suffix += 1
            name = f'{base}_{suffix}'
            self._assign_method_name(member, name, taken)
            self._ctx.diagnostics.warn_overload_renamed(member.signature, name, self._ctx.contract_name)

    def method_name(self, member: AbiMember) -> str:
        if member.signature not in self._method_names:
            self.plan([member])
        return self._method_names[member.signature]

    def generate_arguments(self, params: List[AbiParameter], member_name: str = '') -> List[Argument]:
        """Name and type the inputs of one member; placeholder numbering restarts here."""
        self._arg_count = 0
        taken = {OPTIONS_ARG}
        args = []
        for param in params:
            name = self._argument_name(param, taken)
            taken.add(name)
            args.append(Argument(name, map_parameter(param, self.registry, member_name)))
        return args

    def _argument_name(self, param: AbiParameter, taken: Set[str]) -> str:
        name = param.name
        if name.startswith('_'):
            name = name[1:]
        if not name or not name.isidentifier() or name in TS_RESERVED_WORDS or name in taken:
            return self._generate_arg_name(taken)
        return name

    def _generate_arg_name(self, taken: Set[str]) -> str:
        while True:
            name = f'arg{self._arg_count}'
            self._arg_count += 1
            if name not in taken:
                return name

    def _assign_method_name(self, member: AbiMember, name: str, taken: Set[str]) -> None:
        self._method_names[member.signature] = name
        self._ctx.method_names.add(name)
        taken.add(name)

    @staticmethod
    def _safe_method_name(name: str) -> str:
        if name in CLASS_MEMBERS:
            return f'{name}_'
        return name

    # =========================================================================
    # RETURN SHAPES
    # =========================================================================

    def generate_return_type(self, member: AbiMember) -> str:
        """void, the single mapped output type, or a registered result interface."""
        outputs = member.outputs
        if not outputs:
            return 'void'
        if len(outputs) == 1:
            return map_parameter(outputs[0], self.registry, member.name)
        return self.registry.resolve_return_shape(member.name, outputs)

    def _check_parameters(self, params: List[AbiParameter], member_name: str) -> None:
        """Validate types without registering declarations."""
        for param in params:
            try:
                raw = parse_raw_type(param.type)
            except UnsupportedTypeError as e:
                e.locate(member_name, param.name)
                raise
            if raw.kind == RawKind.TUPLE:
                if not param.components:
                    raise InvalidShapeError(
                        f'Tuple "{param.name}" of "{member_name}" has no components definition'
                    )
                self._check_parameters(param.components, member_name)

    # =========================================================================
    # BODIES
    # =========================================================================

    def _generate_call_body(self, member: AbiMember, return_type: str, args: List[Argument]) -> List[str]:
        call = f'await {self._invocation(member, args)}.call({OPTIONS_ARG});'
        outputs = member.outputs

        if not outputs:
            return [self.line(call, 1)]

        if len(outputs) == 1:
            return [
                self.line(f'const result = {call}', 1),
                self.line(f'return {self.convert_result("result", return_type)};', 1),
            ]

        # Results are positional; fields are assigned in output order
        shape = self.registry.get(return_type)
        if shape is None:
            raise InvalidShapeError(f'Return shape "{return_type}" of "{member.name}" is not registered')
        lines = [
            self.line(f'const resultArr: any = {call}', 1),
            self.line('return {', 1),
        ]
        field_names = self.registry.output_field_names(outputs)
        for index, field_name in enumerate(field_names):
            value = self.convert_result(f'resultArr[{index}]', shape.field_type(field_name) or 'any')
            lines.append(self.line(f'{field_name}: {value},', 2))
        lines.append(self.line('};', 1))
        return lines

    def convert_result(self, expr: str, ts_type: str, depth: int = 0) -> str:
        """Convert a raw web3 value to ``bigint`` where the declared type needs it.

        Arrays are mapped element-wise and struct declarations are rebuilt
        field by field, so integers at any nesting depth are converted.
        """
        if not self._needs_conversion(ts_type):
            return expr
        if ts_type == BIGINT_TYPE:
            return f'BigInt({expr})'
        if ts_type.endswith('[]'):
            var = 'e' if depth == 0 else f'e{depth}'
            inner = self.convert_result(var, ts_type[:-2], depth + 1)
            if inner.startswith('{'):
                inner = f'({inner})'
            return f'{expr}.map(({var}: any) => {inner})'
        decl = self.registry.get(ts_type)
        fields = [f'{f.name}: {self.convert_result(f"{expr}.{f.name}", f.ts_type, depth)}' for f in decl.fields]
        return f'{{ {", ".join(fields)} }}'

    def _needs_conversion(self, ts_type: str) -> bool:
        if ts_type == BIGINT_TYPE:
            return True
        if ts_type.endswith('[]'):
            return self._needs_conversion(ts_type[:-2])
        decl = self.registry.get(ts_type)
        if decl is None:
            return False
        return any(self._needs_conversion(f.ts_type) for f in decl.fields)

    def _invocation(self, member: AbiMember, args: List[Argument]) -> str:
        if member.name in self._overloaded:
            accessor = f"['{member.signature}']"
        else:
            accessor = f'.{member.name}'
        return f'this.contract!.methods{accessor}({self._names_str(args)})'

    @staticmethod
    def _names_str(args: List[Argument]) -> str:
        return ', '.join(a.name for a in args)

    @staticmethod
    def _params_str(args: List[Argument], options_param: str) -> str:
        params = [f'{a.name}: {a.ts_type}' for a in args]
        params.append(options_param)
        return ', '.join(params)
