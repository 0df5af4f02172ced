#!/usr/bin/env python3
"""
Unit tests for client method synthesis and module assembly.

Run with: python3 -m pytest contractgen/test_codegen.py
"""

import unittest

from contractgen.abi import AbiMember, AbiParameter, MemberKind
from contractgen.codegen import (
    GenerationContext,
    GeneratorDiagnostics,
    MemberSynthesizer,
    ModuleAssembler,
    assemble_module,
    package_abi,
    package_bytecode,
)
from contractgen.config import GeneratorOptions
from contractgen.errors import InvalidShapeError, UnsupportedTypeError


def p(name, type_, internal_type='', components=None):
    return AbiParameter(name, type_, internal_type, components)


def view(name, inputs=None, outputs=None):
    return AbiMember(MemberKind.FUNCTION, name, inputs or [], outputs or [], 'view')


def send(name, inputs=None, outputs=None, state='nonpayable'):
    return AbiMember(MemberKind.FUNCTION, name, inputs or [], outputs or [], state)


def constructor(inputs=None):
    return AbiMember(MemberKind.CONSTRUCTOR, '', inputs or [], [], 'nonpayable')


def make_synthesizer(name='Token'):
    ctx = GenerationContext(contract_name=name)
    return ctx, MemberSynthesizer(ctx)


TOKEN_MODULE = """// generated with abi2ts

import Web3 from 'web3';
import { CallOptions, Contract, SendOptions } from 'web3-eth-contract';
import { PromiEvent, TransactionReceipt } from 'web3-core';

export interface ContractInfo {
  abi: any;
  bytecode?: string;
  address?: string;
}

export default class TokenContract {
  private web3: Web3;
  private contract: Contract | undefined;
  private abi: any | undefined;
  private address: string | undefined;
  private bytecode: string | undefined;

  constructor(web3: Web3, contractInfo?: ContractInfo) {
    this.web3 = web3;
    this.abi = contractInfo?.abi;
    this.address = contractInfo?.address;
    this.bytecode = contractInfo?.bytecode;
  }

  private checkInitialized = () => {
    if (!this.contract) {
      if (!this.abi || !this.address) {
        throw new Error('Abi and Address are required');
      }
      this.contract = new this.web3.eth.Contract(this.abi, this.address);
    }
  };

  balance = async (): Promise<bigint> => {
    this.checkInitialized();
    const result = await this.web3.eth.getBalance(this.contract!.options.address);
    return BigInt(result);
  };

  totalSupply = async (options?: CallOptions): Promise<bigint> => {
    this.checkInitialized();
    const result = await this.contract!.methods.totalSupply().call(options);
    return BigInt(result);
  };

  transfer = (to: string, amount: bigint, options: SendOptions): PromiEvent<TransactionReceipt> => {
    this.checkInitialized();
    return this.contract!.methods.transfer(to, amount).send(options);
  };

  deploy = async (supply: bigint, options: SendOptions): Promise<Contract> => {
    if (!this.abi || !this.bytecode) {
      throw new Error('Abi and Bytecode are required');
    }
    this.contract = await new this.web3.eth.Contract(this.abi)
      .deploy({ data: this.bytecode, arguments: [supply] })
      .send(options);
    this.address = this.contract.options.address;
    return this.contract;
  };
}
"""


def token_members():
    return [
        constructor([p('_supply', 'uint256')]),
        view('totalSupply', outputs=[p('', 'uint256')]),
        send('transfer', [p('to', 'address'), p('amount', 'uint256')], [p('', 'bool')]),
    ]


class TestArgumentNaming(unittest.TestCase):
    """Test parameter naming of generated methods."""

    def test_placeholders_and_underscore_stripping(self):
        _, synth = make_synthesizer()
        args = synth.generate_arguments([p('', 'uint256'), p('_x', 'uint256'), p('y', 'uint256')])
        self.assertEqual([a.name for a in args], ['arg0', 'x', 'y'])

    def test_counter_resets_per_member(self):
        _, synth = make_synthesizer()
        synth.generate_arguments([p('', 'bool'), p('', 'bool')])
        args = synth.generate_arguments([p('', 'address')])
        self.assertEqual([a.name for a in args], ['arg0'])

    def test_only_one_underscore_is_stripped(self):
        _, synth = make_synthesizer()
        args = synth.generate_arguments([p('__value', 'uint256'), p('_', 'uint256')])
        self.assertEqual([a.name for a in args], ['_value', 'arg0'])

    def test_reserved_and_duplicate_names_fall_back(self):
        _, synth = make_synthesizer()
        args = synth.generate_arguments([
            p('new', 'address'), p('_options', 'uint256'), p('to', 'address'), p('_to', 'address'),
        ])
        self.assertEqual([a.name for a in args], ['arg0', 'arg1', 'to', 'arg2'])

    def test_argument_types(self):
        _, synth = make_synthesizer()
        args = synth.generate_arguments([p('ids', 'uint256[]'), p('ok', 'bool')])
        self.assertEqual([a.ts_type for a in args], ['bigint[]', 'boolean'])


class TestReadOnlyMethods(unittest.TestCase):
    """Test query method generation."""

    def test_single_bigint_output_is_converted(self):
        ctx, synth = make_synthesizer()
        code = synth.synthesize(view('totalSupply', outputs=[p('', 'uint256')]))
        self.assertEqual(code, '\n'.join([
            'totalSupply = async (options?: CallOptions): Promise<bigint> => {',
            '  this.checkInitialized();',
            '  const result = await this.contract!.methods.totalSupply().call(options);',
            '  return BigInt(result);',
            '};',
        ]))
        self.assertIn('CallOptions', ctx.imported_names('web3-eth-contract'))

    def test_non_integer_output_is_returned_as_is(self):
        _, synth = make_synthesizer()
        code = synth.synthesize(view('owner', outputs=[p('', 'address')]))
        self.assertIn('Promise<string>', code)
        self.assertIn('  return result;', code)

    def test_bigint_array_output_is_mapped(self):
        _, synth = make_synthesizer()
        code = synth.synthesize(view('balances', [p('who', 'address[]')], [p('', 'uint256[]')]))
        self.assertIn('balances = async (who: string[], options?: CallOptions): Promise<bigint[]> => {', code)
        self.assertIn('  return result.map((e: any) => BigInt(e));', code)

    def test_nested_bigint_arrays_are_mapped(self):
        _, synth = make_synthesizer()
        self.assertEqual(
            synth.convert_result('result', 'bigint[][]'),
            'result.map((e: any) => e.map((e1: any) => BigInt(e1)))',
        )

    def test_void_query_has_no_return(self):
        _, synth = make_synthesizer()
        code = synth.synthesize(view('ping'))
        self.assertIn('Promise<void>', code)
        self.assertIn('  await this.contract!.methods.ping().call(options);', code)
        self.assertNotIn('return', code)

    def test_pure_functions_are_queries(self):
        _, synth = make_synthesizer()
        member = AbiMember(MemberKind.FUNCTION, 'version', [], [p('', 'string')], 'pure')
        code = synth.synthesize(member)
        self.assertIn('.call(options)', code)

    def test_multiple_outputs_assigned_by_position(self):
        ctx, synth = make_synthesizer()
        member = view('getPair', outputs=[p('token0', 'address'), p('reserve', 'uint112'), p('', 'bool')])
        code = synth.synthesize(member)
        self.assertEqual(code, '\n'.join([
            'getPair = async (options?: CallOptions): Promise<GetPairResult> => {',
            '  this.checkInitialized();',
            '  const resultArr: any = await this.contract!.methods.getPair().call(options);',
            '  return {',
            '    token0: resultArr[0],',
            '    reserve: BigInt(resultArr[1]),',
            '    value2: resultArr[2],',
            '  };',
            '};',
        ]))
        self.assertEqual([d.name for d in ctx.registry], ['GetPairResult'])

    def test_reused_return_shape_keeps_member_output_order(self):
        ctx, synth = make_synthesizer()
        synth.synthesize(view('first', outputs=[p('a', 'address'), p('b', 'uint256')]))
        code = synth.synthesize(view('second', outputs=[p('b', 'uint256'), p('a', 'address')]))
        self.assertIn('Promise<FirstResult>', code)
        self.assertIn('    b: BigInt(resultArr[0]),', code)
        self.assertIn('    a: resultArr[1],', code)
        self.assertEqual(len(ctx.registry), 1)

    def test_struct_output_uses_declaration(self):
        ctx, synth = make_synthesizer()
        order = p('', 'tuple', 'struct Market.Order',
                  [p('id', 'uint256'), p('maker', 'address')])
        code = synth.synthesize(view('getOrder', [p('id', 'uint256')], [order]))
        self.assertIn('getOrder = async (id: bigint, options?: CallOptions): Promise<Market_Order> => {', code)
        self.assertEqual([d.name for d in ctx.registry], ['Market_Order'])

    def test_struct_output_fields_are_converted(self):
        _, synth = make_synthesizer()
        order = p('', 'tuple', 'struct Order', [p('id', 'uint256'), p('maker', 'address')])
        code = synth.synthesize(view('getOrder', outputs=[order]))
        self.assertIn('  return { id: BigInt(result.id), maker: result.maker };', code)

    def test_struct_array_output_is_mapped(self):
        _, synth = make_synthesizer()
        order = p('', 'tuple[]', 'struct Order[]', [p('id', 'uint256'), p('maker', 'address')])
        code = synth.synthesize(view('getOrders', outputs=[order]))
        self.assertIn('Promise<Order[]>', code)
        self.assertIn('  return result.map((e: any) => ({ id: BigInt(e.id), maker: e.maker }));', code)

    def test_nested_struct_fields_are_converted(self):
        _, synth = make_synthesizer()
        leg = p('legs', 'tuple[]', 'struct Leg[]', [p('qty', 'uint96')])
        order = p('', 'tuple', 'struct Order', [p('maker', 'address'), leg])
        code = synth.synthesize(view('getOrder', outputs=[order]))
        self.assertIn(
            '  return { maker: result.maker, legs: result.legs.map((e: any) => ({ qty: BigInt(e.qty) })) };',
            code,
        )

    def test_struct_field_of_multiple_outputs_is_converted(self):
        _, synth = make_synthesizer()
        order = p('order', 'tuple', 'struct Order', [p('id', 'uint256'), p('maker', 'address')])
        code = synth.synthesize(view('lookup', outputs=[order, p('open', 'bool')]))
        self.assertIn('    order: { id: BigInt(resultArr[0].id), maker: resultArr[0].maker },', code)
        self.assertIn('    open: resultArr[1],', code)

    def test_struct_without_integers_is_returned_as_is(self):
        _, synth = make_synthesizer()
        pair = p('', 'tuple', 'struct Pair', [p('left', 'address'), p('right', 'bool')])
        code = synth.synthesize(view('getPair', outputs=[pair]))
        self.assertIn('  return result;', code)

    def test_unnamed_output_skips_taken_placeholder(self):
        _, synth = make_synthesizer()
        code = synth.synthesize(view('pair', outputs=[p('', 'address'), p('value0', 'uint256')]))
        self.assertIn('    value1: resultArr[0],', code)
        self.assertIn('    value0: BigInt(resultArr[1]),', code)


class TestMutatingMethods(unittest.TestCase):
    """Test transaction method generation."""

    def test_send_returns_handle_unmodified(self):
        ctx, synth = make_synthesizer()
        code = synth.synthesize(send('transfer', [p('to', 'address'), p('amount', 'uint256')], [p('', 'bool')]))
        self.assertEqual(code, '\n'.join([
            'transfer = (to: string, amount: bigint, options: SendOptions): PromiEvent<TransactionReceipt> => {',
            '  this.checkInitialized();',
            '  return this.contract!.methods.transfer(to, amount).send(options);',
            '};',
        ]))
        self.assertEqual(ctx.imported_names('web3-core'), ['PromiEvent', 'TransactionReceipt'])
        self.assertIn('SendOptions', ctx.imported_names('web3-eth-contract'))

    def test_payable_is_mutating(self):
        _, synth = make_synthesizer()
        code = synth.synthesize(send('deposit', state='payable'))
        self.assertIn('.send(options)', code)
        self.assertNotIn('.call(', code)

    def test_outputs_register_no_declarations(self):
        ctx, synth = make_synthesizer()
        synth.synthesize(send('swap', outputs=[p('a', 'uint256'), p('b', 'uint256')]))
        self.assertEqual(len(ctx.registry), 0)

    def test_unsupported_output_type_still_fails(self):
        _, synth = make_synthesizer()
        with self.assertRaises(UnsupportedTypeError) as cm:
            synth.synthesize(send('settle', outputs=[p('rate', 'fixed')]))
        self.assertEqual(cm.exception.member, 'settle')

    def test_tuple_output_without_components_fails(self):
        _, synth = make_synthesizer()
        with self.assertRaises(InvalidShapeError):
            synth.synthesize(send('settle', outputs=[p('order', 'tuple')]))


class TestDeployMethod(unittest.TestCase):
    """Test deploy generation."""

    def test_constructor_arguments_are_forwarded(self):
        _, synth = make_synthesizer()
        code = synth.synthesize(constructor([p('_name', 'string'), p('_supply', 'uint256')]))
        self.assertIn('deploy = async (name: string, supply: bigint, options: SendOptions): Promise<Contract> => {', code)
        self.assertIn('.deploy({ data: this.bytecode, arguments: [name, supply] })', code)

    def test_default_deploy(self):
        _, synth = make_synthesizer()
        code = synth.synthesize_deploy()
        self.assertIn('deploy = async (options: SendOptions): Promise<Contract> => {', code)
        self.assertIn('.deploy({ data: this.bytecode })', code)

    def test_deploy_does_not_call_check_initialized(self):
        _, synth = make_synthesizer()
        code = synth.synthesize_deploy(constructor())
        self.assertNotIn('checkInitialized', code)
        self.assertIn("throw new Error('Abi and Bytecode are required');", code)

    def test_second_deploy_is_rejected(self):
        _, synth = make_synthesizer()
        synth.synthesize_deploy()
        with self.assertRaises(InvalidShapeError):
            synth.synthesize(constructor())


class TestMethodNaming(unittest.TestCase):
    """Test overload and class-surface naming."""

    def test_overloads_are_renamed_and_invoked_by_signature(self):
        diagnostics = GeneratorDiagnostics()
        ctx = GenerationContext(contract_name='Nft', _diagnostics=diagnostics)
        synth = MemberSynthesizer(ctx)
        short = send('safeTransferFrom', [p('from', 'address'), p('to', 'address'), p('tokenId', 'uint256')])
        full = send('safeTransferFrom', [p('from', 'address'), p('to', 'address'),
                                         p('tokenId', 'uint256'), p('data', 'bytes')])
        synth.plan([short, full])

        first = synth.synthesize(short)
        second = synth.synthesize(full)
        self.assertTrue(first.startswith('safeTransferFrom = ('))
        self.assertTrue(second.startswith('safeTransferFrom_2 = ('))
        self.assertIn("methods['safeTransferFrom(address,address,uint256)'](from, to, tokenId)", first)
        self.assertIn("methods['safeTransferFrom(address,address,uint256,bytes)'](from, to, tokenId, data)", second)
        self.assertEqual([d.code for d in diagnostics.warnings], ['W003'])

    def test_overload_suffix_skips_taken_names(self):
        _, synth = make_synthesizer()
        members = [view('get', [p('a', 'uint256')]), view('get_2'), view('get', [p('a', 'address')])]
        synth.plan(members)
        self.assertEqual([synth.method_name(m) for m in members], ['get', 'get_2', 'get_3'])

    def test_tuple_overload_signature(self):
        _, synth = make_synthesizer()
        point = p('pt', 'tuple', 'struct Point', [p('x', 'uint256'), p('y', 'uint256')])
        members = [view('area', [point]), view('area', [p('r', 'uint256')])]
        synth.plan(members)
        code = synth.synthesize(members[0])
        self.assertIn("methods['area((uint256,uint256))'](pt)", code)

    def test_class_surface_names_get_trailing_underscore(self):
        _, synth = make_synthesizer()
        code = synth.synthesize(view('balance', [p('who', 'address')], [p('', 'uint256')]))
        self.assertTrue(code.startswith('balance_ = async (who: string'))
        self.assertIn('this.contract!.methods.balance(who).call(options)', code)


class TestModuleAssembler(unittest.TestCase):
    """Test full module assembly."""

    def test_token_module(self):
        self.assertEqual(assemble_module('Token', token_members()), TOKEN_MODULE)

    def test_generation_is_deterministic(self):
        self.assertEqual(assemble_module('Token', token_members()),
                         assemble_module('Token', token_members()))

    def test_exactly_one_deploy_without_constructor(self):
        diagnostics = GeneratorDiagnostics()
        code = assemble_module('Counter', [send('increment')], diagnostics=diagnostics)
        self.assertEqual(code.count('deploy = async'), 1)
        self.assertIn('  deploy = async (options: SendOptions): Promise<Contract> => {', code)
        self.assertEqual([d.code for d in diagnostics.diagnostics], ['I001'])

    def test_exactly_one_deploy_with_constructor(self):
        code = assemble_module('Token', token_members())
        self.assertEqual(code.count('deploy = async'), 1)

    def test_deploy_is_last_method(self):
        members = [constructor([p('owner', 'address')]), view('owner_', outputs=[p('', 'address')])]
        code = assemble_module('Vault', members)
        self.assertLess(code.index('owner_ = async'), code.index('deploy = async'))
        self.assertTrue(code.endswith('    return this.contract;\n  };\n}\n'))

    def test_declarations_follow_contract_info(self):
        position = p('', 'tuple', 'struct Position',
                     [p('size', 'int256'), p('owner', 'address')])
        members = [view('positionOf', [p('id', 'uint256')], [position]),
                   view('bounds', outputs=[p('low', 'int24'), p('high', 'int24')])]
        code = assemble_module('Pool', members)
        self.assertIn('export interface Position {\n  size: bigint;\n  owner: string;\n}', code)
        self.assertIn('export interface BoundsResult {\n  low: bigint;\n  high: bigint;\n}', code)
        self.assertLess(code.index('interface ContractInfo'), code.index('interface Position'))
        self.assertLess(code.index('interface Position'), code.index('interface BoundsResult'))
        self.assertLess(code.index('interface BoundsResult'), code.index('export default class PoolContract'))

    def test_read_only_module_omits_core_import(self):
        code = assemble_module('Oracle', [view('latest', outputs=[p('', 'int256')])])
        self.assertNotIn('web3-core', code)
        self.assertIn("import { CallOptions, Contract, SendOptions } from 'web3-eth-contract';", code)

    def test_empty_header_leaves_no_blank_lines(self):
        options = GeneratorOptions(header='')
        code = assemble_module('Token', token_members(), options)
        self.assertTrue(code.startswith("import Web3 from 'web3';\n"))
        self.assertNotIn('\n\n\n', code)
        self.assertTrue(code.endswith('}\n'))
        self.assertFalse(code.endswith('\n\n'))

    def test_options_change_rendering(self):
        options = GeneratorOptions(indent_str='    ', class_suffix='Client', result_suffix='Output')
        code = assemble_module('Pair', [view('get', outputs=[p('a', 'bool'), p('b', 'bool')])], options)
        self.assertIn('export default class PairClient {', code)
        self.assertIn('    private web3: Web3;', code)
        self.assertIn('Promise<GetOutput>', code)

    def test_struct_named_like_contract_info_is_renamed(self):
        info = p('info', 'tuple', 'struct ContractInfo', [p('version', 'uint8')])
        code = assemble_module('Registry', [view('info', outputs=[info])])
        self.assertIn('export interface ContractInfo_2 {', code)
        self.assertIn('Promise<ContractInfo_2>', code)

    def test_struct_named_like_web3_import_is_renamed(self):
        diagnostics = GeneratorDiagnostics()
        info = p('', 'tuple', 'struct Contract', [p('id', 'uint256')])
        code = assemble_module('Registry', [view('get', outputs=[info])], diagnostics=diagnostics)
        self.assertNotIn('export interface Contract {', code)
        self.assertIn('export interface Contract_2 {', code)
        self.assertIn('Promise<Contract_2>', code)
        self.assertIn('private contract: Contract | undefined;', code)
        self.assertEqual([d.code for d in diagnostics.warnings], ['W002'])

    def test_assembler_is_single_use(self):
        assembler = ModuleAssembler(GenerationContext(contract_name='Token'))
        assembler.assemble('Token', token_members())
        with self.assertRaises(RuntimeError):
            assembler.assemble('Token', token_members())


class TestArtifactPackaging(unittest.TestCase):
    """Test the ABI and bytecode packagers."""

    def test_package_abi_is_compact(self):
        abi = [{'type': 'function', 'name': 'x', 'inputs': []}]
        self.assertEqual(package_abi(abi),
                         'export default [{"type":"function","name":"x","inputs":[]}];\n')

    def test_package_abi_rejects_non_list(self):
        with self.assertRaises(InvalidShapeError):
            package_abi({'abi': []})

    def test_package_bytecode(self):
        self.assertEqual(package_bytecode('0x6080'), "export default '0x6080';\n")
        self.assertEqual(package_bytecode('6080'), "export default '6080';\n")
        self.assertEqual(package_bytecode(''), "export default '';\n")

    def test_package_bytecode_rejects_non_hex(self):
        for bad in ['0xZZ', 'hello', '0x60__$1234$__80']:
            with self.subTest(bytecode=bad):
                with self.assertRaises(InvalidShapeError):
                    package_bytecode(bad)


if __name__ == '__main__':
    unittest.main()
