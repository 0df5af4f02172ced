#!/usr/bin/env python3
"""
ABI to TypeScript client generator.

Turns compiled contracts into typed web3.js client modules. For every contract
three files are produced next to each other:

- <Name>.ts          the client class, its declarations and imports
- <Name>Abi.ts       the ABI as a default export
- <Name>Bytecode.ts  the deployment bytecode as a default export

Inputs are Solidity sources (compiled with py-solc-x) or precompiled JSON
artifacts (Hardhat/Truffle artifacts, solc standard-JSON output, bare ABIs).

Usage:
    abi2ts contracts/Token.sol -o src/clients
    abi2ts artifacts/Token.json --stdout
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from .abi import AbiReader, CompiledContract
from .codegen import GeneratorDiagnostics, assemble_module, package_abi, package_bytecode
from .compiler import compile_file, load_artifact
from .config import DEFAULT_CONFIG_FILE, GeneratorOptions
from .errors import GeneratorError, InvalidShapeError


@dataclass
class GenerationResult:
    """Generated text for one contract; ``abi`` and ``bytecode`` are module sources."""
    name: str
    ts_source: str
    abi: str
    bytecode: str


def generate(
    contract: CompiledContract,
    options: Optional[GeneratorOptions] = None,
    diagnostics: Optional[GeneratorDiagnostics] = None,
) -> GenerationResult:
    """Generate the client module and packaged artifacts for one contract.

    Either every artifact is produced or an error is raised; nothing partial
    is returned.
    """
    options = options or GeneratorOptions()
    if not contract.name or not contract.name.isidentifier():
        raise InvalidShapeError(f'Contract name "{contract.name}" is not a valid identifier')

    members = AbiReader(diagnostics, contract.name).read(contract.abi)
    ts_source = assemble_module(contract.name, members, options, diagnostics)
    return GenerationResult(
        name=contract.name,
        ts_source=ts_source,
        abi=package_abi(contract.abi),
        bytecode=package_bytecode(contract.bytecode),
    )


def generate_all(
    contracts: List[CompiledContract],
    options: Optional[GeneratorOptions] = None,
    diagnostics: Optional[GeneratorDiagnostics] = None,
) -> List[GenerationResult]:
    """Generate every contract of a batch, each with its own generation context."""
    seen = set()
    results = []
    for contract in contracts:
        if contract.name in seen:
            raise InvalidShapeError(f'Contract "{contract.name}" appears more than once in the input')
        seen.add(contract.name)
        results.append(generate(contract, options, diagnostics))
    return results


def load_contracts(
    path: str,
    options: Optional[GeneratorOptions] = None,
    diagnostics: Optional[GeneratorDiagnostics] = None,
) -> List[CompiledContract]:
    """Compile a ``.sol`` file or load a ``.json`` artifact."""
    suffix = Path(path).suffix.lower()
    if suffix == '.sol':
        return compile_file(path, options, diagnostics)
    if suffix == '.json':
        return load_artifact(path)
    raise InvalidShapeError(f'Unsupported input {path}: expected a .sol or .json file')


def select_contracts(contracts: List[CompiledContract], names: Optional[List[str]]) -> List[CompiledContract]:
    """Keep only the named contracts; every requested name must exist."""
    if not names:
        return contracts
    by_name = {c.name: c for c in contracts}
    missing = [n for n in names if n not in by_name]
    if missing:
        available = ', '.join(sorted(by_name)) or 'none'
        raise InvalidShapeError(f'Contract(s) not found: {", ".join(missing)} (available: {available})')
    return [by_name[n] for n in dict.fromkeys(names)]


# =============================================================================
# OUTPUT
# =============================================================================

def output_paths(result: GenerationResult, output_dir: Path) -> Dict[Path, str]:
    """Map each output file of a result to its content."""
    return {
        output_dir / f'{result.name}.ts': result.ts_source,
        output_dir / f'{result.name}Abi.ts': result.abi,
        output_dir / f'{result.name}Bytecode.ts': result.bytecode,
    }


def write_results(results: List[GenerationResult], output_dir: Path) -> List[Path]:
    """Write generated files to disk."""
    written = []
    output_dir.mkdir(parents=True, exist_ok=True)
    for result in results:
        for path, content in output_paths(result, output_dir).items():
            with open(path, 'w') as f:
                f.write(content)
            print(f"Written: {path}")
            written.append(path)
    return written


# =============================================================================
# CLI INTERFACE
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Generate typed web3.js clients from contract ABIs')
    parser.add_argument('input', help='Solidity source (.sol) or compiled artifact (.json)')
    parser.add_argument('-o', '--output', help='Output directory (default: the input file\'s directory)')
    parser.add_argument('--stdout', action='store_true', help='Print client modules to stdout instead of writing files')
    parser.add_argument('--solc-version', metavar='V', help='Solidity compiler version, installed on demand')
    parser.add_argument('--config', metavar='FILE', default=DEFAULT_CONFIG_FILE,
                        help=f'JSON options file (default: {DEFAULT_CONFIG_FILE})')
    parser.add_argument('--contract', action='append', metavar='NAME',
                        help='Only generate the named contract (repeatable)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Print every diagnostic')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: {args.input} is not a valid file", file=sys.stderr)
        return 1

    options = GeneratorOptions.from_file(args.config).merged(solc_version=args.solc_version)
    diagnostics = GeneratorDiagnostics(verbose=args.verbose)

    try:
        contracts = load_contracts(str(input_path), options, diagnostics)
        contracts = select_contracts(contracts, args.contract)
        results = generate_all(contracts, options, diagnostics)
    except GeneratorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.stdout:
        for result in results:
            print(result.ts_source, end='')
    else:
        output_dir = Path(args.output) if args.output else input_path.parent
        write_results(results, output_dir)

    diagnostics.print_summary()
    return 0


if __name__ == '__main__':
    sys.exit(main())
