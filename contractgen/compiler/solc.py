"""
Solidity compiler service.

Compiles Solidity sources with ``py-solc-x`` through the standard-JSON
interface and returns one CompiledContract per contract in the output.
Compiler errors abort with CompilationFailure; warnings are handed to the
diagnostics collector.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import solcx
from solcx.exceptions import SolcError, SolcNotInstalled

from ..abi.nodes import CompiledContract
from ..codegen.diagnostics import GeneratorDiagnostics
from ..config import GeneratorOptions
from ..errors import CompilationFailure


OUTPUT_SELECTION = {'*': {'*': ['abi', 'evm.bytecode.object']}}


def build_standard_input(source: str, file_name: str, options: GeneratorOptions) -> Dict[str, Any]:
    """Build the solc standard-JSON input for a single source unit."""
    settings: Dict[str, Any] = {
        'optimizer': {'enabled': options.optimize, 'runs': options.optimize_runs},
        'outputSelection': OUTPUT_SELECTION,
    }
    if options.evm_version:
        settings['evmVersion'] = options.evm_version
    return {
        'language': 'Solidity',
        'sources': {file_name: {'content': source}},
        'settings': settings,
    }


def ensure_solc(version: Optional[str]) -> None:
    """Install ``version`` unless it is already available."""
    if not version:
        return
    installed = {str(v) for v in solcx.get_installed_solc_versions()}
    if version.lstrip('v') not in installed:
        print(f"Installing solc {version}...")
        solcx.install_solc(version)


def compile_source(
    source: str,
    options: Optional[GeneratorOptions] = None,
    diagnostics: Optional[GeneratorDiagnostics] = None,
    file_name: str = 'main.sol',
    **solc_kwargs,
) -> List[CompiledContract]:
    """Compile Solidity source text.

    Args:
        source: Solidity source code
        options: Compiler settings (version, optimizer, EVM version)
        diagnostics: Collector for compiler warnings
        file_name: Source unit name reported by the compiler
        **solc_kwargs: Passed to ``solcx.compile_standard`` (base_path, allow_paths)

    Returns:
        The compiled contracts, in compiler output order
    """
    options = options or GeneratorOptions()
    input_data = build_standard_input(source, file_name, options)

    try:
        ensure_solc(options.solc_version)
        output = solcx.compile_standard(
            input_data,
            solc_version=options.solc_version,
            **solc_kwargs,
        )
    except SolcNotInstalled as e:
        raise CompilationFailure(f'Solidity compiler not available: {e}') from e
    except SolcError as e:
        if e.error_dict:
            raise CompilationFailure.from_diagnostics(e.error_dict) from e
        raise CompilationFailure(str(e)) from e

    for entry in output.get('errors', []):
        if entry.get('severity') == 'error':
            raise CompilationFailure.from_diagnostics(output['errors'])
        if diagnostics is not None:
            diagnostics.warn_compiler(entry.get('formattedMessage') or entry.get('message', ''))

    if 'contracts' not in output:
        raise CompilationFailure('Compiler output contains no contracts')
    return contracts_from_output(output)


def compile_file(
    path: str,
    options: Optional[GeneratorOptions] = None,
    diagnostics: Optional[GeneratorDiagnostics] = None,
) -> List[CompiledContract]:
    """Compile a Solidity file; imports are resolved relative to its directory."""
    file_path = Path(path)
    source = file_path.read_text()
    base = str(file_path.parent.resolve())
    return compile_source(
        source,
        options=options,
        diagnostics=diagnostics,
        file_name=file_path.name,
        base_path=base,
        allow_paths=base,
    )


def contracts_from_output(output: Dict[str, Any]) -> List[CompiledContract]:
    """Extract contracts from solc standard-JSON output."""
    contracts = []
    for file_contracts in output.get('contracts', {}).values():
        for name, data in file_contracts.items():
            bytecode = data.get('evm', {}).get('bytecode', {}).get('object', '')
            contracts.append(CompiledContract(name, data.get('abi', []), bytecode))
    return contracts
