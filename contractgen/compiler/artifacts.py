"""
Precompiled artifact loading.

Accepts the JSON files other toolchains leave behind:

- Hardhat / Truffle artifacts: ``{"contractName", "abi", "bytecode"}``
- solc standard-JSON output: ``{"contracts": {file: {name: {...}}}}``
- A bare ABI list; the contract is named after the file and has no bytecode
"""

import json
from pathlib import Path
from typing import Any, List

from ..abi.nodes import CompiledContract
from ..errors import InvalidShapeError
from .solc import contracts_from_output


def load_artifact(path: str) -> List[CompiledContract]:
    """Load the contracts described by an artifact file."""
    file_path = Path(path)
    try:
        with open(file_path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidShapeError(f'{path} is not valid JSON: {e}') from e
    return parse_artifact(data, file_path.stem)


def parse_artifact(data: Any, default_name: str = '') -> List[CompiledContract]:
    """Interpret decoded artifact JSON."""
    if isinstance(data, list):
        if not default_name:
            raise InvalidShapeError('A bare ABI needs a contract name')
        return [CompiledContract(default_name, data, '')]

    if not isinstance(data, dict):
        raise InvalidShapeError(f'Unrecognized artifact: expected an object or a list, got {type(data).__name__}')

    if 'contracts' in data and isinstance(data['contracts'], dict):
        contracts = contracts_from_output(data)
        if not contracts:
            raise InvalidShapeError('Compiler output contains no contracts')
        return contracts

    if 'abi' in data:
        name = data.get('contractName') or default_name
        if not name:
            raise InvalidShapeError('Artifact has no contractName')
        return [CompiledContract(name, data['abi'], _artifact_bytecode(data.get('bytecode')))]

    raise InvalidShapeError('Unrecognized artifact: no "abi" or "contracts" key')


def _artifact_bytecode(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, dict):
        # Foundry and some Truffle builds nest the hex under "object"
        value = value.get('object', '')
    if not isinstance(value, str):
        raise InvalidShapeError('Artifact bytecode must be a hex string')
    return value
