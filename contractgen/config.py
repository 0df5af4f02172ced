"""
Generator configuration.

Options control the shape of the emitted TypeScript (indentation, header,
naming suffixes, web3 module specifiers) and how Solidity sources are
compiled. Defaults can be overridden from a JSON file (``abi2ts.json``):

    {
      "header": "// generated, do not edit",
      "resultSuffix": "Output",
      "solcVersion": "0.8.20"
    }
"""

import json
import re
from dataclasses import dataclass, fields, replace
from typing import Optional


DEFAULT_CONFIG_FILE = 'abi2ts.json'


@dataclass(frozen=True)
class GeneratorOptions:
    """Settings shared by every generation pass of one run."""

    # Rendering
    indent_str: str = '  '
    header: str = '// generated with abi2ts'
    result_suffix: str = 'Result'
    class_suffix: str = 'Contract'

    # Module specifiers used by the generated imports
    web3_module: str = 'web3'
    contract_module: str = 'web3-eth-contract'
    core_module: str = 'web3-core'

    # Compiler
    solc_version: Optional[str] = None
    evm_version: Optional[str] = None
    optimize: bool = False
    optimize_runs: int = 200

    @classmethod
    def from_file(cls, path: str) -> 'GeneratorOptions':
        """Load options from a JSON file, falling back to defaults."""
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except FileNotFoundError:
            return cls()
        except json.JSONDecodeError as e:
            print(f"Warning: Failed to parse {path}: {e}")
            return cls()
        if not isinstance(data, dict):
            print(f"Warning: Ignoring {path}: expected a JSON object")
            return cls()
        return cls().merged(**{_snake_case(k): v for k, v in data.items()})

    def merged(self, **overrides) -> 'GeneratorOptions':
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        changes = {}
        for key, value in overrides.items():
            if value is None:
                continue
            if key not in known:
                print(f"Warning: Unknown option '{key}' ignored")
                continue
            changes[key] = value
        return replace(self, **changes)


def _snake_case(name: str) -> str:
    return re.sub(r'(?<=[a-z0-9])([A-Z])', r'_\1', name).lower()
