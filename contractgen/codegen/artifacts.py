"""
Artifact packaging.

Renders the ABI and the deployment bytecode as standalone TypeScript modules
with a single default export each, so they can be imported next to the
generated client.
"""

import json
import re
from typing import Any

from ..errors import InvalidShapeError


_HEX_BYTECODE = re.compile(r'^(0x)?[0-9a-fA-F]*$')


def package_abi(abi: Any) -> str:
    """``export default [...];`` with the ABI as compact JSON."""
    if not isinstance(abi, list):
        raise InvalidShapeError(f'ABI must be a list of entries, got {type(abi).__name__}')
    return f'export default {json.dumps(abi, separators=(",", ":"))};\n'


def package_bytecode(bytecode: str) -> str:
    """``export default '<hex>';``

    Unlinked bytecode (with ``__$...$__`` library placeholders) is rejected
    since it cannot be deployed as-is.
    """
    if not isinstance(bytecode, str):
        raise InvalidShapeError(f'Bytecode must be text, got {type(bytecode).__name__}')
    bytecode = bytecode.strip()
    if not _HEX_BYTECODE.match(bytecode):
        if '__' in bytecode:
            raise InvalidShapeError('Bytecode contains unlinked library placeholders')
        raise InvalidShapeError('Bytecode is not hex-encoded')
    return f"export default '{bytecode}';\n"
