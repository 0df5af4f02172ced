"""
Error types raised during client generation.

Every failure is raised immediately and aborts the current generation pass;
callers never receive partially assembled module text.
"""

from typing import Any, Dict, List, Optional


class GeneratorError(Exception):
    """Base class for all generation failures."""


class CompilationFailure(GeneratorError):
    """The Solidity compiler reported errors instead of an ABI."""

    def __init__(self, message: str, diagnostics: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.diagnostics = diagnostics or []

    @classmethod
    def from_diagnostics(cls, diagnostics: List[Dict[str, Any]]) -> 'CompilationFailure':
        """Build a failure from solc standard-json error entries."""
        errors = [d for d in diagnostics if d.get('severity') == 'error'] or diagnostics
        lines = [
            (d.get('formattedMessage') or d.get('message') or str(d)).rstrip()
            for d in errors
        ]
        return cls('\n'.join(lines) or 'Compilation failed', diagnostics)


class UnsupportedTypeError(GeneratorError):
    """A raw ABI type tag has no TypeScript mapping."""

    def __init__(self, raw_type: str, member: str = '', parameter: str = ''):
        super().__init__(raw_type)
        self.raw_type = raw_type
        self.member = member
        self.parameter = parameter

    def locate(self, member: str = '', parameter: str = '') -> 'UnsupportedTypeError':
        """Fill in the location if an inner frame has not already done so."""
        if member and not self.member:
            self.member = member
        if parameter and not self.parameter:
            self.parameter = parameter
        return self

    def __str__(self) -> str:
        location = []
        if self.member:
            location.append(f'member "{self.member}"')
        if self.parameter:
            location.append(f'parameter "{self.parameter}"')
        message = f'Unsupported type "{self.raw_type}"'
        if location:
            message += ' in ' + ', '.join(location)
        return message


class InvalidShapeError(GeneratorError):
    """The ABI is missing structural information or is malformed."""
