"""
Base generator class with shared utilities.

This module provides the BaseGenerator class that contains common utilities
used across all specialized generator classes in the code generation pipeline.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import GenerationContext
    from ..type_system import DeclarationRegistry


class BaseGenerator:
    """
    Base class for all code generators.

    Provides shared utilities for:
    - Indentation management
    - Line assembly
    """

    def __init__(self, ctx: 'GenerationContext'):
        """
        Initialize the base generator.

        Args:
            ctx: The code generation context containing all state
        """
        self._ctx = ctx

    @property
    def registry(self) -> 'DeclarationRegistry':
        return self._ctx.registry

    # =========================================================================
    # INDENTATION
    # =========================================================================

    def indent(self, extra: int = 0) -> str:
        """Return the indentation string for the current level plus ``extra``."""
        return self._ctx.indent(self._ctx.indent_level + extra)

    @property
    def indent_level(self) -> int:
        """Get the current indentation level."""
        return self._ctx.indent_level

    @indent_level.setter
    def indent_level(self, value: int):
        """Set the current indentation level."""
        self._ctx.indent_level = value

    # =========================================================================
    # LINES
    # =========================================================================

    def line(self, text: str, extra: int = 0) -> str:
        """Indent a single line; empty text stays empty."""
        if not text:
            return ''
        return f'{self.indent(extra)}{text}'

    def block(self, lines: List[str]) -> str:
        return '\n'.join(lines)
