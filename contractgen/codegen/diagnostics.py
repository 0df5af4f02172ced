"""
Diagnostic/warning system for the generator.

Collects and reports ABI entries that were skipped, names that had to be
changed to stay unique, and warnings passed through from the compiler.
Nothing here affects the generated text; it only tells developers where the
client differs from a one-to-one rendering of the ABI.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from collections import Counter
from typing import Dict, List


class DiagnosticSeverity(Enum):
    """Severity levels for generator diagnostics."""
    WARNING = 'warning'
    INFO = 'info'


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    severity: DiagnosticSeverity
    code: str
    message: str
    contract: str = ''
    construct: str = ''  # e.g., 'event', 'overload', 'declaration'

    def __str__(self) -> str:
        if self.contract:
            return f'[{self.severity.value}] {self.contract}: {self.message} ({self.code})'
        return f'[{self.severity.value}] {self.message} ({self.code})'


class GeneratorDiagnostics:
    """
    Collects generator warnings/diagnostics during a run.

    Usage:
        diag = GeneratorDiagnostics()
        diag.warn_member_skipped('event', 'Transfer', 'Token')
        # ... after generation ...
        diag.print_summary()
    """

    def __init__(self, verbose: bool = False):
        self._diagnostics: List[Diagnostic] = []
        self._verbose = verbose

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Get all collected diagnostics."""
        return list(self._diagnostics)

    @property
    def warnings(self) -> List[Diagnostic]:
        """Get only warning-level diagnostics."""
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.WARNING]

    # =========================================================================
    # SPECIFIC WARNING METHODS
    # =========================================================================

    def warn_member_skipped(self, kind: str, name: str = '', contract: str = '') -> None:
        """Warn that an ABI entry produced no client method."""
        label = f'{kind} "{name}"' if name else f'{kind}()'
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W001',
            message=f'{label} was skipped (no client method is generated).',
            contract=contract,
            construct=kind,
        ))

    def warn_declaration_renamed(self, requested: str, assigned: str, contract: str = '') -> None:
        """Warn that a declaration name was already taken by a different shape."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W002',
            message=f'Declaration "{requested}" already exists with a different shape; '
                    f'emitted as "{assigned}".',
            contract=contract,
            construct='declaration',
        ))

    def warn_overload_renamed(self, signature: str, assigned: str, contract: str = '') -> None:
        """Warn that an overloaded function was given a disambiguated method name."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W003',
            message=f'Overloaded function {signature} is exposed as "{assigned}".',
            contract=contract,
            construct='overload',
        ))

    def warn_compiler(self, message: str, contract: str = '') -> None:
        """Pass through a compiler warning."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W004',
            message=message.strip(),
            contract=contract,
            construct='compiler',
        ))

    def info_default_deploy(self, contract: str = '') -> None:
        """Info that the ABI had no constructor and the default deploy was used."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.INFO,
            code='I001',
            message='No constructor in ABI; emitted default deploy().',
            contract=contract,
            construct='deploy',
        ))

    # =========================================================================
    # REPORTING
    # =========================================================================

    def by_construct(self) -> Dict[str, int]:
        """Warning counts keyed by construct, in construct order."""
        counts = Counter(w.construct or 'other' for w in self.warnings)
        return dict(sorted(counts.items()))

    def get_summary(self) -> str:
        """One line naming how many warnings of each construct were recorded."""
        counts = self.by_construct()
        if not counts:
            return 'No generator warnings.'
        return 'Generator warnings: ' + ', '.join(f'{n} {c}' for c, n in counts.items())

    def print_summary(self, file=None) -> None:
        """Print the summary line to stderr; verbose mode lists every diagnostic."""
        out = file or sys.stderr
        if self.by_construct():
            print(f'\n{self.get_summary()}', file=out)
        if self._verbose:
            for d in self._diagnostics:
                print(f'  {d}', file=out)
