"""
mtlint.core: shared types used by every analysis pass.

Modules:
  - span: Span (file location or template-relative range)
  - codes: DiagnosticId, default severities and titles
  - diagnostics: Diagnostic and ReorderFix
"""

from .codes import DiagnosticId, RULES, default_severity
from .diagnostics import Diagnostic, ReorderFix
from .span import Span

__all__ = ["Diagnostic", "DiagnosticId", "ReorderFix", "RULES", "Span", "default_severity"]
