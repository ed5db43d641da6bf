"""
mtlint: message template checks for structured logging call sites.

Subpackages:
  - core: spans, diagnostic ids and the Diagnostic type
  - source: literal decoding and decoded -> raw offset mapping
  - template: message template parser
  - checker: property binding and naming checks
  - callsite: method shape table and call-site policy
  - host: compiler-free front end for C#-style source files

Log records are disabled for library use; `mtlint.cli` enables them.
"""

from loguru import logger

logger.disable("mtlint")

__all__ = ["callsite", "checker", "core", "host", "source", "template"]
