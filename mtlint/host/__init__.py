"""
mtlint.host: a compiler-free front end for C#-style source files.

Finds logger call sites, types their arguments from file-local declarations
and feeds them to the call-site policy.
"""

from .declarations import Declarations, DiscoveredMethods, collect_declarations, discover_declarations
from .expressions import ArgumentInfo, classify_argument
from .fixes import apply_fixes
from .lexical import LineIndex, mask_source
from .scanner import ScannedCall, analyze_source, prepare_source, scan_source

__all__ = [
	"ArgumentInfo",
	"Declarations",
	"DiscoveredMethods",
	"LineIndex",
	"ScannedCall",
	"analyze_source",
	"apply_fixes",
	"classify_argument",
	"collect_declarations",
	"discover_declarations",
	"mask_source",
	"prepare_source",
	"scan_source",
]
