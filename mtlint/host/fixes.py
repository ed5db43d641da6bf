# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
"Move exception first" code fix.

Each call with an EXCEPTION_NOT_FIRST diagnostic gets its argument texts
permuted: the exception argument moves to the fix's insert index, the other
arguments keep their order, and the separators between argument slots stay
as written. Only the first such diagnostic of a call is applied per pass, and
edits nested inside another edited call are left for the next pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from mtlint.config import Config
from mtlint.core.codes import DiagnosticId
from mtlint.core.diagnostics import ReorderFix

from .scanner import ScannedCall, iter_call_diagnostics, prepare_source


@dataclass(frozen=True)
class Edit:
	start: int
	end: int
	replacement: str


def reorder_arguments(text: str, scanned: ScannedCall, fix: ReorderFix) -> Edit:
	"""Build the edit that applies `fix` to the argument list of `scanned`."""
	ranges = scanned.argument_ranges
	args = [text[s:e] for s, e in ranges]
	moved = args.pop(fix.argument_index)
	args.insert(fix.insert_index, moved)
	out: List[str] = []
	for pos, arg in enumerate(args):
		if pos:
			# Keep whatever separated the original slots (", ", newline + indent ...).
			out.append(text[ranges[pos - 1][1] : ranges[pos][0]])
		out.append(arg)
	return Edit(start=ranges[0][0], end=ranges[-1][1], replacement="".join(out))


def apply_edits(text: str, edits: List[Edit]) -> Tuple[str, int]:
	"""Apply non-overlapping edits; an edit overlapping an earlier one is skipped."""
	kept: List[Edit] = []
	last_end = -1
	for edit in sorted(edits, key=lambda e: (e.start, -e.end)):
		if edit.start < last_end:
			continue
		kept.append(edit)
		last_end = edit.end
	for edit in reversed(kept):
		text = text[: edit.start] + edit.replacement + text[edit.end :]
	return text, len(kept)


def apply_fixes(text: str, config: Optional[Config] = None, file: Optional[str] = None) -> Tuple[str, int]:
	"""
	Rewrite `text` so flagged exception arguments come first.

	Returns the new text and the number of calls rewritten.
	"""
	facts = prepare_source(text, config, file)
	edits: List[Edit] = []
	for scanned, diags in iter_call_diagnostics(facts):
		for diag in diags:
			if diag.id is DiagnosticId.EXCEPTION_NOT_FIRST and diag.fix is not None:
				edits.append(reorder_arguments(text, scanned, diag.fix))
				break
	return apply_edits(text, edits)


__all__ = ["Edit", "apply_edits", "apply_fixes", "reorder_arguments"]
