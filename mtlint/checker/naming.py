# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from typing import List, Optional, Sequence, Set

from mtlint.core.codes import DiagnosticId
from mtlint.core.diagnostics import Diagnostic
from mtlint.template.segments import Segment, iter_properties

from .binder import Locator


def check_naming(segments: Sequence[Segment], locate: Optional[Locator] = None) -> List[Diagnostic]:
	"""Duplicate and casing checks over the named properties of a template."""
	diags: List[Diagnostic] = []
	seen: Set[str] = set()
	for prop in iter_properties(segments):
		if prop.is_positional:
			continue
		span = locate(prop.span) if locate is not None else prop.span
		if prop.name in seen:
			diags.append(
				Diagnostic(
					id=DiagnosticId.DUPLICATE_NAME,
					message=f"Property name '{prop.name}' is not unique in this MessageTemplate",
					span=span,
				)
			)
		seen.add(prop.name)
		if prop.name[:1].islower():
			diags.append(
				Diagnostic(
					id=DiagnosticId.NON_PASCAL_CASE,
					message=f"Property name '{prop.name}' should be pascal case",
					span=span,
				)
			)
	return diags


__all__ = ["check_naming"]
