# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure shared by every analysis pass.

Diagnostics are frozen. Passes locate template spans before building a
diagnostic, so every diagnostic already carries its final source span.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .codes import RULES, DiagnosticId
from .span import Span


@dataclass(frozen=True)
class ReorderFix:
	"""
	Data for the "move exception first" code fix.

	Both indices address the full call argument list (receiver included for
	static-form extension calls): the argument at `argument_index` is removed
	and reinserted at `insert_index`.
	"""

	argument_index: int
	insert_index: int

	def to_dict(self) -> Dict[str, int]:
		return {"argument_index": self.argument_index, "insert_index": self.insert_index}


@dataclass(frozen=True)
class Diagnostic:
	"""Represents an analyzer diagnostic (error/warning)."""

	id: DiagnosticId
	message: str
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	# Empty means "use the rule's default severity".
	severity: str = ""
	fix: Optional[ReorderFix] = None

	def __post_init__(self) -> None:
		# Normalize missing spans/severities so downstream tooling can rely on
		# structured values instead of None.
		if self.span is None:  # type: ignore[unreachable]
			object.__setattr__(self, "span", Span())
		if not self.severity:
			object.__setattr__(self, "severity", RULES[self.id].severity)

	@property
	def code(self) -> str:
		return self.id.code

	def format_human(self) -> str:
		text = f"{RULES[self.id].prefix}{self.message}"
		return f"{self.span.format_location()}: {self.severity} {self.code}: {text}"

	def to_dict(self) -> Dict[str, Any]:
		return {
			"id": self.id.name,
			"code": self.code,
			"severity": self.severity,
			"message": self.message,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"length": self.span.length,
			"fix": self.fix.to_dict() if self.fix is not None else None,
		}


__all__ = ["Diagnostic", "ReorderFix"]
