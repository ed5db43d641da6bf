# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostic identifiers, stable codes and default severities.

The ids, codes and severities are the user-visible contract of the analyzer;
hosts must report them verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Final, Literal

Severity = Literal["error", "warning"]


class DiagnosticId(Enum):
	EXCEPTION_NOT_FIRST = "MTL001"
	PARSE_ERROR = "MTL002"
	BIND_ERROR = "MTL003"
	NON_CONSTANT_TEMPLATE = "MTL004"
	DUPLICATE_NAME = "MTL005"
	NON_PASCAL_CASE = "MTL006"

	@property
	def code(self) -> str:
		return self.value

	@classmethod
	def parse(cls, text: str) -> "DiagnosticId":
		"""Accept either the symbolic id (`BIND_ERROR`) or the code (`MTL003`)."""
		key = text.strip()
		if key in cls.__members__:
			return cls[key]
		return cls(key.upper())


@dataclass(frozen=True)
class RuleSpec:
	id: DiagnosticId
	severity: Severity
	title: str
	# Prefix used when rendering the bare message for humans.
	prefix: str = ""


RULES: Final[Dict[DiagnosticId, RuleSpec]] = {
	DiagnosticId.EXCEPTION_NOT_FIRST: RuleSpec(
		DiagnosticId.EXCEPTION_NOT_FIRST, "warning", "Exception not passed as first argument"
	),
	DiagnosticId.PARSE_ERROR: RuleSpec(
		DiagnosticId.PARSE_ERROR,
		"error",
		"Error while parsing MessageTemplate",
		prefix="Error while parsing MessageTemplate: ",
	),
	DiagnosticId.BIND_ERROR: RuleSpec(
		DiagnosticId.BIND_ERROR,
		"error",
		"Error while binding properties",
		prefix="Error while binding properties: ",
	),
	DiagnosticId.NON_CONSTANT_TEMPLATE: RuleSpec(
		DiagnosticId.NON_CONSTANT_TEMPLATE, "warning", "MessageTemplate argument is not constant"
	),
	DiagnosticId.DUPLICATE_NAME: RuleSpec(
		DiagnosticId.DUPLICATE_NAME, "error", "Property name is not unique"
	),
	DiagnosticId.NON_PASCAL_CASE: RuleSpec(
		DiagnosticId.NON_PASCAL_CASE, "warning", "Property name should be pascal case"
	),
}


def default_severity(diag_id: DiagnosticId) -> Severity:
	return RULES[diag_id].severity


__all__ = ["DiagnosticId", "RuleSpec", "RULES", "Severity", "default_severity"]
