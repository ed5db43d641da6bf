# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MtlintError(Exception):
	"""
	A structured, serializable error for mtlint tooling.

	Only the tooling layers (configuration, host front end, CLI) raise this;
	the analysis core reports problems as diagnostics.
	"""

	reason_code: str
	message: str
	path: str | None = None
	detail: str | None = None

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"path": self.path,
			"detail": self.detail,
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.path:
			parts.append(f"path={self.path}")
		if self.detail:
			parts.append(f"detail={self.detail}")
		return " ".join(parts)
