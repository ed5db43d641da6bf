# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.

A Span is either a file location (1-based line/column plus a 0-based character
offset) or, when only `offset`/`length` are set, a range relative to a decoded
message template. The call-site policy turns template-relative spans into file
spans through the literal position mapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	length: Optional[int] = None
	offset: Optional[int] = None

	@classmethod
	def relative(cls, start: int, length: int) -> "Span":
		"""A range inside a decoded template (no file coordinates)."""
		return cls(offset=start, length=length)

	@property
	def is_relative(self) -> bool:
		return self.line is None and self.offset is not None

	def format_location(self) -> str:
		if self.line is None:
			return "<unknown location>"
		loc = f"{self.line}:{self.column if self.column is not None else 0}"
		return f"{self.file}:{loc}" if self.file else loc


__all__ = ["Span"]
