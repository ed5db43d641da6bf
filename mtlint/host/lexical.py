# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lexical helpers for scanning C#-style source text.

`mask_source` blanks out comments and the contents of string/char literals
while keeping every offset and newline in place, so call sites and brackets
can be found with plain regexes on the masked text and then read back from
the original text at the same offsets.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import List, Optional, Tuple

from mtlint.core.span import Span

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())


def _blank(ch: str) -> str:
	return ch if ch in "\r\n" else " "


def _skip_regular(text: str, i: int, quote: str) -> int:
	"""Index just past a `"..."` / `'...'` literal starting at `i` (the quote)."""
	j = i + 1
	while j < len(text):
		ch = text[j]
		if ch == "\\":
			j += 2
			continue
		if ch == quote or ch == "\n":
			return j + 1 if ch == quote else j
		j += 1
	return len(text)


def _skip_verbatim(text: str, i: int) -> int:
	"""Index just past a verbatim body whose opening quote is at `i`."""
	j = i + 1
	while j < len(text):
		if text[j] == '"':
			if text.startswith('""', j):
				j += 2
				continue
			return j + 1
		j += 1
	return len(text)


def _skip_interpolated(text: str, i: int, verbatim: bool) -> int:
	"""Index just past an interpolated literal whose opening quote is at `i`."""
	j = i + 1
	depth = 0
	while j < len(text):
		ch = text[j]
		if depth == 0:
			if ch == "\\" and not verbatim:
				j += 2
				continue
			if ch == '"':
				if verbatim and text.startswith('""', j):
					j += 2
					continue
				return j + 1
			if ch == "\n" and not verbatim:
				return j
			if text.startswith("{{", j):
				j += 2
				continue
			if ch == "{":
				depth = 1
		else:
			if ch == '"':
				j = _skip_regular(text, j, '"')
				continue
			if ch == "{":
				depth += 1
			elif ch == "}":
				depth -= 1
		j += 1
	return len(text)


def mask_source(text: str) -> str:
	"""Return `text` with comments and literal contents replaced by spaces."""
	out = list(text)
	i = 0
	n = len(text)
	while i < n:
		ch = text[i]
		if text.startswith("//", i):
			end = text.find("\n", i)
			end = n if end == -1 else end
			out[i:end] = [" "] * (end - i)
			i = end
			continue
		if text.startswith("/*", i):
			end = text.find("*/", i + 2)
			end = n if end == -1 else end + 2
			out[i:end] = [_blank(c) for c in text[i:end]]
			i = end
			continue
		end: Optional[int] = None
		quote_at = i
		if text.startswith(('$@"', '@$"'), i):
			quote_at = i + 2
			end = _skip_interpolated(text, quote_at, verbatim=True)
		elif text.startswith('$"', i):
			quote_at = i + 1
			end = _skip_interpolated(text, quote_at, verbatim=False)
		elif text.startswith('@"', i):
			quote_at = i + 1
			end = _skip_verbatim(text, quote_at)
		elif ch in ('"', "'"):
			end = _skip_regular(text, i, ch)
		if end is None:
			i += 1
			continue
		# Keep the delimiters, blank the body.
		body_end = end - 1 if end > quote_at + 1 and text[end - 1] in ('"', "'") else end
		out[quote_at + 1 : body_end] = [_blank(c) for c in text[quote_at + 1 : body_end]]
		i = end
	return "".join(out)


def find_closing(masked: str, open_at: int) -> Optional[int]:
	"""Index of the bracket closing the one at `open_at`, or None if unbalanced."""
	stack: List[str] = []
	for j in range(open_at, len(masked)):
		ch = masked[j]
		if ch in _OPENERS:
			stack.append(_OPENERS[ch])
		elif ch in _CLOSERS:
			if not stack or stack.pop() != ch:
				return None
			if not stack:
				return j
	return None


def split_top_level(masked: str, start: int, end: int) -> List[Tuple[int, int]]:
	"""
	Split `masked[start:end]` at top-level commas; returns (start, end) ranges
	trimmed of surrounding whitespace. An empty range list means no arguments.
	"""
	ranges: List[Tuple[int, int]] = []
	depth = 0
	seg_start = start
	for j in range(start, end):
		ch = masked[j]
		if ch in _OPENERS:
			depth += 1
		elif ch in _CLOSERS:
			depth -= 1
		elif ch == "," and depth == 0:
			ranges.append((seg_start, j))
			seg_start = j + 1
	ranges.append((seg_start, end))
	trimmed = []
	for s, e in ranges:
		while s < e and masked[s].isspace():
			s += 1
		while e > s and masked[e - 1].isspace():
			e -= 1
		trimmed.append((s, e))
	if len(trimmed) == 1 and trimmed[0][0] == trimmed[0][1]:
		return []
	return trimmed


@dataclass
class LineIndex:
	"""Converts 0-based character offsets into 1-based (line, column)."""

	text: str

	def __post_init__(self) -> None:
		self._starts = [0]
		for j, ch in enumerate(self.text):
			if ch == "\n":
				self._starts.append(j + 1)

	def locate(self, offset: int) -> Tuple[int, int]:
		line = bisect.bisect_right(self._starts, offset) - 1
		return line + 1, offset - self._starts[line] + 1

	def span(self, offset: int, length: int, file: Optional[str] = None) -> Span:
		line, column = self.locate(offset)
		return Span(file=file, line=line, column=column, length=length, offset=offset)


__all__ = ["LineIndex", "find_closing", "mask_source", "split_top_level"]
