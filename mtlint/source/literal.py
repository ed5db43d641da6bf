# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Literal position mapper.

Templates are parsed in *decoded* form (escapes expanded, doubled quotes
collapsed), but diagnostics must point into the *raw* source text. The
mapper walks the raw literal escape-by-escape, advancing a decoded counter by
one per source character or escape, until the requested decoded offset is
reached.

Regular literals (`"..."`) understand the simple escapes
`\\' \\" \\\\ \\0 \\a \\b \\f \\n \\r \\t \\v`, `\\x` followed by one to four hex
digits (greedy, stopping at the first non-hex character), `\\uHHHH` and
`\\UHHHHHHHH`. A `\\U` escape decodes to a single code point, so it counts as
one decoded character. Verbatim literals (`@"..."`) only collapse `""` to `"`.

`decode_literal` applies the same table to produce the decoded value; it is
used by the host front end, which is the only caller allowed to reject a
malformed literal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from mtlint.core.span import Span
from mtlint.errors import MtlintError

_SIMPLE_ESCAPES = {
	"'": "'",
	'"': '"',
	"\\": "\\",
	"0": "\0",
	"a": "\a",
	"b": "\b",
	"f": "\f",
	"n": "\n",
	"r": "\r",
	"t": "\t",
	"v": "\v",
}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_MAX_HEX_ESCAPE_DIGITS = 4


@dataclass(frozen=True)
class RawLiteral:
	"""Exact source characters of a string literal token, quotes included."""

	source_text: str
	is_verbatim: bool = False

	@classmethod
	def from_source(cls, text: str) -> "RawLiteral":
		return cls(source_text=text, is_verbatim=text.startswith("@"))

	@property
	def content_start(self) -> int:
		return _content_start(self.is_verbatim)

	@property
	def content_end(self) -> int:
		return _content_end(self.source_text, self.is_verbatim)


def _content_start(is_verbatim: bool) -> int:
	return 2 if is_verbatim else 1


def _content_end(raw: str, is_verbatim: bool) -> int:
	start = _content_start(is_verbatim)
	if len(raw) > start and raw.endswith('"'):
		return len(raw) - 1
	return max(len(raw), start)


def _escape_width(raw: str, i: int) -> int:
	"""Raw width of the escape sequence starting at `raw[i] == '\\\\'`."""
	if i + 1 >= len(raw):
		return 1
	kind = raw[i + 1]
	if kind == "x":
		j = i + 2
		while j < len(raw) and j < i + 2 + _MAX_HEX_ESCAPE_DIGITS and raw[j] in _HEX_DIGITS:
			j += 1
		return j - i
	if kind == "u":
		return 6
	if kind == "U":
		return 10
	return 2


def _step(raw: str, i: int, is_verbatim: bool) -> int:
	if is_verbatim:
		return 2 if raw.startswith('""', i) else 1
	if raw[i] == "\\":
		return _escape_width(raw, i)
	return 1


def map_offset(raw_text: str, is_verbatim: bool, decoded_offset: int) -> int:
	"""
	Map an offset into the decoded literal value to an offset into `raw_text`.

	Offsets before the content clamp to the content start; offsets past the
	end clamp to the closing quote.
	"""
	start = _content_start(is_verbatim)
	end = _content_end(raw_text, is_verbatim)
	i = start
	decoded = 0
	while decoded < decoded_offset and i < end:
		i += _step(raw_text, i, is_verbatim)
		decoded += 1
	return min(i, end)


def map_range(literal: RawLiteral, start: int, length: int) -> Tuple[int, int]:
	"""Map a decoded (start, length) range to a raw (start, length) range."""
	raw_start = map_offset(literal.source_text, literal.is_verbatim, start)
	raw_end = map_offset(literal.source_text, literal.is_verbatim, start + max(length, 0))
	return raw_start, raw_end - raw_start


def span_in_literal(literal: RawLiteral, literal_span: Span, raw_start: int, raw_length: int) -> Span:
	"""
	Build a file span for a raw range inside a literal whose first character
	(`"` or `@`) sits at `literal_span`. Verbatim literals may cross lines.
	"""
	prefix = literal.source_text[:raw_start]
	newlines = prefix.count("\n")
	if newlines == 0 or literal_span.line is None:
		line = literal_span.line
		column = literal_span.column + raw_start if literal_span.column is not None else None
	else:
		line = literal_span.line + newlines
		column = raw_start - prefix.rfind("\n")
	# Without a file offset the span stays relative to the literal token.
	offset = literal_span.offset + raw_start if literal_span.offset is not None else raw_start
	return Span(file=literal_span.file, line=line, column=column, length=raw_length, offset=offset)


def decode_literal(raw_text: str) -> str:
	"""
	Decode a C#-style string literal token into its runtime value.

	Raises MtlintError(reason_code="literal-malformed") for tokens the
	analyzer cannot interpret.
	"""
	literal = RawLiteral.from_source(raw_text)
	opener = '@"' if literal.is_verbatim else '"'
	if not raw_text.startswith(opener) or len(raw_text) < len(opener) + 1 or not raw_text.endswith('"'):
		raise MtlintError("literal-malformed", "string literal is not quoted", detail=raw_text)
	end = literal.content_end
	out: list[str] = []
	i = literal.content_start
	while i < end:
		ch = raw_text[i]
		if literal.is_verbatim:
			if ch == '"':
				if not raw_text.startswith('""', i):
					raise MtlintError("literal-malformed", "unescaped quote in verbatim literal", detail=raw_text)
				out.append('"')
				i += 2
				continue
			out.append(ch)
			i += 1
			continue
		if ch != "\\":
			out.append(ch)
			i += 1
			continue
		width = _escape_width(raw_text, i)
		body = raw_text[i + 2 : i + width]
		kind = raw_text[i + 1] if i + 1 < end else ""
		if kind in _SIMPLE_ESCAPES:
			out.append(_SIMPLE_ESCAPES[kind])
		elif kind in ("x", "u", "U"):
			expected = {"u": 4, "U": 8}.get(kind)
			if not body or (expected is not None and (len(body) != expected or i + width > end)):
				raise MtlintError("literal-malformed", f"truncated \\{kind} escape", detail=raw_text)
			if any(c not in _HEX_DIGITS for c in body):
				raise MtlintError("literal-malformed", f"invalid hex digit in \\{kind} escape", detail=raw_text)
			code_point = int(body, 16)
			if code_point > 0x10FFFF:
				raise MtlintError("literal-malformed", "escape is outside the unicode range", detail=raw_text)
			out.append(chr(code_point))
		else:
			raise MtlintError("literal-malformed", f"unrecognized escape sequence '\\{kind}'", detail=raw_text)
		i += width
	return "".join(out)


__all__ = ["RawLiteral", "decode_literal", "map_offset", "map_range", "span_in_literal"]
