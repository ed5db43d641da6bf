# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Message template parser.

Turns a decoded template string into a sequence of text and property
segments, or into exactly one parse error localized to an offset/length in
the decoded string. Parsing stops at the first structural error; there is no
recovery and no partial result.

Property grammar (inside `{` ... first following `}`):

	[@|$] name [ "," ["-"] digits ] [ ":" format ]

- `{{` and `}}` are literal braces inside text; a lone `}` is plain text.
- An alignment exists only when a `,` appears before the first `:`; a `,`
  after the `:` belongs to the format.
- A name made only of decimal digits is a positional property.
"""

from __future__ import annotations

import string
import unicodedata
from typing import List, Optional

from .segments import (
	Alignment,
	Destructuring,
	ParseOutcome,
	PropertyKind,
	PropertySegment,
	Segment,
	TextSegment,
)

_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_DECIMAL_DIGITS = frozenset(string.digits)


class TemplateSyntaxError(ValueError):
	"""
	Raised internally while scanning a property hole.

	`parse_template` converts it into a failed ParseOutcome so callers never
	see an exception for malformed input.
	"""

	def __init__(self, message: str, *, start: int, length: int = 1) -> None:
		super().__init__(message)
		self.message = message
		self.start = start
		self.length = length


def _is_valid_in_format(ch: str) -> bool:
	# Letters, decimal digits, punctuation and plain spaces.
	if ch == " ":
		return True
	category = unicodedata.category(ch)
	return category[0] in ("L", "P") or category == "Nd"


def _parse_alignment(template: str, comma_at: int, start: int, end: int) -> Alignment:
	text = template[start:end]
	if not text:
		raise TemplateSyntaxError("Found alignment specifier without alignment", start=comma_at)
	for k, ch in enumerate(text):
		if ch == "-":
			if k != 0:
				raise TemplateSyntaxError("'-' character must be the first in alignment", start=start + k)
		elif ch not in _DECIMAL_DIGITS:
			raise TemplateSyntaxError(f"Found invalid character '{ch}' in property alignment", start=start + k)
	is_left = text.startswith("-")
	digits = text[1:] if is_left else text
	if not digits:
		raise TemplateSyntaxError("Found alignment specifier without alignment", start=comma_at)
	value = int(digits)
	if value == 0:
		raise TemplateSyntaxError("Found zero size alignment", start=start)
	return Alignment(value=value, is_left=is_left)


def _parse_property(template: str, start: int) -> PropertySegment:
	close = template.find("}", start + 1)
	if close == -1:
		raise TemplateSyntaxError(
			"Encountered end of messageTemplate while parsing property",
			start=start,
			length=len(template) - start,
		)
	length = close - start + 1
	body_start = start + 1
	body = template[body_start:close]

	format_delim = body.find(":")
	align_delim = body.find(",")
	has_alignment = align_delim != -1 and (format_delim == -1 or align_delim < format_delim)
	if has_alignment:
		name_end = align_delim
	else:
		name_end = format_delim if format_delim != -1 else len(body)

	name = body[:name_end]
	name_at = body_start
	hint = Destructuring.NONE
	if name[:1] in ("@", "$"):
		hint = Destructuring.from_hint(name[0])
		name = name[1:]
		name_at += 1

	if not name:
		if hint is Destructuring.NONE:
			raise TemplateSyntaxError("Found property without name", start=start, length=length)
		raise TemplateSyntaxError(
			"Found property with destructuring hint but without name", start=start, length=length
		)
	where = "property name" if hint is not Destructuring.NONE else "property"
	for k, ch in enumerate(name):
		if ch not in _NAME_CHARS:
			raise TemplateSyntaxError(f"Found invalid character '{ch}' in {where}", start=name_at + k)

	alignment: Optional[Alignment] = None
	if has_alignment:
		align_end = body_start + (format_delim if format_delim != -1 else len(body))
		alignment = _parse_alignment(template, body_start + align_delim, body_start + align_delim + 1, align_end)

	fmt: Optional[str] = None
	if format_delim != -1:
		fmt_start = body_start + format_delim + 1
		fmt = template[fmt_start:close]
		for k, ch in enumerate(fmt):
			if not _is_valid_in_format(ch):
				raise TemplateSyntaxError(f"Found invalid character '{ch}' in property format", start=fmt_start + k)

	positional = all(c in _DECIMAL_DIGITS for c in name)
	return PropertySegment(
		name=name,
		kind=PropertyKind.POSITIONAL if positional else PropertyKind.NAMED,
		start=start,
		length=length,
		index=int(name) if positional else None,
		destructuring=hint,
		alignment=alignment,
		format=fmt,
	)


def parse_template(value: str) -> ParseOutcome:
	"""Parse a decoded message template; pure and total."""
	segments: List[Segment] = []
	text_buf: list[str] = []

	def _flush_text() -> None:
		if text_buf:
			segments.append(TextSegment("".join(text_buf)))
			text_buf.clear()

	i = 0
	try:
		while i < len(value):
			if value.startswith("{{", i):
				text_buf.append("{")
				i += 2
				continue
			if value.startswith("}}", i):
				text_buf.append("}")
				i += 2
				continue
			ch = value[i]
			if ch != "{":
				text_buf.append(ch)
				i += 1
				continue
			_flush_text()
			prop = _parse_property(value, i)
			segments.append(prop)
			i = prop.start + prop.length
	except TemplateSyntaxError as err:
		return ParseOutcome.failure(err.message, err.start, err.length)
	_flush_text()
	return ParseOutcome.success(segments)


__all__ = ["TemplateSyntaxError", "parse_template"]
