"""mtlint.template: message template segments and parser."""

from .parser import parse_template
from .segments import (
	Alignment,
	Destructuring,
	ParseError,
	ParseOutcome,
	PropertyKind,
	PropertySegment,
	Segment,
	TextSegment,
	iter_properties,
)

__all__ = [
	"Alignment",
	"Destructuring",
	"ParseError",
	"ParseOutcome",
	"PropertyKind",
	"PropertySegment",
	"Segment",
	"TextSegment",
	"iter_properties",
	"parse_template",
]
