# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parsed message template representation.

A template is an ordered sequence of segments: literal text runs and
`{...}` property holes. `Segment` is a closed union; consumers match on the
two concrete classes and fail loudly on anything else (see `iter_properties`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, Sequence, Tuple, Union

from mtlint.core.span import Span


class PropertyKind(Enum):
	NAMED = auto()
	POSITIONAL = auto()


class Destructuring(Enum):
	NONE = auto()
	DESTRUCTURE = auto()  # '@'
	STRINGIFY = auto()    # '$'

	@classmethod
	def from_hint(cls, ch: str) -> "Destructuring":
		return {"@": cls.DESTRUCTURE, "$": cls.STRINGIFY}.get(ch, cls.NONE)


@dataclass(frozen=True)
class Alignment:
	value: int
	is_left: bool = False


@dataclass(frozen=True)
class TextSegment:
	text: str


@dataclass(frozen=True)
class PropertySegment:
	"""
	A property hole. `start`/`length` cover `{` through `}` in the decoded
	template; `index` is set iff the property is positional.
	"""

	name: str
	kind: PropertyKind
	start: int
	length: int
	index: Optional[int] = None
	destructuring: Destructuring = Destructuring.NONE
	alignment: Optional[Alignment] = None
	format: Optional[str] = None

	@property
	def is_positional(self) -> bool:
		return self.kind is PropertyKind.POSITIONAL

	@property
	def span(self) -> Span:
		return Span.relative(self.start, self.length)


Segment = Union[TextSegment, PropertySegment]


@dataclass(frozen=True)
class ParseError:
	message: str
	start: int
	length: int

	@property
	def span(self) -> Span:
		return Span.relative(self.start, self.length)


@dataclass(frozen=True)
class ParseOutcome:
	"""Either a complete segment sequence or exactly one parse error."""

	segments: Optional[Tuple[Segment, ...]] = None
	error: Optional[ParseError] = None

	def __post_init__(self) -> None:
		if (self.segments is None) == (self.error is None):
			raise ValueError("ParseOutcome requires exactly one of segments/error")

	@property
	def ok(self) -> bool:
		return self.error is None

	@classmethod
	def success(cls, segments: Sequence[Segment]) -> "ParseOutcome":
		return cls(segments=tuple(segments))

	@classmethod
	def failure(cls, message: str, start: int, length: int = 1) -> "ParseOutcome":
		return cls(error=ParseError(message=message, start=start, length=length))


def iter_properties(segments: Sequence[Segment]) -> Iterator[PropertySegment]:
	for seg in segments:
		if isinstance(seg, PropertySegment):
			yield seg
		elif not isinstance(seg, TextSegment):
			raise TypeError(f"unexpected template segment {type(seg).__name__}")


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
]
