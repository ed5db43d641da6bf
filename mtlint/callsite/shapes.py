# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Method shape table.

A shape lists, for one method name, the parameter-role sequence of every
overload that takes a message template. The table replaces attribute and
overload lookup in the host compiler: the policy matches a call's arguments
against these sequences to find the template and value arguments.

Role rules for one overload:
  - exactly one TEMPLATE;
  - RECEIVER only first (the `this` parameter of an extension method, present
    in the argument list only when the method is invoked in static form);
  - EXCEPTION and OTHER only before the TEMPLATE;
  - only VALUE/VALUES after the TEMPLATE, VALUES (a params array) last.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple


class ParamRole(Enum):
	RECEIVER = "receiver"
	OTHER = "other"
	EXCEPTION = "exception"
	TEMPLATE = "template"
	VALUE = "value"
	VALUES = "values"

	@classmethod
	def parse(cls, text: str) -> "ParamRole":
		return cls(text.strip().lower())


Overload = Tuple[ParamRole, ...]


def validate_overload(roles: Sequence[ParamRole]) -> None:
	"""Raise ValueError when `roles` is not a well-formed overload."""
	if list(roles).count(ParamRole.TEMPLATE) != 1:
		raise ValueError("an overload needs exactly one template parameter")
	template_at = list(roles).index(ParamRole.TEMPLATE)
	for pos, role in enumerate(roles):
		if role is ParamRole.RECEIVER and pos != 0:
			raise ValueError("the receiver parameter must come first")
		if role in (ParamRole.EXCEPTION, ParamRole.OTHER) and pos > template_at:
			raise ValueError(f"{role.value} parameter must precede the template")
		if role in (ParamRole.VALUE, ParamRole.VALUES) and pos < template_at:
			raise ValueError(f"{role.value} parameter must follow the template")
		if role is ParamRole.VALUES and pos != len(roles) - 1:
			raise ValueError("the values parameter must be last")


@dataclass(frozen=True)
class MethodShape:
	"""Template-consuming overloads of one method name."""

	name: str
	overloads: Tuple[Overload, ...]
	requires_constant: bool = True

	def __post_init__(self) -> None:
		for roles in self.overloads:
			validate_overload(roles)

	@classmethod
	def of(cls, name: str, *overloads: Sequence[ParamRole], requires_constant: bool = True) -> "MethodShape":
		return cls(name=name, overloads=tuple(tuple(o) for o in overloads), requires_constant=requires_constant)

	def merged(self, other: "MethodShape") -> "MethodShape":
		overloads = list(self.overloads)
		overloads.extend(o for o in other.overloads if o not in overloads)
		return MethodShape(
			name=self.name,
			overloads=tuple(overloads),
			requires_constant=self.requires_constant and other.requires_constant,
		)

	def to_dict(self) -> dict:
		return {
			"overloads": [[r.value for r in roles] for roles in self.overloads],
			"requires_constant": self.requires_constant,
		}


class ShapeTable:
	"""
	Name -> MethodShape lookup.

	Registering a name twice merges the overload lists, which is how shapes
	discovered in source extend the well-known defaults.
	"""

	def __init__(self, shapes: Iterable[MethodShape] = ()) -> None:
		self._by_name: Dict[str, MethodShape] = {}
		for shape in shapes:
			self.register(shape)

	def register(self, shape: MethodShape) -> None:
		existing = self._by_name.get(shape.name)
		self._by_name[shape.name] = existing.merged(shape) if existing is not None else shape

	def lookup(self, name: str) -> Optional[MethodShape]:
		return self._by_name.get(name)

	def copy(self) -> "ShapeTable":
		return ShapeTable(self._by_name.values())

	def names(self) -> List[str]:
		return sorted(self._by_name)

	def __contains__(self, name: object) -> bool:
		return name in self._by_name

	def __iter__(self) -> Iterator[MethodShape]:
		return iter(self._by_name[n] for n in self.names())

	def __len__(self) -> int:
		return len(self._by_name)

	def to_dict(self) -> dict:
		return {shape.name: shape.to_dict() for shape in self}


_E = ParamRole.EXCEPTION
_T = ParamRole.TEMPLATE
_O = ParamRole.OTHER
_VS = ParamRole.VALUES

# Serilog ILogger / static Log
SERILOG_LEVEL_METHODS = ("Verbose", "Debug", "Information", "Warning", "Error", "Fatal")
# Microsoft.Extensions.Logging LoggerExtensions
MEL_LEVEL_METHODS = ("LogTrace", "LogDebug", "LogInformation", "LogWarning", "LogError", "LogCritical")


def default_shapes() -> ShapeTable:
	"""Well-known template-consuming logger methods."""
	table = ShapeTable()
	for name in SERILOG_LEVEL_METHODS:
		table.register(MethodShape.of(name, (_T, _VS), (_E, _T, _VS)))
	# Write(LogEventLevel level, ...)
	table.register(MethodShape.of("Write", (_O, _T, _VS), (_O, _E, _T, _VS)))
	for name in MEL_LEVEL_METHODS:
		# (EventId, ...) overloads come after the plain ones so a string in the
		# first slot is taken as the template.
		table.register(MethodShape.of(name, (_T, _VS), (_E, _T, _VS), (_O, _T, _VS), (_O, _E, _T, _VS)))
	table.register(MethodShape.of("Log", (_O, _T, _VS), (_O, _E, _T, _VS), (_O, _O, _T, _VS), (_O, _O, _E, _T, _VS)))
	return table


__all__ = [
	"MEL_LEVEL_METHODS",
	"MethodShape",
	"Overload",
	"ParamRole",
	"SERILOG_LEVEL_METHODS",
	"ShapeTable",
	"default_shapes",
	"validate_overload",
]
