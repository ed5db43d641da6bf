# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Property binder.

Checks a parsed template against the call's trailing value arguments. Binding
is purely by count and position: named properties take arguments in textual
order, positional properties take the argument at their index. Property
diagnostics are anchored at the property (through `locate`), argument
diagnostics at the argument's own span.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Protocol, Sequence

from mtlint.core.codes import DiagnosticId
from mtlint.core.diagnostics import Diagnostic
from mtlint.core.span import Span
from mtlint.template.segments import PropertySegment, Segment, iter_properties

# Converts a template-relative span into a file span.
Locator = Callable[[Span], Span]

MIXED_MODE = "Positional properties are not allowed, when named properties are being used"
NO_ARGUMENT_FOR_NAMED = "There is no argument that corresponds to the named property '{name}'"
NO_NAMED_PROPERTY = "There is no named property that corresponds to this argument"
NO_PROPERTY = "There is no property that corresponds to this argument"
NO_ARGUMENT_FOR_POSITIONAL = "There is no argument that corresponds to the positional property {index}"
NO_POSITIONAL_PROPERTY = "There is no positional property that corresponds to this argument"


class BoundArgument(Protocol):
	text: str
	span: Span


def _same_span(span: Span) -> Span:
	return span


def _bind_error(message: str, span: Span) -> Diagnostic:
	return Diagnostic(id=DiagnosticId.BIND_ERROR, message=message, span=span)


def _bind_named(
	properties: Sequence[PropertySegment],
	arguments: Sequence[BoundArgument],
	locate: Locator,
) -> List[Diagnostic]:
	diags: List[Diagnostic] = []
	for ordinal, prop in enumerate(properties):
		if ordinal >= len(arguments):
			diags.append(_bind_error(NO_ARGUMENT_FOR_NAMED.format(name=prop.name), locate(prop.span)))
	surplus = NO_NAMED_PROPERTY if properties else NO_PROPERTY
	for arg in arguments[len(properties):]:
		diags.append(_bind_error(surplus, arg.span))
	return diags


def _bind_positional(
	properties: Sequence[PropertySegment],
	arguments: Sequence[BoundArgument],
	locate: Locator,
) -> List[Diagnostic]:
	diags: List[Diagnostic] = []
	first_by_index: Dict[int, PropertySegment] = {}
	for prop in properties:
		assert prop.index is not None
		first_by_index.setdefault(prop.index, prop)
	for index in sorted(first_by_index):
		if index >= len(arguments):
			diags.append(_bind_error(NO_ARGUMENT_FOR_POSITIONAL.format(index=index), locate(first_by_index[index].span)))
	for position, arg in enumerate(arguments):
		if position not in first_by_index:
			diags.append(_bind_error(NO_POSITIONAL_PROPERTY, arg.span))
	return diags


def bind_properties(
	segments: Sequence[Segment],
	arguments: Sequence[BoundArgument],
	locate: Optional[Locator] = None,
) -> List[Diagnostic]:
	"""
	Produce BIND_ERROR diagnostics for a successfully parsed template.

	A template mixing positional and named properties gets one mode error at
	its first positional property; the rest of the template is then bound in
	named mode with every property taking an argument by ordinal position, so
	the mode error is the only diagnostic for a template whose property count
	matches its argument count.
	"""
	locate = locate or _same_span
	properties = list(iter_properties(segments))
	positional = [p for p in properties if p.is_positional]
	named = [p for p in properties if not p.is_positional]

	if positional and named:
		diags = [_bind_error(MIXED_MODE, locate(positional[0].span))]
		diags.extend(_bind_named(properties, arguments, locate))
		return diags
	if positional:
		return _bind_positional(positional, arguments, locate)
	return _bind_named(named, arguments, locate)


__all__ = ["BoundArgument", "Locator", "bind_properties"]
