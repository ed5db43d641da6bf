#!/usr/bin/env python3
# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Property binding by count and position."""

from dataclasses import dataclass

from mtlint.checker.binder import bind_properties
from mtlint.core.codes import DiagnosticId
from mtlint.core.span import Span
from mtlint.template.parser import parse_template


@dataclass(frozen=True)
class _Arg:
	text: str
	span: Span


def _args(*texts: str) -> list[_Arg]:
	# Each argument gets a distinct fake location so diagnostics can be told apart.
	return [_Arg(text=t, span=Span(line=1, column=100 + k, length=len(t))) for k, t in enumerate(texts)]


def _bind(template: str, *args: str):
	outcome = parse_template(template)
	assert outcome.ok
	diags = bind_properties(outcome.segments, _args(*args))
	assert all(d.id is DiagnosticId.BIND_ERROR for d in diags)
	return [(d.message, d.span.offset if d.span.is_relative else d.span.column) for d in diags]


def test_matching_named_counts_are_clean():
	assert _bind("{User} did {Action} {Subject}", "a", "b", "c") == []


def test_named_properties_without_arguments():
	assert _bind("{User} did {Action} {Subject}", "a", "b") == [
		("There is no argument that corresponds to the named property 'Subject'", 20),
	]


def test_surplus_arguments_for_named_template():
	assert _bind("{User} did {Action}", "a", "b", "c") == [
		("There is no named property that corresponds to this argument", 102),
	]


def test_arguments_without_any_property():
	assert _bind("", "a") == [("There is no property that corresponds to this argument", 100)]
	assert _bind("plain text", "a", "b") == [
		("There is no property that corresponds to this argument", 100),
		("There is no property that corresponds to this argument", 101),
	]


def test_positional_beyond_arguments():
	assert _bind("{1}", "tester") == [
		("There is no argument that corresponds to the positional property 1", 0),
		("There is no positional property that corresponds to this argument", 100),
	]


def test_positional_surplus_arguments():
	assert _bind("{0}", "Mr.", "Tester") == [
		("There is no positional property that corresponds to this argument", 101),
	]
	assert _bind("{1}", "Mr.", "Tester") == [
		("There is no positional property that corresponds to this argument", 100),
	]


def test_repeated_positional_index_reported_once():
	assert _bind("{3} and {3}", "a", "b", "c", "d") == [
		("There is no positional property that corresponds to this argument", 100),
		("There is no positional property that corresponds to this argument", 101),
		("There is no positional property that corresponds to this argument", 102),
	]
	assert _bind("{2} {2}", "a") == [
		("There is no argument that corresponds to the positional property 2", 0),
		("There is no positional property that corresponds to this argument", 100),
	]


def test_positional_order_does_not_matter():
	assert _bind("{1} then {0}", "a", "b") == []


def test_mixed_mode_reports_once_at_first_positional():
	assert _bind("{0} mixed with {Kind} Property", "positional", "named") == [
		("Positional properties are not allowed, when named properties are being used", 0),
	]


def test_mixed_mode_still_counts_arguments():
	diags = _bind("{Kind} then {0}", "one")
	assert diags == [
		("Positional properties are not allowed, when named properties are being used", 12),
		("There is no argument that corresponds to the named property '0'", 12),
	]


def test_template_without_properties_and_arguments_is_clean():
	assert _bind("just text") == []


def test_locator_is_applied_to_property_spans():
	outcome = parse_template("{Missing}")
	shifted = bind_properties(outcome.segments, [], lambda s: Span(line=9, column=s.offset + 30, length=s.length))
	assert len(shifted) == 1
	assert (shifted[0].span.line, shifted[0].span.column, shifted[0].span.length) == (9, 30, 9)
