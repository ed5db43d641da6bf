#!/usr/bin/env python3
# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Call-site policy: overload matching and per-call diagnostics."""

from mtlint.callsite.policy import ArgumentDescriptor, CallSite, analyze_call, analyze_call_site, match_call
from mtlint.callsite.shapes import MethodShape, ParamRole, default_shapes
from mtlint.core.codes import DiagnosticId
from mtlint.core.span import Span
from mtlint.source.literal import RawLiteral, decode_literal

R, O, E, T, V, VS = (
	ParamRole.RECEIVER,
	ParamRole.OTHER,
	ParamRole.EXCEPTION,
	ParamRole.TEMPLATE,
	ParamRole.VALUE,
	ParamRole.VALUES,
)


def _lit(raw: str, column: int = 26) -> ArgumentDescriptor:
	return ArgumentDescriptor(
		text=raw,
		span=Span(line=7, column=column, length=len(raw), offset=column - 1),
		constant_value=decode_literal(raw),
		literal=RawLiteral.from_source(raw),
		type_name="string",
	)


def _name(text: str, column: int = 50, *, exception: bool = False, type_name: str | None = None) -> ArgumentDescriptor:
	return ArgumentDescriptor(
		text=text,
		span=Span(line=7, column=column, length=len(text)),
		is_exception_type=exception,
		type_name=type_name,
	)


def _ids(diags):
	return [d.id for d in diags]


def test_template_diagnostics_are_mapped_into_the_literal():
	diags = analyze_call_site(_lit('"Hello {Name:$} to the World"'), [_lit('"tester"', 57)])
	assert _ids(diags) == [DiagnosticId.PARSE_ERROR]
	assert (diags[0].span.line, diags[0].span.column, diags[0].span.length) == (7, 39, 1)


def test_clean_call_has_no_diagnostics():
	assert analyze_call_site(_lit('"Hello {Name} World"'), [_lit('"tester"', 50)]) == []


def test_non_constant_template_is_reported_at_the_argument():
	arg = _name("errorMessage", 23, type_name="string")
	diags = analyze_call_site(arg, [])
	assert _ids(diags) == [DiagnosticId.NON_CONSTANT_TEMPLATE]
	assert diags[0].message == "MessageTemplate argument errorMessage is not constant"
	assert (diags[0].span.column, diags[0].span.length) == (23, 12)


def test_non_constant_template_allowed_by_shape():
	shape = MethodShape.of("Trace", (T, VS), requires_constant=False)
	assert analyze_call_site(_name("msg"), [], shape) == []


def test_string_empty_is_a_constant_template():
	assert analyze_call_site(_name("String.Empty"), []) == []
	assert analyze_call_site(_name("string.Empty"), []) == []
	diags = analyze_call_site(_name("String.Empty", 23), [_lit('"Hello"', 37)])
	assert [(d.message, d.span.column) for d in diags] == [
		("There is no property that corresponds to this argument", 37),
	]


def test_exception_value_gets_bind_error_and_reorder_fix():
	ex = _name("ex", 49, exception=True)
	diags = analyze_call_site(_lit('"Hello World"'), [ex])
	assert _ids(diags) == [DiagnosticId.BIND_ERROR, DiagnosticId.EXCEPTION_NOT_FIRST]
	assert diags[1].message == "The exception 'ex' should be passed as first argument"
	assert diags[1].span == ex.span
	assert (diags[1].fix.argument_index, diags[1].fix.insert_index) == (1, 0)


def test_every_exception_value_is_flagged():
	diags = analyze_call_site(
		_lit('"{A} {B}"'),
		[_name("first", exception=True), _name("second", exception=True)],
	)
	assert _ids(diags) == [DiagnosticId.EXCEPTION_NOT_FIRST, DiagnosticId.EXCEPTION_NOT_FIRST]


def test_parse_error_suppresses_binding_and_naming():
	diags = analyze_call_site(_lit('"{tester"'), [_lit('"a"', 40), _lit('"b"', 45)])
	assert _ids(diags) == [DiagnosticId.PARSE_ERROR]


def test_match_call_prefers_plain_template_overload():
	call = CallSite("Warning", (_lit('"Hello"'), _name("x")))
	binding = match_call(call, default_shapes().lookup("Warning"))
	assert binding.template_index == 0
	assert binding.value_indices == (1,)


def test_match_call_takes_exception_overload_when_exception_is_first():
	call = CallSite("Error", (_name("ex", exception=True), _lit('"Failed {Id}"'), _name("id")))
	binding = match_call(call, default_shapes().lookup("Error"))
	assert binding.template_index == 1
	assert binding.exception_index == 0
	assert binding.value_indices == (2,)


def test_level_argument_precedes_template_for_write():
	call = CallSite("Write", (_name("LogEventLevel.Information"), _lit('"{A}"'), _name("a")))
	assert analyze_call(call, default_shapes()) == []


def test_static_form_uses_receiver_overloads():
	shapes = default_shapes()
	shapes.register(MethodShape.of("Warning", (R, T), (R, T, V), (R, E, T), (R, E, T, V)))
	receiver = _name("test", 38, type_name="IMyLogger")
	call = CallSite(
		"Warning",
		(receiver, _lit('"Hello World"', 44), _name("ex", 63, exception=True)),
		explicit_receiver=True,
	)
	diags = analyze_call(call, shapes)
	assert _ids(diags) == [DiagnosticId.BIND_ERROR, DiagnosticId.EXCEPTION_NOT_FIRST]
	assert all(d.span.column == 63 for d in diags)
	assert (diags[1].fix.argument_index, diags[1].fix.insert_index) == (2, 1)


def test_instance_form_skips_the_receiver():
	shape = MethodShape.of("Audit", (R, T, V))
	call = CallSite("Audit", (_lit('"{Who}"'), _name("who")))
	binding = match_call(call, shape)
	assert binding.overload == (T, V)


def test_fixed_arity_overloads_must_match_exactly():
	shape = MethodShape.of("Audit", (T, V))
	assert match_call(CallSite("Audit", (_lit('"{A}"'),)), shape) is None
	assert match_call(CallSite("Audit", (_lit('"{A}"'), _name("a"), _name("b"))), shape) is None


def test_unknown_methods_are_ignored():
	assert analyze_call(CallSite("Print", (_lit('"{bad"'),)), default_shapes()) == []


def test_exception_cannot_be_the_template():
	call = CallSite("Information", (_name("ex", exception=True),))
	assert analyze_call(call, default_shapes()) == []


def test_unknown_leading_argument_does_not_steal_the_template():
	call = CallSite(
		"LogError",
		(_name("context.Exception", 22), _lit('"Failed {Id}"', 41), _name("1", 56, type_name="int")),
	)
	binding = match_call(call, default_shapes().lookup("LogError"))
	assert (binding.template_index, binding.exception_index, binding.value_indices) == (1, 0, (2,))
	assert analyze_call(call, default_shapes()) == []


def test_template_errors_after_unknown_leading_argument_are_reported():
	call = CallSite("LogError", (_name("context.Exception", 22), _lit('"Failed {Id"', 41), _name("id", 55)))
	diags = analyze_call(call, default_shapes())
	assert _ids(diags) == [DiagnosticId.PARSE_ERROR]
	assert diags[0].message == "Encountered end of messageTemplate while parsing property"


def test_unknown_argument_alone_is_still_a_non_constant_template():
	call = CallSite("LogError", (_name("message", 22), _name("id", 31, type_name="int")))
	diags = analyze_call(call, default_shapes())
	assert _ids(diags) == [DiagnosticId.NON_CONSTANT_TEMPLATE]
