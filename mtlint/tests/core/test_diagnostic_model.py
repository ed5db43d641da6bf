#!/usr/bin/env python3
# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Diagnostic ids, severities and rendering."""

import pytest

from mtlint.core.codes import RULES, DiagnosticId, default_severity
from mtlint.core.diagnostics import Diagnostic, ReorderFix
from mtlint.core.span import Span


def test_codes_are_stable():
	assert [d.code for d in DiagnosticId] == ["MTL001", "MTL002", "MTL003", "MTL004", "MTL005", "MTL006"]


def test_default_severities():
	errors = {d for d in DiagnosticId if default_severity(d) == "error"}
	assert errors == {DiagnosticId.PARSE_ERROR, DiagnosticId.BIND_ERROR, DiagnosticId.DUPLICATE_NAME}
	assert set(RULES) == set(DiagnosticId)


def test_parse_accepts_name_or_code():
	assert DiagnosticId.parse("BIND_ERROR") is DiagnosticId.BIND_ERROR
	assert DiagnosticId.parse("mtl006") is DiagnosticId.NON_PASCAL_CASE
	with pytest.raises(ValueError):
		DiagnosticId.parse("MTL999")


def test_severity_defaults_from_rule():
	diag = Diagnostic(id=DiagnosticId.NON_CONSTANT_TEMPLATE, message="m")
	assert diag.severity == "warning"
	assert diag.span == Span()


def test_human_rendering_prefixes_parse_and_bind_errors():
	span = Span(file="Test0.cs", line=7, column=39, length=1)
	diag = Diagnostic(id=DiagnosticId.PARSE_ERROR, message="Found zero size alignment", span=span)
	assert diag.format_human() == (
		"Test0.cs:7:39: error MTL002: Error while parsing MessageTemplate: Found zero size alignment"
	)
	plain = Diagnostic(id=DiagnosticId.DUPLICATE_NAME, message="dup", span=span)
	assert plain.format_human() == "Test0.cs:7:39: error MTL005: dup"


def test_to_dict_carries_location_and_fix():
	diag = Diagnostic(
		id=DiagnosticId.EXCEPTION_NOT_FIRST,
		message="The exception 'ex' should be passed as first argument",
		span=Span(file="a.cs", line=3, column=5, length=2),
		fix=ReorderFix(argument_index=1, insert_index=0),
	)
	assert diag.to_dict() == {
		"id": "EXCEPTION_NOT_FIRST",
		"code": "MTL001",
		"severity": "warning",
		"message": "The exception 'ex' should be passed as first argument",
		"file": "a.cs",
		"line": 3,
		"column": 5,
		"length": 2,
		"fix": {"argument_index": 1, "insert_index": 0},
	}


def test_unknown_location_rendering():
	assert Span().format_location() == "<unknown location>"
	assert Span.relative(3, 2).is_relative
