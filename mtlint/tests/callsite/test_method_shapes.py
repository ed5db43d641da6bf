#!/usr/bin/env python3
# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Method shape validation and table merging."""

import pytest

from mtlint.callsite.shapes import MEL_LEVEL_METHODS, SERILOG_LEVEL_METHODS, MethodShape, ParamRole, ShapeTable, default_shapes

R, O, E, T, V, VS = (
	ParamRole.RECEIVER,
	ParamRole.OTHER,
	ParamRole.EXCEPTION,
	ParamRole.TEMPLATE,
	ParamRole.VALUE,
	ParamRole.VALUES,
)


@pytest.mark.parametrize(
	"roles",
	[
		(V, VS),
		(T, T),
		(T, R),
		(T, E),
		(V, T),
		(T, VS, V),
	],
)
def test_invalid_overloads_are_rejected(roles):
	with pytest.raises(ValueError):
		MethodShape.of("Bad", roles)


def test_default_table_covers_well_known_loggers():
	table = default_shapes()
	for name in SERILOG_LEVEL_METHODS + MEL_LEVEL_METHODS + ("Write", "Log"):
		assert name in table
	assert (E, T, VS) in table.lookup("Fatal").overloads


def test_register_merges_overloads_without_duplicates():
	table = ShapeTable([MethodShape.of("Audit", (T, VS))])
	table.register(MethodShape.of("Audit", (T, VS), (E, T, VS), requires_constant=False))
	shape = table.lookup("Audit")
	assert shape.overloads == ((T, VS), (E, T, VS))
	assert shape.requires_constant is False


def test_copy_is_independent():
	table = default_shapes()
	clone = table.copy()
	clone.register(MethodShape.of("Audit", (T,)))
	assert "Audit" in clone
	assert "Audit" not in table


def test_to_dict_is_sorted_and_serializable():
	table = ShapeTable([MethodShape.of("B", (T,)), MethodShape.of("A", (R, T, V))])
	assert list(table.to_dict()) == ["A", "B"]
	assert table.to_dict()["A"] == {"overloads": [["receiver", "template", "value"]], "requires_constant": True}
	assert len(table) == 2


def test_role_parse_is_case_insensitive():
	assert ParamRole.parse(" Template ") is T
	with pytest.raises(ValueError):
		ParamRole.parse("message")
