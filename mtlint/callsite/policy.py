# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Call-site policy.

Decides which argument of a logger call is the message template and which
arguments are values, then runs the template passes:

	match_call -> parse_template -> bind_properties / check_naming

plus the two call-level checks that do not need a parsed template:
NON_CONSTANT_TEMPLATE and EXCEPTION_NOT_FIRST. Every pass reports into one
flat list; nothing here raises for malformed user code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence, Tuple

from mtlint.checker.binder import Locator, bind_properties
from mtlint.checker.naming import check_naming
from mtlint.core.codes import DiagnosticId
from mtlint.core.diagnostics import Diagnostic, ReorderFix
from mtlint.core.span import Span
from mtlint.source.literal import RawLiteral, map_range, span_in_literal
from mtlint.template.parser import parse_template

from .shapes import MethodShape, ParamRole, ShapeTable

# Member accesses that denote the constant empty string.
EMPTY_STRING_EXPRESSIONS: FrozenSet[str] = frozenset({"String.Empty", "string.Empty", "System.String.Empty"})
STRING_TYPE_NAMES: FrozenSet[str] = frozenset({"string", "String", "System.String"})


@dataclass(frozen=True)
class ArgumentDescriptor:
	"""
	One call argument as seen by the policy.

	`constant_value` is the decoded compile-time string value when the host
	knows it; `literal` is set when that value comes from a single literal
	token, which is what allows diagnostics to point inside the string.
	"""

	text: str
	span: Span = field(default_factory=Span)
	is_exception_type: bool = False
	constant_value: Optional[str] = None
	literal: Optional[RawLiteral] = None
	type_name: Optional[str] = None


@dataclass(frozen=True)
class CallSite:
	method_name: str
	arguments: Tuple[ArgumentDescriptor, ...]
	# True for extension methods invoked as `Extensions.Method(receiver, ...)`.
	explicit_receiver: bool = False
	span: Span = field(default_factory=Span)


@dataclass(frozen=True)
class CallBinding:
	"""Result of matching a call against one overload."""

	overload: Tuple[ParamRole, ...]
	template_index: int
	value_indices: Tuple[int, ...]
	exception_index: Optional[int] = None


def _may_be_template(arg: ArgumentDescriptor) -> bool:
	if arg.is_exception_type:
		return False
	if arg.constant_value is not None or arg.type_name is None:
		return True
	return arg.type_name in STRING_TYPE_NAMES


def _effective_roles(call: CallSite, overload: Sequence[ParamRole]) -> Optional[List[ParamRole]]:
	roles = list(overload)
	has_receiver = bool(roles) and roles[0] is ParamRole.RECEIVER
	if call.explicit_receiver:
		return roles if has_receiver else None
	return roles[1:] if has_receiver else roles


def _type_unknown(arg: ArgumentDescriptor) -> bool:
	return arg.type_name is None and arg.constant_value is None and not arg.is_exception_type


def _fit(roles: Sequence[ParamRole], args: Sequence[ArgumentDescriptor], *, lenient: bool = False) -> bool:
	"""
	True when `args` fit `roles`. With `lenient`, an argument of unknown type
	may fill an EXCEPTION slot.
	"""
	variadic = bool(roles) and roles[-1] is ParamRole.VALUES
	fixed = roles[:-1] if variadic else roles
	if len(args) < len(fixed) or (not variadic and len(args) != len(fixed)):
		return False
	for role, arg in zip(fixed, args):
		if role is ParamRole.EXCEPTION and not (arg.is_exception_type or (lenient and _type_unknown(arg))):
			return False
		if role is ParamRole.TEMPLATE and not _may_be_template(arg):
			return False
	return True


def _binding(roles: List[ParamRole], call: CallSite) -> CallBinding:
	template_index = roles.index(ParamRole.TEMPLATE)
	exception_index = roles.index(ParamRole.EXCEPTION) if ParamRole.EXCEPTION in roles else None
	return CallBinding(
		overload=tuple(roles),
		template_index=template_index,
		value_indices=tuple(range(template_index + 1, len(call.arguments))),
		exception_index=exception_index,
	)


def match_call(call: CallSite, shape: MethodShape) -> Optional[CallBinding]:
	"""
	Pick the overload of `shape` that fits the call's arguments.

	The first overload whose template slot holds a constant string wins;
	unknown-typed arguments may fill exception slots for this. Without such
	an overload, the first strict fit is taken.
	"""
	candidates = []
	for overload in shape.overloads:
		roles = _effective_roles(call, overload)
		if roles is not None:
			candidates.append(roles)
	for roles in candidates:
		if not _fit(roles, call.arguments, lenient=True):
			continue
		template = call.arguments[roles.index(ParamRole.TEMPLATE)]
		if _constant_value(template) is not None:
			return _binding(roles, call)
	for roles in candidates:
		if _fit(roles, call.arguments):
			return _binding(roles, call)
	return None


def _template_locator(template: ArgumentDescriptor) -> Locator:
	literal = template.literal

	def _locate(span: Span) -> Span:
		if literal is None or span.offset is None:
			return template.span
		raw_start, raw_length = map_range(literal, span.offset, span.length or 0)
		return span_in_literal(literal, template.span, raw_start, raw_length)

	return _locate


def _constant_value(template: ArgumentDescriptor) -> Optional[str]:
	if template.constant_value is not None:
		return template.constant_value
	if template.text.strip() in EMPTY_STRING_EXPRESSIONS:
		return ""
	return None


def analyze_call_site(
	template_argument: ArgumentDescriptor,
	value_arguments: Sequence[ArgumentDescriptor],
	shape: Optional[MethodShape] = None,
	*,
	value_indices: Optional[Sequence[int]] = None,
	insert_index: int = 0,
) -> List[Diagnostic]:
	"""
	Analyze one call whose template and value arguments are already known.

	`value_indices` are the call-argument positions of `value_arguments`
	(default: the template is argument 0); `insert_index` is where the code
	fix should move an exception argument.
	"""
	diags: List[Diagnostic] = []
	value = _constant_value(template_argument)
	if value is None:
		if shape is None or shape.requires_constant:
			diags.append(
				Diagnostic(
					id=DiagnosticId.NON_CONSTANT_TEMPLATE,
					message=f"MessageTemplate argument {template_argument.text} is not constant",
					span=template_argument.span,
				)
			)
	else:
		locate = _template_locator(template_argument)
		outcome = parse_template(value)
		if outcome.error is not None:
			diags.append(
				Diagnostic(
					id=DiagnosticId.PARSE_ERROR,
					message=outcome.error.message,
					span=locate(outcome.error.span),
				)
			)
		else:
			assert outcome.segments is not None
			diags.extend(bind_properties(outcome.segments, value_arguments, locate))
			diags.extend(check_naming(outcome.segments, locate))

	indices = list(value_indices) if value_indices is not None else list(range(1, len(value_arguments) + 1))
	for index, arg in zip(indices, value_arguments):
		if arg.is_exception_type:
			diags.append(
				Diagnostic(
					id=DiagnosticId.EXCEPTION_NOT_FIRST,
					message=f"The exception '{arg.text}' should be passed as first argument",
					span=arg.span,
					fix=ReorderFix(argument_index=index, insert_index=insert_index),
				)
			)
	return diags


def analyze_call(call: CallSite, shapes: ShapeTable) -> List[Diagnostic]:
	"""Analyze a call to any method; unknown methods and non-matching calls yield nothing."""
	shape = shapes.lookup(call.method_name)
	if shape is None:
		return []
	binding = match_call(call, shape)
	if binding is None:
		return []
	return analyze_call_site(
		call.arguments[binding.template_index],
		[call.arguments[i] for i in binding.value_indices],
		shape,
		value_indices=binding.value_indices,
		# The exception slot sits right before the template (after any receiver
		# or level argument).
		insert_index=binding.template_index,
	)


__all__ = [
	"ArgumentDescriptor",
	"CallBinding",
	"CallSite",
	"EMPTY_STRING_EXPRESSIONS",
	"analyze_call",
	"analyze_call_site",
	"match_call",
]
