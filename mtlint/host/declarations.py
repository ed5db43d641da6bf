# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declaration facts collected from one source file.

The host has no compiler, so types come from a flat, file-wide symbol table
built with regexes over the masked source:

  - `catch (T x)`, typed locals, fields and parameters (`T x =`, `T x,` ...);
  - `var x = new T(...)`, `var x = "..."` and `var x = Method(...)`;
  - method return types (`T Method(`);
  - `const string` fields and locals with their decoded values;
  - class declarations with their base lists.

`discover_declarations` additionally turns methods marked with
`[MessageTemplateFormatMethod("param")]` into method shapes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from loguru import logger

from mtlint import logs
from mtlint.callsite.shapes import MethodShape, ParamRole
from mtlint.errors import MtlintError

from .expressions import classify_argument
from .lexical import LineIndex, find_closing, mask_source, split_top_level

# Words that can precede an identifier without being its type.
KEYWORDS: FrozenSet[str] = frozenset(
	{
		"abstract", "as", "async", "await", "base", "break", "case", "catch", "checked", "class",
		"const", "continue", "default", "delegate", "do", "else", "enum", "event", "explicit",
		"extern", "finally", "fixed", "for", "foreach", "goto", "if", "implicit", "in", "interface",
		"internal", "is", "lock", "namespace", "new", "operator", "out", "override", "params",
		"partial", "private", "protected", "public", "readonly", "ref", "return", "sealed", "sizeof",
		"stackalloc", "static", "struct", "switch", "this", "throw", "try", "typeof", "unchecked",
		"unsafe", "using", "virtual", "volatile", "when", "where", "while", "yield",
	}
)

_TYPE = r"[A-Za-z_][\w.]*(?:<[^<>;(){}]*>)?(?:\[\s*\])*\??"

_CATCH_RE = re.compile(r"\bcatch\s*\(\s*(?P<type>[A-Za-z_][\w.]*)\s+(?P<name>@?[A-Za-z_]\w*)\s*\)")
_TYPED_RE = re.compile(r"(?<![\w.@])(?P<type>" + _TYPE + r")\s+(?P<name>@?[A-Za-z_]\w*)\s*(?=[=;,)])")
_VAR_NEW_RE = re.compile(r"\bvar\s+(?P<name>@?[A-Za-z_]\w*)\s*=\s*new\s+(?P<type>[A-Za-z_][\w.]*)")
_VAR_STRING_RE = re.compile(r"\bvar\s+(?P<name>@?[A-Za-z_]\w*)\s*=\s*[$@]*\"")
_VAR_CALL_RE = re.compile(r"\bvar\s+(?P<name>@?[A-Za-z_]\w*)\s*=\s*(?:[A-Za-z_][\w.]*\.)?(?P<callee>[A-Za-z_]\w*)\s*\(")
_CONST_RE = re.compile(r"\bconst\s+(?P<type>" + _TYPE + r")\s+(?P<name>@?[A-Za-z_]\w*)\s*=")
_METHOD_RE = re.compile(r"(?<![\w.@])(?P<type>" + _TYPE + r")\s+(?P<name>[A-Za-z_]\w*)\s*(?:<[^<>;(){}]*>\s*)?\(")
_CLASS_RE = re.compile(
	r"\b(?P<kind>class|struct|interface|record)\s+(?P<name>[A-Za-z_]\w*)(?:\s*<[^<>{]*>)?(?:\s*:\s*(?P<bases>[^{;]+?))?\s*(?:where\b[^{]*)?\{"
)
_ATTRIBUTE_RE = re.compile(r"\[\s*(?:[A-Za-z_][\w.]*\.)?MessageTemplateFormatMethod(?:Attribute)?\s*\(\s*\"")
_MODIFIERS = frozenset({"this", "params", "ref", "out", "in", "scoped", "readonly"})


def _ident(name: str) -> str:
	return name[1:] if name.startswith("@") else name


def _simple(type_name: str) -> str:
	"""`System.ArgumentException` -> `ArgumentException`; generics/arrays/nullable stripped."""
	base = re.split(r"[<\[?]", type_name, maxsplit=1)[0].strip()
	return base.rsplit(".", 1)[-1]


@dataclass
class ClassDecl:
	name: str
	bases: Tuple[str, ...]
	body_start: int
	body_end: int
	is_static: bool = False


@dataclass
class Declarations:
	"""File-wide symbol facts used to type call arguments."""

	variables: Dict[str, str] = field(default_factory=dict)
	# `var x = Method(...)`: resolved against `returns` on lookup.
	variable_calls: Dict[str, str] = field(default_factory=dict)
	returns: Dict[str, str] = field(default_factory=dict)
	# Decoded values of `const` strings.
	constants: Dict[str, str] = field(default_factory=dict)
	classes: List[ClassDecl] = field(default_factory=list)
	exception_types: FrozenSet[str] = frozenset({"Exception"})

	def variable_type(self, name: str) -> Optional[str]:
		name = _ident(name)
		if name in self.variables:
			return self.variables[name]
		callee = self.variable_calls.get(name)
		return self.returns.get(callee) if callee is not None else None

	def return_type(self, method: str) -> Optional[str]:
		return self.returns.get(_ident(method))

	def constant_value(self, name: str) -> Optional[str]:
		"""Value of the constant `name`; `Messages.Hello` resolves by its last segment."""
		return self.constants.get(_ident(name.rsplit(".", 1)[-1]))

	def _bases(self, simple_name: str) -> Tuple[str, ...]:
		for cls in self.classes:
			if cls.name == simple_name:
				return cls.bases
		return ()

	def is_exception(self, type_name: Optional[str]) -> bool:
		"""True when `type_name` is an exception type or derives from one in this file."""
		if not type_name:
			return False
		seen: Set[str] = set()
		pending = [type_name]
		while pending:
			current = pending.pop()
			simple = _simple(current)
			if simple in seen:
				continue
			seen.add(simple)
			if current in self.exception_types or simple in self.exception_types or simple.endswith("Exception"):
				return True
			pending.extend(self._bases(simple))
		return False

	def enclosing_class(self, offset: int) -> Optional[ClassDecl]:
		best: Optional[ClassDecl] = None
		for cls in self.classes:
			if cls.body_start <= offset <= cls.body_end:
				if best is None or cls.body_start > best.body_start:
					best = cls
		return best


def _collect_classes(masked: str) -> List[ClassDecl]:
	classes = []
	for m in _CLASS_RE.finditer(masked):
		open_at = m.end() - 1
		close_at = find_closing(masked, open_at)
		bases = tuple(b.strip() for b in (m.group("bases") or "").split(",") if b.strip())
		line_start = masked.rfind("\n", 0, m.start()) + 1
		is_static = re.search(r"\bstatic\b", masked[line_start : m.start()]) is not None
		classes.append(
			ClassDecl(
				name=m.group("name"),
				bases=bases,
				body_start=open_at,
				body_end=close_at if close_at is not None else len(masked),
				is_static=is_static,
			)
		)
	return classes


def _collect_constants(text: str, masked: str, decls: Declarations) -> None:
	for m in _CONST_RE.finditer(masked):
		if _simple(m.group("type")) not in ("string", "String"):
			continue
		end = masked.find(";", m.end())
		if end == -1:
			continue
		name = _ident(m.group("name"))
		line = text.count("\n", 0, m.start()) + 1
		try:
			info = classify_argument(text[m.end() : end])
		except MtlintError as err:
			logger.warning(logs.DECL_BAD_CONSTANT.format(name=name, line=line, error=err))
			continue
		value = info.constant_value
		if value is None and info.symbol is not None:
			value = decls.constants.get(info.symbol)
		if value is not None:
			logger.debug(logs.DECL_CONSTANT.format(name=name, line=line))
			decls.constants[name] = value


def collect_declarations(text: str, exception_types: Iterable[str] = (), *, masked: Optional[str] = None) -> Declarations:
	"""Build the symbol table for `text` (later declarations win)."""
	if masked is None:
		masked = mask_source(text)
	decls = Declarations(exception_types=frozenset({"Exception"}) | frozenset(exception_types))
	decls.classes = _collect_classes(masked)
	for m in _METHOD_RE.finditer(masked):
		if m.group("type") in KEYWORDS or m.group("name") in KEYWORDS:
			continue
		decls.returns[m.group("name")] = m.group("type")
	for m in _TYPED_RE.finditer(masked):
		type_name = m.group("type")
		if type_name in KEYWORDS or type_name == "var" or _ident(m.group("name")) in KEYWORDS:
			continue
		decls.variables[_ident(m.group("name"))] = type_name
	for m in _CATCH_RE.finditer(masked):
		decls.variables[_ident(m.group("name"))] = m.group("type")
	for m in _VAR_NEW_RE.finditer(masked):
		decls.variables[_ident(m.group("name"))] = m.group("type")
	for m in _VAR_STRING_RE.finditer(masked):
		decls.variables[_ident(m.group("name"))] = "string"
	for m in _VAR_CALL_RE.finditer(masked):
		name = _ident(m.group("name"))
		if m.group("callee") != "new" and name not in decls.variables:
			decls.variable_calls[name] = m.group("callee")
	_collect_constants(text, masked, decls)
	return decls


@dataclass(frozen=True)
class Parameter:
	name: str
	type_name: str
	modifiers: FrozenSet[str] = frozenset()


def parse_parameter(text: str) -> Optional[Parameter]:
	"""Split `this ILogger logger` / `params object[] values` / `int x = 0`."""
	text = re.sub(r"^\s*(?:\[[^\]]*\]\s*)*", "", text)
	text = text.split("=", 1)[0].strip()
	words = text.split()
	modifiers = set()
	while words and words[0] in _MODIFIERS:
		modifiers.add(words.pop(0))
	if len(words) < 2:
		return None
	return Parameter(name=_ident(words[-1]), type_name=" ".join(words[:-1]), modifiers=frozenset(modifiers))


def _roles(params: List[Parameter], template: str, decls: Declarations) -> Optional[Tuple[ParamRole, ...]]:
	names = [p.name for p in params]
	if template not in names:
		return None
	template_at = names.index(template)
	roles = []
	for pos, param in enumerate(params):
		if pos == template_at:
			roles.append(ParamRole.TEMPLATE)
		elif "this" in param.modifiers and pos == 0:
			roles.append(ParamRole.RECEIVER)
		elif pos < template_at:
			roles.append(ParamRole.EXCEPTION if decls.is_exception(param.type_name) else ParamRole.OTHER)
		else:
			roles.append(ParamRole.VALUES if "params" in param.modifiers else ParamRole.VALUE)
	return tuple(roles)


@dataclass(frozen=True)
class DiscoveredMethods:
	shapes: Tuple[MethodShape, ...] = ()
	extension_classes: FrozenSet[str] = frozenset()


def discover_declarations(
	text: str,
	decls: Optional[Declarations] = None,
	*,
	masked: Optional[str] = None,
	requires_constant: bool = True,
) -> DiscoveredMethods:
	"""
	Find `[MessageTemplateFormatMethod("param")]` methods in `text`.

	Each marked method contributes one overload to the shape named after it.
	Static classes declaring marked extension methods are reported as
	extension classes, so `Class.Method(receiver, ...)` is matched with the
	receiver as the first argument.
	"""
	if masked is None:
		masked = mask_source(text)
	if decls is None:
		decls = collect_declarations(text, masked=masked)
	index = LineIndex(text)
	overloads: Dict[str, List[Tuple[ParamRole, ...]]] = {}
	extension_classes: Set[str] = set()

	for m in _ATTRIBUTE_RE.finditer(masked):
		quote_at = m.end() - 1
		close_quote = masked.find('"', quote_at + 1)
		attr_close = find_closing(masked, m.start())
		if close_quote == -1 or attr_close is None:
			continue
		template_param = text[quote_at + 1 : close_quote]
		header = _METHOD_RE.search(masked, attr_close + 1)
		if header is None:
			continue
		name = header.group("name")
		line, _ = index.locate(header.start("name"))
		open_at = header.end() - 1
		close_at = find_closing(masked, open_at)
		if close_at is None:
			continue
		params = []
		for start, end in split_top_level(masked, open_at + 1, close_at):
			param = parse_parameter(text[start:end])
			if param is not None:
				params.append(param)
		roles = _roles(params, template_param, decls)
		if roles is None:
			logger.warning(logs.DECL_TEMPLATE_PARAM_MISSING.format(param=template_param, name=name, line=line))
			continue
		try:
			MethodShape.of(name, roles)
		except ValueError as err:
			logger.warning(logs.DECL_INVALID_OVERLOAD.format(name=name, line=line, error=err))
			continue
		logger.debug(logs.DECL_TEMPLATE_METHOD.format(name=name, roles=", ".join(r.value for r in roles), line=line))
		overloads.setdefault(name, [])
		if roles not in overloads[name]:
			overloads[name].append(roles)
		if roles[0] is ParamRole.RECEIVER:
			cls = decls.enclosing_class(header.start())
			if cls is not None and cls.name not in extension_classes:
				logger.debug(logs.DECL_EXTENSION_CLASS.format(name=cls.name))
				extension_classes.add(cls.name)

	return DiscoveredMethods(
		shapes=tuple(MethodShape.of(n, *o, requires_constant=requires_constant) for n, o in overloads.items()),
		extension_classes=frozenset(extension_classes),
	)


__all__ = [
	"ClassDecl",
	"Declarations",
	"DiscoveredMethods",
	"KEYWORDS",
	"Parameter",
	"collect_declarations",
	"discover_declarations",
	"parse_parameter",
]
