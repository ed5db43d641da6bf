# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Analyzer configuration.

Configuration is a small JSON document (`mtlint.json` by default):

	{
	  "methods": {"Audit": [["template", "values"], ["exception", "template", "values"]]},
	  "replace_default_methods": false,
	  "exception_types": ["MyFailure"],
	  "extension_classes": ["LoggerExtensions"],
	  "disabled_rules": ["NON_PASCAL_CASE"],
	  "require_constant_template": true
	}

Every key is optional. Errors are reported as MtlintError with
`config-unreadable` or `config-invalid` reason codes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, FrozenSet, Iterable, Optional

from loguru import logger

from mtlint import logs
from mtlint.callsite.shapes import MethodShape, ParamRole, ShapeTable, default_shapes
from mtlint.core.codes import DiagnosticId
from mtlint.errors import MtlintError

DEFAULT_CONFIG_NAME = "mtlint.json"

_KNOWN_KEYS = frozenset(
	{
		"methods",
		"replace_default_methods",
		"exception_types",
		"extension_classes",
		"disabled_rules",
		"require_constant_template",
	}
)


@dataclass(frozen=True)
class Config:
	shapes: ShapeTable = field(default_factory=default_shapes, compare=False)
	exception_types: FrozenSet[str] = frozenset({"Exception", "System.Exception"})
	extension_classes: FrozenSet[str] = frozenset()
	disabled_rules: FrozenSet[DiagnosticId] = frozenset()
	require_constant_template: bool = True
	path: Optional[Path] = None

	def is_enabled(self, diag_id: DiagnosticId) -> bool:
		return diag_id not in self.disabled_rules

	def extended(
		self,
		*,
		shapes: Iterable[MethodShape] = (),
		extension_classes: Iterable[str] = (),
		exception_types: Iterable[str] = (),
	) -> "Config":
		"""Return a copy with additional shapes/classes (e.g. discovered in source)."""
		table = self.shapes.copy()
		for shape in shapes:
			table.register(shape)
		return replace(
			self,
			shapes=table,
			extension_classes=self.extension_classes | frozenset(extension_classes),
			exception_types=self.exception_types | frozenset(exception_types),
		)


def _invalid(path: Optional[Path], message: str) -> MtlintError:
	return MtlintError("config-invalid", message, path=str(path) if path is not None else None)


def _string_list(obj: dict[str, Any], key: str, path: Optional[Path]) -> list[str]:
	value = obj.get(key, [])
	if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
		raise _invalid(path, f"'{key}' must be a list of non-empty strings")
	return list(value)


def _parse_methods(obj: Any, path: Optional[Path], require_constant: bool) -> list[MethodShape]:
	if not isinstance(obj, dict):
		raise _invalid(path, "'methods' must be an object mapping method names to overload lists")
	shapes: list[MethodShape] = []
	for name, overloads in obj.items():
		if not isinstance(overloads, list) or not overloads:
			raise _invalid(path, f"method '{name}' needs a non-empty list of overloads")
		parsed = []
		for overload in overloads:
			if not isinstance(overload, list):
				raise _invalid(path, f"overload of '{name}' must be a list of roles")
			try:
				parsed.append(tuple(ParamRole.parse(str(role)) for role in overload))
			except ValueError:
				raise _invalid(path, f"unknown parameter role in '{name}': {overload}") from None
		try:
			shapes.append(MethodShape.of(name, *parsed, requires_constant=require_constant))
		except ValueError as err:
			raise _invalid(path, f"method '{name}': {err}") from None
	return shapes


def config_from_dict(obj: Any, path: Optional[Path] = None) -> Config:
	if not isinstance(obj, dict):
		raise _invalid(path, "configuration root must be a JSON object")
	unknown = sorted(set(obj) - _KNOWN_KEYS)
	if unknown:
		raise _invalid(path, f"unknown configuration key(s): {', '.join(unknown)}")

	require_constant = obj.get("require_constant_template", True)
	replace_defaults = obj.get("replace_default_methods", False)
	if not isinstance(require_constant, bool) or not isinstance(replace_defaults, bool):
		raise _invalid(path, "'require_constant_template' and 'replace_default_methods' must be booleans")

	table = ShapeTable() if replace_defaults else ShapeTable(
		MethodShape(s.name, s.overloads, requires_constant=require_constant) for s in default_shapes()
	)
	added = _parse_methods(obj.get("methods", {}), path, require_constant)
	for shape in added:
		table.register(shape)
	if added:
		logger.debug(logs.CONFIG_METHODS_ADDED.format(count=len(added)))

	try:
		disabled = frozenset(DiagnosticId.parse(r) for r in _string_list(obj, "disabled_rules", path))
	except ValueError:
		raise _invalid(path, "'disabled_rules' contains an unknown rule id") from None

	return Config(
		shapes=table,
		exception_types=Config().exception_types | frozenset(_string_list(obj, "exception_types", path)),
		extension_classes=frozenset(_string_list(obj, "extension_classes", path)),
		disabled_rules=disabled,
		require_constant_template=require_constant,
		path=path,
	)


def load_config(path: Optional[Path] = None, *, search_dir: Optional[Path] = None) -> Config:
	"""
	Load configuration from `path`, or from `<search_dir>/mtlint.json` when it
	exists, or fall back to the built-in defaults.
	"""
	if path is None:
		candidate = (search_dir or Path.cwd()) / DEFAULT_CONFIG_NAME
		if not candidate.is_file():
			logger.debug(logs.CONFIG_DEFAULTS)
			return Config()
		path = candidate
	try:
		text = path.read_text(encoding="utf-8")
	except OSError as err:
		raise MtlintError("config-unreadable", "cannot read configuration file", path=str(path), detail=str(err)) from err
	try:
		obj = json.loads(text)
	except json.JSONDecodeError as err:
		raise MtlintError("config-invalid", "configuration is not valid JSON", path=str(path), detail=str(err)) from err
	config = config_from_dict(obj, path)
	logger.info(logs.CONFIG_LOADED.format(path=path))
	return config


__all__ = ["Config", "DEFAULT_CONFIG_NAME", "config_from_dict", "load_config"]
