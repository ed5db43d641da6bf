# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Call-site scanner: source text -> CallSite records -> diagnostics.

Pipeline per file:

	mask_source -> collect_declarations -> discover_declarations
	  -> call-site regex over the masked text -> classify_argument per argument
	  -> analyze_call

Call sites whose method name is not in the shape table are ignored, as are
method declarations that happen to share a logger method's name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from loguru import logger

from mtlint import logs
from mtlint.callsite.policy import ArgumentDescriptor, CallSite, analyze_call
from mtlint.config import Config
from mtlint.core.diagnostics import Diagnostic
from mtlint.errors import MtlintError

from .declarations import KEYWORDS, Declarations, collect_declarations, discover_declarations
from .expressions import OPAQUE, ArgumentInfo, classify_argument
from .lexical import LineIndex, find_closing, mask_source, split_top_level

_CALL_RE = re.compile(
	r"(?<![\w@])(?P<qual>(?:@?[A-Za-z_]\w*\s*\??\.\s*)*)(?P<name>@?[A-Za-z_]\w*)\s*(?:<[^<>();]*>\s*)?\("
)
# Keywords after which `Name(` is still an invocation.
_CALL_KEYWORDS = frozenset({"return", "await", "else", "yield", "throw", "in", "case", "when", "is", "as", "do"})
_WORD_BEFORE_RE = re.compile(r"(@?[A-Za-z_]\w*)\s*$")


@dataclass(frozen=True)
class ScannedCall:
	"""A call site plus the raw offsets needed to rewrite its argument list."""

	call: CallSite
	open_paren: int
	close_paren: int
	argument_ranges: Tuple[Tuple[int, int], ...]


@dataclass
class SourceFacts:
	"""Everything derived from one file before call sites are analyzed."""

	text: str
	masked: str
	declarations: Declarations
	config: Config
	index: LineIndex
	file: Optional[str] = None


def prepare_source(text: str, config: Optional[Config] = None, file: Optional[str] = None) -> SourceFacts:
	"""Mask `text`, build its symbol table and extend `config` with discovered shapes."""
	config = config if config is not None else Config()
	masked = mask_source(text)
	decls = collect_declarations(text, config.exception_types, masked=masked)
	discovered = discover_declarations(
		text,
		decls,
		masked=masked,
		requires_constant=config.require_constant_template,
	)
	effective = config.extended(shapes=discovered.shapes, extension_classes=discovered.extension_classes)
	return SourceFacts(text=text, masked=masked, declarations=decls, config=effective, index=LineIndex(text), file=file)


def _is_declaration(masked: str, start: int) -> bool:
	before = masked[max(0, start - 200) : start].rstrip()
	if before.endswith("[]"):
		return True
	m = _WORD_BEFORE_RE.search(before)
	if m is None:
		return False
	word = m.group(1)
	return word not in _CALL_KEYWORDS


def _argument_type(info: ArgumentInfo, decls: Declarations) -> Optional[str]:
	if info.type_name is not None:
		return info.type_name
	if info.symbol is not None:
		return decls.variable_type(info.symbol)
	if info.callee is not None:
		return decls.return_type(info.callee)
	if info.dotted is not None and info.dotted.startswith("this."):
		return decls.variable_type(info.dotted[len("this.") :])
	return None


def _describe(facts: SourceFacts, start: int, end: int) -> ArgumentDescriptor:
	text = facts.text[start:end]
	info = classify_argument(text)
	if info is OPAQUE:
		logger.trace(logs.SCAN_OPAQUE_ARGUMENT.format(text=text))
	type_name = _argument_type(info, facts.declarations)
	constant_value = info.constant_value
	if constant_value is None and (info.symbol or info.dotted):
		# `const string` value; with no literal token, spans stay on the argument.
		constant_value = facts.declarations.constant_value(info.symbol or info.dotted or "")
	if info.literal is not None:
		# Template diagnostics are mapped relative to the literal token.
		literal_at = start + info.literal_offset
		span = facts.index.span(literal_at, len(info.literal.source_text), facts.file)
	else:
		span = facts.index.span(start, end - start, facts.file)
	return ArgumentDescriptor(
		text=text,
		span=span,
		is_exception_type=facts.declarations.is_exception(type_name),
		constant_value=constant_value,
		literal=info.literal,
		type_name=type_name,
	)


def _scan(facts: SourceFacts) -> Iterator[ScannedCall]:
	masked = facts.masked
	shapes = facts.config.shapes
	for m in _CALL_RE.finditer(masked):
		name = m.group("name").lstrip("@")
		if name in KEYWORDS or name not in shapes:
			continue
		if _is_declaration(masked, m.start()):
			continue
		line, column = facts.index.locate(m.start("name"))
		open_paren = m.end() - 1
		close_paren = find_closing(masked, open_paren)
		if close_paren is None:
			logger.warning(logs.SCAN_UNBALANCED_CALL.format(method=name, line=line, column=column))
			continue
		ranges = tuple(split_top_level(masked, open_paren + 1, close_paren))
		try:
			arguments = tuple(_describe(facts, s, e) for s, e in ranges)
		except MtlintError as err:
			logger.warning(logs.SCAN_BAD_LITERAL.format(line=line, column=column, error=err))
			continue
		qualifier = [part.strip().lstrip("@") for part in m.group("qual").replace("?", "").split(".") if part.strip()]
		explicit_receiver = bool(qualifier) and qualifier[-1] in facts.config.extension_classes
		logger.debug(logs.SCAN_CALL_SITE.format(method=name, line=line, column=column, count=len(arguments)))
		yield ScannedCall(
			call=CallSite(
				method_name=name,
				arguments=arguments,
				explicit_receiver=explicit_receiver,
				span=facts.index.span(m.start(), close_paren + 1 - m.start(), facts.file),
			),
			open_paren=open_paren,
			close_paren=close_paren,
			argument_ranges=ranges,
		)


def scan_source(text: str, config: Optional[Config] = None, file: Optional[str] = None) -> List[ScannedCall]:
	"""Find every call site in `text` whose method has a known shape."""
	return list(_scan(prepare_source(text, config, file)))


def iter_call_diagnostics(facts: SourceFacts) -> Iterator[Tuple[ScannedCall, List[Diagnostic]]]:
	"""Yield each scanned call with its enabled diagnostics."""
	for scanned in _scan(facts):
		diags = [d for d in analyze_call(scanned.call, facts.config.shapes) if facts.config.is_enabled(d.id)]
		yield scanned, diags


def analyze_source(text: str, config: Optional[Config] = None, file: Optional[str] = None) -> List[Diagnostic]:
	"""Analyze one source file; diagnostics carry (line, column, length) in `text`."""
	facts = prepare_source(text, config, file)
	diags: List[Diagnostic] = []
	for _, call_diags in iter_call_diagnostics(facts):
		diags.extend(call_diags)
	return diags


__all__ = ["ScannedCall", "SourceFacts", "analyze_source", "iter_call_diagnostics", "prepare_source", "scan_source"]
