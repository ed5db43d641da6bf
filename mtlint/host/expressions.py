# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Argument expression classifier.

Each call argument's source text is parsed with the lark grammar in
`grammar.lark` and reduced to the facts the call-site policy needs: is it a
compile-time constant string (and from which literal token), and what static
type can be inferred or looked up for it. Text the grammar does not cover is
an opaque expression, which the policy treats as "not constant, type unknown".
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from lark import Lark, Token, Tree
from lark.exceptions import LarkError

from mtlint.source.literal import RawLiteral, decode_literal

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_ARG_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=True,
)


@dataclass(frozen=True)
class ArgumentInfo:
	"""What the host knows about one argument expression."""

	kind: str
	constant_value: Optional[str] = None
	literal: Optional[RawLiteral] = None
	# Offset of the literal token inside the argument text.
	literal_offset: int = 0
	type_name: Optional[str] = None
	# Variable name whose declared type decides the argument type.
	symbol: Optional[str] = None
	# Invoked method name whose return type decides the argument type.
	callee: Optional[str] = None
	dotted: Optional[str] = None


OPAQUE = ArgumentInfo(kind="opaque")


def _name(node: object) -> str:
	return node.data if isinstance(node, Tree) else ""


def _ident(tok: Token) -> str:
	return tok.value[1:] if tok.value.startswith("@") else tok.value


def _dotted(node: object) -> Optional[str]:
	"""`a.b.c` for a pure name/member chain, None otherwise."""
	if _name(node) == "name":
		return _ident(node.children[0])
	if _name(node) == "member":
		head = _dotted(node.children[0])
		return f"{head}.{_ident(node.children[1])}" if head is not None else None
	if _name(node) == "type_name":
		return ".".join(_ident(t) for t in node.children)
	return None


def _literal(tok: Token, verbatim: bool) -> ArgumentInfo:
	# decode_literal raises MtlintError for malformed tokens; the scanner
	# skips such call sites.
	return ArgumentInfo(
		kind="literal",
		constant_value=decode_literal(tok.value),
		literal=RawLiteral(source_text=tok.value, is_verbatim=verbatim),
		literal_offset=tok.start_pos,
		type_name="string",
	)


def _classify(node: Tree) -> ArgumentInfo:
	kind = _name(node)
	if kind == "named_argument":
		return _classify(node.children[1])
	if kind == "string":
		return _literal(node.children[0], verbatim=False)
	if kind == "verbatim":
		return _literal(node.children[0], verbatim=True)
	if kind == "interpolated":
		return ArgumentInfo(kind="interpolated", type_name="string")
	if kind == "concat":
		parts = [_classify(child) for child in node.children]
		if all(p.constant_value is not None for p in parts):
			return ArgumentInfo(kind="concat", constant_value="".join(p.constant_value or "" for p in parts), type_name="string")
		if any(p.type_name == "string" for p in parts):
			return ArgumentInfo(kind="concat", type_name="string")
		return OPAQUE
	if kind == "name":
		return ArgumentInfo(kind="name", symbol=_ident(node.children[0]))
	if kind == "member":
		return ArgumentInfo(kind="member", dotted=_dotted(node))
	if kind == "invoke":
		target = node.children[0]
		callee = None
		if _name(target) == "name":
			callee = _ident(target.children[0])
		elif _name(target) == "member":
			callee = _ident(target.children[1])
		return ArgumentInfo(kind="invoke", callee=callee)
	if kind == "new_object":
		return ArgumentInfo(kind="new", type_name=_dotted(node.children[0]))
	if kind == "number":
		return ArgumentInfo(kind="number", type_name="double" if "." in node.children[0].value else "int")
	if kind == "char":
		return ArgumentInfo(kind="char", type_name="char")
	if kind in ("true", "false"):
		return ArgumentInfo(kind="bool", type_name="bool")
	if kind == "null":
		return ArgumentInfo(kind="null")
	return OPAQUE


def classify_argument(text: str) -> ArgumentInfo:
	"""Classify one argument's source text; unparseable text is opaque."""
	try:
		tree = _ARG_PARSER.parse(text)
	except LarkError:
		return OPAQUE
	return _classify(tree)


__all__ = ["ArgumentInfo", "OPAQUE", "classify_argument"]
