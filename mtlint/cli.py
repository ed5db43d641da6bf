# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

from loguru import logger

from mtlint import logs
from mtlint.config import Config, load_config
from mtlint.core.diagnostics import Diagnostic
from mtlint.errors import MtlintError
from mtlint.host.fixes import apply_fixes
from mtlint.host.scanner import analyze_source

_BOM = "\ufeff"


def _build_parser() -> argparse.ArgumentParser:
	common = argparse.ArgumentParser(add_help=False)
	common.add_argument(
		"--config",
		type=Path,
		default=None,
		help="Path to configuration JSON (default: ./mtlint.json when present)",
	)
	common.add_argument("--verbose", "-v", action="store_true", help="Log scanning details to stderr")

	p = argparse.ArgumentParser(prog="mtlint", description="Message template checks for structured logging calls")
	sub = p.add_subparsers(dest="cmd", required=True)

	check = sub.add_parser("check", parents=[common], help="Report message template diagnostics")
	check.add_argument("paths", nargs="+", type=Path, help="Source files or directories (searched for *.cs)")
	check.add_argument("--json", action="store_true", help="Emit machine-readable JSON report")

	fix = sub.add_parser("fix", parents=[common], help="Move exception arguments to the first position")
	fix.add_argument("paths", nargs="+", type=Path, help="Source files or directories (searched for *.cs)")
	fix.add_argument("--check", action="store_true", help="Do not write; exit 1 when a fix would apply")

	shapes = sub.add_parser("shapes", parents=[common], help="Print the effective method shape table")
	shapes.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
	return p


def _configure_logging(verbose: bool) -> None:
	logger.remove()
	logger.enable("mtlint")
	logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING", format="{level}: {message}")


def _iter_sources(paths: Iterable[Path]) -> List[Path]:
	files: List[Path] = []
	for path in paths:
		if path.is_dir():
			files.extend(sorted(p for p in path.rglob("*.cs") if p.is_file()))
		elif path.is_file():
			files.append(path)
		else:
			raise MtlintError("path-missing", "no such file or directory", path=str(path))
	if not files:
		logger.warning(logs.NO_SOURCE_FILES)
	return files


def _read_source(path: Path) -> Tuple[str, bool]:
	"""Return (text, had_bom); line endings are preserved."""
	try:
		data = path.read_bytes()
	except OSError as err:
		raise MtlintError("source-unreadable", "cannot read source file", path=str(path), detail=str(err)) from err
	try:
		text = data.decode("utf-8")
	except UnicodeDecodeError as err:
		raise MtlintError("source-unreadable", "source file is not UTF-8", path=str(path), detail=str(err)) from err
	if text.startswith(_BOM):
		return text[1:], True
	return text, False


def _write_source(path: Path, text: str, bom: bool) -> None:
	try:
		path.write_bytes(((_BOM if bom else "") + text).encode("utf-8"))
	except OSError as err:
		raise MtlintError("source-unwritable", "cannot write source file", path=str(path), detail=str(err)) from err


def _check(config: Config, paths: List[Path], as_json: bool) -> int:
	diags: List[Diagnostic] = []
	files = _iter_sources(paths)
	for path in files:
		logger.info(logs.SCAN_FILE.format(path=path))
		text, _ = _read_source(path)
		found = analyze_source(text, config, file=str(path))
		logger.info(logs.FILE_DIAGNOSTICS.format(path=path, count=len(found)))
		diags.extend(found)
	errors = sum(1 for d in diags if d.severity == "error")
	warnings = sum(1 for d in diags if d.severity == "warning")
	code = 1 if errors else 0
	if as_json:
		report = {
			"diagnostics": [d.to_dict() for d in diags],
			"errors": errors,
			"files": len(files),
			"ok": code == 0,
			"warnings": warnings,
		}
		print(json.dumps(report, sort_keys=True, separators=(",", ":")))
		return code
	for diag in diags:
		print(diag.format_human())
	print(
		f"mtlint: files={len(files)} errors={errors} warnings={warnings}",
		file=sys.stderr if code != 0 else sys.stdout,
	)
	return code


def _fix(config: Config, paths: List[Path], check_only: bool) -> int:
	pending = 0
	for path in _iter_sources(paths):
		logger.info(logs.SCAN_FILE.format(path=path))
		text, bom = _read_source(path)
		fixed, count = apply_fixes(text, config, file=str(path))
		if count == 0:
			continue
		pending += count
		if check_only:
			print(f"{path}: {count} fix(es) would apply")
			continue
		_write_source(path, fixed, bom)
		logger.info(logs.FILE_FIXED.format(path=path, count=count))
	return 1 if check_only and pending else 0


def _shapes(config: Config, as_json: bool) -> int:
	obj = {
		"extension_classes": sorted(config.extension_classes),
		"methods": config.shapes.to_dict(),
	}
	if as_json:
		print(json.dumps(obj, sort_keys=True, separators=(",", ":")))
		return 0
	for shape in config.shapes:
		overloads = " | ".join("(" + ", ".join(r.value for r in roles) + ")" for roles in shape.overloads)
		print(f"{shape.name}: {overloads}")
	return 0


def main(argv: list[str] | None = None) -> int:
	p = _build_parser()
	args = p.parse_args(argv)
	_configure_logging(bool(args.verbose))

	try:
		config = load_config(args.config)
		if args.cmd == "check":
			return _check(config, list(args.paths), bool(args.json))
		if args.cmd == "fix":
			return _fix(config, list(args.paths), bool(args.check))
		if args.cmd == "shapes":
			return _shapes(config, bool(args.json))
	except MtlintError as err:
		print(err.format_human(), file=sys.stderr)
		return 2

	raise AssertionError("unreachable")


if __name__ == "__main__":
	raise SystemExit(main())
