#!/usr/bin/env python3
# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""mtlint command line: exit codes, JSON reports and in-place fixes."""

import json
from pathlib import Path

import pytest
from loguru import logger

from mtlint.cli import main

CLEAN = """
class Program
{
    static void Main()
    {
        Serilog.ILogger test = null;
        test.Information("Hello {Name}", "tester");
    }
}"""

BROKEN = """
class Program
{
    static void Main()
    {
        Serilog.ILogger test = null;
        test.Information("Hello {Name", "tester");
    }
}"""

WARNING_ONLY = """
class Program
{
    static void Main(Exception ex)
    {
        Serilog.ILogger test = null;
        test.Information("Hello {name}", "tester");
    }
}"""

NEEDS_FIX = """
class Program
{
    static void Main()
    {
        Serilog.ILogger test = null;
        try { }
        catch (ArgumentException ex)
        {
            test.Error("Failed", ex);
        }
    }
}"""


@pytest.fixture(autouse=True)
def _isolated_run(tmp_path: Path, monkeypatch):
	monkeypatch.chdir(tmp_path)
	yield
	logger.remove()
	logger.disable("mtlint")


def _write(tmp_path: Path, name: str, text: str) -> Path:
	path = tmp_path / name
	path.write_text(text, encoding="utf-8")
	return path


def test_check_clean_file_exits_zero(tmp_path: Path, capsys):
	path = _write(tmp_path, "Clean.cs", CLEAN)
	assert main(["check", str(path)]) == 0
	out = capsys.readouterr().out
	assert "errors=0" in out


def test_check_reports_errors(tmp_path: Path, capsys):
	path = _write(tmp_path, "Broken.cs", BROKEN)
	assert main(["check", str(path)]) == 1
	out = capsys.readouterr().out
	assert (
		f"{path}:7:33: error MTL002: Error while parsing MessageTemplate: "
		"Encountered end of messageTemplate while parsing property"
	) in out


def test_warnings_do_not_fail_the_check(tmp_path: Path, capsys):
	path = _write(tmp_path, "Warn.cs", WARNING_ONLY)
	assert main(["check", str(path)]) == 0
	assert "warning MTL006" in capsys.readouterr().out


def test_check_json_report(tmp_path: Path, capsys):
	_write(tmp_path, "Broken.cs", BROKEN)
	_write(tmp_path, "Clean.cs", CLEAN)
	assert main(["check", str(tmp_path), "--json"]) == 1
	report = json.loads(capsys.readouterr().out)
	assert report["files"] == 2
	assert report["errors"] == 1
	assert report["ok"] is False
	(diag,) = report["diagnostics"]
	assert (diag["code"], diag["line"], diag["column"], diag["length"]) == ("MTL002", 7, 33, 5)


def test_disabled_rules_from_config(tmp_path: Path, capsys):
	path = _write(tmp_path, "Warn.cs", WARNING_ONLY)
	config = _write(tmp_path, "rules.json", json.dumps({"disabled_rules": ["NON_PASCAL_CASE"]}))
	assert main(["check", str(path), "--config", str(config), "--json"]) == 0
	assert json.loads(capsys.readouterr().out)["diagnostics"] == []


def test_invalid_config_exits_two(tmp_path: Path, capsys):
	path = _write(tmp_path, "Clean.cs", CLEAN)
	config = _write(tmp_path, "bad.json", json.dumps({"bogus": True}))
	assert main(["check", str(path), "--config", str(config)]) == 2
	assert "[config-invalid]" in capsys.readouterr().err


def test_missing_path_exits_two(tmp_path: Path, capsys):
	assert main(["check", str(tmp_path / "nope.cs")]) == 2
	assert "[path-missing]" in capsys.readouterr().err


def test_fix_rewrites_in_place(tmp_path: Path):
	path = _write(tmp_path, "Fix.cs", NEEDS_FIX)
	assert main(["fix", str(path)]) == 0
	assert 'test.Error(ex, "Failed");' in path.read_text(encoding="utf-8")


def test_fix_check_mode_does_not_write(tmp_path: Path, capsys):
	path = _write(tmp_path, "Fix.cs", NEEDS_FIX)
	assert main(["fix", str(path), "--check"]) == 1
	assert path.read_text(encoding="utf-8") == NEEDS_FIX
	assert "1 fix(es) would apply" in capsys.readouterr().out


def test_fix_preserves_bom_and_line_endings(tmp_path: Path):
	path = tmp_path / "Crlf.cs"
	path.write_bytes(b"\xef\xbb\xbf" + NEEDS_FIX.replace("\n", "\r\n").encode("utf-8"))
	assert main(["fix", str(path)]) == 0
	data = path.read_bytes()
	assert data.startswith(b"\xef\xbb\xbf")
	assert b'test.Error(ex, "Failed");\r\n' in data


def test_shapes_json_includes_config_methods(tmp_path: Path, capsys):
	config = _write(tmp_path, "m.json", json.dumps({"methods": {"Audit": [["template", "values"]]}}))
	assert main(["shapes", "--config", str(config), "--json"]) == 0
	obj = json.loads(capsys.readouterr().out)
	assert obj["methods"]["Audit"]["overloads"] == [["template", "values"]]
	assert "Information" in obj["methods"]


def test_shapes_human_listing(capsys):
	assert main(["shapes"]) == 0
	assert "Warning: (template, values) | (exception, template, values)" in capsys.readouterr().out


def test_verbose_logs_call_sites(tmp_path: Path, capsys):
	path = _write(tmp_path, "Clean.cs", CLEAN)
	assert main(["check", str(path), "-v"]) == 0
	assert "DEBUG:   Call site Information at 7:14 with 2 argument(s)" in capsys.readouterr().err
