#!/usr/bin/env python3
# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Source masking, bracket matching and line/column conversion."""

from mtlint.host.lexical import LineIndex, find_closing, mask_source, split_top_level


def test_mask_keeps_length_and_newlines():
	text = 'a("x, y", /* c, ( */ b) // tail (\nnext'
	masked = mask_source(text)
	assert len(masked) == len(text)
	assert masked.index("\n") == text.index("\n")
	assert masked.count(",") == 1
	assert masked.count("(") == 1
	assert masked.endswith("\nnext")


def test_mask_blanks_literal_bodies_but_keeps_quotes():
	text = 'f(@"a ""(q"" b", $"x {y} (", \'(\')'
	masked = mask_source(text)
	assert masked.count("(") == 1
	assert masked.startswith('f(@"')
	assert masked.endswith("')")


def test_find_closing_skips_masked_brackets():
	text = 'Log.Error("(", x[0], (a + b))'
	masked = mask_source(text)
	open_at = text.index("(")
	assert find_closing(masked, open_at) == len(text) - 1


def test_find_closing_reports_unbalanced():
	masked = mask_source("Log.Error(x, y")
	assert find_closing(masked, 9) is None


def test_split_top_level_trims_and_ignores_nested_commas():
	text = 'f( "a, b" , g(1, 2) ,new[] { 1, 2 } )'
	masked = mask_source(text)
	close = find_closing(masked, 1)
	ranges = split_top_level(masked, 2, close)
	assert [text[s:e] for s, e in ranges] == ['"a, b"', "g(1, 2)", "new[] { 1, 2 }"]


def test_split_top_level_without_arguments():
	assert split_top_level(mask_source("f(   )"), 2, 5) == []


def test_line_index_is_one_based():
	index = LineIndex("ab\ncd\n\nef")
	assert index.locate(0) == (1, 1)
	assert index.locate(4) == (2, 2)
	assert index.locate(6) == (3, 1)
	assert index.locate(7) == (4, 1)
	span = index.span(3, 2, "x.cs")
	assert (span.file, span.line, span.column, span.length, span.offset) == ("x.cs", 2, 1, 2, 3)
