# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import io

import pytest

from ngcc_gate.diagnostics import CompilationResult, Diagnostic, LogLevel, TransformerLogger


def test_info_is_framed_progress_text_on_stderr(capsys: pytest.CaptureFixture[str]) -> None:
	logger = TransformerLogger(CompilationResult())
	logger.info("Compiling", "@angular/core", ": es2015 as esm2015")
	captured = capsys.readouterr()
	assert captured.out == ""
	assert captured.err == "\nCompiling @angular/core : es2015 as esm2015\n"


def test_debug_is_discarded(capsys: pytest.CaptureFixture[str]) -> None:
	result = CompilationResult()
	TransformerLogger(result, LogLevel.debug).debug("noise")
	assert capsys.readouterr().err == ""
	assert result.warnings == [] and result.errors == []


def test_warn_and_error_accumulate_in_result() -> None:
	result = CompilationResult()
	logger = TransformerLogger(result, stream=io.StringIO())
	logger.warn("entry point", "has no typings")
	logger.error("Failed to compile", "entry-point lib-a")
	assert result.warnings == ["entry point has no typings"]
	assert len(result.errors) == 1
	assert isinstance(result.errors[0], Diagnostic)
	assert result.errors[0].message == "Failed to compile entry-point lib-a"
	assert result.has_errors


def test_level_filters_info_and_warn_but_never_errors() -> None:
	stream = io.StringIO()
	result = CompilationResult()
	logger = TransformerLogger(result, LogLevel.error, stream=stream)
	logger.info("progress")
	logger.warn("careful")
	logger.error("broken")
	assert stream.getvalue() == ""
	assert result.warnings == []
	assert [d.message for d in result.errors] == ["broken"]


def test_results_extend_and_serialize() -> None:
	a = CompilationResult(warnings=["w1"])
	b = CompilationResult(warnings=["w2"], errors=[Diagnostic(message="e1", code="NGCC")])
	a.extend(b)
	assert a.to_dict() == {
		"warnings": ["w1", "w2"],
		"errors": [{"message": "e1", "code": "NGCC", "phase": "ngcc", "severity": "error", "notes": []}],
	}
	assert a.errors[0].format_human() == "ngcc: error: e1 [NGCC]"
