# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostics collected while the transformer runs in-process.

The transformer reports progress and problems through a logger rather than a
return value. Warnings and errors land in an explicit `CompilationResult`
owned by the caller; info messages are transient progress text on stderr.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, TextIO


class LogLevel(IntEnum):
	debug = 0
	info = 1
	warn = 2
	error = 3


@dataclass
class Diagnostic:
	"""A warning or error reported by the transformer."""

	message: str
	code: str | None = None
	phase: str | None = "ngcc"
	severity: str = "error"
	notes: list[str] = field(default_factory=list)

	def format_human(self) -> str:
		prefix = f"{self.phase}: " if self.phase else ""
		text = f"{prefix}{self.severity}: {self.message}"
		if self.code:
			text += f" [{self.code}]"
		for note in self.notes:
			text += f"\n  note: {note}"
		return text

	def to_dict(self) -> dict[str, Any]:
		return {
			"message": self.message,
			"code": self.code,
			"phase": self.phase,
			"severity": self.severity,
			"notes": list(self.notes),
		}


@dataclass
class CompilationResult:
	warnings: list[str] = field(default_factory=list)
	errors: list[Diagnostic] = field(default_factory=list)

	@property
	def has_errors(self) -> bool:
		return bool(self.errors)

	def extend(self, other: "CompilationResult") -> None:
		self.warnings.extend(other.warnings)
		self.errors.extend(other.errors)

	def to_dict(self) -> dict[str, Any]:
		return {
			"warnings": list(self.warnings),
			"errors": [d.to_dict() for d in self.errors],
		}


class TransformerLogger:
	"""
	Logger handed to the in-process transformer.

	- debug: discarded
	- info: written to stderr framed by newlines (progress text)
	- warn: appended to `result.warnings` as plain text
	- error: appended to `result.errors` as a `Diagnostic`
	"""

	def __init__(self, result: CompilationResult, level: LogLevel = LogLevel.info, stream: TextIO | None = None) -> None:
		self.result = result
		self.level = level
		self._stream = stream

	def debug(self, *args: str) -> None:
		pass

	def info(self, *args: str) -> None:
		if self.level > LogLevel.info:
			return
		# Resolved per call so stderr redirection after construction is honored.
		stream = self._stream if self._stream is not None else sys.stderr
		stream.write(f"\n{' '.join(args)}\n")

	def warn(self, *args: str) -> None:
		if self.level > LogLevel.warn:
			return
		self.result.warnings.append(" ".join(args))

	def error(self, *args: str) -> None:
		self.result.errors.append(Diagnostic(message=" ".join(args)))
