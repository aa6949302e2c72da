# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class GateError(Exception):
	"""
	A structured, serializable error raised by the gate.

	`reason_code` is stable and meant for tooling; `message` is for humans.
	Subclasses pin their reason code so callers can match on type or code.
	"""

	reason_code: str
	message: str
	path: str | None = None
	module_name: str | None = None
	exit_status: int | None = None

	def __post_init__(self) -> None:
		Exception.__init__(self, self.message)

	def __reduce__(self) -> tuple[Any, ...]:
		# Subclass constructors take different arguments; rebuild from the fields.
		return (_restore_gate_error, (type(self), self.to_dict()))

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"path": self.path,
			"module_name": self.module_name,
			"exit_status": self.exit_status,
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.module_name:
			parts.append(f"module={self.module_name}")
		if self.path:
			parts.append(f"path={self.path}")
		if self.exit_status is not None:
			parts.append(f"exit_status={self.exit_status}")
		return " ".join(parts)


class NoLockFileFound(GateError):
	"""None of the package manager lock files could be read."""

	def __init__(self, project_root: str) -> None:
		super().__init__(
			reason_code="NO_LOCK_FILE",
			message="Cannot locate a package manager lock file.",
			path=project_root,
		)


class TransformFailed(GateError):
	"""The whole-tree transformer subprocess failed; fatal for the build."""

	def __init__(self, message: str, *, exit_status: int | None = None) -> None:
		super().__init__(reason_code="TRANSFORM_FAILED", message=message, exit_status=exit_status)


class ModuleProcessingFailed(GateError):
	"""Processing a single package failed. The caller decides whether that is fatal."""

	def __init__(self, message: str, *, module_name: str, path: str | None = None) -> None:
		super().__init__(
			reason_code="MODULE_PROCESSING_FAILED",
			message=message,
			module_name=module_name,
			path=path,
		)


class MarkerWriteFailed(GateError):
	"""Writing a run marker failed. Never escapes `RunGate.commit`."""

	def __init__(self, path: str) -> None:
		super().__init__(reason_code="MARKER_WRITE_FAILED", message="cannot write run marker", path=path)


class ConfigError(GateError):
	"""`ngcc-gate.json` is malformed."""

	def __init__(self, message: str, *, path: str | None = None) -> None:
		super().__init__(reason_code="CONFIG_INVALID", message=message, path=path)


class MissingDependencyRoot(GateError):
	"""An operation needing `node_modules` was called on a gate that has none."""

	def __init__(self, operation: str) -> None:
		super().__init__(
			reason_code="NO_DEPENDENCY_ROOT",
			message=f"{operation} requires a node_modules directory",
		)


def _restore_gate_error(cls: type[GateError], state: dict[str, Any]) -> GateError:
	err = cls.__new__(cls)
	GateError.__init__(err, **state)
	return err
