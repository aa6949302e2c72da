# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Run fingerprint (lock state hashing).

The fingerprint covers everything that can invalidate a previous whole-tree
rewrite: the package manager lock file (bytes and path), the optional ngcc
tool config, and the tsconfig (bytes and project-relative path).

Pinned feed order (changing it invalidates every existing run marker):
  1. lock file bytes
  2. lock file path
  3. tool config bytes (empty when absent)
  4. tsconfig bytes
  5. tsconfig path relative to the project root
"""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from pathlib import Path

from ngcc_gate.errors import NoLockFileFound
from ngcc_gate.paths import first_match

LOCK_FILE_CANDIDATES: tuple[str, ...] = ("yarn.lock", "pnpm-lock.yaml", "package-lock.json")
DEFAULT_TOOL_CONFIG_NAME = "ngcc.config.js"


@dataclass(frozen=True)
class LockFile:
	path: Path
	data: bytes


@dataclass(frozen=True)
class RunFingerprint:
	digest: bytes

	@property
	def hex(self) -> str:
		return self.digest.hex()

	@classmethod
	def from_hex(cls, text: str) -> "RunFingerprint":
		return cls(digest=bytes.fromhex(text.lower()))

	def marker_name(self) -> str:
		return f"{self.hex}.lock"

	def __str__(self) -> str:
		return self.hex


def _try_read(path: Path) -> bytes | None:
	try:
		return path.read_bytes()
	except OSError:
		return None


def find_lock_file(project_root: Path, candidates: tuple[str, ...] = LOCK_FILE_CANDIDATES) -> LockFile:
	def _attempt(name: str) -> LockFile | None:
		lock_path = project_root / name
		data = _try_read(lock_path)
		return LockFile(path=lock_path, data=data) if data is not None else None

	found = first_match(candidates, _attempt)
	if found is None:
		raise NoLockFileFound(str(project_root))
	return found


def read_optional(path: Path) -> bytes:
	data = _try_read(path)
	return data if data is not None else b""


def compute_run_fingerprint(
	project_root: Path,
	tsconfig_path: Path,
	tool_config_name: str = DEFAULT_TOOL_CONFIG_NAME,
) -> RunFingerprint:
	"""
	Hash the current lock/config state of a project.

	Raises `NoLockFileFound` when no lock file is readable and `OSError` when
	the tsconfig cannot be read. A missing tool config is hashed as empty bytes.
	"""
	tool_config_data = read_optional(project_root / tool_config_name)
	relative_tsconfig = os.path.relpath(tsconfig_path, project_root)
	tsconfig_data = Path(tsconfig_path).read_bytes()
	lock = find_lock_file(project_root)

	h = hashlib.sha256()
	h.update(lock.data)
	h.update(str(lock.path).encode("utf-8"))
	h.update(tool_config_data)
	h.update(tsconfig_data)
	h.update(relative_tsconfig.encode("utf-8"))
	return RunFingerprint(digest=h.digest())


@dataclass(frozen=True)
class LockStateHasher:
	project_root: Path
	tsconfig_path: Path
	tool_config_name: str = DEFAULT_TOOL_CONFIG_NAME

	def lock_file(self) -> LockFile:
		return find_lock_file(self.project_root)

	def fingerprint(self) -> RunFingerprint:
		return compute_run_fingerprint(self.project_root, self.tsconfig_path, self.tool_config_name)
