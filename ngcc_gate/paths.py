# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Ordered fallback chains over the file system.

Both the dependency-root walk and the lock-file trial are "first candidate that
works" searches. They are expressed as plain functions over an ordered list of
candidates returning either the first hit or `None`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, TypeVar

T = TypeVar("T")
R = TypeVar("R")

DEPENDENCY_DIR_NAME = "node_modules"


def iter_ancestors(start: Path) -> Iterator[Path]:
	"""
	Yield `start` and each of its parents.

	The filesystem root itself is not yielded: a dependency tree directly under
	`/` is never considered.
	"""
	current = Path(os.path.abspath(start))
	while current.parent != current:
		yield current
		current = current.parent


def first_match(candidates: Iterable[T], attempt: Callable[[T], R | None]) -> R | None:
	for candidate in candidates:
		result = attempt(candidate)
		if result is not None:
			return result
	return None


def find_dependency_root(base_path: Path, dir_name: str = DEPENDENCY_DIR_NAME) -> Path | None:
	def _probe(directory: Path) -> Path | None:
		candidate = directory / dir_name
		return candidate if candidate.exists() else None

	return first_match(iter_ancestors(base_path), _probe)


def is_read_only(path: str | os.PathLike[str]) -> bool:
	# Missing paths report not-writable too.
	return not os.access(path, os.W_OK)


def is_read_only_package(manifest_path: str | os.PathLike[str]) -> bool:
	"""A package is read-only when its manifest or the manifest's directory cannot be written."""
	return is_read_only(manifest_path) or is_read_only(os.path.dirname(os.fspath(manifest_path)))


def is_relative_specifier(module_name: str) -> bool:
	return module_name.startswith(".")


def canonical_path(path: str | os.PathLike[str]) -> str:
	return os.path.normpath(os.fspath(path))
