# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

from ngcc_gate.paths import canonical_path


class InputStore(Protocol):
	"""The host file system layer, possibly caching reads."""

	def read_bytes(self, path: str) -> bytes: ...

	def write_bytes(self, path: str, data: bytes) -> None: ...

	def exists(self, path: str) -> bool: ...

	def purge(self, path: str) -> None:
		"""Forget any cached state for `path`."""
		...


class CachedInputStore:
	"""
	Read-through byte cache over the real file system.

	Entries live until `purge()`; after the transformer rewrites a manifest the
	processor purges it so the next read sees the new entry-point fields.
	"""

	def __init__(self) -> None:
		self._cache: dict[str, bytes] = {}

	def read_bytes(self, path: str) -> bytes:
		key = canonical_path(path)
		cached = self._cache.get(key)
		if cached is None:
			cached = Path(key).read_bytes()
			self._cache[key] = cached
		return cached

	def write_bytes(self, path: str, data: bytes) -> None:
		key = canonical_path(path)
		Path(key).write_bytes(data)
		self._cache[key] = data

	def exists(self, path: str) -> bool:
		key = canonical_path(path)
		return key in self._cache or os.path.exists(key)

	def purge(self, path: str) -> None:
		self._cache.pop(canonical_path(path), None)

	def is_cached(self, path: str) -> bool:
		return canonical_path(path) in self._cache
