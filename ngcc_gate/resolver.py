# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Package manifest resolution.

The host build supplies the module resolver; `NodeModulesResolver` is a plain
node-style lookup used when none is given.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

from ngcc_gate.paths import DEPENDENCY_DIR_NAME, iter_ancestors

MANIFEST_NAME = "package.json"


class ResolveError(ValueError):
	"""Raised by resolvers when a request does not map to an installed file."""


class Resolver(Protocol):
	def resolve_sync(self, context_path: str, request: str) -> str | None:
		"""
		Resolve `request` as seen from `context_path` (a file or a directory).

		Returns the absolute resolved path. Raises `ResolveError` when the
		request cannot be resolved.
		"""
		...


class NodeModulesResolver:
	"""Resolve `<name>/<subpath>` by searching `node_modules` directories upwards."""

	def __init__(self, dir_name: str = DEPENDENCY_DIR_NAME) -> None:
		self.dir_name = dir_name

	def resolve_sync(self, context_path: str, request: str) -> str | None:
		if request.startswith(".") or os.path.isabs(request):
			raise ResolveError(f"not a package request: {request}")
		start = Path(context_path)
		if not start.is_dir():
			start = start.parent
		for directory in iter_ancestors(start):
			if directory.name == self.dir_name:
				continue
			candidate = directory / self.dir_name / request
			if candidate.is_file():
				return str(candidate)
		raise ResolveError(f"cannot resolve '{request}' from {context_path}")


def manifest_request(module_name: str) -> str:
	return f"{module_name}/{MANIFEST_NAME}"


def try_resolve_manifest(resolver: Resolver, module_name: str, context_path: str) -> str | None:
	"""
	Find the `package.json` owning `module_name` as resolved from `context_path`.

	Deep imports (e.g. `@angular/compiler/src/i18n/i18n_ast`) and linked local
	libraries outside `node_modules` do not resolve; for those the manifest next
	to `context_path` is used, if there is one. Host resolvers may raise any
	exception for such requests; all of them take the fallback.
	"""
	try:
		resolved = resolver.resolve_sync(context_path, manifest_request(module_name))
		return resolved or None
	except Exception:
		fallback = os.path.normpath(os.path.join(os.path.abspath(context_path), "..", MANIFEST_NAME))
		return fallback if os.path.exists(fallback) else None
