# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-module incremental processing.

While the compiler resolves imports file by file, each resolved external
module is offered here. The owning package is rewritten at most once per
process lifetime; the host calls `invalidate()` when a file changes on disk.
"""

from __future__ import annotations

import os
from pathlib import Path

from ngcc_gate import paths as gate_paths
from ngcc_gate.benchmark import timed
from ngcc_gate.config_v0 import GateConfig
from ngcc_gate.diagnostics import TransformerLogger
from ngcc_gate.errors import ModuleProcessingFailed
from ngcc_gate.resolver import Resolver, try_resolve_manifest
from ngcc_gate.store import InputStore
from ngcc_gate.transformer import Transformer, TransformOptions


class IncrementalProcessor:
	def __init__(
		self,
		transformer: Transformer,
		config: GateConfig,
		dependency_root: Path | None,
		resolver: Resolver,
		store: InputStore,
		logger: TransformerLogger,
	) -> None:
		self.transformer = transformer
		self.config = config
		self.dependency_root = dependency_root
		self.resolver = resolver
		self.store = store
		self.logger = logger
		self._processed: set[str] = set()

	@property
	def processed(self) -> frozenset[str]:
		return frozenset(self._processed)

	def is_processed(self, resolved_file_name: str) -> bool:
		return gate_paths.canonical_path(resolved_file_name) in self._processed

	def process(self, module_name: str, resolved_file_name: str | None) -> None:
		"""
		Rewrite the package owning `resolved_file_name` unless already done.

		Relative imports, unknown files and packages without a writable manifest
		are skipped. Raises `ModuleProcessingFailed` when the transformer fails;
		the file then stays unprocessed and is retried on the next call.
		"""
		if self.dependency_root is None or not resolved_file_name or gate_paths.is_relative_specifier(module_name):
			return
		key = gate_paths.canonical_path(resolved_file_name)
		if key in self._processed:
			return

		manifest = try_resolve_manifest(self.resolver, module_name, resolved_file_name)
		if manifest is None or gate_paths.is_read_only_package(manifest):
			# Remember the miss so the lookup is not repeated.
			self._processed.add(key)
			return

		options = TransformOptions(
			base_path=str(self.dependency_root),
			target_entry_point_path=os.path.dirname(manifest),
			properties_to_consider=tuple(self.config.properties_to_consider),
			logger=self.logger,
			tsconfig_path=str(self.config.tsconfig_path),
		)
		with timed(f"IncrementalProcessor.process+{module_name}"):
			try:
				self.transformer.process(options)
			except Exception as err:
				raise ModuleProcessingFailed(
					f"ngcc failed to process '{module_name}': {err}",
					module_name=module_name,
					path=manifest,
				) from err

		# The transformer adds entry-point fields to package.json; drop the stale read.
		self.store.purge(manifest)
		self._processed.add(key)

	def invalidate(self, file_name: str) -> None:
		self._processed.discard(gate_paths.canonical_path(file_name))
