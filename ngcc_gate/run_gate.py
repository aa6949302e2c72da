# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Whole-tree run gate.

A successful whole-tree run leaves an empty marker file named after the run
fingerprint under `<node_modules>/.cli-ngcc/`. A later build with the same
fingerprint finds the marker and skips the run. Markers are never removed: a
changed lock file or tsconfig yields a different file name.

The check-then-write sequence is not atomic. Two builds racing on an absent
marker both run the transformer, whose own locking keeps that safe.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Mapping

from ngcc_gate import paths as gate_paths
from ngcc_gate.benchmark import timed
from ngcc_gate.config_v0 import GateConfig
from ngcc_gate.errors import ConfigError, GateError, MarkerWriteFailed, MissingDependencyRoot
from ngcc_gate.fingerprint import LockStateHasher, RunFingerprint
from ngcc_gate.resolver import Resolver, try_resolve_manifest
from ngcc_gate.transformer import build_transformer_argv, run_transformer_subprocess

RunAction = Literal["run", "skip"]


@dataclass(frozen=True)
class RunDecision:
	action: RunAction
	reason: str
	fingerprint: RunFingerprint | None = None
	marker_path: Path | None = None

	@property
	def should_run(self) -> bool:
		return self.action == "run"


class RunGate:
	def __init__(
		self,
		config: GateConfig,
		dependency_root: Path | None,
		resolver: Resolver,
		*,
		environ: Mapping[str, str] | None = None,
	) -> None:
		self.config = config
		self.dependency_root = dependency_root
		self.resolver = resolver
		self._environ = environ

	@property
	def project_root(self) -> Path | None:
		return self.dependency_root.parent if self.dependency_root is not None else None

	@property
	def marker_dir(self) -> Path | None:
		if self.dependency_root is None:
			return None
		return self.dependency_root / self.config.marker_dir_name

	def _env(self) -> Mapping[str, str]:
		return self._environ if self._environ is not None else os.environ

	def hasher(self) -> LockStateHasher:
		if self.dependency_root is None:
			raise MissingDependencyRoot("RunGate.hasher")
		return LockStateHasher(
			project_root=self.dependency_root.parent,
			tsconfig_path=self.config.tsconfig_path,
			tool_config_name=self.config.tool_config_name,
		)

	def should_run(self) -> RunDecision:
		"""Decide whether the whole-tree transformer has to run. Has no side effects."""
		if self.dependency_root is None:
			return RunDecision("skip", "no-dependency-root")
		# Sandboxed builds (e.g. Bazel) see a partially read-only tree.
		if self._env().get(self.config.skip_env_var):
			return RunDecision("skip", "sandboxed")
		probe = try_resolve_manifest(self.resolver, self.config.probe_package, str(self.dependency_root))
		if probe is not None and gate_paths.is_read_only_package(probe):
			return RunDecision("skip", "read-only")

		try:
			fingerprint = self.hasher().fingerprint()
		except (GateError, OSError):
			# Unverifiable state means the run is needed.
			return RunDecision("run", "fingerprint-unavailable")

		marker_path = self.dependency_root / self.config.marker_dir_name / fingerprint.marker_name()
		if marker_path.exists():
			return RunDecision("skip", "marker-present", fingerprint=fingerprint, marker_path=marker_path)
		return RunDecision("run", "marker-absent", fingerprint=fingerprint, marker_path=marker_path)

	def execute(self, decision: RunDecision) -> None:
		if not decision.should_run:
			return
		if self.dependency_root is None:
			raise MissingDependencyRoot("RunGate.execute")
		if self.config.transformer_main is None:
			raise ConfigError("no transformer entry point configured (transformer_main)")
		argv = build_transformer_argv(
			runtime=self.config.runtime,
			main_path=self.config.transformer_main,
			source=self.dependency_root,
			properties=self.config.properties_to_consider,
			tsconfig_path=self.config.tsconfig_path,
		)
		with timed("RunGate.execute"):
			run_transformer_subprocess(argv)

	def _write_marker(self, marker_path: Path) -> None:
		try:
			marker_path.parent.mkdir(parents=True, exist_ok=True)
			marker_path.write_bytes(b"")
		except OSError as err:
			raise MarkerWriteFailed(str(marker_path)) from err

	def commit(self, decision: RunDecision) -> bool:
		"""
		Record a completed run. Returns True when a marker was written.

		Failing to write the marker only costs a redundant run next time.
		"""
		if not decision.should_run or decision.marker_path is None:
			return False
		try:
			self._write_marker(decision.marker_path)
		except MarkerWriteFailed:
			return False
		return True

	def process_all(self) -> RunDecision:
		"""Check, run and record the whole-tree transformation."""
		decision = self.should_run()
		if decision.should_run:
			self.execute(decision)
			self.commit(decision)
		return decision
