# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
ngcc_gate: run-once gate in front of the legacy package rewrite (ngcc).

Packages shipped in the legacy module format must be rewritten in place before
the compiler can consume them. This package decides whether the whole
`node_modules` tree needs the rewrite at all (RunGate, keyed by a lock/config
fingerprint), and otherwise rewrites single packages on first use
(IncrementalProcessor).

Modules:
  fingerprint: lock file discovery and run fingerprint hashing
  run_gate:    whole-tree run decision, subprocess execution and run markers
  processor:   per-module incremental processing
  session:     both of the above sharing one dependency root
"""

from __future__ import annotations

from ngcc_gate.config_v0 import GateConfig, load_gate_config_v0
from ngcc_gate.diagnostics import CompilationResult, Diagnostic, LogLevel, TransformerLogger
from ngcc_gate.errors import (
	ConfigError,
	GateError,
	MarkerWriteFailed,
	MissingDependencyRoot,
	ModuleProcessingFailed,
	NoLockFileFound,
	TransformFailed,
)
from ngcc_gate.fingerprint import LockStateHasher, RunFingerprint, compute_run_fingerprint
from ngcc_gate.processor import IncrementalProcessor
from ngcc_gate.run_gate import RunDecision, RunGate
from ngcc_gate.session import NgccGate

__all__ = [
	"CompilationResult",
	"ConfigError",
	"Diagnostic",
	"GateConfig",
	"GateError",
	"IncrementalProcessor",
	"LockStateHasher",
	"LogLevel",
	"MarkerWriteFailed",
	"MissingDependencyRoot",
	"ModuleProcessingFailed",
	"NgccGate",
	"NoLockFileFound",
	"RunDecision",
	"RunFingerprint",
	"RunGate",
	"TransformFailed",
	"TransformerLogger",
	"compute_run_fingerprint",
	"load_gate_config_v0",
]
