# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

from ngcc_gate.config_v0 import GateConfig, load_gate_config_v0
from ngcc_gate.diagnostics import CompilationResult, LogLevel, TransformerLogger
from ngcc_gate.paths import find_dependency_root
from ngcc_gate.processor import IncrementalProcessor
from ngcc_gate.resolver import NodeModulesResolver, Resolver
from ngcc_gate.run_gate import RunDecision, RunGate
from ngcc_gate.store import CachedInputStore, InputStore
from ngcc_gate.transformer import Transformer


class NgccGate:
	"""
	One build's view of the gate: a run gate and an incremental processor
	sharing the dependency root discovered once from `base_path`.
	"""

	def __init__(
		self,
		*,
		config: GateConfig,
		dependency_root: Path | None,
		run_gate: RunGate,
		processor: IncrementalProcessor,
		result: CompilationResult,
	) -> None:
		self.config = config
		self.dependency_root = dependency_root
		self.run_gate = run_gate
		self.processor = processor
		self.result = result

	@classmethod
	def create(
		cls,
		base_path: Path,
		transformer: Transformer,
		*,
		config: GateConfig | None = None,
		resolver: Resolver | None = None,
		store: InputStore | None = None,
		result: CompilationResult | None = None,
	) -> "NgccGate":
		cfg = config if config is not None else load_gate_config_v0(base_path)
		res = resolver if resolver is not None else NodeModulesResolver()
		acc = result if result is not None else CompilationResult()
		dependency_root = find_dependency_root(base_path)
		logger = TransformerLogger(acc, LogLevel.info)
		return cls(
			config=cfg,
			dependency_root=dependency_root,
			run_gate=RunGate(cfg, dependency_root, res),
			processor=IncrementalProcessor(
				transformer,
				cfg,
				dependency_root,
				res,
				store if store is not None else CachedInputStore(),
				logger,
			),
			result=acc,
		)

	def process(self) -> RunDecision:
		return self.run_gate.process_all()

	def process_module(self, module_name: str, resolved_file_name: str | None) -> None:
		self.processor.process(module_name, resolved_file_name)

	def invalidate(self, file_name: str) -> None:
		self.processor.invalidate(file_name)
