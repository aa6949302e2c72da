# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from ngcc_gate.config_v0 import GateConfig
from ngcc_gate.resolver import ResolveError
from ngcc_gate.transformer import TransformOptions


def _write_file(path: Path, text: str) -> Path:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(text, encoding="utf-8")
	return path


@dataclass
class ProjectTree:
	root: Path

	@property
	def node_modules(self) -> Path:
		return self.root / "node_modules"

	@property
	def tsconfig(self) -> Path:
		return self.root / "tsconfig.json"

	def add_package(self, name: str, *, typings: str = "index.d.ts") -> Path:
		"""Install a package under node_modules; returns the path of its typings file."""
		pkg_dir = self.node_modules / name
		_write_file(pkg_dir / "package.json", json.dumps({"name": name, "version": "1.0.0", "typings": typings}))
		return _write_file(pkg_dir / typings, "export declare const x: number;\n")

	def config(self, **overrides: object) -> GateConfig:
		return GateConfig(tsconfig_path=self.tsconfig, **overrides)  # type: ignore[arg-type]


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ProjectTree:
	"""A project root with node_modules, a yarn.lock and a tsconfig.json."""
	monkeypatch.delenv("BAZEL_TARGET", raising=False)
	monkeypatch.delenv("NGCC_GATE_PROFILING", raising=False)
	tree = ProjectTree(root=tmp_path / "app")
	tree.node_modules.mkdir(parents=True)
	_write_file(tree.root / "yarn.lock", "# yarn lockfile v1\n\n@angular/core@^12.0.0:\n  version \"12.0.0\"\n")
	_write_file(tree.tsconfig, json.dumps({"compilerOptions": {"strict": True}}))
	return tree


@dataclass
class RecordingTransformer:
	"""In-process transformer double recording each call."""

	calls: list[TransformOptions] = field(default_factory=list)
	fail_with: Exception | None = None

	def process(self, options: TransformOptions) -> None:
		self.calls.append(options)
		if self.fail_with is not None:
			raise self.fail_with


@pytest.fixture
def transformer() -> RecordingTransformer:
	return RecordingTransformer()


@dataclass
class ScriptedResolver:
	"""Resolver answering from a table; unknown requests raise ResolveError."""

	answers: dict[str, str | None] = field(default_factory=dict)
	requests: list[tuple[str, str]] = field(default_factory=list)

	def resolve_sync(self, context_path: str, request: str) -> str | None:
		self.requests.append((context_path, request))
		if request not in self.answers:
			raise ResolveError(f"cannot resolve '{request}'")
		return self.answers[request]


@pytest.fixture
def scripted_resolver() -> ScriptedResolver:
	return ScriptedResolver()
