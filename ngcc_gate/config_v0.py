# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Gate configuration (v0).

Defaults can be overridden by an optional `ngcc-gate.json` next to the project,
then by keyword overrides from the host build:

	{
	  "format": "ngcc-gate",
	  "version": 0,
	  "properties": ["es2015", "browser", "module", "main"],
	  "tsconfig": "tsconfig.app.json",
	  "runtime": "node",
	  "transformer_main": "node_modules/@angular/compiler-cli/ngcc/main-ngcc.js"
	}

Relative paths are resolved against the directory holding the file. `runtime`
defaults to the running Python interpreter; a JavaScript entry point needs
`"runtime": "node"`.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from ngcc_gate.errors import ConfigError
from ngcc_gate.fingerprint import DEFAULT_TOOL_CONFIG_NAME

CONFIG_FILE_NAME = "ngcc-gate.json"
DEFAULT_PROPERTIES: tuple[str, ...] = ("es2015", "browser", "module", "main")
DEFAULT_SKIP_ENV_VAR = "BAZEL_TARGET"
DEFAULT_PROBE_PACKAGE = "@angular/core"
DEFAULT_MARKER_DIR_NAME = ".cli-ngcc"


@dataclass(frozen=True)
class GateConfig:
	tsconfig_path: Path
	properties_to_consider: tuple[str, ...] = DEFAULT_PROPERTIES
	tool_config_name: str = DEFAULT_TOOL_CONFIG_NAME
	skip_env_var: str = DEFAULT_SKIP_ENV_VAR
	probe_package: str = DEFAULT_PROBE_PACKAGE
	marker_dir_name: str = DEFAULT_MARKER_DIR_NAME
	runtime: str = sys.executable
	transformer_main: Path | None = None

	def to_dict(self) -> dict[str, Any]:
		return {
			"tsconfig_path": str(self.tsconfig_path),
			"properties_to_consider": list(self.properties_to_consider),
			"tool_config_name": self.tool_config_name,
			"skip_env_var": self.skip_env_var,
			"probe_package": self.probe_package,
			"marker_dir_name": self.marker_dir_name,
			"runtime": self.runtime,
			"transformer_main": str(self.transformer_main) if self.transformer_main is not None else None,
		}


def default_gate_config(base_path: Path) -> GateConfig:
	return GateConfig(tsconfig_path=Path(base_path).resolve() / "tsconfig.json")


def _require_str(data: dict[str, Any], key: str, path: Path) -> str | None:
	if key not in data:
		return None
	value = data[key]
	if not isinstance(value, str) or not value:
		raise ConfigError(f"config field '{key}' must be a non-empty string", path=str(path))
	return value


def _load_config_json(path: Path) -> dict[str, Any]:
	try:
		data = json.loads(path.read_text(encoding="utf-8"))
	except json.JSONDecodeError as err:
		raise ConfigError(f"invalid JSON: {err}", path=str(path)) from err
	if not isinstance(data, dict):
		raise ConfigError("config must be a JSON object", path=str(path))
	if data.get("format") != "ngcc-gate" or data.get("version") != 0:
		raise ConfigError("unsupported config format/version", path=str(path))
	allowed = {
		"format",
		"version",
		"properties",
		"tsconfig",
		"tool_config",
		"skip_env",
		"probe_package",
		"marker_dir",
		"runtime",
		"transformer_main",
		"x",
	}
	unknown = sorted(set(data.keys()) - allowed)
	if unknown:
		raise ConfigError(f"config has unknown fields: {', '.join(unknown)}", path=str(path))
	if "x" in data and not isinstance(data.get("x"), dict):
		raise ConfigError("config field 'x' must be an object", path=str(path))
	return data


def _apply_config_file(config: GateConfig, path: Path) -> GateConfig:
	data = _load_config_json(path)
	base = path.parent.resolve()
	changes: dict[str, Any] = {}

	if "properties" in data:
		props = data["properties"]
		if not isinstance(props, list) or not props or any((not isinstance(p, str) or not p) for p in props):
			raise ConfigError("config field 'properties' must be a non-empty list of strings", path=str(path))
		changes["properties_to_consider"] = tuple(props)

	tsconfig = _require_str(data, "tsconfig", path)
	if tsconfig is not None:
		changes["tsconfig_path"] = base / tsconfig
	transformer_main = _require_str(data, "transformer_main", path)
	if transformer_main is not None:
		changes["transformer_main"] = base / transformer_main

	for key, field_name in (
		("tool_config", "tool_config_name"),
		("skip_env", "skip_env_var"),
		("probe_package", "probe_package"),
		("marker_dir", "marker_dir_name"),
		("runtime", "runtime"),
	):
		value = _require_str(data, key, path)
		if value is not None:
			changes[field_name] = value

	return replace(config, **changes)


def load_gate_config_v0(base_path: Path, *, config_path: Path | None = None, **overrides: Any) -> GateConfig:
	"""
	Build the effective config: defaults, then `ngcc-gate.json`, then `overrides`.

	An explicit `config_path` must exist; the implicit `<base_path>/ngcc-gate.json`
	is optional.
	"""
	config = default_gate_config(base_path)
	if config_path is not None:
		if not config_path.exists():
			raise ConfigError("config file not found", path=str(config_path))
		config = _apply_config_file(config, config_path)
	else:
		implicit = Path(base_path) / CONFIG_FILE_NAME
		if implicit.exists():
			config = _apply_config_file(config, implicit)

	known = {f.name for f in fields(GateConfig)}
	unknown = sorted(set(overrides) - known)
	if unknown:
		raise ConfigError(f"unknown config overrides: {', '.join(unknown)}")
	if "properties_to_consider" in overrides:
		overrides["properties_to_consider"] = tuple(overrides["properties_to_consider"])
	for key in ("tsconfig_path", "transformer_main"):
		if overrides.get(key) is not None:
			overrides[key] = Path(overrides[key])
	return replace(config, **overrides)
