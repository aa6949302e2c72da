# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

from ngcc_gate.paths import (
	canonical_path,
	find_dependency_root,
	first_match,
	is_read_only,
	is_relative_specifier,
	iter_ancestors,
)


def test_iter_ancestors_stops_before_filesystem_root() -> None:
	assert list(iter_ancestors(Path("/a/b/c"))) == [Path("/a/b/c"), Path("/a/b"), Path("/a")]
	assert list(iter_ancestors(Path("/"))) == []


def test_first_match_returns_first_hit_in_candidate_order() -> None:
	seen: list[int] = []

	def _attempt(n: int) -> str | None:
		seen.append(n)
		return f"hit-{n}" if n >= 2 else None

	assert first_match([0, 1, 2, 3], _attempt) == "hit-2"
	assert seen == [0, 1, 2]
	assert first_match([], _attempt) is None


def test_find_dependency_root_walks_up_from_nested_directory(tmp_path: Path) -> None:
	(tmp_path / "app" / "node_modules").mkdir(parents=True)
	nested = tmp_path / "app" / "src" / "lib"
	nested.mkdir(parents=True)
	assert find_dependency_root(nested) == tmp_path / "app" / "node_modules"


def test_find_dependency_root_prefers_closest_tree(tmp_path: Path) -> None:
	(tmp_path / "node_modules").mkdir()
	(tmp_path / "inner" / "node_modules").mkdir(parents=True)
	assert find_dependency_root(tmp_path / "inner") == tmp_path / "inner" / "node_modules"


def test_find_dependency_root_reports_absence(tmp_path: Path) -> None:
	base = tmp_path / "nothing" / "here"
	base.mkdir(parents=True)
	assert find_dependency_root(base, dir_name="no_such_dependency_dir") is None


def test_relative_specifiers() -> None:
	assert is_relative_specifier("./local")
	assert is_relative_specifier("../up")
	assert not is_relative_specifier("@angular/core")
	assert not is_relative_specifier("rxjs/operators")


def test_missing_path_is_read_only(tmp_path: Path) -> None:
	assert is_read_only(tmp_path / "missing.json")


def test_canonical_path_normalizes_segments() -> None:
	assert canonical_path("/a/b/../c/./d.ts") == "/a/c/d.ts"
