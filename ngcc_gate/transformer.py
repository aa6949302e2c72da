# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
The rewrite engine seam.

Single packages are processed by calling the transformer in-process. The
whole-tree run is spawned as a separate process instead: the engine's async
mode coordinates worker processes through its own lock files, and two builds
sharing one tree in the same process would collide on them.
"""

from __future__ import annotations

import subprocess
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Protocol, Sequence

import setproctitle

from ngcc_gate.diagnostics import TransformerLogger
from ngcc_gate.errors import TransformFailed

STDERR_FD = 2


@dataclass(frozen=True)
class TransformOptions:
	base_path: str
	target_entry_point_path: str
	properties_to_consider: tuple[str, ...]
	logger: TransformerLogger
	tsconfig_path: str
	compile_all_formats: bool = False
	create_new_entry_point_formats: bool = True


class Transformer(Protocol):
	def process(self, options: TransformOptions) -> None:
		"""Rewrite the entry point described by `options`; raise on failure."""
		...


def build_transformer_argv(
	*,
	runtime: str,
	main_path: Path,
	source: Path,
	properties: Sequence[str],
	tsconfig_path: Path,
) -> list[str]:
	return [
		runtime,
		str(main_path),
		"--source",
		str(source),
		"--properties",
		*properties,
		"--first-only",
		"--create-ivy-entry-points",
		"--async",
		"--tsconfig",
		str(tsconfig_path),
		"--use-program-dependencies",
	]


@contextmanager
def preserved_process_title() -> Iterator[str]:
	"""Restore the process title on exit; child processes may rename us."""
	original = setproctitle.getproctitle()
	try:
		yield original
	finally:
		setproctitle.setproctitle(original)


def run_transformer_subprocess(argv: Sequence[str]) -> None:
	"""
	Run the whole-tree transformer to completion.

	stdin is inherited; stdout and stderr both go to our stderr since the tool
	only produces diagnostics. Raises `TransformFailed` on spawn failure or a
	non-zero exit status.
	"""
	sys.stderr.flush()
	with preserved_process_title():
		try:
			proc = subprocess.run(list(argv), stdin=None, stdout=STDERR_FD, stderr=subprocess.STDOUT)
		except OSError as err:
			raise TransformFailed(f"{err}\nngcc failed, see above.") from err
	if proc.returncode != 0:
		raise TransformFailed("ngcc failed.", exit_status=proc.returncode)
