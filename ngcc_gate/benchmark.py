# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import os
import sys
import time
from contextlib import contextmanager
from typing import Iterator

PROFILING_ENV_VAR = "NGCC_GATE_PROFILING"


def profiling_enabled() -> bool:
	return bool(os.environ.get(PROFILING_ENV_VAR))


@contextmanager
def timed(label: str) -> Iterator[None]:
	"""Print the wall time of the block to stderr when profiling is enabled."""
	if not profiling_enabled():
		yield
		return
	start = time.perf_counter()
	try:
		yield
	finally:
		elapsed_ms = (time.perf_counter() - start) * 1000.0
		print(f"{label}: {elapsed_ms:.3f}ms", file=sys.stderr)
