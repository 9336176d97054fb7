"""Scan pipeline — process candidate paths into a ScanState."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

from libcensus.elf import ElfError, ErrorKind, process_one
from libcensus.model import Binary
from libcensus.scan.state import ScanState

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


def try_process(path: str | os.PathLike[str]) -> Binary | None:
    """Process one binary; any ElfError means it contributes nothing."""
    try:
        return process_one(path)
    except ElfError as e:
        if e.kind is not ErrorKind.NOT_DYNAMIC:
            logger.debug("Skipping %s: %s", os.fspath(path), e)
        return None


def _scan_chunk(
    paths: Sequence[str | os.PathLike[str]],
    on_progress: ProgressCallback | None,
) -> ScanState:
    state = ScanState()
    for path in paths:
        binary = try_process(path)
        if binary is not None:
            state.add_binary(binary)
        if on_progress is not None:
            on_progress(os.fspath(path))
    return state


def scan_paths(
    paths: Sequence[str | os.PathLike[str]],
    jobs: int = 1,
    on_progress: ProgressCallback | None = None,
) -> ScanState:
    """Fold every parsable binary in ``paths`` into a fresh ScanState.

    With ``jobs > 1`` the paths are split into one contiguous chunk per
    worker; each worker fills its own ScanState and the partial states
    are merged in chunk order. ``on_progress`` is called once per path,
    possibly from a worker thread.
    """
    if jobs < 1:
        raise ValueError(f"jobs must be >= 1, got {jobs}")
    if jobs == 1 or len(paths) < 2:
        return _scan_chunk(paths, on_progress)

    chunk_size = -(-len(paths) // jobs)
    chunks = [paths[i : i + chunk_size] for i in range(0, len(paths), chunk_size)]
    state = ScanState()
    with ThreadPoolExecutor(max_workers=len(chunks)) as pool:
        for partial in pool.map(lambda c: _scan_chunk(c, on_progress), chunks):
            state.merge(partial)
    return state
