"""Directory traversal — find candidate executables under a root."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def is_executable_file(mode: int) -> bool:
    """Regular file with at least one execute bit set."""
    return stat.S_ISREG(mode) and bool(mode & EXEC_BITS)


def iter_executables(root: str | Path, follow_symlinks: bool = False) -> Iterator[Path]:
    """Yield executable regular files below ``root`` in sorted order."""

    def _on_error(err: OSError) -> None:
        logger.debug("Skipping %s: %s", err.filename, err)

    seen_dirs: set[tuple[int, int]] = set()
    for dirpath, dirnames, filenames in os.walk(
        root, onerror=_on_error, followlinks=follow_symlinks
    ):
        if follow_symlinks:
            # a symlinked directory loop would otherwise recurse until ELOOP
            try:
                st = os.stat(dirpath)
            except OSError as e:
                logger.debug("Cannot stat %s: %s", dirpath, e)
                dirnames.clear()
                continue
            key = (st.st_dev, st.st_ino)
            if key in seen_dirs:
                logger.debug("Skipping %s: already visited", dirpath)
                dirnames.clear()
                continue
            seen_dirs.add(key)
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            try:
                st = os.stat(path, follow_symlinks=follow_symlinks)
            except OSError as e:
                logger.debug("Cannot stat %s: %s", path, e)
                continue
            if is_executable_file(st.st_mode):
                yield path
