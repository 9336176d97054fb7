"""Per-architecture text reports."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from libcensus.elf import machine_name
from libcensus.scan.state import LibraryUsage, ScanState

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "m_"
PATH_INDENT = " " * 8


def render_report(usages: Iterable[LibraryUsage]) -> str:
    """Render finalized entries as::

        libc.so.6 (2 exes)
                <= /usr/bin/a
                <= /usr/bin/b
    """
    lines: list[str] = []
    for usage in usages:
        lines.append(f"{usage.soname} ({usage.count} exes)")
        lines.extend(f"{PATH_INDENT}<= {path}" for path in usage.paths)
    return "".join(line + "\n" for line in lines)


def report_filename(machine: int, prefix: str = DEFAULT_PREFIX) -> str:
    return f"{prefix}{machine_name(machine)}.txt"


def write_reports(
    state: ScanState,
    output_dir: str | Path = ".",
    prefix: str = DEFAULT_PREFIX,
) -> list[Path]:
    """Write one report per architecture found in ``state``.

    Returns the written paths, ordered by machine id.
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for machine in state.machines():
        path = out / report_filename(machine, prefix)
        usages = state.finalize(machine)
        path.write_text(render_report(usages), encoding="utf-8")
        logger.info("Wrote %s (%d libraries)", path, len(usages))
        written.append(path)
    return written
