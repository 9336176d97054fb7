"""Dependency extraction — DT_NEEDED entries to library names."""

from __future__ import annotations

import os
from collections.abc import Iterable

from libcensus.elf.errors import ElfError, ErrorKind
from libcensus.elf.parser import parse_elf
from libcensus.elf.strtab import StringTable, resolve_strtab
from libcensus.model import DT_NEEDED, Binary, DynamicEntry


def needed_libraries(entries: Iterable[DynamicEntry], table: StringTable) -> list[str]:
    """Names of all DT_NEEDED entries, in table order, duplicates kept."""
    return [table.get(e.value) for e in entries if e.tag == DT_NEEDED]


def read_binary(path: str | os.PathLike[str]) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ElfError(ErrorKind.CANNOT_READ, str(e)) from e


def process_one(path: str | os.PathLike[str]) -> Binary:
    """Read, parse and extract the dependencies of a single file.

    Raises:
        ElfError: whatever step failed first.
    """
    data = read_binary(path)
    parsed = parse_elf(data)
    table = resolve_strtab(parsed, data)
    return Binary(
        path=os.fspath(path),
        machine=parsed.machine,
        dependencies=needed_libraries(parsed.dynamic, table),
    )
