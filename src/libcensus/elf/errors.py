"""Error kinds raised while inspecting one binary."""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """Every way processing a single binary can fail.

    The set is closed: callers are expected to handle each member.
    """

    CANNOT_READ = "cannot_read"  # the file could not be read
    NOT_AN_ELF = "not_an_elf"  # bad magic or inconsistent header
    NOT_DYNAMIC = "not_dynamic"  # statically linked, object file, ...
    STRTAB_BAD = "strtab_bad"  # missing or out-of-range string table data


class ElfError(Exception):
    """Processing a binary failed with one of the ``ErrorKind`` members."""

    def __init__(self, kind: ErrorKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)
