"""Binary, dynamic entry and segment data types."""

from __future__ import annotations

from dataclasses import dataclass, field

# Dynamic section tags (d_tag)
DT_NULL = 0
DT_NEEDED = 1
DT_STRTAB = 5
DT_STRSZ = 10


@dataclass(frozen=True)
class DynamicEntry:
    """One (d_tag, d_val) pair from the dynamic table."""

    tag: int
    value: int


@dataclass(frozen=True)
class LoadSegment:
    """File-backed part of a PT_LOAD segment."""

    vaddr: int
    offset: int
    filesz: int

    def contains(self, vaddr: int, size: int = 0) -> bool:
        return self.vaddr <= vaddr and vaddr + size <= self.vaddr + self.filesz


@dataclass
class ParsedElf:
    """What the format parser extracts from a dynamically linked ELF."""

    machine: int
    bits: int = 64  # 32 or 64
    little_endian: bool = True
    dynamic: list[DynamicEntry] = field(default_factory=list)
    segments: list[LoadSegment] = field(default_factory=list)

    def find(self, tag: int) -> DynamicEntry | None:
        """First dynamic entry carrying ``tag``, or None."""
        for entry in self.dynamic:
            if entry.tag == tag:
                return entry
        return None


@dataclass
class Binary:
    """A scanned executable.

    ``machine`` is only set once the file parsed successfully.
    """

    path: str
    machine: int | None = None
    dependencies: list[str] = field(default_factory=list)
