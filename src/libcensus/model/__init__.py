"""Data types shared by the ELF inspection core and the scanner."""

from libcensus.model.binary import (
    DT_NEEDED,
    DT_NULL,
    DT_STRSZ,
    DT_STRTAB,
    Binary,
    DynamicEntry,
    LoadSegment,
    ParsedElf,
)

__all__ = [
    "DT_NEEDED",
    "DT_NULL",
    "DT_STRSZ",
    "DT_STRTAB",
    "Binary",
    "DynamicEntry",
    "LoadSegment",
    "ParsedElf",
]
